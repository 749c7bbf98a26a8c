"""Workflow for creating or replacing a Kubernetes secret with kubectl."""
import os
import logging
from typing import Dict, List, Optional

from ..domains.arguments import build_docker_args, build_generic_args
from ..domains.errors import ErrorKind, SecretError
from ..domains.kubectl_client import KubectlClient
from ..domains.models import DockerCredentials, RunOptions, SecretKind, SecretRequest
from ..domains.outputs import set_output
from ..domains.temp_files import get_temp_dir

logger = logging.getLogger(__name__)

OUTPUT_NAME = "secret-name"

DELETE_OPTIONS = RunOptions(fail_on_stderr=False, ignore_return_code=True, silent=True)


def check_cluster_context() -> None:
    """
    Ensure a cluster context has been set for kubectl.

    Raises:
        SecretError: CLUSTER_CONTEXT_NOT_SET if KUBECONFIG is unset or empty
    """
    if not os.getenv("KUBECONFIG"):
        raise SecretError(
            ErrorKind.CLUSTER_CONTEXT_NOT_SET,
            "Cluster context not set. Use k8s-set-context/aks-set-context action to set cluster context"
        )


def _namespace_args(namespace: Optional[str]) -> List[str]:
    return ["-n", namespace] if namespace else []


def delete_secret(client: KubectlClient, name: str, namespace: Optional[str] = None) -> None:
    """
    Delete a secret if it exists.

    Best effort: the secret usually doesn't exist, so kubectl's exit code
    is ignored and spawn failures are only logged.
    """
    args = ["delete", "secret", name] + _namespace_args(namespace)
    try:
        client.run(args, DELETE_OPTIONS)
    except OSError as e:
        logger.debug(f"Delete of secret {name} failed: {e}")
    logger.debug(f"Deleting {name} if already exist.")


def ensure_secret(
    request: SecretRequest,
    client: KubectlClient,
    docker_fields: Optional[DockerCredentials] = None,
    arguments: str = "",
    temp_dir: Optional[str] = None,
) -> str:
    """
    Create a secret, replacing any existing secret of the same name.

    Args:
        request: Secret kind, name, and namespace
        client: kubectl client bound to a resolved executable path
        docker_fields: Registry credentials (docker-registry secrets only)
        arguments: Raw argument string (generic secrets only)
        temp_dir: Directory for literal files (defaults to get_temp_dir())

    Returns:
        The created secret's name

    Raises:
        SecretError: UNSUPPORTED_KIND, MALFORMED_LITERAL, MALFORMED_ARGUMENTS,
            FILE_WRITE, or CREATION_FAILED
    """
    delete_secret(client, request.name, request.namespace)

    if request.kind is SecretKind.DOCKER_REGISTRY:
        args = build_docker_args(docker_fields or DockerCredentials("", ""), request.name)
    elif request.kind is SecretKind.GENERIC:
        args = build_generic_args(arguments, request.name, temp_dir or get_temp_dir())
    else:
        raise SecretError(
            ErrorKind.UNSUPPORTED_KIND,
            "Invalid secret-type input. It should be either docker-registry or generic"
        )

    args.extend(_namespace_args(request.namespace))

    code = client.run(args)
    if code != 0:
        raise SecretError(ErrorKind.CREATION_FAILED, "Secret create failed.")

    logger.info(f"Created secret {request.name}")
    return request.name


def run_action(inputs: Dict[str, str], client: Optional[KubectlClient] = None) -> str:
    """
    Run the full create-secret step from loaded inputs.

    Checks the cluster context, resolves kubectl (unless a client is given),
    creates the secret, and publishes the secret-name output.

    Args:
        inputs: Inputs as returned by config_loader.load_inputs()
        client: Optional pre-built client; resolved with KubectlClient.locate() if None

    Returns:
        The created secret's name
    """
    check_cluster_context()
    client = client or KubectlClient.locate()

    request = SecretRequest(
        kind=SecretKind.parse(inputs["secret-type"]),
        name=inputs["secret-name"],
        namespace=inputs.get("namespace") or None,
    )

    docker_fields = None
    if request.kind is SecretKind.DOCKER_REGISTRY:
        docker_fields = DockerCredentials(
            username=inputs.get("container-registry-username", ""),
            password=inputs.get("container-registry-password", ""),
            server=inputs.get("container-registry-url") or None,
            email=inputs.get("container-registry-email") or None,
        )

    name = ensure_secret(
        request,
        client,
        docker_fields=docker_fields,
        arguments=inputs.get("arguments", ""),
    )
    set_output(OUTPUT_NAME, name)
    return name
