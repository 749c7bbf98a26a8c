"""Test suite for the create-secret workflow.

This test suite validates:
- delete-then-create ordering and namespace scoping
- docker-registry and generic argument selection
- exit code interpretation and error kinds
- cluster context check before any kubectl work
- secret-name output reporting
"""
import os

import pytest

from k8s_create_secret.secrets.domains.errors import ErrorKind, SecretError
from k8s_create_secret.secrets.domains import kubectl_client
from k8s_create_secret.secrets.domains.kubectl_client import KubectlClient
from k8s_create_secret.secrets.domains.models import DockerCredentials, SecretKind, SecretRequest
from k8s_create_secret.secrets.workflows import secret_operations
from k8s_create_secret.secrets.workflows.secret_operations import (
    check_cluster_context,
    delete_secret,
    ensure_secret,
    run_action,
)


class FakeClient(KubectlClient):
    """Records kubectl invocations and returns scripted exit codes."""

    def __init__(self, create_code=0, delete_code=1, delete_error=None):
        super().__init__("/fake/kubectl")
        self.calls = []
        self.create_code = create_code
        self.delete_code = delete_code
        self.delete_error = delete_error

    def run(self, args, options=None):
        self.calls.append((list(args), options))
        if args[0] == "delete":
            if self.delete_error:
                raise self.delete_error
            return self.delete_code
        return self.create_code


@pytest.fixture
def runner_env(tmp_path, monkeypatch):
    """Fixture for a runner-like environment with cluster context and outputs file."""
    temp_dir = tmp_path / "runner-temp"
    temp_dir.mkdir()
    output_file = tmp_path / "github_output"
    output_file.write_text("")
    monkeypatch.setenv("KUBECONFIG", str(tmp_path / "kubeconfig"))
    monkeypatch.setenv("RUNNER_TEMP", str(temp_dir))
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    return {"temp_dir": temp_dir, "output_file": output_file}


@pytest.fixture
def docker_inputs():
    """Sample docker-registry inputs."""
    return {
        "secret-type": "docker-registry",
        "secret-name": "regcred",
        "namespace": "apps",
        "container-registry-username": "u",
        "container-registry-password": "p",
        "container-registry-url": "",
        "container-registry-email": "",
        "arguments": "",
    }


class TestEnsureSecret:
    """Test suite for ensure_secret."""

    def test_deletes_before_create(self, tmp_path):
        """Test the existing secret is deleted before creation."""
        client = FakeClient()
        request = SecretRequest(SecretKind.GENERIC, "mysecret", "apps")

        ensure_secret(request, client, arguments="--from-file=./a", temp_dir=str(tmp_path))

        delete_args, delete_options = client.calls[0]
        assert delete_args == ["delete", "secret", "mysecret", "-n", "apps"]
        assert delete_options.ignore_return_code
        assert delete_options.silent
        assert not delete_options.fail_on_stderr
        assert client.calls[1][0][:2] == ["create", "secret"]

    def test_docker_args_with_namespace(self):
        """Test docker-registry arguments end with namespace scoping."""
        client = FakeClient()
        request = SecretRequest(SecretKind.DOCKER_REGISTRY, "regcred", "apps")

        name = ensure_secret(request, client, docker_fields=DockerCredentials("u", "p"))

        assert name == "regcred"
        create_args = client.calls[1][0]
        assert create_args == [
            "create", "secret", "docker-registry", "regcred",
            "--docker-username", "u", "--docker-password", "p",
            "--docker-email", " ",
            "-n", "apps",
        ]

    def test_no_namespace_no_scope_flag(self, tmp_path):
        """Test no -n flag is added without a namespace."""
        client = FakeClient()
        request = SecretRequest(SecretKind.GENERIC, "mysecret")

        ensure_secret(request, client, arguments="--from-literal=user=admin", temp_dir=str(tmp_path))

        assert client.calls[0][0] == ["delete", "secret", "mysecret"]
        assert client.calls[1][0] == [
            "create", "secret", "generic", "mysecret",
            f"--from-file={os.path.join(str(tmp_path), 'user')}",
        ]
        assert (tmp_path / "user").read_text() == "admin"

    def test_nonzero_exit_raises_creation_failed(self, tmp_path):
        """Test a failed kubectl create raises CREATION_FAILED."""
        client = FakeClient(create_code=1)
        request = SecretRequest(SecretKind.GENERIC, "mysecret")

        with pytest.raises(SecretError) as exc_info:
            ensure_secret(request, client, arguments="--from-file=./a", temp_dir=str(tmp_path))

        assert exc_info.value.kind is ErrorKind.CREATION_FAILED
        assert str(exc_info.value) == "Secret create failed."

    def test_delete_spawn_failure_does_not_block_create(self, tmp_path):
        """Test an error from the delete step is swallowed."""
        client = FakeClient(delete_error=OSError("exec format error"))
        request = SecretRequest(SecretKind.GENERIC, "mysecret")

        assert ensure_secret(request, client, arguments="", temp_dir=str(tmp_path)) == "mysecret"
        assert len(client.calls) == 2

    def test_unsupported_kind(self):
        """Test a kind outside docker-registry/generic raises UNSUPPORTED_KIND."""
        client = FakeClient()
        request = SecretRequest("tls", "cert")

        with pytest.raises(SecretError) as exc_info:
            ensure_secret(request, client)

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_KIND
        assert len(client.calls) == 1

    def test_malformed_literal_stops_before_create(self, tmp_path):
        """Test a malformed literal aborts without running kubectl create."""
        client = FakeClient()
        request = SecretRequest(SecretKind.GENERIC, "mysecret")

        with pytest.raises(SecretError) as exc_info:
            ensure_secret(request, client, arguments="--from-literal=nokeyvalue", temp_dir=str(tmp_path))

        assert exc_info.value.kind is ErrorKind.MALFORMED_LITERAL
        assert [call[0][0] for call in client.calls] == ["delete"]


class TestDeleteSecret:
    """Test suite for delete_secret."""

    def test_ignores_exit_code(self):
        """Test a non-zero delete exit code is ignored."""
        client = FakeClient(delete_code=1)

        delete_secret(client, "missing", "apps")

        assert client.calls[0][0] == ["delete", "secret", "missing", "-n", "apps"]


class TestClusterContext:
    """Test suite for check_cluster_context."""

    def test_missing_kubeconfig(self, monkeypatch):
        """Test missing KUBECONFIG raises CLUSTER_CONTEXT_NOT_SET."""
        monkeypatch.delenv("KUBECONFIG", raising=False)

        with pytest.raises(SecretError) as exc_info:
            check_cluster_context()

        assert exc_info.value.kind is ErrorKind.CLUSTER_CONTEXT_NOT_SET

    def test_empty_kubeconfig(self, monkeypatch):
        """Test an empty KUBECONFIG counts as unset."""
        monkeypatch.setenv("KUBECONFIG", "")

        with pytest.raises(SecretError):
            check_cluster_context()

    def test_kubeconfig_set(self, monkeypatch):
        """Test a set KUBECONFIG passes."""
        monkeypatch.setenv("KUBECONFIG", "/home/runner/.kube/config")

        check_cluster_context()


class TestRunAction:
    """Test suite for run_action."""

    def test_docker_success_writes_output(self, runner_env, docker_inputs):
        """Test a successful run publishes secret-name."""
        client = FakeClient()

        assert run_action(docker_inputs, client) == "regcred"

        assert runner_env["output_file"].read_text() == "secret-name=regcred\n"
        create_args = client.calls[1][0]
        assert "--docker-server" not in create_args
        assert create_args[-4:] == ["--docker-email", " ", "-n", "apps"]

    def test_generic_uses_runner_temp(self, runner_env):
        """Test generic literals are written under RUNNER_TEMP."""
        client = FakeClient()
        inputs = {
            "secret-type": "generic",
            "secret-name": "mysecret",
            "namespace": "",
            "arguments": "--from-literal=user=admin --from-literal=pass=p@ss=w0rd",
        }

        run_action(inputs, client)

        temp_dir = runner_env["temp_dir"]
        assert client.calls[1][0] == [
            "create", "secret", "generic", "mysecret",
            f"--from-file={os.path.join(str(temp_dir), 'user')}",
            f"--from-file={os.path.join(str(temp_dir), 'pass')}",
        ]
        assert (temp_dir / "user").read_text() == "admin"
        assert (temp_dir / "pass").read_text() == "p@ss=w0rd"

    def test_missing_cluster_context_aborts_first(self, runner_env, docker_inputs, monkeypatch):
        """Test no kubectl lookup or invocation happens without a cluster context."""
        monkeypatch.delenv("KUBECONFIG")

        def fail_locate():
            raise AssertionError("kubectl lookup must not happen")

        monkeypatch.setattr(secret_operations.KubectlClient, "locate", staticmethod(fail_locate))

        with pytest.raises(SecretError) as exc_info:
            run_action(docker_inputs)

        assert exc_info.value.kind is ErrorKind.CLUSTER_CONTEXT_NOT_SET
        assert runner_env["output_file"].read_text() == ""

    def test_tool_not_found(self, runner_env, docker_inputs, monkeypatch):
        """Test a missing kubectl aborts before any secret operation."""
        monkeypatch.setattr(kubectl_client.shutil, "which", lambda name: None)
        monkeypatch.delenv("RUNNER_TOOL_CACHE", raising=False)

        with pytest.raises(SecretError) as exc_info:
            run_action(docker_inputs)

        assert exc_info.value.kind is ErrorKind.TOOL_NOT_FOUND

    def test_invalid_secret_type(self, runner_env, docker_inputs):
        """Test an unknown secret-type raises UNSUPPORTED_KIND before kubectl runs."""
        client = FakeClient()
        docker_inputs["secret-type"] = "tls"

        with pytest.raises(SecretError) as exc_info:
            run_action(docker_inputs, client)

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_KIND
        assert client.calls == []

    def test_failure_writes_no_output(self, runner_env, docker_inputs):
        """Test a failed create publishes nothing."""
        client = FakeClient(create_code=1)

        with pytest.raises(SecretError):
            run_action(docker_inputs, client)

        assert runner_env["output_file"].read_text() == ""

    def test_output_to_stdout_without_github_output(self, runner_env, docker_inputs, monkeypatch, capsys):
        """Test the output is printed when GITHUB_OUTPUT is not set."""
        monkeypatch.delenv("GITHUB_OUTPUT")

        run_action(docker_inputs, FakeClient())

        assert "secret-name=regcred" in capsys.readouterr().out
