"""CLI entrypoint for k8s-create-secret."""
import os
import sys
import argparse
import logging

from .validators import validate_secret_name

VERSION = "0.1.0"

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)

# Input name -> argparse destination
_INPUT_FLAGS = {
    "secret-type": "secret_type",
    "secret-name": "secret_name",
    "namespace": "namespace",
    "container-registry-username": "container_registry_username",
    "container-registry-password": "container_registry_password",
    "container-registry-url": "container_registry_url",
    "container-registry-email": "container_registry_email",
    "arguments": "arguments",
}


def _configure_verbosity(verbose: bool) -> None:
    """Enable debug logging when asked to, or when the runner has debug on."""
    if verbose or os.getenv("RUNNER_DEBUG") == "1":
        logging.getLogger().setLevel(logging.DEBUG)


def cmd_version(args):
    """Show version information."""
    print(f"k8s-create-secret {VERSION}")


def cmd_create(args):
    """Create or replace a Kubernetes secret."""
    from k8s_create_secret.secrets.domains.config_loader import load_inputs, ConfigError
    from k8s_create_secret.secrets.domains.errors import ErrorKind, SecretError
    from k8s_create_secret.secrets.domains.outputs import report_failure
    from k8s_create_secret.secrets.workflows.secret_operations import check_cluster_context, run_action

    _configure_verbosity(args.verbose)

    # Fails fast, before any input is read
    try:
        check_cluster_context()
    except SecretError as e:
        report_failure(e.message)
        sys.exit(1)

    overrides = {name: getattr(args, dest, None) for name, dest in _INPUT_FLAGS.items()}

    try:
        inputs = load_inputs(overrides, config_path=args.config)
    except ConfigError as e:
        report_failure(str(e))
        sys.exit(2)

    validate_secret_name(inputs["secret-name"])

    try:
        run_action(inputs)
    except SecretError as e:
        report_failure(e.message)
        sys.exit(2 if e.kind in (ErrorKind.UNSUPPORTED_KIND, ErrorKind.MALFORMED_LITERAL,
                                 ErrorKind.MALFORMED_ARGUMENTS) else 1)


def main():
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (no cluster context, kubectl missing, create failed, etc.)
        2 - Usage errors (missing inputs, invalid secret type or arguments, etc.)
    """
    parser = argparse.ArgumentParser(
        prog="k8s-create-secret",
        description="Create or replace a Kubernetes secret with kubectl",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (no cluster context, kubectl missing, secret create failed, etc.)
  2 - Usage error (missing inputs, invalid secret type, malformed arguments, etc.)

Environment variables:
  KUBECONFIG        - Required; marks that a cluster context is set
  INPUT_<NAME>      - GitHub Actions inputs (e.g. INPUT_SECRET-NAME)
  RUNNER_TEMP       - Directory for --from-literal value files
  RUNNER_TOOL_CACHE - Searched for kubectl when it is not on PATH
  GITHUB_OUTPUT     - File the secret-name output is appended to
  K8S_SECRET_CONFIG - YAML inputs file (same as --config)
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    _version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of k8s-create-secret"
    )

    # create command
    create_parser = subparsers.add_parser(
        "create",
        help="Create or replace a secret",
        description="""
Create a docker-registry or generic secret, deleting any existing secret
with the same name first.

Inputs are read from command-line flags, then INPUT_* environment
variables, then the YAML inputs file. For generic secrets, every
--from-literal=key=value in --arguments is written to a file under
RUNNER_TEMP and passed to kubectl as --from-file.

On success the secret-name output is written to GITHUB_OUTPUT (or stdout).
        """
    )
    create_parser.add_argument(
        "--secret-type",
        choices=["docker-registry", "generic"],
        help="Type of secret to create"
    )
    create_parser.add_argument(
        "--secret-name",
        help="Name of the secret"
    )
    create_parser.add_argument(
        "--namespace",
        help="Namespace to create the secret in (kubectl's current namespace if omitted)"
    )
    create_parser.add_argument(
        "--container-registry-username",
        help="Registry username (docker-registry only)"
    )
    create_parser.add_argument(
        "--container-registry-password",
        help="Registry password (docker-registry only)"
    )
    create_parser.add_argument(
        "--container-registry-url",
        help="Registry server URL (docker-registry only)"
    )
    create_parser.add_argument(
        "--container-registry-email",
        help="Registry email (docker-registry only)"
    )
    create_parser.add_argument(
        "--arguments",
        help="kubectl arguments for a generic secret; use the = form, e.g. --arguments='--from-literal=user=admin'"
    )
    create_parser.add_argument(
        "--config",
        help="Path to a YAML file of inputs"
    )
    create_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    # If no command provided, show help and exit with usage error code
    if not args.command:
        parser.print_help()
        sys.exit(2)

    # Route to command handlers
    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "create":
            cmd_create(args)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
