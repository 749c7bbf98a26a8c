"""kubectl argument construction for docker-registry and generic secrets."""
import os
import shlex
import logging
from typing import List

from .errors import ErrorKind, SecretError
from .models import DockerCredentials
from .temp_files import write_file

logger = logging.getLogger(__name__)

FLAG_DELIMITER = "--"
LITERAL_PREFIX = "from-literal="
FILE_FLAG = "--from-file="

# kubectl rejects an empty --docker-email
EMAIL_PLACEHOLDER = " "


def build_docker_args(fields: DockerCredentials, name: str) -> List[str]:
    """
    Build `kubectl create secret docker-registry` arguments.

    Args:
        fields: Registry credentials, passed through unvalidated
        name: Secret name

    Returns:
        Ordered token list, always ending with --docker-email
    """
    args = [
        "create", "secret", "docker-registry", name,
        "--docker-username", fields.username,
        "--docker-password", fields.password,
    ]

    if fields.server:
        args.extend(["--docker-server", fields.server])

    args.extend(["--docker-email", fields.email or EMAIL_PLACEHOLDER])
    return args


def translate_literals(raw_arguments: str, temp_dir: str) -> str:
    """
    Rewrite every --from-literal=key=value segment as --from-file=<path>.

    The value is written to <temp_dir>/<key> so it never appears on the
    kubectl command line. Other segments are kept verbatim and in order.

    Args:
        raw_arguments: Raw argument string, e.g. "--from-literal=user=admin --type=Opaque"
        temp_dir: Directory the literal files are written into

    Returns:
        Argument string ready for tokenize()

    Raises:
        SecretError: MALFORMED_ARGUMENTS if text precedes the first "--",
            MALFORMED_LITERAL if a literal has no "=" after its key,
            FILE_WRITE if a literal file can't be written
    """
    prefix, *segments = raw_arguments.split(FLAG_DELIMITER)
    if prefix.strip():
        raise SecretError(
            ErrorKind.MALFORMED_ARGUMENTS,
            f"Invalid arguments input. Unexpected text before the first flag: '{prefix.strip()}'"
        )

    translated = ""
    for segment in segments:
        # Trailing whitespace separates flags; it is not part of the value
        segment = segment.rstrip()
        if not segment:
            continue

        if not segment.startswith(LITERAL_PREFIX):
            translated += " " + FLAG_DELIMITER + segment
            continue

        command = segment[len(LITERAL_PREFIX):]
        if "=" not in command:
            raise SecretError(
                ErrorKind.MALFORMED_LITERAL,
                "Invalid from-literal input. It should contain a key and value"
            )
        key, value = command.split("=", 1)
        path = write_file(os.path.join(temp_dir, key.strip()), value)
        translated += " " + FILE_FLAG + f'"{path}"'

    return translated


def tokenize(argument_string: str) -> List[str]:
    """
    Split an argument string on whitespace.

    Only double quotes group words; backslashes and single quotes are kept
    as ordinary characters so Windows paths and apostrophes pass through.

    Raises:
        SecretError: MALFORMED_ARGUMENTS if a double quote is left open
    """
    lexer = shlex.shlex(argument_string, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.escape = ""
    lexer.quotes = '"'
    try:
        return list(lexer)
    except ValueError as e:
        raise SecretError(
            ErrorKind.MALFORMED_ARGUMENTS,
            f"Invalid arguments input. {e}"
        ) from e


def build_generic_args(raw_arguments: str, name: str, temp_dir: str) -> List[str]:
    """
    Build `kubectl create secret generic` arguments.

    Args:
        raw_arguments: Raw argument string from configuration
        name: Secret name
        temp_dir: Directory for literal value files

    Returns:
        Ordered token list
    """
    translated = translate_literals(raw_arguments or "", temp_dir)
    logger.debug(f"Translated generic secret arguments: {translated.strip()}")
    return ["create", "secret", "generic", name] + tokenize(translated)
