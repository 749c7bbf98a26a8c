"""Domain models for secret creation."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ErrorKind, SecretError


class SecretKind(Enum):
    """Kinds of secret kubectl can create for us."""
    DOCKER_REGISTRY = "docker-registry"
    GENERIC = "generic"

    @classmethod
    def parse(cls, value: str) -> "SecretKind":
        try:
            return cls(value)
        except ValueError:
            raise SecretError(
                ErrorKind.UNSUPPORTED_KIND,
                "Invalid secret-type input. It should be either docker-registry or generic"
            ) from None


@dataclass
class SecretRequest:
    """Identifies the secret being created."""
    kind: SecretKind
    name: str
    namespace: Optional[str] = None


@dataclass
class DockerCredentials:
    """Registry credentials for a docker-registry secret."""
    username: str
    password: str
    server: Optional[str] = None
    email: Optional[str] = None


@dataclass
class RunOptions:
    """Execution flags for a kubectl invocation."""
    fail_on_stderr: bool = False
    ignore_return_code: bool = False
    silent: bool = False
