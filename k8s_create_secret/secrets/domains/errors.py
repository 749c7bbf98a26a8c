"""Error taxonomy for secret creation.

Every failure in the create flow is raised as a ``SecretError`` carrying an
``ErrorKind``. Callers branch on ``error.kind`` rather than on exception
subclasses.
"""
from enum import Enum


class ErrorKind(Enum):
    """Kinds of failure that abort a secret creation run."""
    CLUSTER_CONTEXT_NOT_SET = "cluster-context-not-set"
    TOOL_NOT_FOUND = "tool-not-found"
    UNSUPPORTED_KIND = "unsupported-kind"
    MALFORMED_LITERAL = "malformed-literal"
    MALFORMED_ARGUMENTS = "malformed-arguments"
    CREATION_FAILED = "creation-failed"
    FILE_WRITE = "file-write"


class SecretError(Exception):
    """Failure raised by the secret creation flow."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"SecretError({self.kind.name}, {self.message!r})"
