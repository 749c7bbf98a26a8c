"""Temporary file handling for file-backed secret values."""
import os
import logging
import tempfile

from .errors import ErrorKind, SecretError

logger = logging.getLogger(__name__)


def get_temp_dir() -> str:
    """
    Get the directory literal values are written to.

    Uses RUNNER_TEMP (set by GitHub Actions runners), falling back to the
    system temp directory when running outside a runner.
    """
    runner_temp = os.getenv("RUNNER_TEMP")
    if runner_temp:
        return runner_temp
    logger.debug("RUNNER_TEMP not set, using system temp directory")
    return tempfile.gettempdir()


def write_file(path: str, content: str) -> str:
    """
    Write content to path, overwriting any existing file.

    Args:
        path: Destination file path
        content: Text to write, stored exactly as given

    Returns:
        The path that was written

    Raises:
        SecretError: FILE_WRITE if the write fails; the partial file is removed
            first and the underlying OSError is kept as __cause__
    """
    try:
        with open(path, "w", newline="") as f:
            f.write(content)
    except OSError as e:
        delete_file(path)
        raise SecretError(ErrorKind.FILE_WRITE, f"Failed to write {path}: {e}") from e
    logger.debug(f"Wrote literal value to {path}")
    return path


def delete_file(path: str) -> None:
    """Remove path if it exists, logging (not raising) on failure."""
    if not os.path.isfile(path):
        return
    try:
        os.unlink(path)
    except OSError as e:
        logger.error(f"Failed to delete {path}: {e}")
