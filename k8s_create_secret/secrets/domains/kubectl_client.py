"""kubectl discovery and invocation."""
import os
import re
import sys
import shutil
import logging
import platform
import subprocess
from pathlib import Path
from typing import List, Optional

from .errors import ErrorKind, SecretError
from .models import RunOptions

logger = logging.getLogger(__name__)

TOOL_NAME = "kubectl"

# Architecture folder names used by the runner tool cache
_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def get_executable_extension() -> str:
    """Return the platform's executable suffix."""
    return ".exe" if platform.system() == "Windows" else ""


def _version_key(version: str):
    # A release sorts above its pre-releases: "1.28.0" beats "1.28.0-rc.1"
    release, _, prerelease = version.partition("-")
    numbers = tuple(int(part) if part.isdigit() else -1 for part in re.split(r"[.+]", release))
    return numbers, not prerelease, prerelease


def _find_in_tool_cache(tool_name: str) -> Optional[str]:
    """
    Look up a tool in the runner tool cache.

    Layout: $RUNNER_TOOL_CACHE/<tool>/<version>/<arch>/<tool>[.exe]
    The newest cached version wins.
    """
    cache_root = os.getenv("RUNNER_TOOL_CACHE")
    if not cache_root:
        return None

    tool_dir = Path(cache_root) / tool_name
    if not tool_dir.is_dir():
        return None

    machine = platform.machine().lower()
    arch = _ARCH_ALIASES.get(machine, machine)
    executable = f"{tool_name}{get_executable_extension()}"

    versions = sorted(
        (entry.name for entry in tool_dir.iterdir() if entry.is_dir()),
        key=_version_key,
        reverse=True
    )
    for version in versions:
        candidate = tool_dir / version / arch / executable
        if candidate.is_file():
            logger.debug(f"Found {tool_name} {version} in tool cache: {candidate}")
            return str(candidate)

    return None


def find_kubectl() -> str:
    """
    Resolve the path of the kubectl executable.

    Priority order:
    1. kubectl on PATH
    2. Newest kubectl in the runner tool cache

    Returns:
        Absolute path to kubectl

    Raises:
        SecretError: TOOL_NOT_FOUND if kubectl is in neither location
    """
    path = shutil.which(TOOL_NAME)
    if path:
        logger.debug(f"Using {TOOL_NAME} from PATH: {path}")
        return path

    path = _find_in_tool_cache(TOOL_NAME)
    if path:
        return path

    raise SecretError(ErrorKind.TOOL_NOT_FOUND, "Kubectl is not installed")


def run_tool(tool_path: str, args: List[str], options: Optional[RunOptions] = None) -> int:
    """
    Run an executable and wait for it to finish.

    Args:
        tool_path: Path to the executable
        args: Ordered argument list
        options: Execution flags (defaults: stream output, report non-zero codes)

    Returns:
        Process exit code. With fail_on_stderr, a zero exit code becomes 1
        if the process wrote anything to stderr.
    """
    options = options or RunOptions()

    if options.silent:
        logger.debug(f"Running {tool_path} {args[0] if args else ''} (silent)")
        stdout = subprocess.DEVNULL
        stderr = subprocess.DEVNULL
    else:
        # Flags only; values such as passwords stay out of the log
        logger.info(f"Running {tool_path} {' '.join(args[:4])}")
        stdout = None
        stderr = subprocess.PIPE if options.fail_on_stderr else None

    result = subprocess.run([tool_path] + list(args), stdout=stdout, stderr=stderr, text=True)
    code = result.returncode

    if options.fail_on_stderr and result.stderr:
        sys.stderr.write(result.stderr)
        if code == 0:
            logger.error(f"{tool_path} wrote to stderr")
            code = 1

    if code != 0:
        if options.ignore_return_code:
            logger.debug(f"{tool_path} exited with code {code} (ignored)")
        else:
            logger.error(f"{tool_path} exited with code {code}")

    return code


class KubectlClient:
    """Thin wrapper binding a resolved kubectl path to run_tool."""

    def __init__(self, kubectl_path: str):
        self.kubectl_path = kubectl_path

    @classmethod
    def locate(cls) -> "KubectlClient":
        """Create a client for the kubectl found by find_kubectl()."""
        return cls(find_kubectl())

    def run(self, args: List[str], options: Optional[RunOptions] = None) -> int:
        return run_tool(self.kubectl_path, args, options)
