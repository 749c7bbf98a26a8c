"""Step output and failure reporting for GitHub Actions runners."""
import os
import sys
import logging

logger = logging.getLogger(__name__)


def set_output(name: str, value: str) -> None:
    """
    Publish a named step output.

    Appends `name=value` to the file named by GITHUB_OUTPUT when running on a
    runner, otherwise prints it to stdout.
    """
    output_file = os.getenv("GITHUB_OUTPUT")
    if output_file:
        with open(output_file, "a") as f:
            f.write(f"{name}={value}\n")
        logger.debug(f"Wrote output '{name}' to {output_file}")
    else:
        print(f"{name}={value}")


def report_failure(message: str) -> None:
    """Print a failure message, plus an error annotation on GitHub Actions."""
    if os.getenv("GITHUB_ACTIONS") == "true":
        print(f"::error::{message}")
    print(f"Error: {message}", file=sys.stderr)
