"""Input validation for CLI arguments."""
import re
import sys

# RFC 1123 subdomain, as required for Kubernetes object names
SECRET_NAME_PATTERN = r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$'
SECRET_NAME_MAX_LENGTH = 253


def validate_secret_name(name: str) -> None:
    """
    Validate secret name matches Kubernetes object name rules.

    Kubernetes allows lowercase alphanumerics, '-' and '.', starting and
    ending with an alphanumeric, at most 253 characters.

    Args:
        name: Secret name to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print("Error: Secret name cannot be empty", file=sys.stderr)
        sys.exit(2)

    if len(name) > SECRET_NAME_MAX_LENGTH or not re.match(SECRET_NAME_PATTERN, name):
        print(f"Error: Invalid secret name '{name}'", file=sys.stderr)
        print("\nAllowed characters: lowercase letters, numbers, hyphens (-), dots (.)", file=sys.stderr)
        print("Must start and end with a letter or number, at most 253 characters.", file=sys.stderr)
        print("\nExamples of valid names:", file=sys.stderr)
        print("  ✓ regcred", file=sys.stderr)
        print("  ✓ api-key.prod", file=sys.stderr)
        print("\nExamples of invalid names:", file=sys.stderr)
        print("  ✗ MySecret (uppercase)", file=sys.stderr)
        print("  ✗ my_secret (contains underscore)", file=sys.stderr)
        sys.exit(2)
