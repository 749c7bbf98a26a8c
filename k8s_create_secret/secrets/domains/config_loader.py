"""Input loading for k8s-create-secret."""
import os
import logging
from typing import Dict, Optional, Any
import yaml

logger = logging.getLogger(__name__)

INPUT_NAMES = (
    "secret-type",
    "secret-name",
    "namespace",
    "container-registry-username",
    "container-registry-password",
    "container-registry-url",
    "container-registry-email",
    "arguments",
)

REQUIRED_INPUTS = ("secret-type", "secret-name")

CONFIG_ENV_VAR = "K8S_SECRET_CONFIG"


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def get_input(name: str) -> str:
    """
    Read an input from the GitHub Actions environment.

    Inputs arrive as INPUT_<NAME> with the name uppercased and spaces
    replaced by underscores; hyphens are kept. Values are trimmed.

    Returns:
        Trimmed value, or "" if not set
    """
    env_name = f"INPUT_{name.replace(' ', '_').upper()}"
    return os.getenv(env_name, "").strip()


def _get_config_path(config_path: Optional[str] = None) -> Optional[str]:
    """
    Get the inputs file path.

    Priority order:
    1. Explicit path (from --config)
    2. K8S_SECRET_CONFIG environment variable

    Returns:
        Path to the inputs file, or None if no file is configured
    """
    if config_path:
        return config_path

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        logger.info(f"Using inputs file from {CONFIG_ENV_VAR}: {env_path}")
        return env_path

    return None


def _load_config_file(config_path: str) -> Dict[str, str]:
    """
    Load a flat mapping of inputs from a YAML file.

    Raises:
        ConfigError: If the file is missing, unparseable, or not a mapping
    """
    if not os.path.exists(config_path):
        raise ConfigError(f"Inputs file not found at: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML inputs at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read inputs file at {config_path}: {e}")

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Inputs file at {config_path} must contain a mapping of input names to values")

    unknown = sorted(str(key) for key in config if key not in INPUT_NAMES)
    if unknown:
        logger.warning(f"Ignoring unknown inputs in {config_path}: {', '.join(unknown)}")

    return {
        key: "" if config[key] is None else str(config[key]).strip()
        for key in INPUT_NAMES
        if key in config
    }


def load_inputs(overrides: Optional[Dict[str, Any]] = None, config_path: Optional[str] = None) -> Dict[str, str]:
    """
    Load and validate action inputs.

    Sources, highest priority first:
    1. overrides (explicit CLI flags; None values are skipped)
    2. INPUT_* environment variables
    3. YAML inputs file

    Args:
        overrides: Input values keyed by input name
        config_path: Optional path to a YAML inputs file

    Returns:
        Dict with every name in INPUT_NAMES; unset inputs map to ""

    Raises:
        ConfigError: If a required input is missing or the inputs file is invalid
    """
    inputs = {name: "" for name in INPUT_NAMES}

    path = _get_config_path(config_path)
    if path:
        inputs.update(_load_config_file(path))

    for name in INPUT_NAMES:
        env_value = get_input(name)
        if env_value:
            inputs[name] = env_value

    for name, value in (overrides or {}).items():
        if value is not None:
            inputs[name] = str(value).strip()

    missing = [name for name in REQUIRED_INPUTS if not inputs[name]]
    if missing:
        raise ConfigError(f"Input required and not supplied: {', '.join(missing)}")

    logger.debug(f"Loaded inputs for secret '{inputs['secret-name']}' of type '{inputs['secret-type']}'")
    return inputs
