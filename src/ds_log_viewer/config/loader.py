"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import yaml

from ..utils.async_helpers import ConfigError
from .schema import ViewerConfig


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path | None = None) -> ViewerConfig:
    """
    Load configuration from a YAML file with environment variable substitution.

    Without a path the defaults (plus any ``DS_LOG_VIEWER_*`` environment
    overrides) are returned.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated ViewerConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If environment variables are missing or config is invalid
    """
    if path is None:
        return ViewerConfig()

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    try:
        yaml_with_env = substitute_env_vars(raw_yaml)
        config_dict = yaml.safe_load(yaml_with_env) or {}
        if not isinstance(config_dict, dict):
            raise ValueError("Top level of the configuration must be a mapping")
        config = ViewerConfig.model_validate(config_dict)
    except (ValueError, yaml.YAMLError) as e:
        # pydantic's ValidationError is a ValueError
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    validate_config(config)

    return config


def validate_config(config: ViewerConfig) -> None:
    """
    Perform additional cross-field validation.

    Args:
        config: Configuration to validate

    Raises:
        ConfigError: If the navigation markers collide
    """
    if config.navigation.error_marker == config.navigation.instance_marker:
        raise ConfigError("error_marker and instance_marker must differ")
