"""
Configuration module for tracenet.

Provides the process-wide settings read by nodes and connections at call time,
with YAML loading and pydantic validation.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


class TracenetConfig(BaseModel):
    """Process-wide settings."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    # Warn when an already active self-connection is enabled again
    warnings: bool = False
    # Half-width of the uniform range for initial non-input biases
    bias_init: float = Field(default=0.1, ge=0.0)
    # Half-width of the uniform range for connections created without a weight
    weight_init: float = Field(default=0.1, ge=0.0)
    log_level: str = "INFO"


_config = TracenetConfig()


def get_config() -> TracenetConfig:
    """Return the active process-wide configuration."""
    return _config


def configure(**overrides) -> TracenetConfig:
    """Update the active configuration in place.

    Raises:
        ValueError: If a key is unknown or a value fails validation
    """
    for key, value in overrides.items():
        if key not in TracenetConfig.model_fields:
            raise ValueError(f"Unknown configuration key: {key}")
        setattr(_config, key, value)
    return _config


def reset_config() -> TracenetConfig:
    """Restore every setting to its default."""
    defaults = TracenetConfig()
    for key in TracenetConfig.model_fields:
        setattr(_config, key, getattr(defaults, key))
    return _config


def load_config(config_path: str | Path) -> TracenetConfig:
    """Load settings from a YAML file and make them active.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        The active TracenetConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If config validation fails
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raise ValueError("Empty configuration file")

    return _apply(raw_config)


def load_config_from_string(config_string: str) -> TracenetConfig:
    """Load settings from a YAML string and make them active."""
    raw_config = yaml.safe_load(config_string)
    if raw_config is None:
        raise ValueError("Empty configuration string")
    return _apply(raw_config)


def _apply(raw_config: Any) -> TracenetConfig:
    # Validate the whole document before touching the active settings
    validated = TracenetConfig.model_validate(raw_config)
    for key in TracenetConfig.model_fields:
        setattr(_config, key, getattr(validated, key))
    return _config
