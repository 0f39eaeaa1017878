"""Configuration loading system.

Configurations are YAML files with `io` (reader/writer) and `validate` blocks.
Files can include other files, and individual values can be overridden with
dot-notation key paths.
"""

from .errors import (
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
)
from .load import load_config, load_config_file
from .operations import apply_overrides, deep_merge, parse_value, set_nested_value

__all__ = [
    "load_config",
    "load_config_file",
    "apply_overrides",
    "deep_merge",
    "parse_value",
    "set_nested_value",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
]
