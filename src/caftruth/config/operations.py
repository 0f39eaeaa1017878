"""Operations on configuration dictionaries.

Included files are merged into the including one with :func:`deep_merge`.
The command line then edits the merged configuration with `key.path=value`
overrides, e.g. `--set io.reader.n_entry=10` or `--set validate.strict=true`.
"""

from copy import deepcopy
from typing import Any, Dict, List

import yaml

from .errors import ConfigPathError, ConfigTypeError

__all__ = ["deep_merge", "parse_value", "set_nested_value", "apply_overrides"]


def deep_merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """Merges a configuration on top of another one.

    Blocks present in both configurations (e.g. `io.reader`) are merged key
    by key. Any other value of `update` replaces the one in `base`. Neither
    input is modified.

    Parameters
    ----------
    base : Dict[str, Any]
        Configuration to merge into
    update : Dict[str, Any]
        Configuration which takes precedence

    Returns
    -------
    Dict[str, Any]
        Merged configuration
    """
    merged = deepcopy(base)
    for key, value in update.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)

    return merged


def parse_value(value: Any) -> Any:
    """Interprets the value of a command-line override.

    Values follow YAML typing: `10` is an integer, `true` a boolean and
    `[0, 2]` a list of entries. Blank strings and strings which are not
    valid YAML are kept as they are.

    Parameters
    ----------
    value : Any
        Value to interpret

    Returns
    -------
    Any
        Typed value
    """
    if not isinstance(value, str) or not value.strip():
        return value

    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def set_nested_value(config: Dict[str, Any], key_path: str, value: Any):
    """Sets a configuration parameter from its dot-separated path.

    Blocks along the path which do not exist yet are created.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary, modified in place
    key_path : str
        Dot-separated path to the parameter (e.g. "io.reader.n_entry")
    value : Any
        Value of the parameter

    Returns
    -------
    Dict[str, Any]
        Modified configuration

    Raises
    ------
    ConfigPathError
        If the path has an empty component
    ConfigTypeError
        If the path goes through a value which is not a block
    """
    keys = key_path.split(".")
    if not all(keys):
        raise ConfigPathError(f"Invalid configuration path: '{key_path}'.")

    block = config
    for depth, key in enumerate(keys[:-1]):
        block = block.setdefault(key, {})
        if not isinstance(block, dict):
            parent = ".".join(keys[: depth + 1])
            raise ConfigTypeError(
                f"Cannot set '{key_path}': '{parent}' is not a configuration "
                "block."
            )

    block[keys[-1]] = value

    return config


def apply_overrides(config: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    """Applies a list of `key.path=value` overrides to a configuration.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary, modified in place
    overrides : List[str]
        List of overrides in the form "key.path=value"

    Returns
    -------
    Dict[str, Any]
        Modified configuration
    """
    for override in overrides:
        key_path, sep, value = override.partition("=")
        if not sep:
            raise ConfigPathError(
                f"Invalid override '{override}', expected 'key.path=value'."
            )

        set_nested_value(config, key_path.strip(), parse_value(value.strip()))

    return config
