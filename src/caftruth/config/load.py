"""Loading of YAML configurations.

A configuration may pull other files in with an `include` directive, a path
or a list of paths relative to the including file:

.. code-block:: yaml

    include: base.yaml
    validate:
      strict: true

Included files are merged in order, then the content of the including file is
merged on top of them.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigCycleError, ConfigIncludeError, ConfigTypeError
from .operations import deep_merge

__all__ = ["load_config", "load_config_file"]

INCLUDE_KEY = "include"


def _parse(text: str, source: str) -> Dict[str, Any]:
    """Parses the YAML content of one configuration.

    Parameters
    ----------
    text : str
        YAML content
    source : str
        Name of the content origin, used in error messages

    Returns
    -------
    Dict[str, Any]
        Parsed configuration, empty if there is no content
    """
    try:
        config = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigIncludeError(f"Error loading {source}: {exc}") from exc

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigTypeError(
            f"The configuration in {source} must be a dictionary, "
            f"got {type(config).__name__}."
        )

    return config


def _resolve(
    config: Dict[str, Any], root_dir: str, stack: List[str]
) -> Dict[str, Any]:
    """Replaces the `include` directive of a configuration by its content.

    Parameters
    ----------
    config : Dict[str, Any]
        Parsed configuration, which may hold an `include` directive
    root_dir : str
        Directory against which relative include paths are resolved
    stack : List[str]
        Files being loaded, outermost first

    Returns
    -------
    Dict[str, Any]
        Configuration merged with all the files it includes
    """
    includes = config.pop(INCLUDE_KEY, [])
    if isinstance(includes, str):
        includes = [includes]

    merged = {}
    for path in includes:
        path = os.path.abspath(os.path.join(root_dir, path))
        if path in stack:
            raise ConfigCycleError(stack + [path])
        if not os.path.isfile(path):
            raise ConfigIncludeError(f"Configuration file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            included = _parse(f.read(), path)

        included = _resolve(included, os.path.dirname(path), stack + [path])
        merged = deep_merge(merged, included)

    return deep_merge(merged, config)


def load_config(config_str: str, root_dir: Optional[str] = None) -> Dict[str, Any]:
    """Loads a configuration from a YAML string.

    Parameters
    ----------
    config_str : str
        YAML configuration string
    root_dir : str, optional
        Directory against which relative include paths are resolved. Defaults
        to the current working directory.

    Returns
    -------
    Dict[str, Any]
        Loaded and merged configuration

    Examples
    --------
    >>> config = load_config("io:\\n  reader:\\n    name: hdf5\\n")
    >>> config["io"]["reader"]["name"]
    'hdf5'
    """
    config = _parse(config_str, "<string>")

    return _resolve(config, root_dir or os.getcwd(), ["<string>"])


def load_config_file(cfg_path: str) -> Dict[str, Any]:
    """Loads a configuration from a YAML file.

    Relative include paths are resolved against the directory of the file.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    Dict[str, Any]
        Loaded and merged configuration
    """
    cfg_path = os.path.abspath(cfg_path)
    if not os.path.isfile(cfg_path):
        raise ConfigIncludeError(f"Configuration file not found: {cfg_path}")

    with open(cfg_path, "r", encoding="utf-8") as f:
        config = _parse(f.read(), cfg_path)

    return _resolve(config, os.path.dirname(cfg_path), [cfg_path])
