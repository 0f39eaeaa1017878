"""Exceptions raised while loading or editing a configuration."""

from typing import List


class ConfigError(Exception):
    """Base exception of the configuration package."""


class ConfigIncludeError(ConfigError):
    """An included file is missing or is not valid YAML."""


class ConfigCycleError(ConfigError):
    """A file includes itself, directly or through other files."""

    def __init__(self, cycle_path: List[str]):
        """Stores the chain of files which forms the cycle.

        Parameters
        ----------
        cycle_path : List[str]
            Files in include order, the first one repeated at the end
        """
        self.cycle_path = cycle_path
        super().__init__(f"Circular include detected: {' -> '.join(cycle_path)}")


class ConfigPathError(ConfigError):
    """An override is malformed or its key path is empty."""


class ConfigTypeError(ConfigError):
    """A configuration or one of its blocks is not a dictionary."""
