"""Builds IO tools from the `name`-keyed blocks of a configuration.

A block such as

.. code-block:: yaml

    writer:
      name: csv
      file_name: interactions.csv

is turned into `CSVWriter(file_name="interactions.csv")`.
"""

from copy import deepcopy

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module, pattern=None):
    """Maps the names under which the classes of a module can be requested.

    Each class defined in the module (or its submodules) is registered under
    its class name and, if it defines a non-empty `name` attribute, under
    that short name as well.

    Parameters
    ----------
    module : module
        Module which exposes the classes
    pattern : str, optional
        If specified, only classes whose name contains it are registered

    Returns
    -------
    Dict[str, type]
        Classes by name
    """
    cls_dict = {}
    for attr in getattr(module, "__all__", dir(module)):
        cls = getattr(module, attr)
        if attr.startswith("_") or not isinstance(cls, type):
            continue
        if not cls.__module__.startswith(module.__name__):
            continue
        if pattern is not None and pattern not in cls.__name__:
            continue

        cls_dict[cls.__name__] = cls
        if getattr(cls, "name", ""):
            cls_dict[cls.name] = cls

    return cls_dict


def instantiate(cls_dict, cfg, **kwargs):
    """Instantiates the class requested by a configuration block.

    Parameters
    ----------
    cls_dict : Dict[str, type]
        Classes by name, as built by :func:`module_dict`
    cfg : Union[str, dict]
        Configuration block, or simply the name of the class
    **kwargs : dict, optional
        Additional arguments, which must not repeat those of the block

    Returns
    -------
    object
        Instantiated object
    """
    config = {"name": cfg} if isinstance(cfg, str) else deepcopy(cfg)
    assert "name" in config, "The configuration block must provide a `name`."

    name = config.pop("name")
    if name not in cls_dict:
        raise ValueError(
            f"Unknown class name '{name}'. Available names: {list(cls_dict)}"
        )

    repeated = set(kwargs).intersection(config)
    assert not repeated, (
        f"Argument(s) {sorted(repeated)} provided both in the configuration "
        "block and explicitly."
    )
    config.update(kwargs)

    cls = cls_dict[name]
    try:
        return cls(**config)

    except Exception:
        logger.error(
            "Failed to instantiate %s with these arguments: %s", cls.__name__, config
        )
        raise
