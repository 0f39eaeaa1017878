"""Module which contains enumerated variables shared across the project.

The integer value of each enumerator is what gets persisted to file. These
values must never be changed or reused: new tags are appended with new values.
"""

from enum import IntEnum

from .globals import MEC_NN_CODE, MEC_NP_CODE, MEC_PP_CODE

__all__ = ["Generator", "ScatteringMode", "NucleonPair", "enum_factory"]


class UnknownMixin:
    """Maps any value which is not part of the vocabulary onto `UNKNOWN`."""

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class Generator(UnknownMixin, IntEnum):
    """Enumerates the generators which can produce neutrino interactions.

    Extend as other generators are used.
    """

    UNKNOWN = 0
    GENIE = 1
    GIBUU = 2
    NEUT = 3


class ScatteringMode(UnknownMixin, IntEnum):
    """Enumerates the neutrino interaction categories.

    The values follow the `MCNeutrino` convention of the LArSoft simulation
    base (itself derived from the GENIE scattering types).
    """

    UNKNOWN = -1
    QE = 0
    RES = 1
    DIS = 2
    COH = 3
    COH_ELASTIC = 4
    ELECTRON_SCATTERING = 5
    IMD_ANNIHILATION = 6
    INVERSE_BETA_DECAY = 7
    GLASHOW_RESONANCE = 8
    AM_NU_GAMMA = 9
    MEC = 10
    DIFFRACTIVE = 11
    EM = 12
    WEAK_MIX = 13


class NucleonPair(IntEnum):
    """Enumerates the struck nucleon pair codes of multi-nucleon processes."""

    NN = MEC_NN_CODE
    NP = MEC_NP_CODE
    PP = MEC_PP_CODE


ENUM_DICT = {
    "generator": Generator,
    "mode": ScatteringMode,
    "nucleon_pair": NucleonPair,
}


def enum_factory(enum, value):
    """Parses an enumerated object from string name(s) to value(s).

    Parameters
    ----------
    enum : str
        Name of the enumerated type
    value : Union[str, List[str]]
        Name or names of the enumerated objects (from config)

    Returns
    -------
    Union[int, List[int]]
        Value or values of the enumerated objects
    """
    # Get the enumerated type
    assert enum in ENUM_DICT, (
        f"Enumerated type not recognized: {enum}. Must be one of "
        f"{list(ENUM_DICT.keys())}."
    )
    enum = ENUM_DICT[enum]

    # Translate enumerated strings into values
    if isinstance(value, str):
        return _parse_enum_name(enum, value)

    return [_parse_enum_name(enum, v) for v in value]


def _parse_enum_name(enum, name):
    """Translates a single enumerator name into its value.

    Parameters
    ----------
    enum : IntEnum
        Enumerated type
    name : str
        Case-insensitive name of the enumerator

    Returns
    -------
    int
        Value of the enumerator
    """
    if name.upper() not in enum.__members__:
        raise ValueError(
            f"Enumerated object not recognized: {name}. Must be one "
            f"of {[e.name for e in enum]}."
        )

    return enum[name.upper()].value
