"""Helpers to interpret the particle codes stored in the records."""

from .enums import NucleonPair
from .globals import CHARGED_LEPTON_PDGS, MEC_CODE_BLOCK, MEC_CODES

__all__ = [
    "is_nucleon_pair",
    "in_nucleon_pair_block",
    "nucleon_pair",
    "is_charged_lepton",
]


def in_nucleon_pair_block(code):
    """Checks whether a struck nucleon code lives in the reserved pair block.

    Parameters
    ----------
    code : int
        Struck nucleon code

    Returns
    -------
    bool
        `True` if the code belongs to the block reserved for nucleon pairs
    """
    return MEC_CODE_BLOCK[0] <= int(code) <= MEC_CODE_BLOCK[1]


def is_nucleon_pair(code):
    """Checks whether a struck nucleon code represents a nucleon pair.

    Parameters
    ----------
    code : int
        Struck nucleon code

    Returns
    -------
    bool
        `True` if the code is one of the documented nucleon pair codes
    """
    return int(code) in MEC_CODES


def nucleon_pair(code):
    """Interprets a struck nucleon code as a nucleon pair, if it is one.

    Parameters
    ----------
    code : int
        Struck nucleon code

    Returns
    -------
    Union[NucleonPair, None]
        Nucleon pair, or `None` if the code is an ordinary PDG code
    """
    if not is_nucleon_pair(code):
        return None

    return NucleonPair(int(code))


def is_charged_lepton(pdg):
    """Checks whether a PDG code corresponds to a charged lepton.

    Parameters
    ----------
    pdg : int
        PDG code of the particle

    Returns
    -------
    bool
        `True` if the particle is a charged lepton or anti-lepton
    """
    return abs(int(pdg)) in CHARGED_LEPTON_PDGS
