"""Module with a data class object which represents a true daughter particle.

This mirrors the primary particles attached to a true interaction record.
"""

from dataclasses import dataclass

import numpy as np

from caftruth.utils.globals import SNAN

from .base import DataBase

__all__ = ["TrueParticle"]


@dataclass(eq=False)
class TrueParticle(DataBase):
    """True particle produced in an interaction.

    Attributes
    ----------
    pdg : int
        PDG code of the particle
    G4ID : int
        Geant4 track ID of the particle (-1 if it was never tracked)
    interaction_id : int
        Index of the interaction this particle belongs to
    time : float
        Creation time of the particle [ns]
    p : np.ndarray
        (4) Four-momentum of the particle (E, px, py, pz) [GeV]
    start_pos : np.ndarray
        (3) Start position in detector coordinates [cm]
    end_pos : np.ndarray
        (3) End position in detector coordinates [cm]
    parent : int
        Geant4 track ID of the parent particle (-1 if primary)
    daughters : np.ndarray
        (D) Geant4 track IDs of the daughter particles
    first_process : int
        Geant4 process which created the particle
    first_subprocess : int
        Geant4 subprocess which created the particle
    end_process : int
        Geant4 process which ended the particle
    end_subprocess : int
        Geant4 subprocess which ended the particle
    """

    pdg: int = 0
    G4ID: int = -1
    interaction_id: int = -1
    time: float = SNAN
    p: np.ndarray = None
    start_pos: np.ndarray = None
    end_pos: np.ndarray = None
    parent: int = -1
    daughters: np.ndarray = None
    first_process: int = 0
    first_subprocess: int = 0
    end_process: int = 0
    end_subprocess: int = 0

    # Fixed-length attributes
    _fixed_length_attrs = (("p", 4), ("start_pos", 3), ("end_pos", 3))

    # Variable-length attributes
    _var_length_attrs = (("daughters", np.int32),)

    # Scalar attributes with an explicit storage type
    _scalar_dtypes = (
        ("pdg", np.int32),
        ("G4ID", np.int32),
        ("interaction_id", np.int32),
        ("time", np.float32),
        ("parent", np.int32),
        ("first_process", np.uint32),
        ("first_subprocess", np.uint32),
        ("end_process", np.uint32),
        ("end_subprocess", np.uint32),
    )

    # Attributes specifying coordinates
    _pos_attrs = ("start_pos", "end_pos")

    # Units of the dimensionful attributes
    _units = (("time", "ns"), ("p", "GeV"), ("start_pos", "cm"), ("end_pos", "cm"))
