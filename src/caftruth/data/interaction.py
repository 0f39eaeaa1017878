"""Module with a data class object which represents a true interaction.

The record holds the simulated truth of the interaction of a incident particle
(usually a neutrino, occasionally a cosmic or another top-level particle) with
the detector. The attribute names and their order define the persisted schema.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from caftruth.utils.enums import Generator, ScatteringMode
from caftruth.utils.globals import SNAN

from .base import DataBase
from .particle import TrueParticle

__all__ = ["TrueInteraction"]


@dataclass(eq=False)
class TrueInteraction(DataBase):
    """True interaction of a incident particle with the detector.

    Floating point attributes which are not computed for an interaction keep
    the signaling NaN sentinel. Vertex and position attributes are expressed
    in detector coordinates, neutrino parent attributes in beam coordinates.

    Attributes
    ----------
    isvtxcont : bool
        Whether the true vertex is within the detector. If not, might be a
        rock particle or a cosmic
    pdg : int
        PDG code of the incident particle
    pdgorig : int
        Initial (unoscillated) PDG code of the incident neutrino (may differ from
        `pdg` in flavor-swapped samples)
    iscc : bool
        Charged current (`True`) or neutral current/interference (`False`)
    mode : ScatteringMode
        Interaction mode
    targetPDG : int
        PDG code of the struck target
    hitnuc : int
        PDG code of the struck nucleon. For MEC, code of the struck nucleon
        pair: 2000000200 (nn), 2000000201 (np), 2000000202 (pp)
    E : float
        True energy [GeV]
    vtx : np.ndarray
        (3) Interaction vertex position in detector coordinates [cm]
    momentum : np.ndarray
        (3) Three-momentum of the incident particle [GeV]
    position : np.ndarray
        (3) Interaction position of the incident particle [cm]
    time : float
        True interaction time [ns]
    bjorkenX : float
        Bjorken x = -q^2 / (2 p.q) [dimensionless]
    inelasticity : float
        Inelasticity y = (p.q) / (k.p) = q0 / E
    Q2 : float
        Invariant four-momentum transfer from the lepton to the nuclear
        system [GeV^2]
    q0 : float
        Energy transferred from the lepton to the nuclear system, in the
        lab frame [GeV]
    modq : float
        Magnitude of the three-momentum transferred from the lepton to the
        nuclear system, in the lab frame [GeV]
    W : float
        Hadronic invariant mass [GeV]
    t : float
        Kinematic t
    baseline : float
        Distance from the neutrino production point to the interaction [m]
    npiplus : int
        Number of positive pions after the interaction, before FSI
    npiminus : int
        Number of negative pions after the interaction, before FSI
    npizero : int
        Number of neutral pions after the interaction, before FSI
    nproton : int
        Number of protons after the interaction, before FSI
    nneutron : int
        Number of neutrons after the interaction, before FSI
    ischarm : bool
        Whether a charm quark is involved in the interaction
    isseaquark : bool
        Whether the incident particle scattered off a sea quark
    resnum : int
        Resonance number, as provided by the generator
    xsec : float
        Cross section of the thrown interaction [1/GeV^2]
    genweight : float
        Weight assigned by the generator, if any
    prod_vtx : np.ndarray
        (3) Production vertex of the incident particle in beam coordinates [cm]
    parent_dcy_mom : np.ndarray
        (3) Momentum of the neutrino parent at decay in beam coordinates [GeV]
    parent_dcy_mode : int
        Decay mode of the parent hadron/muon (-1 if unknown)
    parent_pdg : int
        PDG code of the parent particle
    parent_dcy_E : float
        Energy of the parent particle at decay [GeV]
    imp_weight : float
        Importance weight from the flux file
    generator : Generator
        Generator which produced this interaction
    genVersion : np.ndarray
        (V) Version components of the generator
    genConfigString : str
        Generator configuration string (for GENIE 3+, this is the
        comprehensive model configuration)
    nprim : int
        Number of primary daughters
    prim : List[TrueParticle]
        Primary daughters. If there is an outgoing lepton, it comes first
    """

    isvtxcont: bool = False
    pdg: int = 0
    pdgorig: int = 0
    iscc: bool = False
    mode: ScatteringMode = ScatteringMode.UNKNOWN
    targetPDG: int = 0
    hitnuc: int = 0
    E: float = SNAN
    vtx: np.ndarray = None
    momentum: np.ndarray = None
    position: np.ndarray = None
    time: float = SNAN
    bjorkenX: float = SNAN
    inelasticity: float = SNAN
    Q2: float = SNAN
    q0: float = SNAN
    modq: float = SNAN
    W: float = SNAN
    t: float = SNAN
    baseline: float = SNAN
    npiplus: int = 0
    npiminus: int = 0
    npizero: int = 0
    nproton: int = 0
    nneutron: int = 0
    ischarm: bool = False
    isseaquark: bool = False
    resnum: int = 0
    xsec: float = SNAN
    genweight: float = SNAN
    prod_vtx: np.ndarray = None
    parent_dcy_mom: np.ndarray = None
    parent_dcy_mode: int = -1
    parent_pdg: int = 0
    parent_dcy_E: float = SNAN
    imp_weight: float = SNAN
    generator: Generator = Generator.UNKNOWN
    genVersion: np.ndarray = None
    genConfigString: str = ""
    nprim: int = 0
    prim: List[TrueParticle] = None

    # Enumerated attributes
    _enum_attrs = (("mode", ScatteringMode), ("generator", Generator))

    # Fixed-length attributes
    _fixed_length_attrs = (
        ("vtx", 3),
        ("momentum", 3),
        ("position", 3),
        ("prod_vtx", 3),
        ("parent_dcy_mom", 3),
    )

    # Variable-length attributes
    _var_length_attrs = (("genVersion", np.uint32),)

    # Scalar attributes with an explicit storage type
    _scalar_dtypes = (
        ("pdg", np.int32),
        ("pdgorig", np.int32),
        ("targetPDG", np.int32),
        ("hitnuc", np.int32),
        ("E", np.float32),
        ("time", np.float32),
        ("bjorkenX", np.float32),
        ("inelasticity", np.float32),
        ("Q2", np.float32),
        ("q0", np.float32),
        ("modq", np.float32),
        ("W", np.float32),
        ("t", np.float32),
        ("baseline", np.float32),
        ("npiplus", np.uint32),
        ("npiminus", np.uint32),
        ("npizero", np.uint32),
        ("nproton", np.uint32),
        ("nneutron", np.uint32),
        ("resnum", np.int32),
        ("xsec", np.float32),
        ("genweight", np.float32),
        ("parent_dcy_mode", np.int32),
        ("parent_pdg", np.int32),
        ("parent_dcy_E", np.float32),
        ("imp_weight", np.float32),
        ("nprim", np.int32),
    )

    # Attributes which hold lists of other data structures
    _obj_list_attrs = (("prim", TrueParticle),)

    # Attributes that must not be stored to file when storing lite files
    _lite_skip_attrs = ("genConfigString", "prim")

    # Attributes specifying coordinates in the detector frame
    _pos_attrs = ("vtx", "position")

    # Attributes specifying coordinates or vectors in the beam frame
    _beam_attrs = ("prod_vtx", "parent_dcy_mom")

    # Attributes specifying vector components
    _vec_attrs = ("momentum",)

    # String attributes
    _str_attrs = ("genConfigString",)

    # Boolean attributes
    _bool_attrs = ("isvtxcont", "iscc", "ischarm", "isseaquark")

    # Units of the dimensionful attributes
    _units = (
        ("E", "GeV"),
        ("vtx", "cm"),
        ("momentum", "GeV"),
        ("position", "cm"),
        ("time", "ns"),
        ("Q2", "GeV^2"),
        ("q0", "GeV"),
        ("modq", "GeV"),
        ("W", "GeV"),
        ("baseline", "m"),
        ("xsec", "1/GeV^2"),
        ("prod_vtx", "cm"),
        ("parent_dcy_mom", "GeV"),
        ("parent_dcy_E", "GeV"),
    )
