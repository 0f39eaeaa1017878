"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import os

import numpy as np
import pytest

from caftruth.data import TrueInteraction, TrueParticle
from caftruth.utils.enums import Generator, ScatteringMode
from caftruth.utils.globals import MEC_NP_CODE


@pytest.fixture(name="muon")
def fixture_muon():
    """Builds the outgoing muon of a charged-current interaction."""
    return TrueParticle(
        pdg=13,
        G4ID=1,
        interaction_id=0,
        time=np.float32(1.5),
        p=np.array([1.2, 0.1, -0.2, 1.1], dtype=np.float32),
        start_pos=np.array([10.0, -5.0, 100.0], dtype=np.float32),
        end_pos=np.array([20.0, -4.0, 350.0], dtype=np.float32),
        daughters=np.array([5, 6], dtype=np.int32),
    )


@pytest.fixture(name="proton")
def fixture_proton():
    """Builds a proton knocked out of the nucleus."""
    return TrueParticle(
        pdg=2212,
        G4ID=2,
        interaction_id=0,
        p=np.array([1.0, 0.0, 0.3, 0.1], dtype=np.float32),
        start_pos=np.array([10.0, -5.0, 100.0], dtype=np.float32),
    )


@pytest.fixture(name="cc_interaction")
def fixture_cc_interaction(muon, proton):
    """Builds a fully populated charged-current MEC interaction.

    The production vertex in the beam frame is numerically equal to the
    interaction vertex in the detector frame, but is stored separately.
    """
    vtx = np.array([10.0, -5.0, 100.0], dtype=np.float32)
    return TrueInteraction(
        isvtxcont=True,
        pdg=14,
        pdgorig=14,
        iscc=True,
        mode=ScatteringMode.MEC,
        targetPDG=1000180400,
        hitnuc=MEC_NP_CODE,
        E=np.float32(2.5),
        vtx=vtx,
        momentum=np.array([0.0, 0.05, 2.5], dtype=np.float32),
        position=vtx.copy(),
        time=np.float32(12.0),
        Q2=np.float32(0.4),
        q0=np.float32(0.8),
        npiplus=1,
        nproton=2,
        xsec=np.float32(1e-38),
        genweight=np.float32(1.0),
        prod_vtx=vtx.copy(),
        parent_dcy_mom=np.array([0.1, 0.2, 30.0], dtype=np.float32),
        parent_dcy_mode=13,
        parent_pdg=211,
        parent_dcy_E=np.float32(30.0),
        imp_weight=np.float32(1.0),
        generator=Generator.GENIE,
        genVersion=[3, 4, 0],
        genConfigString="AR23_20i_00_000",
        nprim=2,
        prim=[muon, proton],
    )


@pytest.fixture(name="hdf5_output")
def fixture_hdf5_output(tmp_path):
    """Create a dummy output path for an HDF5 file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    """
    return os.path.join(tmp_path, "dummy.h5")


@pytest.fixture(name="csv_output")
def fixture_csv_output(tmp_path):
    """Create a dummy output path for a CSV file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    """
    return os.path.join(tmp_path, "dummy.csv")
