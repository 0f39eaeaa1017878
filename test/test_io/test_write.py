"""Test that the writer classes work as intended."""

import h5py
import numpy as np
import pytest
import yaml

from caftruth.data import TrueInteraction, TrueParticle
from caftruth.io.write import HDF5Writer
from caftruth.utils.globals import SNAN_BITS
from caftruth.version import __version__


def member_type(in_file, name, key="interactions"):
    """Fetches the HDF5 type of one member of a compound dataset."""
    compound = in_file[key].id.get_type()
    return compound.get_member_type(compound.get_member_index(name.encode()))


class TestHDF5Writer:
    """Test the layout of the HDF5 files."""

    def test_layout(self, hdf5_output, cc_interaction):
        """Test the datasets created for a collection of records."""
        writer = HDF5Writer(hdf5_output)
        writer([cc_interaction, TrueInteraction()], cfg={"io": {"writer": "hdf5"}})

        with h5py.File(hdf5_output, "r") as in_file:
            assert set(in_file.keys()) == {
                "info",
                "interactions",
                "interactions_prim",
                "interactions_prim_index",
            }
            assert in_file["info"].dtype == np.float32
            assert in_file["info"].attrs["version"] == __version__
            assert "writer: hdf5" in in_file["info"].attrs["cfg"]

            dataset = in_file["interactions"]
            assert len(dataset) == 2
            assert dataset.attrs["class_name"] == "TrueInteraction"
            assert dataset.dtype.names[0] == "isvtxcont"
            assert "prim" not in dataset.dtype.names

            assert len(in_file["interactions_prim"]) == 2
            assert in_file["interactions_prim"].attrs["class_name"] == "TrueParticle"
            assert np.array_equal(
                in_file["interactions_prim_index"][:], [[0, 2], [2, 2]]
            )

    def test_column_types(self, hdf5_output, cc_interaction):
        """Test the storage type of each category of attribute."""
        HDF5Writer(hdf5_output)(cc_interaction)

        with h5py.File(hdf5_output, "r") as in_file:
            dtype = in_file["interactions"].dtype
            assert dtype["iscc"] == np.uint8
            assert dtype["E"] == np.float32
            assert dtype["npiplus"] == np.uint32
            assert dtype["hitnuc"] == np.int32
            assert dtype["vtx"].shape == (3,)
            assert dtype["vtx"].base == np.float32
            assert member_type(in_file, "mode").get_class() == h5py.h5t.ENUM
            assert member_type(in_file, "mode").enum_valueof(b"MEC") == 10
            assert member_type(in_file, "generator").enum_valueof(b"GENIE") == 1
            assert member_type(in_file, "genVersion").get_class() == h5py.h5t.VLEN
            string_type = member_type(in_file, "genConfigString")
            assert string_type.get_class() == h5py.h5t.STRING

            row = in_file["interactions"][0]
            assert row["mode"] == 10
            assert row["hitnuc"] == 2000000201

    def test_sentinel_bits(self, hdf5_output):
        """Test that the unset values are stored with their exact bits."""
        HDF5Writer(hdf5_output)(TrueInteraction())

        with h5py.File(hdf5_output, "r") as in_file:
            row = in_file["interactions"][0]
            assert row["E"].view(np.uint32) == SNAN_BITS
            assert np.all(row["vtx"].view(np.uint32) == SNAN_BITS)

    @pytest.mark.parametrize("vtx", [[1.0, 2.0, 3.0], [1, 2, 3]])
    def test_assigned_vector_type(self, hdf5_output, vtx):
        """Test that an assigned vector does not change its column type."""
        first = TrueInteraction()
        first.vtx = vtx
        HDF5Writer(hdf5_output)([first, TrueInteraction()])

        with h5py.File(hdf5_output, "r") as in_file:
            dataset = in_file["interactions"]
            assert dataset.dtype["vtx"].base == np.float32
            assert np.array_equal(dataset[0]["vtx"], [1.0, 2.0, 3.0])
            assert np.all(dataset[1]["vtx"].view(np.uint32) == SNAN_BITS)

    def test_units(self, hdf5_output, cc_interaction):
        """Test that the units of the dimensionful columns are stored."""
        HDF5Writer(hdf5_output)(cc_interaction)

        with h5py.File(hdf5_output, "r") as in_file:
            units = yaml.safe_load(in_file["interactions"].attrs["units"])
            assert units["E"] == "GeV"
            assert units["baseline"] == "m"
            assert "pdg" not in units

            units = yaml.safe_load(in_file["interactions_prim"].attrs["units"])
            assert units["p"] == "GeV"

    def test_empty(self, hdf5_output):
        """Test that an empty collection still creates the file layout."""
        HDF5Writer(hdf5_output)([])

        with h5py.File(hdf5_output, "r") as in_file:
            assert len(in_file["interactions"]) == 0
            assert len(in_file["interactions_prim_index"]) == 0

    def test_lite(self, hdf5_output, cc_interaction):
        """Test that the lite files drop the heavy attributes."""
        HDF5Writer(hdf5_output, lite=True)(cc_interaction)

        with h5py.File(hdf5_output, "r") as in_file:
            assert "interactions_prim" not in in_file
            assert "genConfigString" not in in_file["interactions"].dtype.names
            assert in_file["interactions"][0]["nprim"] == 2

    def test_key(self, hdf5_output, cc_interaction):
        """Test storing the records under a custom dataset name."""
        HDF5Writer(hdf5_output, key="truth")(cc_interaction)

        with h5py.File(hdf5_output, "r") as in_file:
            assert "truth" in in_file
            assert "truth_prim_index" in in_file

    def test_append(self, hdf5_output, cc_interaction):
        """Test adding records to an existing file."""
        HDF5Writer(hdf5_output)(cc_interaction)
        writer = HDF5Writer(hdf5_output, append=True)
        writer([cc_interaction, cc_interaction])

        with h5py.File(hdf5_output, "r") as in_file:
            assert len(in_file["interactions"]) == 3
            assert len(in_file["interactions_prim"]) == 6
            assert np.array_equal(in_file["interactions_prim_index"][-1], [4, 6])

    def test_multiple_calls(self, hdf5_output, cc_interaction):
        """Test that one writer can be called several times."""
        writer = HDF5Writer(hdf5_output)
        writer(cc_interaction)
        writer(TrueInteraction(nprim=1, prim=[TrueParticle(pdg=11)]))

        with h5py.File(hdf5_output, "r") as in_file:
            assert len(in_file["interactions"]) == 2
            assert np.array_equal(in_file["interactions_prim_index"][1], [2, 3])

    def test_overwrite(self, hdf5_output, cc_interaction):
        """Test that existing files are protected unless requested."""
        HDF5Writer(hdf5_output)(cc_interaction)

        with pytest.raises(FileExistsError):
            HDF5Writer(hdf5_output)

        HDF5Writer(hdf5_output, overwrite=True)(TrueInteraction())
        with h5py.File(hdf5_output, "r") as in_file:
            assert len(in_file["interactions"]) == 1

    def test_append_missing(self, hdf5_output):
        """Test that appending requires an existing file."""
        with pytest.raises(FileNotFoundError):
            HDF5Writer(hdf5_output, append=True)

    def test_class_mismatch(self, hdf5_output):
        """Test that records of another class cannot share a dataset."""
        HDF5Writer(hdf5_output)(TrueInteraction())

        with pytest.raises(TypeError):
            HDF5Writer(hdf5_output, append=True)(TrueParticle())
