"""Test suite for the command-line entry point."""

import csv

import pytest

from caftruth.bin.cli import cli
from caftruth.data import TrueInteraction
from caftruth.io.write import HDF5Writer


@pytest.fixture(name="hdf5_input")
def fixture_hdf5_input(hdf5_output, cc_interaction):
    """Stores a consistent record to an HDF5 file."""
    HDF5Writer(hdf5_output)([cc_interaction, cc_interaction])
    return hdf5_output


@pytest.fixture(name="hdf5_bad_input")
def fixture_hdf5_bad_input(tmp_path, muon):
    """Stores a record with an inconsistent primary count to an HDF5 file."""
    path = str(tmp_path / "bad.h5")
    HDF5Writer(path)(TrueInteraction(nprim=2, prim=[muon]))
    return path


class TestCLI:
    """Test the sub-commands of the command-line tool."""

    def test_no_command(self, capsys):
        """Test that the help is printed without a sub-command."""
        assert cli([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        """Test the version flag."""
        with pytest.raises(SystemExit):
            cli(["--version"])
        assert "caftruth" in capsys.readouterr().out

    def test_dump(self, hdf5_input, capsys):
        """Test printing the records of a file."""
        assert cli(["dump", hdf5_input, "-n", "1"]) == 0

        out = capsys.readouterr().out
        assert "Entry 0:" in out
        assert "Entry 1:" not in out
        assert "hitnuc: 2000000201" in out
        assert "prim: 2 element(s)" in out

    def test_validate(self, hdf5_input, hdf5_bad_input):
        """Test that the exit status reflects the error-level issues."""
        assert cli(["validate", hdf5_input]) == 0
        assert cli(["validate", hdf5_bad_input]) == 1
        assert cli(["validate", hdf5_bad_input, "--strict"]) == 1

    def test_validate_overrides(self, hdf5_bad_input, tmp_path):
        """Test configuring the validator from a file and overrides."""
        cfg_path = tmp_path / "cfg.yaml"
        cfg_path.write_text("validate:\n  check_counts: false\n")
        assert cli(["validate", hdf5_bad_input, "-c", str(cfg_path)]) == 0

        args = ["validate", hdf5_bad_input, "-c", str(cfg_path)]
        assert cli(args + ["--set", "validate.check_counts=true"]) == 1

    def test_csv(self, hdf5_input, tmp_path):
        """Test exporting the records to a CSV file."""
        output = str(tmp_path / "out.csv")
        assert cli(["csv", hdf5_input, "-o", output, "--nskip", "1"]) == 0

        with open(output, "r", encoding="utf-8", newline="") as in_file:
            rows = list(csv.reader(in_file))
        assert len(rows) == 2
        assert "vtx_x" in rows[0]

        with pytest.raises(FileExistsError):
            cli(["csv", hdf5_input, "-o", output])

        assert cli(["csv", hdf5_input, "-o", output, "--overwrite"]) == 0

    def test_csv_lengths(self, hdf5_input, tmp_path):
        """Test passing CSV writer parameters through the configuration."""
        output = str(tmp_path / "out.csv")
        args = ["csv", hdf5_input, "-o", output]
        assert cli(args + ["--set", "io.writer.lengths={genVersion: 3}"]) == 0

        with open(output, "r", encoding="utf-8", newline="") as in_file:
            header = next(csv.reader(in_file))
        assert "genVersion_2" in header
