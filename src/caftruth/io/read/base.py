"""Contains the base class of record readers.

A reader resolves its input files, counts the records each of them stores and
builds a global index of the records selected by the user. Inheriting classes
only have to load one record at a time through :meth:`ReaderBase.get`.
"""

import glob
import os

import numpy as np

from caftruth.utils.logger import logger

__all__ = ["ReaderBase"]


class ReaderBase:
    """Parent class of all record readers.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    file_paths : List[str]
        Files to read records from
    file_offsets : np.ndarray
        (F + 1) Global index of the first record of each file, followed by
        the total number of records
    entry_index : np.ndarray
        (N) Global indexes of the selected records
    """

    name = ""
    file_paths = None
    file_offsets = None
    entry_index = None

    def __len__(self):
        """Returns the number of selected records."""
        return len(self.entry_index)

    def __getitem__(self, idx):
        """Returns one selected record."""
        return self.get(idx)

    def __iter__(self):
        """Loops over the selected records."""
        for idx in range(len(self)):
            yield self.get(idx)

    def get(self, idx):
        """Loads one selected record, defined by the daughter class."""
        raise NotImplementedError

    @property
    def num_entries(self):
        """Total number of records stored in the files.

        Returns
        -------
        int
            Number of records, selected or not
        """
        return int(self.file_offsets[-1])

    def process_file_paths(self, file_keys):
        """Resolves the paths to the input files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path, glob pattern or list of them. A single path with a `.txt`
            extension is read as a list of paths, one per line.
        """
        assert file_keys, "No input `file_keys` provided, abort."
        if isinstance(file_keys, str):
            if os.path.splitext(file_keys)[-1] != ".txt":
                file_keys = [file_keys]
            elif not os.path.isfile(file_keys):
                raise FileNotFoundError(f"File list not found at path: {file_keys}")
            else:
                with open(file_keys, "r", encoding="utf-8") as f:
                    file_keys = [line.strip() for line in f if line.strip()]

        # Each pattern contributes its matches in alphabetical order
        self.file_paths = []
        for file_key in file_keys:
            matches = sorted(glob.glob(file_key))
            if not matches:
                raise FileNotFoundError(f"File key {file_key} matches no file.")
            self.file_paths.extend(matches)

        logger.info(
            "Will read records from %d file(s):\n - %s\n",
            len(self.file_paths),
            "\n - ".join(self.file_paths),
        )

    def process_file_offsets(self, counts):
        """Builds the global record index from the record count of each file.

        Parameters
        ----------
        counts : List[int]
            Number of records stored in each file
        """
        self.file_offsets = np.zeros(len(counts) + 1, dtype=np.int64)
        self.file_offsets[1:] = np.cumsum(counts)
        logger.info("Total number of records in the file(s): %d", self.num_entries)

    def process_entry_list(self, n_entry=None, n_skip=None, entry_list=None):
        """Selects the records to be accessed by :meth:`__getitem__`.

        Records are selected either as a contiguous range (`n_skip`,
        `n_entry`) or as an explicit list of global indexes.

        Parameters
        ----------
        n_entry : int, optional
            Maximum number of records to load
        n_skip : int, optional
            Number of records to skip at the beginning
        entry_list : List[int], optional
            Global indexes of the records to load, in loading order
        """
        assert entry_list is None or (n_entry is None and n_skip is None), (
            "Cannot select records with `entry_list` and with `n_entry` or "
            "`n_skip` at the same time."
        )

        if entry_list is not None:
            entry_index = np.asarray(entry_list, dtype=np.int64)
            assert np.all((entry_index >= 0) & (entry_index < self.num_entries)), (
                "Values in `entry_list` must index one of the "
                f"{self.num_entries} stored records."
            )

        else:
            start = n_skip or 0
            stop = self.num_entries if n_entry is None else start + n_entry
            assert stop <= self.num_entries, (
                f"Cannot load {n_entry} record(s) after skipping {start}, the "
                f"file(s) only store {self.num_entries}."
            )
            entry_index = np.arange(start, stop, dtype=np.int64)

        logger.info("Selected %d record(s)\n", len(entry_index))

        self.entry_index = entry_index

    def locate(self, idx):
        """Finds the file which stores a selected record.

        Parameters
        ----------
        idx : int
            Index of the record among the selected ones

        Returns
        -------
        int
            Index of the file in :attr:`file_paths`
        int
            Index of the record within that file
        """
        entry = self.entry_index[idx]
        file_idx = int(np.searchsorted(self.file_offsets, entry, side="right")) - 1

        return file_idx, int(entry - self.file_offsets[file_idx])
