"""Module to write flattened records to CSV files."""

import csv
import os

from caftruth.data.base import DataBase

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes records to a CSV file, one row per record.

    Rows are built with :meth:`DataBase.scalar_dict`. The columns of the
    first row written to a file define its header, which every later row must
    match. Unset floating point values are written as `nan`.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          writer:
            name: csv
            file_name: interactions.csv
            lengths:
              genVersion: 3
    """

    name = "csv"

    def __init__(
        self,
        file_name="output.csv",
        overwrite=False,
        append=False,
        accept_missing=False,
        lengths=None,
    ):
        """Checks the output file and stores the writer parameters.

        Parameters
        ----------
        file_name : str, default 'output.csv'
            Path to the output CSV file
        overwrite : bool, default False
            If `True`, replace the output file if it already exists
        append : bool, default False
            If `True`, add rows to an existing file under its header
        accept_missing : bool, default False
            If `True`, rows may lack some of the header columns, which are
            then filled with -1
        lengths : Dict[str, int], optional
            Number of columns given to each variable-length attribute
        """
        exists = os.path.isfile(file_name)
        if append and not exists:
            raise FileNotFoundError(
                f"Cannot append rows to {file_name}, the file does not exist."
            )
        if not append and not overwrite and exists:
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name
        self.accept_missing = accept_missing
        self.lengths = lengths

        # When appending, the header of the existing file is the reference
        self.header = None
        if append:
            with open(file_name, "r", encoding="utf-8", newline="") as in_file:
                self.header = next(csv.reader(in_file), None)

    def __call__(self, objects):
        """Flattens and writes a collection of records.

        Parameters
        ----------
        objects : Union[DataBase, List[DataBase]]
            Record or list of records to store
        """
        if isinstance(objects, DataBase):
            objects = [objects]

        for obj in objects:
            self.append(obj.scalar_dict(lengths=self.lengths))

    def append(self, row):
        """Writes one row of scalars to the file.

        The first row written by a new writer also writes the header.

        Parameters
        ----------
        row : dict
            Column names and their scalar values
        """
        mode = "a"
        if self.header is None:
            self.header, mode = list(row), "w"

        new_keys = set(row) - set(self.header)
        if new_keys:
            raise KeyError(
                f"Row has columns absent from the header of {self.file_name}: "
                f"{sorted(new_keys)}"
            )

        missing_keys = set(self.header) - set(row)
        if missing_keys and not self.accept_missing:
            raise KeyError(
                f"Row lacks columns of the header of {self.file_name}: "
                f"{sorted(missing_keys)}. Set `accept_missing` to fill them."
            )

        with open(self.file_name, mode, encoding="utf-8", newline="") as out_file:
            writer = csv.DictWriter(out_file, fieldnames=self.header, restval=-1)
            if mode == "w":
                writer.writeheader()
            writer.writerow(row)
