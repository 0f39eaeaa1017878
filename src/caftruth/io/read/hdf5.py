"""Contains a reader class dedicated to loading records from HDF5 files."""

from dataclasses import fields
from warnings import warn

import h5py
import numpy as np
import yaml

import caftruth.data
from caftruth.errors import SchemaError
from caftruth.utils.docstring import inherit_docstring
from caftruth.utils.logger import logger

from .base import ReaderBase

__all__ = ["HDF5Reader"]


@inherit_docstring(ReaderBase)
class HDF5Reader(ReaderBase):
    """Class which reads records stored in HDF5 files.

    This class inherits from the :class:`ReaderBase` class. It provides
    methods to load HDF5 files produced by :class:`HDF5Writer` and rebuild
    the records they store. The files must be structured as follows:
      - A compound dataset named after the `key`, one row per record
      - For each attribute which holds a list of objects, a compound dataset
        `<key>_<attr>` and its `<key>_<attr>_index` range dataset

    Attributes
    ----------
    key : str
        Name of the dataset which stores the records
    cfg : dict
        Configuration used to produce the first file, if stored
    version : str
        Package version used to produce the first file
    units : Dict[str, str]
        Units of the dimensionful attributes of the records, if stored
    """

    name = "hdf5"

    def __init__(
        self,
        file_keys,
        n_entry=None,
        n_skip=None,
        entry_list=None,
        build_classes=True,
        skip_unknown_attrs=False,
        key="interactions",
    ):
        """Indexes the records stored in the HDF5 file(s).

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path, glob pattern or list of them pointing to the HDF5 files
        n_entry : int, optional
            Maximum number of records to load
        n_skip : int, optional
            Number of records to skip at the beginning
        entry_list : List[int], optional
            Global indexes of the records to load, in loading order
        build_classes : bool, default True
            If `True`, rebuild the record objects. If `False`, return them
            as dictionaries of stored values.
        skip_unknown_attrs : bool, default False
            If `True`, allow a loaded object to have unrecognized attributes.
            This allows reading files produced by newer releases, but use
            with caution, as this might hide a fundamental layout issue.
        key : str, default 'interactions'
            Name of the dataset which stores the records
        """
        # Process the list of files and count the records they store
        self.process_file_paths(file_keys)
        self.key = key
        counts = []
        for path in self.file_paths:
            with h5py.File(path, "r") as in_file:
                if key not in in_file:
                    raise SchemaError(
                        f"File {path} does not contain a `{key}` dataset."
                    )
                counts.append(len(in_file[key]))

        self.process_file_offsets(counts)

        # Select the records to load
        self.process_entry_list(n_entry, n_skip, entry_list)

        # Store other attributes
        self.build_classes = build_classes
        self.skip_unknown_attrs = skip_unknown_attrs

        # Process the configuration and version used to produce the file
        self.cfg = self.process_cfg()
        self.version = self.process_version()
        self.units = self.process_units()

    def process_cfg(self):
        """Fetches the configuration used to produce the HDF5 file.

        Returns
        -------
        dict
            Configuration dictionary, `None` if it was not stored
        """
        # Fetch the string-form configuration
        with h5py.File(self.file_paths[0], "r") as in_file:
            if "info" not in in_file:
                return None
            cfg_str = in_file["info"].attrs.get("cfg")

        if cfg_str is None:
            return None

        return yaml.safe_load(cfg_str)

    def process_version(self):
        """Returns the package version used to produce the HDF5 file.

        Returns
        -------
        str
            Release tag, `None` if it was not stored
        """
        with h5py.File(self.file_paths[0], "r") as in_file:
            if "info" not in in_file:
                return None
            version = in_file["info"].attrs.get("version")

        if isinstance(version, bytes):
            version = version.decode()

        return version

    def process_units(self):
        """Returns the units of the record attributes stored in the file.

        Returns
        -------
        Dict[str, str]
            Units of each dimensionful attribute, empty if not stored
        """
        with h5py.File(self.file_paths[0], "r") as in_file:
            units = in_file[self.key].attrs.get("units")

        if units is None:
            return {}

        return yaml.safe_load(units)

    def get(self, idx):
        """Returns a specific record in the file(s).

        Parameters
        ----------
        idx : int
            Index of the record among the selected ones

        Returns
        -------
        Union[DataBase, dict]
            Record stored at this entry
        """
        # Find the file which stores the record
        assert idx < len(self.entry_index), (
            f"Record {idx} is out of range, only {len(self.entry_index)} "
            "records are selected."
        )
        file_idx, entry_idx = self.locate(idx)

        # Load the record and the objects it holds
        with h5py.File(self.file_paths[file_idx], "r") as in_file:
            return self.load_objects(in_file, self.key, entry_idx, entry_idx + 1)[0]

    def load_objects(self, in_file, key, start, stop):
        """Rebuilds a range of objects stored in a compound dataset.

        Parameters
        ----------
        in_file : h5py.File
            HDF5 file instance
        key : str
            Name of the dataset to load from
        start : int
            Index of the first object to load
        stop : int
            Index past the last object to load

        Returns
        -------
        List[Union[DataBase, dict]]
            Objects stored in the requested range
        """
        # Fetch the class to rebuild
        dataset = in_file[key]
        class_name = dataset.attrs["class_name"]
        if isinstance(class_name, bytes):
            class_name = class_name.decode()
        obj_class = getattr(caftruth.data, class_name, None)
        if obj_class is None:
            raise SchemaError(
                f"Dataset `{key}` stores `{class_name}` objects, which is not "
                "a known record class."
            )

        # Check that every stored attribute is known to the class
        array = dataset[start:stop]
        known_attrs = [f.name for f in fields(obj_class)]
        names = [k for k in array.dtype.names if k in known_attrs]
        unknown_attrs = [k for k in array.dtype.names if k not in known_attrs]
        if unknown_attrs and not self.skip_unknown_attrs:
            raise SchemaError(
                f"Dataset `{key}` stores attribute(s) {unknown_attrs} which "
                f"are not part of `{class_name}`. Set `skip_unknown_attrs` "
                "to ignore them."
            )
        if unknown_attrs:
            warn(
                f"Skipping attribute(s) {unknown_attrs} of dataset `{key}`, "
                f"which are not part of `{class_name}`."
            )

        # Load the lists of objects held by each object, if they were stored
        nested = {}
        for attr in obj_class().obj_list_attrs:
            sub_key = f"{key}_{attr}"
            if sub_key not in in_file or f"{sub_key}_index" not in in_file:
                continue

            ranges = in_file[f"{sub_key}_index"][start:stop]
            nested[attr] = [
                self.load_objects(in_file, sub_key, lo, hi) for lo, hi in ranges
            ]

        # Rebuild the objects
        objects = []
        for i, el in enumerate(array):
            obj_dict = {}
            for k in names:
                value = el[k]
                if isinstance(value, np.ndarray):
                    value = value.copy()
                obj_dict[k] = value

            for attr, values in nested.items():
                obj_dict[attr] = values[i]

            if self.build_classes:
                objects.append(obj_class(**obj_dict))
            else:
                objects.append(obj_dict)

        return objects
