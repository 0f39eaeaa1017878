"""Module to write true interaction records to HDF5 files."""

import os

import h5py
import numpy as np
import yaml

from caftruth.data import TrueInteraction
from caftruth.data.base import DataBase
from caftruth.utils.logger import logger
from caftruth.version import __version__

__all__ = ["HDF5Writer"]


class HDF5Writer:
    """Writes collections of records to an HDF5 file.

    The file is laid out as follows:
      - An `info` dataset whose attributes store the package version and the
        configuration used to produce the file
      - One compound dataset named after the `key`, with one row per record,
        whose `units` attribute lists the units of its dimensionful columns
      - For each attribute which holds a list of objects (e.g. `prim`), a
        compound dataset `<key>_<attr>` which stores all the elements and a
        `<key>_<attr>_index` dataset which stores the [start, stop) range of
        the elements of each record

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: hdf5
            file_name: output.h5
    """

    name = "hdf5"

    def __init__(
        self,
        file_name="output.h5",
        key="interactions",
        overwrite=False,
        append=False,
        lite=False,
    ):
        """Checks the output file and stores the writer parameters.

        Parameters
        ----------
        file_name : str, default 'output.h5'
            Name of the output HDF5 file
        key : str, default 'interactions'
            Name of the dataset which stores the records
        overwrite : bool, default False
            If `True`, overwrite the output file if it already exists
        append : bool, default False
            If `True`, add new records to the end of an existing file
        lite : bool, default False
            If `True`, the lite version of objects is stored
        """
        # Check that the output file does not already exist, if requested
        if append:
            if not os.path.isfile(file_name):
                raise FileNotFoundError(
                    f"Cannot append records to {file_name}, the file does "
                    "not exist."
                )
        elif not overwrite and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        # Store persistent attributes
        self.file_name = file_name
        self.key = key
        self.append_file = append
        self.lite = lite

        # If appending, the file structure already exists
        self.ready = append

    def __call__(self, objects, cfg=None):
        """Writes a collection of records to file.

        Parameters
        ----------
        objects : Union[DataBase, List[DataBase]]
            Record or list of records to store
        cfg : dict, optional
            Configuration used to produce the records
        """
        # Wrap single records into a list
        if isinstance(objects, DataBase):
            objects = [objects]
        else:
            objects = list(objects)

        # If needed, create the output file
        if not self.ready:
            self.create(objects, cfg)

        # Append the records
        self.append(objects)

    def create(self, objects, cfg=None):
        """Create the output file structure based on the records to store.

        Parameters
        ----------
        objects : List[DataBase]
            Records to store. If empty, the file is typed as storing
            :class:`TrueInteraction` records.
        cfg : dict, optional
            Configuration used to produce the records
        """
        # Pick the object used to type the datasets
        ref_obj = objects[0] if len(objects) else TrueInteraction()

        # Initialize the output HDF5 file
        with h5py.File(self.file_name, "w") as out_file:
            # Initialize the info dataset that stores environment parameters
            out_file.create_dataset("info", (0,), maxshape=(None,), dtype="f4")
            out_file["info"].attrs["version"] = __version__
            if cfg is not None:
                out_file["info"].attrs["cfg"] = yaml.dump(cfg)

            # Initialize the record datasets
            self.initialize_datasets(out_file, self.key, ref_obj)

        logger.info("Created output file: %s", self.file_name)

        # Mark file as ready for use
        self.ready = True

    def initialize_datasets(self, out_file, key, ref_obj):
        """Create place holders for all the datasets of one object class.

        Parameters
        ----------
        out_file : h5py.File
            HDF5 file instance
        key : str
            Name of the dataset to create
        ref_obj : DataBase
            Instance of the class to store, used to identify attribute types
        """
        # Create the dataset for the object class itself
        dtype = self.get_object_dtype(ref_obj)
        out_file.create_dataset(key, (0,), maxshape=(None,), dtype=dtype)
        out_file[key].attrs["class_name"] = ref_obj.__class__.__name__

        # Store the units of the dimensionful columns
        units = {k: v for k, v in ref_obj.units.items() if k in dtype.names}
        if units:
            out_file[key].attrs["units"] = yaml.dump(units)

        # Create the datasets for the lists of objects it holds
        stored_attrs = ref_obj.as_dict(self.lite)
        for attr, obj_class in ref_obj.obj_list_attrs.items():
            if attr not in stored_attrs:
                continue

            sub_key = f"{key}_{attr}"
            self.initialize_datasets(out_file, sub_key, obj_class())
            out_file.create_dataset(
                f"{sub_key}_index", (0, 2), maxshape=(None, 2), dtype=np.int64
            )

    def get_object_dtype(self, obj):
        """Builds the compound type of the columns which store a class.

        Parameters
        ----------
        obj : DataBase
            Instance of a class used to identify attribute types

        Returns
        -------
        np.dtype
            Compound data type of the class
        """
        object_dtype = []
        for key, val in obj.as_dict(self.lite).items():
            # Append the relevant data type
            if key in obj.obj_list_attrs:
                # Lists of objects are stored in their own dataset
                continue

            elif key in obj.str_attrs:
                # String
                object_dtype.append((key, h5py.string_dtype()))

            elif key in obj.enum_attrs:
                # Recognized enumerated type, store the numeric values
                enum = obj.enum_attrs[key]
                enum_dtype = h5py.enum_dtype(
                    {e.name: e.value for e in enum}, basetype=np.int32
                )
                object_dtype.append((key, enum_dtype))

            elif key in obj.bool_attrs:
                # Boolean, forced onto an 8-bit unsigned integer
                object_dtype.append((key, np.uint8))

            elif key in obj.fixed_length_attrs:
                # Fixed-length array of scalars, typed from its declaration
                size = obj.fixed_length_attrs[key]
                dtype = obj.fixed_length_dtypes[key]
                object_dtype.append((key, dtype, (size,)))

            elif key in obj.var_length_attrs:
                # Variable-length array of scalars
                dtype = np.dtype(obj.var_length_attrs[key])
                object_dtype.append((key, h5py.vlen_dtype(dtype)))

            elif key in obj.scalar_dtypes:
                # Scalar with a prescribed storage type
                object_dtype.append((key, obj.scalar_dtypes[key]))

            elif np.isscalar(val):
                # Other scalar, use its own type
                object_dtype.append((key, type(val)))

            else:
                raise ValueError(
                    f"Attribute {key} of {obj} has an unrecognized "
                    f"type: {type(val)}"
                )

        return np.dtype(object_dtype)

    def append(self, objects):
        """Append the HDF5 file with a list of records.

        Parameters
        ----------
        objects : List[DataBase]
            Records to store
        """
        with h5py.File(self.file_name, "a") as out_file:
            assert self.key in out_file, (
                f"The output file does not contain a `{self.key}` dataset "
                "to append records to."
            )
            self.append_objects(out_file, self.key, objects)

    def append_objects(self, out_file, key, objects):
        """Stores a list of objects at the end of a dataset.

        Parameters
        ----------
        out_file : h5py.File
            HDF5 file instance
        key : str
            Name of the dataset to append
        objects : List[DataBase]
            Objects to store
        """
        # Nothing to do if there are no objects
        if not len(objects):
            return

        # Check that the objects are of the class stored in the dataset
        dataset = out_file[key]
        class_name = objects[0].__class__.__name__
        if class_name != dataset.attrs["class_name"]:
            raise TypeError(
                f"Cannot store `{class_name}` objects in the `{key}` dataset, "
                f"which stores `{dataset.attrs['class_name']}` objects."
            )

        # Check that the objects store the same attributes as the dataset
        dtype = self.get_object_dtype(objects[0])
        if dtype.names != dataset.dtype.names:
            raise TypeError(
                f"The attributes of the `{class_name}` objects do not match "
                f"the columns of the `{key}` dataset. Check the `lite` flag."
            )

        # Append the objects themselves
        array = self.to_array(objects, dtype)
        offset = len(dataset)
        dataset.resize((offset + len(objects),))
        dataset[offset:] = array

        # Append the lists of objects they hold, along with their ranges
        for attr in objects[0].obj_list_attrs:
            sub_key = f"{key}_{attr}"
            if sub_key not in out_file:
                continue

            start = len(out_file[sub_key])
            elements, ranges = [], np.empty((len(objects), 2), dtype=np.int64)
            for i, obj in enumerate(objects):
                obj_list = getattr(obj, attr)
                offset = start + len(elements)
                ranges[i] = (offset, offset + len(obj_list))
                elements.extend(obj_list)

            self.append_objects(out_file, sub_key, elements)

            index = out_file[f"{sub_key}_index"]
            offset = len(index)
            index.resize((offset + len(objects), 2))
            index[offset:] = ranges

    @staticmethod
    def to_array(objects, dtype):
        """Converts a list of objects into a structured array.

        Parameters
        ----------
        objects : List[DataBase]
            Objects to convert
        dtype : np.dtype
            Compound data type of the objects

        Returns
        -------
        np.ndarray
            Structured array with one row per object
        """
        array = np.empty(len(objects), dtype=dtype)
        for name in dtype.names:
            field = dtype.fields[name][0]
            values = [getattr(obj, name) for obj in objects]
            if field.kind == "O":
                # Variable-length objects must be filled one by one
                column = np.empty(len(values), dtype=object)
                if h5py.check_string_dtype(field) is not None:
                    column[:] = [str(v) for v in values]
                else:
                    base = h5py.check_vlen_dtype(field)
                    for i, v in enumerate(values):
                        column[i] = np.asarray(v, dtype=base)

                array[name] = column

            else:
                # Fixed-size values are cast without going through Python
                # floats, which preserves the NaN bit patterns
                base = field.subdtype[0] if field.subdtype is not None else field
                array[name] = np.stack([np.asarray(v, dtype=base) for v in values])

        return array
