"""Module with the parent class of the truth records.

Each record class declares how its attributes are typed through class-level
registries. The records use them to fill and cast their attributes, the
storage tools use them to lay the attributes out in files.
"""

from dataclasses import dataclass, fields
from enum import IntEnum

import numpy as np

from caftruth.utils.sentinel import float_bits, sentinel_array


@dataclass(eq=False)
class DataBase:
    """Parent class of the truth records.

    Records accept any content: casting never validates nor raises.
    """

    # Enumerated attributes as (key, enumerated type) pairs
    _enum_attrs = ()

    # Fixed-length attributes as (key, size) or (key, (size, dtype)) pairs
    _fixed_length_attrs = ()

    # Variable-length attributes as (key, dtype) pairs
    _var_length_attrs = ()

    # Scalar attributes with an explicit storage type as (key, dtype) pairs
    _scalar_dtypes = ()

    # Attributes which hold lists of other records as (key, class) pairs
    _obj_list_attrs = ()

    # Attributes specifying coordinates in the detector frame
    _pos_attrs = ()

    # Attributes specifying coordinates or vectors in the beam frame
    _beam_attrs = ()

    # Attributes specifying vector components
    _vec_attrs = ()

    # String attributes
    _str_attrs = ()

    # Boolean attributes
    _bool_attrs = ()

    # Units of the dimensionful attributes as (key, units) pairs
    _units = ()

    # Attributes dropped from lite files
    _lite_skip_attrs = ()

    # Euclidean axis labels
    _axes = ("x", "y", "z")

    def __post_init__(self):
        """Fills the attributes left unset and restores their types.

        Array defaults cannot be declared on the fields themselves, or every
        instance would share the same array, so they are built here:
        - Fixed-length arrays are filled with the unset sentinel
        - Variable-length arrays and lists of records start empty

        Values loaded from files are cast back to their declared types:
        binary strings are decoded, 8-bit integers become booleans and
        integers become enumerators (the unknown member if out of range).
        Plain Python integers outside of the vocabulary are kept as is.
        """
        for attr, size in self._fixed_length_attrs:
            size, dtype = size if isinstance(size, tuple) else (size, np.float32)
            value = getattr(self, attr)
            if value is None:
                setattr(self, attr, sentinel_array(size, dtype))
            elif not isinstance(value, np.ndarray):
                setattr(self, attr, np.asarray(value, dtype=dtype))

        for attr, dtype in self._var_length_attrs:
            value = getattr(self, attr)
            if value is None:
                value = ()
            if not isinstance(value, np.ndarray):
                setattr(self, attr, np.asarray(value, dtype=dtype))

        for attr, _ in self._obj_list_attrs:
            if getattr(self, attr) is None:
                setattr(self, attr, [])

        for attr in self._str_attrs:
            value = getattr(self, attr)
            if isinstance(value, bytes):
                setattr(self, attr, value.decode())

        for attr in self._bool_attrs:
            value = getattr(self, attr)
            if isinstance(value, (np.uint8, np.bool_)):
                setattr(self, attr, bool(value))

        for attr, enum in self._enum_attrs:
            value = getattr(self, attr)
            if isinstance(value, IntEnum):
                continue
            if isinstance(value, np.integer):
                setattr(self, attr, enum(int(value)))
            elif isinstance(value, int) and value in enum.__members__.values():
                setattr(self, attr, enum(value))

    def __eq__(self, other):
        """Checks that two records hold identical attributes.

        Arrays are compared element-wise and lists of records one record at
        a time. Two NaN values are identical only if they carry the same bit
        pattern, so an unset value differs from a computed NaN.

        Parameters
        ----------
        other : DataBase
            Other record of the same class

        Returns
        -------
        bool
            `True` if all attributes of both records are identical
        """
        if self.__class__ != other.__class__:
            return False

        for attr, value in self.__dict__.items():
            other_value = getattr(other, attr)
            if isinstance(value, list):
                if len(value) != len(other_value) or any(
                    a != b for a, b in zip(value, other_value)
                ):
                    return False

            elif not self._equal_values(value, other_value):
                return False

        return True

    @staticmethod
    def _equal_values(value, other):
        """Compares two scalar or array values, NaN bits included."""
        value, other = np.asarray(value), np.asarray(other)
        if value.shape != other.shape:
            return False

        if value.dtype.kind == "f" and other.dtype.kind == "f":
            if not np.array_equal(value, other, equal_nan=True):
                return False
            nan = np.isnan(value)
            return bool(
                np.array_equal(float_bits(value[nan]), float_bits(other[nan]))
            )

        return bool(np.array_equal(value, other))

    def as_dict(self, lite=False):
        """Returns the record as a dictionary of (attribute, value) pairs.

        Parameters
        ----------
        lite : bool, default False
            If `True`, the attributes dropped from lite files are left out

        Returns
        -------
        dict
            Attribute values, in declaration order
        """
        skip_attrs = self._lite_skip_attrs if lite else ()

        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in skip_attrs
        }

    def scalar_dict(self, attrs=None, lengths=None, lite=False):
        """Returns the record flattened to one scalar per key.

        This is the row layout of flat tables such as CSV files:
        - Enumerators are stored as their integer value
        - Positions and vectors expand to `<attr>_x`, `<attr>_y`, `<attr>_z`
        - Other fixed-length arrays expand to `<attr>_0`, `<attr>_1`, ...
        - Variable-length arrays expand the same way, padded with `None` up to
          the length provided in `lengths`, and are left out otherwise
        - Lists of records are left out

        Parameters
        ----------
        attrs : List[str], optional
            Attributes to include. If not specified, all of them are.
        lengths : Dict[str, int], optional
            Number of columns given to each variable-length attribute
        lite : bool, default False
            If `True`, the attributes dropped from lite files are left out

        Returns
        -------
        dict
            Flattened attribute names and their scalar values
        """
        lengths = lengths or {}
        values = self.as_dict(lite)
        if attrs is not None:
            missing = [attr for attr in attrs if attr not in values]
            if missing:
                raise AttributeError(
                    f"Attribute(s) {missing} do(es) not appear in "
                    f"{self.__class__.__name__}."
                )
            values = {attr: values[attr] for attr in values if attr in attrs}

        scalars = {}
        for attr, value in values.items():
            if attr in self.obj_list_attrs:
                assert attrs is None, (
                    f"Cannot flatten the list of records `{attr}`."
                )
                continue

            if attr in self.var_length_attrs and attr not in lengths:
                assert attrs is None, (
                    f"Cannot flatten `{attr}` without a length. Provide it "
                    "through `lengths`."
                )
                continue

            scalars.update(self._flatten(attr, value, lengths.get(attr)))

        return scalars

    def _flatten(self, attr, value, length=None):
        """Expands one attribute into (column, scalar) pairs.

        Parameters
        ----------
        attr : str
            Attribute name
        value : object
            Attribute value
        length : int, optional
            Number of columns of a variable-length attribute

        Returns
        -------
        List[tuple]
            Flattened column names and values
        """
        if isinstance(value, IntEnum):
            return [(attr, int(value))]

        if np.isscalar(value):
            return [(attr, value)]

        if attr in self._pos_attrs + self._beam_attrs + self._vec_attrs:
            return [(f"{attr}_{axis}", v) for axis, v in zip(self._axes, value)]

        if attr in self.fixed_length_attrs:
            return [(f"{attr}_{i}", v) for i, v in enumerate(value)]

        if attr in self.var_length_attrs:
            return [
                (f"{attr}_{i}", value[i] if i < len(value) else None)
                for i in range(length)
            ]

        raise ValueError(
            f"Cannot expand the `{attr}` attribute of "
            f"`{self.__class__.__name__}` to scalar values."
        )

    @property
    def fixed_length_attrs(self):
        """Dict[str, int]: Length of each fixed-length array attribute."""
        return {
            k: v[0] if isinstance(v, tuple) else v for k, v in self._fixed_length_attrs
        }

    @property
    def fixed_length_dtypes(self):
        """Dict[str, type]: Element type of each fixed-length array attribute.

        Arrays are single precision unless their declaration says otherwise.
        """
        return {
            k: v[1] if isinstance(v, tuple) else np.float32
            for k, v in self._fixed_length_attrs
        }

    @property
    def var_length_attrs(self):
        """Dict[str, type]: Element type of each variable-length attribute."""
        return dict(self._var_length_attrs)

    @property
    def enum_attrs(self):
        """Dict[str, IntEnum]: Vocabulary of each enumerated attribute."""
        return dict(self._enum_attrs)

    @property
    def scalar_dtypes(self):
        """Dict[str, type]: Storage type of each typed scalar attribute."""
        return dict(self._scalar_dtypes)

    @property
    def obj_list_attrs(self):
        """Dict[str, type]: Record class held by each list attribute."""
        return dict(self._obj_list_attrs)

    @property
    def pos_attrs(self):
        """Tuple[str]: Coordinate attributes in the detector frame."""
        return self._pos_attrs

    @property
    def beam_attrs(self):
        """Tuple[str]: Coordinate and vector attributes in the beam frame."""
        return self._beam_attrs

    @property
    def vec_attrs(self):
        """Tuple[str]: Vector attributes in the detector frame."""
        return self._vec_attrs

    @property
    def str_attrs(self):
        """Tuple[str]: String attributes."""
        return self._str_attrs

    @property
    def bool_attrs(self):
        """Tuple[str]: Boolean attributes."""
        return self._bool_attrs

    @property
    def units(self):
        """Dict[str, str]: Units of each dimensionful attribute."""
        return dict(self._units)

    @property
    def lite_skip_attrs(self):
        """Tuple[str]: Attributes dropped from lite files."""
        return self._lite_skip_attrs
