"""Input/output tools for true interaction records.

Records are persisted to HDF5 files (one compound dataset per record class)
and can be flattened to CSV tables. The readers and writers are typically
built from the `io.reader` and `io.writer` configuration blocks using
:func:`reader_factory` and :func:`writer_factory`.
"""

from .factories import reader_factory, writer_factory
from .read import HDF5Reader
from .write import CSVWriter, HDF5Writer

__all__ = [
    "reader_factory",
    "writer_factory",
    "HDF5Reader",
    "HDF5Writer",
    "CSVWriter",
]
