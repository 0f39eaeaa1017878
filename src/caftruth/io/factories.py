"""Functions that build readers and writers from configuration blocks."""

from caftruth.utils.factory import instantiate, module_dict

from . import read, write

READER_DICT = module_dict(read)
WRITER_DICT = module_dict(write)

__all__ = ["reader_factory", "writer_factory"]


def reader_factory(reader_cfg):
    """Builds the reader requested by the `io.reader` block.

    Parameters
    ----------
    reader_cfg : Union[str, dict]
        Reader configuration, `name` being one of `hdf5` or `HDF5Reader`

    Returns
    -------
    ReaderBase
        Reader of record files
    """
    return instantiate(READER_DICT, reader_cfg)


def writer_factory(writer_cfg, **kwargs):
    """Builds the writer requested by the `io.writer` block.

    Parameters
    ----------
    writer_cfg : Union[str, dict]
        Writer configuration, `name` being one of `hdf5` or `csv`
    **kwargs : dict, optional
        Arguments which are not part of the configuration block

    Returns
    -------
    Union[HDF5Writer, CSVWriter]
        Writer of record files
    """
    return instantiate(WRITER_DICT, writer_cfg, **kwargs)
