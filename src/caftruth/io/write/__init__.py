"""Writers which store records to files."""

from .csv import *
from .hdf5 import *
