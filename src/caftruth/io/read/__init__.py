"""Readers which rebuild records from files."""

from .hdf5 import *
