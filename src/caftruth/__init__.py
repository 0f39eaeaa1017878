"""Top-level module of the true interaction record package."""

from .version import __version__

# Import the record types and their vocabularies
from .data import TrueInteraction, TrueParticle
from .utils.enums import Generator, NucleonPair, ScatteringMode
