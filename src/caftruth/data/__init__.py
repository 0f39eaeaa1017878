"""Data structures which describe the simulated truth of interactions.

- `TrueInteraction`: truth record of one incident-particle interaction
- `TrueParticle`: truth record of one daughter particle of an interaction

Every floating point attribute which is not provided keeps the signaling NaN
sentinel, which consumers must interpret as missing.
"""

from .interaction import *
from .particle import *
