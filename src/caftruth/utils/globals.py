"""Module which contains all global variables shared across the project."""

import numpy as np

# Bit pattern of the single-precision signaling NaN used to mark unset floats.
# This is the default signaling NaN of the platforms which produce the records
# (quiet bit cleared, payload 0x200000).
SNAN_BITS = 0x7FA00000

# Sentinel value itself, as a float32 scalar which carries the exact bits
SNAN = np.array([SNAN_BITS], dtype=np.uint32).view(np.float32)[0]

# Codes of the struck nucleon pairs in multi-nucleon (MEC) interactions
MEC_NN_CODE = 2000000200 # Neutron-neutron pair
MEC_NP_CODE = 2000000201 # Neutron-proton pair
MEC_PP_CODE = 2000000202 # Proton-proton pair
MEC_CODES   = (MEC_NN_CODE, MEC_NP_CODE, MEC_PP_CODE)

# Reserved block of codes in which the nucleon pair codes live
MEC_CODE_BLOCK = (2000000200, 2000000299)

# PDG codes of the charged leptons
ELEC_PDG = 11   # Electron
MUON_PDG = 13   # Muon
TAU_PDG  = 15   # Tau

# Charged leptons (absolute PDG codes)
CHARGED_LEPTON_PDGS = (ELEC_PDG, MUON_PDG, TAU_PDG)
