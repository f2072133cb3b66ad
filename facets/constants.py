# facets/constants.py
"""
Facets Constants

This module defines constants used throughout the facets system:

UNIVERSE
- UNIVERSE_BITS: Number of elements in the universe {0, ..., 63}
- MAX_SUBSET_SIZE: Largest possible subset size (histogram has one more slot)

SET STORE
- DEFAULT_CAPACITY: Maximal number of sets A_i held by a store

INPUT FORMAT
- ELEMENT_SEPARATOR: Separator between elements on one input line
"""


# =============================================================================
# UNIVERSE
# =============================================================================

UNIVERSE_BITS = 64
MAX_SUBSET_SIZE = UNIVERSE_BITS     # histogram slots are 0..64 inclusive


# =============================================================================
# SET STORE
# =============================================================================

DEFAULT_CAPACITY = 1000

assert DEFAULT_CAPACITY > 0, "DEFAULT_CAPACITY must be positive"


# =============================================================================
# INPUT FORMAT
# =============================================================================

ELEMENT_SEPARATOR = ","
