"""
Facets - Size distribution of the union of power sets

Given nonempty subsets A_1, ..., A_n of {0, ..., 63}, facets counts for each
k the number of sets X of size k such that X is a subset of at least one A_i.

Quick Start:
    >>> from facets import SetStore, compute_histogram
    >>> store = SetStore.from_sets([[1, 3, 5, 6], [2, 4, 5, 16, 20], [0, 2, 5]])
    >>> compute_histogram(store).to_list()
    [1, 9, 18, 15, 6, 1]
"""

__version__ = "0.1.0"

from .set_store import (
    SetStore,
    SetRecord,
    SetStoreError,
    CapacityExceeded,
    InvalidElement,
)
from .census import (
    Histogram,
    CensusResult,
    CensusCancelled,
    SubsetCensus,
    walk_subsets,
    compute_histogram,
    brute_force_histogram,
)
from .formats import (
    parse_set_line,
    read_store,
    load_store,
    format_histogram,
    write_histogram,
)

__all__ = [
    # Set Store
    "SetStore",
    "SetRecord",
    "SetStoreError",
    "CapacityExceeded",
    "InvalidElement",
    # Census Engine
    "Histogram",
    "CensusResult",
    "CensusCancelled",
    "SubsetCensus",
    "walk_subsets",
    "compute_histogram",
    "brute_force_histogram",
    # Formats
    "parse_set_line",
    "read_store",
    "load_store",
    "format_histogram",
    "write_histogram",
]
