# facets/census.py
"""
Subset Census Engine

For a family A_1, ..., A_n of subsets of {0, ..., 63} this module computes,
for every k, the number of distinct k-element sets X such that X is a
subset of at least one A_i.

================================================================================
ALGORITHM
================================================================================

Go over all sets A_1, ..., A_n in store order, and for each fixed A_i go
over all subsets of A_i. For each subset, check whether it is a subset of
any of the previous A_j (j < i). If not, count it under its size.

Subsets of A_i are visited by walking A_i's chain (see set_store.py). The
successor of the current subset is found by taking the first chain entry
that is not contained in the subset and XOR-ing it in:

    t = min { t : chain[t] not subset of cursor }
    cursor := cursor XOR chain[t]

chain[t-1] is contained in the cursor and chain[t] adds exactly one new
element, so the XOR drops t elements and adds one: size := size + 1 - t.
This is a Gray-code like walk that visits every subset of A_i exactly once
and ends on A_i itself.

Each subset is counted only in the pass of the first set that contains it,
so the final counts are independent of the order of the input sets.

================================================================================
COMPONENTS
================================================================================

- walk_subsets: the chain walk over one set
- Histogram: counts for sizes 0..64
- CensusResult: histogram plus run statistics
- SubsetCensus: the engine, with optional cooperative cancellation
- compute_histogram: convenience wrapper
- brute_force_histogram: independent reference counter for small inputs
"""

from __future__ import annotations
from typing import (
    Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
)
from dataclasses import dataclass
from itertools import combinations
import logging
import time

import numpy as np

from .constants import MAX_SUBSET_SIZE
from .set_store import SetRecord, SetStore

logger = logging.getLogger(__name__)

HISTOGRAM_SLOTS = MAX_SUBSET_SIZE + 1


# =============================================================================
# SECTION 1: Histogram
# =============================================================================

class Histogram:
    """
    Number of distinct covered subsets per size k = 0..64.

    Sizes without a count read as 0. Instances are not modified after
    construction; `counts` returns a copy.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Optional[Sequence[int]] = None):
        values = np.zeros(HISTOGRAM_SLOTS, dtype=np.int64)
        if counts is not None:
            given = np.asarray(counts, dtype=np.int64)
            if given.ndim != 1 or given.shape[0] > HISTOGRAM_SLOTS:
                raise ValueError(
                    f"Expected at most {HISTOGRAM_SLOTS} counts, got shape {given.shape}"
                )
            if np.any(given < 0):
                raise ValueError("Counts must be non-negative")
            values[:given.shape[0]] = given
        values.flags.writeable = False
        self._counts = values

    def __getitem__(self, size: int) -> int:
        if not 0 <= size < HISTOGRAM_SLOTS:
            raise IndexError(f"Size {size} out of range [0, {MAX_SUBSET_SIZE}]")
        return int(self._counts[size])

    def __len__(self) -> int:
        return HISTOGRAM_SLOTS

    def __iter__(self):
        return (int(c) for c in self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Histogram):
            return NotImplemented
        return bool(np.array_equal(self._counts, other._counts))

    def __hash__(self) -> int:
        return hash(self._counts.tobytes())

    def __repr__(self) -> str:
        return f"Histogram({self.to_list()})"

    @property
    def counts(self) -> np.ndarray:
        """Copy of all 65 counts as an int64 array."""
        return self._counts.copy()

    @property
    def total(self) -> int:
        """Number of distinct subsets of all sizes."""
        return int(self._counts.sum())

    @property
    def max_size(self) -> int:
        """Largest size with a nonzero count, or -1 if every count is zero."""
        nonzero = np.flatnonzero(self._counts)
        return int(nonzero[-1]) if nonzero.size else -1

    def to_list(self) -> List[int]:
        """Counts for sizes 0..max_size."""
        return [int(c) for c in self._counts[:self.max_size + 1]]

    def leading_counts(self) -> List[int]:
        """
        Counts for sizes 0, 1, 2, ... up to (excluding) the first zero.

        This is the sequence the output format writes. For a census result
        it equals to_list(), since the covered family is closed under
        taking subsets.
        """
        zeros = np.flatnonzero(self._counts == 0)
        stop = int(zeros[0]) if zeros.size else HISTOGRAM_SLOTS
        return [int(c) for c in self._counts[:stop]]

    def as_dict(self) -> Dict[int, int]:
        """Mapping size -> count for sizes 0..max_size."""
        return dict(enumerate(self.to_list()))


# =============================================================================
# SECTION 2: Census Engine
# =============================================================================

class CensusCancelled(RuntimeError):
    """The census was stopped by its should_stop callback."""

    def __init__(self, sets_completed: int):
        self.sets_completed = sets_completed
        super().__init__(f"Census cancelled after {sets_completed} sets")


@dataclass
class CensusResult:
    """Result of one census run."""
    histogram: Histogram
    num_sets: int            # Number of sets A_i processed
    subsets_visited: int     # Subsets enumerated over all passes
    elapsed: float           # Time in seconds

    @property
    def subsets_counted(self) -> int:
        """Distinct subsets, i.e. visits not covered by an earlier set."""
        return self.histogram.total

    @property
    def duplicates_skipped(self) -> int:
        return self.subsets_visited - self.subsets_counted

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "histogram": self.histogram.to_list(),
            "num_sets": self.num_sets,
            "subsets_visited": self.subsets_visited,
            "subsets_counted": self.subsets_counted,
            "duplicates_skipped": self.duplicates_skipped,
            "elapsed": self.elapsed,
        }


def walk_subsets(record: SetRecord) -> Iterator[Tuple[int, int]]:
    """
    Yield (subset, size) for every subset of record, in chain order.

    Starts at the empty set and ends at record.mask itself. size is
    maintained incrementally and always equals the popcount of subset.
    """
    target = record.mask
    chain = record.chain
    subset = 0
    size = 0
    while subset != target:
        yield subset, size
        # first chain entry not contained in subset
        t = 0
        while (subset | chain[t]) == subset:
            t += 1
        subset ^= chain[t]
        size += 1 - t
    yield subset, size


def _is_covered(subset: int, earlier: np.ndarray) -> bool:
    """True iff subset is contained in one of the earlier masks."""
    if earlier.size == 0:
        return False
    s = np.uint64(subset)
    return bool(np.any((earlier & s) == s))


class SubsetCensus:
    """
    Computes the size histogram of the union of the power sets of a family.

    The work is 2^|A_i| subset visits per set, each with a containment test
    against i earlier sets. There is no size guard: large sets simply take
    long, and should_stop is the way to bound a run.

    Example:
        >>> store = SetStore.from_sets([[1, 3, 5, 6], [2, 4, 5, 16, 20], [0, 2, 5]])
        >>> SubsetCensus().run(store).histogram.to_list()
        [1, 9, 18, 15, 6, 1]
    """

    def __init__(self, should_stop: Optional[Callable[[], bool]] = None):
        """
        Args:
            should_stop: Polled before each set's pass; returning True
                aborts the run with CensusCancelled
        """
        self.should_stop = should_stop

    def run(self, store: SetStore) -> CensusResult:
        """
        Run the census over every set of the store, in store order.

        Raises:
            CensusCancelled: if should_stop asked to stop
        """
        logger.info(
            "Census of %d sets (largest has %d elements)",
            len(store), store.max_set_size,
        )
        start = time.perf_counter()
        masks = store.masks
        counts = [0] * HISTOGRAM_SLOTS
        visited = 0

        for i, record in enumerate(store):
            if self.should_stop is not None and self.should_stop():
                logger.info("Census cancelled after %d of %d sets", i, len(store))
                raise CensusCancelled(i)

            earlier = masks[:i]
            for subset, size in walk_subsets(record):
                if not _is_covered(subset, earlier):
                    counts[size] += 1
                visited += 1
            logger.debug("Set %d (%d elements) done, %d visits so far",
                         i, record.size, visited)

        elapsed = time.perf_counter() - start
        result = CensusResult(
            histogram=Histogram(counts),
            num_sets=len(store),
            subsets_visited=visited,
            elapsed=elapsed,
        )
        logger.info(
            "Census finished in %.3fs: %d distinct of %d visited subsets",
            elapsed, result.subsets_counted, visited,
        )
        return result


# =============================================================================
# SECTION 3: Convenience Functions
# =============================================================================

def compute_histogram(store: SetStore) -> Histogram:
    """
    Histogram of distinct covered subsets for the family held in store.

    Args:
        store: Populated SetStore

    Returns:
        Histogram with counts for sizes 0..64
    """
    return SubsetCensus().run(store).histogram


def brute_force_histogram(
    sets: Union[SetStore, Iterable[Sequence[int]]],
) -> Histogram:
    """
    Reference histogram by explicit set-based deduplication.

    Materializes every subset of every set as a frozenset, so it is only
    usable for small inputs. Shares no code with SubsetCensus.
    """
    if isinstance(sets, SetStore):
        sets = [record.elements for record in sets]
    seen = set()
    for elements in sets:
        members = sorted(set(elements))
        for k in range(len(members) + 1):
            seen.update(frozenset(c) for c in combinations(members, k))
    counts = [0] * HISTOGRAM_SLOTS
    for subset in seen:
        counts[len(subset)] += 1
    return Histogram(counts)
