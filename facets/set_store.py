# facets/set_store.py
"""
Set Store: the family A_1, ..., A_n as 64-bit bitmasks

Every set A is presented by two pieces of data:
- mask:  the set in binary form, bit b is set iff element b belongs to A
- chain: the ascending sequence of cumulative unions of A's elements,
         taken in the order they were declared

Example: the data for A = {1, 5, 2, 0} is

    mask     = 100111 (bin) = 39
    chain[0] = 000010 (bin)   {1}
    chain[1] = 100010 (bin)   {1, 5}
    chain[2] = 100110 (bin)   {1, 5, 2}
    chain[3] = 100111 (bin)   {1, 5, 2, 0}

The chain is a strictly increasing basis of A: each entry has exactly one
more bit than the previous one and the last entry equals the mask. It drives
the subset enumeration in census.py.

The store is append only. Records are immutable once added, and the order
of insertion is significant: it is the order the census engine processes
sets in, and earlier sets win containment ties.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple
from dataclasses import dataclass
import numbers

import numpy as np

from .constants import UNIVERSE_BITS, DEFAULT_CAPACITY


# =============================================================================
# ERRORS
# =============================================================================

class SetStoreError(ValueError):
    """Base class for errors raised while building a SetStore."""


class CapacityExceeded(SetStoreError):
    """The store already holds its maximal number of sets."""

    def __init__(self, capacity: int, line: Optional[int] = None):
        self.capacity = capacity
        self.line = line
        message = f"Too many sets: capacity is {capacity}"
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)

    def at_line(self, line: int) -> "CapacityExceeded":
        """Return a copy of this error located at the given input line."""
        return CapacityExceeded(self.capacity, line=line)


class InvalidElement(SetStoreError):
    """
    An element is malformed or outside [0, 63], or a set is not acceptable
    (empty, or declares the same element twice).

    Attributes:
        value: The offending element (None when the whole set is rejected)
        line: 1-based input line number, when known
        reason: Human readable reason without location
    """

    def __init__(self, reason: str, value=None, line: Optional[int] = None):
        self.reason = reason
        self.value = value
        self.line = line
        message = reason if line is None else f"line {line}: {reason}"
        super().__init__(message)

    def at_line(self, line: int) -> "InvalidElement":
        """Return a copy of this error located at the given input line."""
        return InvalidElement(self.reason, value=self.value, line=line)


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class SetRecord:
    """One set A_i: its bitmask, its chain and its declared elements."""
    mask: int
    chain: Tuple[int, ...]
    elements: Tuple[int, ...]

    @property
    def size(self) -> int:
        """Number of elements |A_i|."""
        return len(self.elements)

    def __contains__(self, element: int) -> bool:
        return 0 <= element < UNIVERSE_BITS and (self.mask >> element) & 1 == 1

    def issubset(self, other: "SetRecord") -> bool:
        return (self.mask & other.mask) == self.mask


def _check_element(x) -> int:
    if isinstance(x, bool) or not isinstance(x, numbers.Integral):
        raise InvalidElement(f"element {x!r} is not an integer", value=x)
    x = int(x)
    if not 0 <= x < UNIVERSE_BITS:
        raise InvalidElement(
            f"element {x} outside [0, {UNIVERSE_BITS - 1}]", value=x
        )
    return x


def build_record(elements: Iterable[int]) -> SetRecord:
    """
    Build the mask and chain of one set from its elements in declared order.

    Raises:
        InvalidElement: for a malformed, out-of-range or repeated element
    """
    mask = 0
    chain: List[int] = []
    declared: List[int] = []
    for raw in elements:
        x = _check_element(raw)
        bit = 1 << x
        if mask & bit:
            raise InvalidElement(f"element {x} appears twice", value=x)
        mask |= bit
        chain.append(mask)
        declared.append(x)
    return SetRecord(mask=mask, chain=tuple(chain), elements=tuple(declared))


# =============================================================================
# STORE
# =============================================================================

class SetStore:
    """
    Append-only arena of sets, indexed by insertion position.

    Example:
        >>> store = SetStore()
        >>> store.add_set([1, 3, 5, 6])
        0
        >>> store[0].chain
        (2, 10, 42, 106)
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, allow_empty: bool = False):
        """
        Args:
            capacity: Maximal number of sets the store accepts
            allow_empty: Accept sets without elements (they contribute
                only the empty subset to a census)
        """
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self.allow_empty = allow_empty
        self._records: List[SetRecord] = []
        self._masks: Optional[np.ndarray] = None

    @classmethod
    def from_sets(
        cls,
        sets: Iterable[Sequence[int]],
        capacity: int = DEFAULT_CAPACITY,
        allow_empty: bool = False,
    ) -> "SetStore":
        """Build a store from an iterable of element sequences."""
        store = cls(capacity=capacity, allow_empty=allow_empty)
        for elements in sets:
            store.add_set(elements)
        return store

    def add_set(self, elements: Iterable[int]) -> int:
        """
        Append one set, given its elements in declaration order.

        Returns:
            Handle of the new set (its zero-based index)

        Raises:
            CapacityExceeded: if the store is already full
            InvalidElement: for a bad element, a repeated element, or an
                empty set when empty sets are not allowed
        """
        if len(self._records) >= self.capacity:
            raise CapacityExceeded(self.capacity)
        record = build_record(elements)
        if record.mask == 0 and not self.allow_empty:
            raise InvalidElement("set has no elements")
        self._records.append(record)
        self._masks = None
        return len(self._records) - 1

    # ---- read access ----

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, handle: int) -> SetRecord:
        return self._records[handle]

    def __iter__(self) -> Iterator[SetRecord]:
        return iter(self._records)

    @property
    def masks(self) -> np.ndarray:
        """All masks in insertion order as a read-only uint64 array."""
        if self._masks is None:
            masks = np.array([r.mask for r in self._records], dtype=np.uint64)
            masks.flags.writeable = False
            self._masks = masks
        return self._masks

    @property
    def max_set_size(self) -> int:
        """Largest |A_i| in the store (0 for an empty store)."""
        return max((r.size for r in self._records), default=0)

    def __repr__(self) -> str:
        return f"SetStore(sets={len(self)}, capacity={self.capacity})"
