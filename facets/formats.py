# facets/formats.py
"""
Line-oriented input and output formats.

Input: one set per line, elements separated by commas.

    1,3,5,6
    2,4,5,16,20
    0,2,5

Line order is the set order, and within a line the element order is the
chain order.

Output: one count per line for sizes k = 0, 1, 2, ..., stopping at the
first size whose count is zero.

    1
    9
    18
    15
    6
    1
"""

from __future__ import annotations
from typing import IO, Iterable, List, Optional, Union
from pathlib import Path
import logging

from .constants import DEFAULT_CAPACITY, ELEMENT_SEPARATOR
from .census import Histogram
from .set_store import CapacityExceeded, InvalidElement, SetStore

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# =============================================================================
# Reading
# =============================================================================

def parse_set_line(line: str, line_number: Optional[int] = None) -> List[int]:
    """
    Parse one comma-separated line into its elements, in order.

    Whitespace around elements is ignored. A blank line yields [].
    Range and duplicate checks are left to the SetStore.

    Raises:
        InvalidElement: if a field is not an integer
    """
    line = line.strip()
    if not line:
        return []
    elements = []
    for field in line.split(ELEMENT_SEPARATOR):
        field = field.strip()
        try:
            elements.append(int(field))
        except ValueError:
            raise InvalidElement(
                f"malformed element {field!r}", value=field, line=line_number
            ) from None
    return elements


def read_store(
    lines: Iterable[Union[str, bytes]],
    capacity: int = DEFAULT_CAPACITY,
    allow_empty: bool = False,
) -> SetStore:
    """
    Build a SetStore from input lines.

    Lines may be str, or bytes decoded as UTF-8 one line at a time. Every
    error raised is located at its 1-based line number.

    Raises:
        CapacityExceeded: more lines than capacity
        InvalidElement: a rejected or undecodable line
    """
    store = SetStore(capacity=capacity, allow_empty=allow_empty)
    lines = iter(lines)
    number = 0
    while True:
        number += 1
        try:
            line = next(lines)
            if isinstance(line, bytes):
                line = line.decode("utf-8")
        except StopIteration:
            break
        except UnicodeDecodeError:
            raise InvalidElement("undecodable input", line=number) from None
        line = line.rstrip("\r\n")
        try:
            store.add_set(parse_set_line(line, number))
        except (InvalidElement, CapacityExceeded) as e:
            if e.line is None:
                raise e.at_line(number) from None
            raise
    logger.info("Read %d sets", len(store))
    return store


def load_store(
    path: PathLike,
    capacity: int = DEFAULT_CAPACITY,
    allow_empty: bool = False,
) -> SetStore:
    """Build a SetStore from a text file (see read_store)."""
    logger.debug("Loading sets from %s", path)
    with open(path, "rb") as f:
        return read_store(f, capacity=capacity, allow_empty=allow_empty)


# =============================================================================
# Writing
# =============================================================================

def format_histogram(histogram: Histogram) -> str:
    """Render the leading nonzero counts, one per line."""
    return "".join(f"{count}\n" for count in histogram.leading_counts())


def write_histogram(histogram: Histogram, target: Union[PathLike, IO[str]]) -> None:
    """
    Write a histogram to a path or an open text stream.

    Nothing at all is written when the count for size 0 is zero.
    """
    text = format_histogram(histogram)
    if isinstance(target, (str, Path)):
        with open(target, "w") as f:
            f.write(text)
    else:
        target.write(text)
