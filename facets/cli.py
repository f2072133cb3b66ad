# facets/cli.py
"""
Command line front end.

    facets sets.txt -o counts.txt
    cat sets.txt | facets - -v
"""

import argparse
import logging
import sys
from typing import List, Optional

from .census import SubsetCensus
from .constants import DEFAULT_CAPACITY
from .formats import read_store, write_histogram
from .set_store import CapacityExceeded, InvalidElement

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facets",
        description=(
            "Count, for every k, the k-element sets contained in at least "
            "one of the input sets."
        ),
    )
    parser.add_argument(
        "input",
        help="file with one comma-separated set per line, or - for stdin",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="-",
        help="file to write one count per line to (default: stdout)",
    )
    parser.add_argument(
        "--max-sets",
        type=non_negative_int,
        default=DEFAULT_CAPACITY,
        help="maximal number of input sets (default: %(default)s)",
    )
    parser.add_argument(
        "--allow-empty",
        action="store_true",
        help="accept blank lines as empty sets instead of rejecting them",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s %(levelname)-1.1s - %(name)s - %(message)s",
        level=logging.INFO if args.verbose else logging.WARNING,
    )

    try:
        if args.input == "-":
            store = read_store(
                sys.stdin, capacity=args.max_sets, allow_empty=args.allow_empty
            )
        else:
            with open(args.input, "rb") as f:
                store = read_store(
                    f, capacity=args.max_sets, allow_empty=args.allow_empty
                )
    except OSError as e:
        logger.error("Can't read file %s: %s", args.input, e)
        return EXIT_IO_ERROR
    except CapacityExceeded as e:
        logger.error("%s: %s", args.input, e)
        return EXIT_BAD_INPUT
    except InvalidElement as e:
        logger.error("%s: rejected %s", args.input, e)
        return EXIT_BAD_INPUT

    try:
        result = SubsetCensus().run(store)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_INTERRUPTED

    try:
        if args.output == "-":
            write_histogram(result.histogram, sys.stdout)
        else:
            write_histogram(result.histogram, args.output)
    except OSError as e:
        logger.error("Can't write file %s: %s", args.output, e)
        return EXIT_IO_ERROR

    logger.info("Finished writing output data")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
