"""Command line interface for inspecting CSV files as Frames.

This module provides a command line interface that loads a CSV file
through :func:`cellframe.datasources.read_csv`, optionally converts
its columns to the requested types and prints the resulting
:class:`cellframe.Frame` or one of its deduplication views.

The results are printed to the console in a tabular format
using the :mod:`cellframe.utils.tabulate` module.
"""

import argparse
import logging
import sys

import pyarrow as pa

from cellframe.datasources import read_csv
from cellframe.errors import FrameError
from cellframe.utils import tabulate

VIEWS = {
    "all": lambda frame: frame,
    "unique": lambda frame: frame.unique_rows(),
    "duplicated": lambda frame: frame.duplicated_rows(),
    "duplicates": lambda frame: frame.all_duplicate_occurrences(),
    "dedup": lambda frame: frame.deduplicated(),
}


def main(argv: list[str] | None = None) -> int:
    """Parse the command line arguments and print the requested view of the file."""
    parser = argparse.ArgumentParser(description="Print a CSV file as a table.")
    parser.add_argument(
        "-t",
        "--type",
        action="append",
        help="Declare the type of a column as NAME=TYPE. Can be provided multiple times.",
    )
    parser.add_argument(
        "--infer",
        action="store_true",
        help="Detect the narrowest type of the columns without a declared type.",
    )
    parser.add_argument(
        "--view",
        choices=sorted(VIEWS),
        default="all",
        help="Which rows to show.",
    )
    parser.add_argument(
        "--max-rows", type=int, default=20, help="How many rows to print at most."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs.")
    parser.add_argument("filename", type=str, help="The CSV file to load.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    types = {}
    if args.type:
        for declaration in args.type:
            name, _, dtype = declaration.partition("=")
            types[name] = dtype

    try:
        frame = read_csv(args.filename)
        if args.infer:
            frame = frame.infer_types([n for n in frame.column_names if n not in types])
        if types:
            frame = frame.parse_columns(types)
        frame = VIEWS[args.view](frame)
    except (FrameError, OSError, pa.ArrowInvalid) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(tabulate.tabulate(frame, max_rows=args.max_rows))
    return 0


if __name__ == "__main__":
    sys.exit(main())
