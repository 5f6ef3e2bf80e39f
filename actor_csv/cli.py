#!/usr/bin/env python3
"""
actor-csv command line.

Converts a JSON array of EUDAMED actor records into a 32 column CSV file
with a UTF-8 BOM so spreadsheet tools show umlauts correctly.

Usage:
    actor-csv actors.json              # writes actors.csv
    actor-csv actors.json export.csv
    actor-csv data -v                  # writes data.csv, debug logging on stderr
"""

import argparse
import logging
import os
import sys

from .convert import convert_file
from .errors import ConversionError, UsageError
from .rules import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = _Parser(
        prog="actor-csv",
        description="Convert a JSON array of actor records to a BOM-prefixed CSV file.",
    )
    parser.add_argument("input", help="Path to the input JSON file (required)")
    parser.add_argument(
        "output",
        nargs="?",
        help="Path to the output CSV file (optional). If omitted, output will be "
        "'<input>.csv', replacing a trailing '.json'",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def _configure_logging(verbose):
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = DEFAULT_LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None):
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_help(sys.stderr)
        print(f"\n{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    _configure_logging(args.verbose)

    try:
        result = convert_file(args.input, args.output)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Successfully converted '{result.input_path}' → '{result.output_path}' "
        f"({result.data_rows} data rows + header)"
    )
    print("NOTE: UTF-8 BOM added for proper Excel display of umlauts (ä, ö, ü, ß, etc.)")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
