"""
CLI interface for csvtable.

Reads a delimited file and prints its rows as JSON arrays, or rewrites it
with different delimiters.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import get_config, unescape_delimiter
from .parser import CsvParser
from .table import Table


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build the csvtable argument parser and parse args (sys.argv when None)."""
    parser = argparse.ArgumentParser(
        prog="csvtable",
        description="Read and write delimiter-separated text tables",
    )

    parser.add_argument(
        "file",
        help="Input file",
    )

    parser.add_argument(
        "--field-delimiter",
        "-f",
        type=unescape_delimiter,
        help="Field delimiter (default from config, ';')",
    )

    parser.add_argument(
        "--row-delimiter",
        "-r",
        type=unescape_delimiter,
        help="Row delimiter, escapes allowed (e.g. '\\r\\n'; default '\\n')",
    )

    parser.add_argument(
        "--legacy-offsets",
        action="store_true",
        default=None,
        help="Split fields with the legacy one-past-delimiter-start scan",
    )

    parser.add_argument(
        "--first-row",
        action="store_true",
        help="Only read the first line of the file",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the table to this file instead of printing it",
    )

    parser.add_argument(
        "--to-field",
        type=unescape_delimiter,
        help="Field delimiter for --output (defaults to the input one)",
    )

    parser.add_argument(
        "--to-row",
        type=unescape_delimiter,
        help="Row delimiter for --output (defaults to the input one)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every parsing step to stderr",
    )

    return parser.parse_args(args)


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_table(table: Table) -> None:
    for row in table:
        print(json.dumps(row.fields, ensure_ascii=False))


def main(args: list[str] | None = None) -> int:
    """Run the csvtable command; returns the process exit code."""
    parsed = parse_args(args)
    cfg = get_config()
    setup_logging(parsed.debug or cfg.logging.debug)

    try:
        reader = CsvParser(
            parsed.field_delimiter,
            parsed.row_delimiter,
            file_name=parsed.file,
            legacy_offsets=parsed.legacy_offsets,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.first_row:
        row = reader.read_row()
        if row is None:
            print(f"Error: {reader.last_error}", file=sys.stderr)
            return 1
        table = Table(rows=[row])
    else:
        table = reader.parse_file(parsed.file)
        if table is None:
            print(f"Error: {reader.last_error}", file=sys.stderr)
            return 1

    if not parsed.output:
        print_table(table)
        return 0

    try:
        writer = CsvParser(
            parsed.to_field or reader.field_delimiter,
            parsed.to_row or reader.row_delimiter,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not writer.write_file(parsed.output, table):
        print(f"Error: {writer.last_error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
