#!/usr/bin/env python3
# Copyright 2026 Yevgeniy Zaremba
# SPDX-License-Identifier: Apache-2.0

"""Convert JSON (file or stdin) into CSV with a sorted, unified header."""

from __future__ import annotations

import sys
import traceback
from typing import Any, Iterable

from json2csv_common import FileReadError, ParseError, UsageError, parse_json, read_text
from json2csv_flatten import rows_from_document

USAGE = """\
json2csv - flatten JSON into CSV

Usage:
  json2csv <input.json>
  cat input.json | json2csv

Notes:
  - Nested objects become dot keys: user.profile.name
  - Arrays of primitives become joined strings: tags -> "a|b|c"
  - Arrays of objects become indexed columns: items[0].id, items[1].id
"""

HELP_FLAGS = ("-h", "--help")

# Characters that force a cell to be quoted.
_QUOTE_TRIGGERS = ('"', ",", "\r", "\n")


def escape_cell(value: Any) -> str:
    """Quote a cell when it contains a quote, comma, CR or LF; double inner quotes."""
    text = "" if value is None else str(value)
    if any(ch in text for ch in _QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def build_header(rows: Iterable[dict[str, str]]) -> list[str]:
    """Sorted union of the keys of every row."""
    keys: set[str] = set()
    for row in rows:
        keys.update(row.keys())
    return sorted(keys)


def to_csv(rows: list[dict[str, str]]) -> str:
    """Serialize rows under a shared header; missing cells are empty."""
    header = build_header(rows)
    lines = [",".join(escape_cell(name) for name in header)]
    for row in rows:
        lines.append(",".join(escape_cell(row.get(name, "")) for name in header))
    return "\n".join(lines) + "\n"


def convert(text: str) -> str:
    """Parse raw JSON text and return the CSV document."""
    return to_csv(rows_from_document(parse_json(text)))


def print_usage() -> None:
    sys.stderr.write(USAGE)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if any(arg in HELP_FLAGS for arg in args):
        print_usage()
        return 0

    path = args[0] if args else None
    try:
        output = convert(read_text(path))
    except UsageError:
        print_usage()
        return 1
    except (FileReadError, ParseError) as err:
        print(err, file=sys.stderr)
        return 1
    except Exception:
        print(f"Unexpected error:\n{traceback.format_exc().rstrip()}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
