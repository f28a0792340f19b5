#!/usr/bin/env python3
# Copyright 2026 Yevgeniy Zaremba
# SPDX-License-Identifier: Apache-2.0

"""Flatten nested JSON into CSV-ready rows using dot-notation and indexed keys.

- Objects become dot keys: user.profile.name
- Arrays of primitives become joined strings: tags -> "a|b|c"
- Arrays containing objects or arrays become indexed keys: items[0].id, items[1].id
"""

from __future__ import annotations

import argparse
import sys
import traceback
from typing import Any

from json2csv_common import (
    FileReadError,
    ParseError,
    UsageError,
    format_scalar,
    is_primitive,
    load_json,
    type_name,
    write_json,
)

# Separator used when an array of primitives is collapsed into one cell.
JOIN_SEPARATOR = "|"


def _child_key(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _index_key(prefix: str, idx: int) -> str:
    return f"{prefix}[{idx}]" if prefix else f"[{idx}]"


def flatten_to_row(value: Any, prefix: str = "", out: dict[str, str] | None = None) -> dict[str, str]:
    """Flatten one JSON value into `out` and return it.

    Cells are only written under a non-empty prefix, so a bare top-level
    primitive, null or empty container yields an empty row. When two paths
    produce the same key the later one wins.
    """
    if out is None:
        out = {}

    if value is None:
        if prefix:
            out[prefix] = ""
        return out

    if isinstance(value, list):
        if not value:
            if prefix:
                out[prefix] = ""
            return out
        if all(is_primitive(item) for item in value):
            if prefix:
                out[prefix] = JOIN_SEPARATOR.join(format_scalar(item) for item in value)
            return out
        for idx, item in enumerate(value):
            flatten_to_row(item, _index_key(prefix, idx), out)
        return out

    if isinstance(value, dict):
        if not value:
            if prefix:
                out[prefix] = ""
            return out
        for key, inner in value.items():
            flatten_to_row(inner, _child_key(prefix, str(key)), out)
        return out

    if is_primitive(value):
        if prefix:
            out[prefix] = format_scalar(value)
        return out

    raise TypeError(f"Cannot flatten value of type {type_name(value)}")


def rows_from_document(data: Any) -> list[dict[str, str]]:
    """Top-level array elements become one row each; anything else is a single row."""
    if isinstance(data, list):
        return [flatten_to_row(item) for item in data]
    return [flatten_to_row(data)]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Preview the flattened rows json2csv would tabulate.", add_help=False)
    parser.add_argument("-h", "--help", action="store_true", help="Show this help message on stderr and exit.")
    parser.add_argument("input", nargs="?", default="-", help="Input JSON file path or '-' for stdin.")
    parser.add_argument("--compact", action="store_true", help="Emit compact JSON output.")
    args = parser.parse_args(argv)
    if args.help:
        sys.stderr.write(parser.format_help())
        return 0

    try:
        data = load_json(args.input)
        rows = rows_from_document(data)
    except UsageError:
        parser.print_usage(sys.stderr)
        return 1
    except (FileReadError, ParseError) as err:
        print(err, file=sys.stderr)
        return 1
    except Exception:
        print(f"Unexpected error:\n{traceback.format_exc().rstrip()}", file=sys.stderr)
        return 1

    result: Any = rows if isinstance(data, list) else rows[0]
    write_json(result, compact=args.compact)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
