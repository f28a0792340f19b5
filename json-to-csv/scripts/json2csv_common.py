#!/usr/bin/env python3
# Copyright 2026 Yevgeniy Zaremba
# SPDX-License-Identifier: Apache-2.0

"""Shared helpers for json-to-csv scripts: read input, parse JSON, format scalars."""

from __future__ import annotations

import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

# Default encoding for input files.
DEFAULT_ENCODING = "utf-8"

# Integral floats at or above this magnitude keep their float repr.
_INTEGRAL_FLOAT_LIMIT = 1e21


class Json2CsvError(Exception):
    """Base class for errors reported by the json-to-csv scripts."""


class UsageError(Json2CsvError):
    """No usable input source was given."""


class FileReadError(Json2CsvError):
    """The input path could not be read."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Error reading file: {path}\n{detail}")
        self.path = path
        self.detail = detail


class ParseError(Json2CsvError, ValueError):
    """The input text is not valid JSON."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid JSON:\n{detail}")
        self.detail = detail


def read_text(path: str | None, encoding: str = DEFAULT_ENCODING) -> str:
    """Read file or stdin as text. Raises FileReadError or UsageError."""
    if path is None or path == "-":
        if sys.stdin is None or sys.stdin.isatty():
            raise UsageError("no input file given and stdin is a terminal")
        # Decode stdin ourselves so bad bytes are replaced exactly as for files.
        buffer = getattr(sys.stdin, "buffer", None)
        text = buffer.read().decode(encoding, "replace") if buffer is not None else sys.stdin.read()
    else:
        try:
            text = Path(path).read_text(encoding=encoding, errors="replace")
        except OSError as err:
            raise FileReadError(path, str(err)) from err
    # Strip UTF-8 BOM so it does not end up in the first key.
    if text.startswith("\ufeff"):
        text = text[1:]
    return text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str) -> Any:
    """Parse strict JSON text. NaN and Infinity literals are rejected."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as err:
        raise ParseError(str(err)) from err
    except ValueError as err:
        raise ParseError(str(err)) from err


def load_json(path: str | None) -> Any:
    """Load JSON from a file path or stdin when path is '-' or None."""
    return parse_json(read_text(path))


def write_json(data: Any, compact: bool = False) -> None:
    """Write JSON to stdout with deterministic formatting."""
    if compact:
        json.dump(data, sys.stdout, ensure_ascii=False, separators=(",", ":"))
    else:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def is_primitive(value: Any) -> bool:
    """True for null, strings, numbers and booleans."""
    return value is None or isinstance(value, (str, int, float, bool))


def format_scalar(value: Any) -> str:
    """Render a JSON primitive the way JSON writes it: true, false, 1, 2.5."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value == 0:
            return "0"
        if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
            # Digits come from the shortest repr: 1.2345678901234567e20 -> 123456789012345670000.
            return format(Decimal(repr(value)).to_integral_value(), "f")
        return repr(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Not a JSON primitive: {type(value).__name__}")


def type_name(value: Any) -> str:
    """Map python value to a JSON-like type name."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int) and not isinstance(value, bool):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
