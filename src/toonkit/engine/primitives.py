"""Scalar rendering: null, booleans, canonical numbers and quoted strings."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from toonkit.contracts.common import NotEncodable
from toonkit.engine.quoting import quote_value

NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"


def is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def format_integer(value: int) -> str:
    """Decimal digits of ``value``, including ints too long for ``str()``."""
    # str() enforces sys.get_int_max_str_digits(); Decimal converts without it
    if value.bit_length() <= 64:
        return str(value)
    return format(Decimal(value), "f")


def format_number(value: int | float) -> str:
    """Canonical decimal text: no exponent, no trailing zeros, ``-0`` as ``0``."""
    if isinstance(value, int):
        return format_integer(value)
    if not math.isfinite(value):
        return NULL_LITERAL
    if value.is_integer():
        return str(int(value))
    # repr() is the shortest round-tripping form; Decimal expands any exponent
    return format(Decimal(repr(value)), "f")


def encode_primitive(value: Any, delimiter: str = ",") -> str:
    """Render a primitive value for a ``key: value`` line or a delimited row."""
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return quote_value(value, delimiter)
    raise NotEncodable(value)


def join_primitives(values: list[Any], delimiter: str = ",") -> str:
    return delimiter.join(encode_primitive(v, delimiter) for v in values)
