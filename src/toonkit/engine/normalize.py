"""Normalize arbitrary Python values into the JSON data model.

After normalization every node is ``None``, ``bool``, a finite ``int`` or
``float``, ``str``, ``list`` or ``dict`` with ``str`` keys. Anything the
table below does not recognise becomes ``None``.
"""

from __future__ import annotations

import dataclasses
import math
import sys
import threading
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from datetime import date, time
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

import orjson
from pydantic import BaseModel

from toonkit.contracts.common import MaxDepthExceeded
from toonkit.engine.primitives import encode_primitive, format_integer, is_primitive

DEFAULT_MAX_DEPTH = 1000

# Largest integer a float64 holds exactly, and its negation
MAX_SAFE_INTEGER = 2**53 - 1

# Upper bound on interpreter frames one nesting level costs across the
# normalize, replacer and render passes
FRAMES_PER_LEVEL = 4


@runtime_checkable
class ToonSerializable(Protocol):
    """Objects that provide their own representation for encoding."""

    def to_toon(self) -> Any: ...


class _RecursionBudget:
    """Raises the interpreter recursion limit while deep passes run.

    The limit is process-wide, so nested and concurrent users share one
    saved value and the last one out restores it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users = 0
        self._saved = 0

    @contextmanager
    def reserve(self, max_depth: int) -> Iterator[None]:
        with self._lock:
            if self._users == 0:
                self._saved = sys.getrecursionlimit()
            self._users += 1
            wanted = self._saved + FRAMES_PER_LEVEL * (max_depth + 1)
            if wanted > sys.getrecursionlimit():
                sys.setrecursionlimit(wanted)
        try:
            yield
        finally:
            with self._lock:
                self._users -= 1
                if self._users == 0:
                    sys.setrecursionlimit(self._saved)


_budget = _RecursionBudget()


def recursion_headroom(max_depth: int):
    """Context manager giving recursive passes room for ``max_depth`` levels."""
    return _budget.reserve(max_depth)


def normalize(value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH, depth: int = 0) -> Any:
    """Convert ``value`` to the JSON data model.

    ``depth`` is the nesting level ``value`` already sits at, for callers
    normalizing a subtree in place.

    Raises:
        MaxDepthExceeded: when a node sits deeper than ``max_depth``.
    """
    with recursion_headroom(max_depth):
        return _normalize(value, depth, max_depth)


def _normalize(value: Any, depth: int, limit: int) -> Any:
    if depth > limit:
        raise MaxDepthExceeded(depth, limit)

    if _has_hook(value):
        replacement = value.to_toon()
        if replacement is not value:
            return _normalize(replacement, depth + 1, limit)

    if value is None:
        return None
    if isinstance(value, Enum):
        return _normalize(value.value, depth, limit)
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return _normalize_int(int(value))
    if isinstance(value, float):
        return _normalize_float(float(value))
    if isinstance(value, str):
        return value if type(value) is str else str(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (date, time)):
        # datetime is a date subclass
        return value.isoformat()
    if isinstance(value, Decimal):
        return _normalize_decimal(value)
    if isinstance(value, Fraction):
        return _normalize_fraction(value)

    if isinstance(value, (set, frozenset)):
        items = [_normalize(item, depth + 1, limit) for item in value]
        return sorted(items, key=_sort_key)
    if isinstance(value, BaseModel):
        return _normalize_mapping(value.model_dump(), depth, limit)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return _normalize_mapping(fields, depth, limit)
    if isinstance(value, Mapping):
        return _normalize_mapping(value, depth, limit)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return None
    if isinstance(value, Iterable):
        return [_normalize(item, depth + 1, limit) for item in value]

    return None


def _has_hook(value: Any) -> bool:
    # Looked up on the type so classes themselves are never asked
    return callable(getattr(type(value), "to_toon", None))


def _normalize_int(value: int) -> int | str:
    if -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
        return value
    return format_integer(value)


def _normalize_float(value: float) -> float | int | None:
    if not math.isfinite(value):
        return None
    if value == 0:
        return 0
    return value


def _normalize_decimal(value: Decimal) -> int | float | str | None:
    if not value.is_finite():
        return None
    if value == value.to_integral_value():
        if -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
            return int(value)
        return format(value, "f")
    as_float = float(value)
    # Keep the number only when the float renders back to the same digits
    if math.isfinite(as_float) and Decimal(repr(as_float)) == value:
        return as_float
    return format(value, "f")


def _normalize_fraction(value: Fraction) -> int | float | str:
    if value.denominator == 1:
        return _normalize_int(value.numerator)
    try:
        as_float = float(value)
    except OverflowError:
        as_float = math.inf
    if math.isfinite(as_float) and Fraction(as_float) == value:
        return as_float
    return f"{format_integer(value.numerator)}/{format_integer(value.denominator)}"


def _normalize_mapping(value: Mapping[Any, Any], depth: int, limit: int) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, item in value.items():
        result[_normalize_key(key, depth, limit)] = _normalize(item, depth + 1, limit)
    return result


def _normalize_key(key: Any, depth: int, limit: int) -> str:
    if type(key) is str:
        return key
    normalized = _normalize(key, depth + 1, limit)
    if isinstance(normalized, str):
        return normalized
    if is_primitive(normalized):
        return encode_primitive(normalized)
    return str(key)


def _sort_key(value: Any) -> tuple[int, Any]:
    """Total order over normalized values: kind first, then value."""
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (1, value)
    if isinstance(value, (int, float)):
        return (2, value)
    if isinstance(value, str):
        return (3, value)
    if isinstance(value, list):
        return (4, orjson.dumps(value, option=orjson.OPT_SORT_KEYS))
    return (5, orjson.dumps(value, option=orjson.OPT_SORT_KEYS))
