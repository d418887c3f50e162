"""Quoting rules for keys and string values.

A string is left bare only when a reader could not mistake it for anything
but a string: not empty, no surrounding whitespace, not a literal
(``true``/``false``/``null``) or number, and free of structural characters,
control characters and the active delimiter.
"""

from __future__ import annotations

import re

_NUMERIC = re.compile(r"^-?\d+(?:\.\d+)?(?:e[+-]?\d+)?$", re.IGNORECASE)
_LEADING_ZERO = re.compile(r"^0\d+$")
_STRUCTURAL = re.compile(r'[:"\\\[\]{}\n\r\t]')
_BARE_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")
_SEGMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_LITERALS = frozenset({"true", "false", "null"})

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape(text: str) -> str:
    """Backslash-escape quotes, backslashes and line/tab controls."""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def _quoted(text: str) -> str:
    return f'"{escape(text)}"'


def looks_numeric(text: str) -> bool:
    return bool(_NUMERIC.match(text) or _LEADING_ZERO.match(text))


def needs_quotes(text: str, delimiter: str = ",") -> bool:
    if not text or text != text.strip():
        return True
    if text in _LITERALS or looks_numeric(text):
        return True
    if _STRUCTURAL.search(text):
        return True
    if delimiter in text:
        return True
    return text.startswith("-")


def quote_value(text: str, delimiter: str = ",") -> str:
    """Render a string value, quoting it only when a bare form is ambiguous."""
    if needs_quotes(text, delimiter):
        return _quoted(text)
    return text


def quote_key(key: str) -> str:
    """Render an object key; identifiers and dotted paths stay bare."""
    if _BARE_KEY.match(key):
        return key
    return _quoted(key)


def is_identifier_segment(segment: str) -> bool:
    """True when ``segment`` can be one dot-free part of a collapsed key."""
    return bool(_SEGMENT.match(segment))
