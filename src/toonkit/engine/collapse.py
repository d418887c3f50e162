"""Key collapsing: fold chains of single-key objects into dotted keys.

``{"a": {"b": {"c": 1}}}`` becomes ``a.b.c: 1`` when every segment is a
plain identifier and the folded key cannot be confused with a key that
already exists literally.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from toonkit.contracts.common import CollapseResult
from toonkit.contracts.options import EncodingOptions
from toonkit.engine.quoting import is_identifier_segment


def try_collapse(
    key: str,
    value: Any,
    sibling_keys: Collection[str],
    options: EncodingOptions,
    *,
    root_literal_keys: Collection[str] = (),
    path_prefix: str | None = None,
    budget: int | None = None,
) -> CollapseResult | None:
    """Return the folded form of ``(key, value)``, or None to encode it as is.

    ``budget`` caps the number of segments; it defaults to the options'
    ``flatten_depth``.
    """
    if not options.collapsing:
        return None
    limit = budget if budget is not None else options.flatten_depth
    if limit is not None and limit < 2:
        return None

    segments = [key]
    current = value
    while isinstance(current, dict) and len(current) == 1:
        if limit is not None and len(segments) >= limit:
            break
        (child_key, child_value), = current.items()
        segments.append(child_key)
        current = child_value

    if len(segments) < 2:
        return None
    if not all(is_identifier_segment(segment) for segment in segments):
        return None

    collapsed = ".".join(segments)
    if collapsed in sibling_keys:
        return None
    qualified = f"{path_prefix}.{collapsed}" if path_prefix else collapsed
    if qualified in root_literal_keys:
        return None

    remainder = current if isinstance(current, dict) and current else None
    return CollapseResult(
        collapsed_key=collapsed,
        remainder=remainder,
        leaf_value=None if remainder is not None else current,
        segment_count=len(segments),
    )
