"""Object rendering: one ``key: value`` line (or header block) per field."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from toonkit.contracts.common import NotEncodable
from toonkit.contracts.options import EncodingOptions
from toonkit.engine.arrays import encode_array
from toonkit.engine.collapse import try_collapse
from toonkit.engine.primitives import encode_primitive, is_primitive
from toonkit.engine.quoting import quote_key
from toonkit.engine.writer import LineWriter


def encode_object(
    obj: dict[str, Any],
    options: EncodingOptions,
    depth: int,
    writer: LineWriter,
    *,
    root_keys: Collection[str] = (),
    path: str | None = None,
    budget: int | None = None,
) -> None:
    """Write every field of ``obj`` at ``depth``, in insertion order.

    ``root_keys`` holds the dotted keys that exist literally at the document
    root and ``path`` the dotted path from the root to ``obj``; together they
    keep collapsed keys from shadowing literal ones.
    """
    siblings = obj.keys()
    for key, value in obj.items():
        encode_field(
            key,
            value,
            options,
            depth,
            writer,
            siblings=siblings,
            root_keys=root_keys,
            path=path,
            budget=budget,
        )


def encode_field(
    key: str,
    value: Any,
    options: EncodingOptions,
    depth: int,
    writer: LineWriter,
    *,
    siblings: Collection[str] = (),
    root_keys: Collection[str] = (),
    path: str | None = None,
    budget: int | None = None,
) -> None:
    """Write a single field, folding single-key chains when enabled."""
    folded = try_collapse(
        key,
        value,
        siblings,
        options,
        root_literal_keys=root_keys,
        path_prefix=path,
        budget=budget,
    )
    if folded is None:
        _encode_entry(key, value, options, depth, writer, root_keys=root_keys, path=path, budget=budget)
        return

    name = folded.collapsed_key
    if folded.remainder is None:
        _encode_entry(name, folded.leaf_value, options, depth, writer, root_keys=root_keys, path=path, budget=budget)
        return

    limit = budget if budget is not None else options.flatten_depth
    remaining = limit - folded.segment_count if limit is not None else None
    writer.push(depth, f"{quote_key(name)}:")
    encode_object(
        folded.remainder,
        options,
        depth + 1,
        writer,
        root_keys=root_keys,
        path=_join(path, name),
        budget=remaining,
    )


def _encode_entry(
    key: str,
    value: Any,
    options: EncodingOptions,
    depth: int,
    writer: LineWriter,
    *,
    root_keys: Collection[str],
    path: str | None,
    budget: int | None,
) -> None:
    name = quote_key(key)
    if is_primitive(value):
        writer.push(depth, f"{name}: {encode_primitive(value, options.delimiter.value)}")
    elif isinstance(value, list):
        encode_array(key, value, options, depth, writer)
    elif isinstance(value, dict):
        writer.push(depth, f"{name}:")
        if value:
            encode_object(
                value,
                options,
                depth + 1,
                writer,
                root_keys=root_keys,
                path=_join(path, key),
                budget=budget,
            )
    else:
        raise NotEncodable(value)


def _join(prefix: str | None, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key
