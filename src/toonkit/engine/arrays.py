"""Array rendering: inline, tabular, nested-list and mixed-list forms.

Format selection, first match wins:

- empty            -> ``key[0]`` (``- []`` as a bare list item)
- all primitives   -> ``key[N]: v1,v2``
- uniform records  -> ``key[N]{a,b}:`` header + one delimited row per record
- anything else    -> ``key[N]:`` header + one ``- `` list item per element
"""

from __future__ import annotations

from typing import Any

from toonkit.contracts.common import NotEncodable
from toonkit.contracts.options import EncodingOptions
from toonkit.engine.primitives import encode_primitive, is_primitive, join_primitives
from toonkit.engine.quoting import quote_key
from toonkit.engine.writer import LineWriter

LIST_MARKER = "-"
LIST_PREFIX = "- "


def array_header(length: int, delimiter: str = ",") -> str:
    """``[N]``, with a non-comma delimiter embedded as ``[N|]``."""
    if delimiter == ",":
        return f"[{length}]"
    return f"[{length}{delimiter}]"


def common_keys(items: list[dict[str, Any]]) -> list[str]:
    """Keys present in every record, in the first record's order."""
    if not items:
        return []
    shared = set(items[0])
    for item in items[1:]:
        shared &= item.keys()
        if not shared:
            return []
    return [key for key in items[0] if key in shared]


def tabular_columns(items: list[Any]) -> list[str] | None:
    """Columns for a tabular block, or None when the array is not tabular.

    Every record must hold only primitive values; keys outside the common
    set are left out of the rows.
    """
    if not items or not all(isinstance(item, dict) for item in items):
        return None
    for item in items:
        if not all(is_primitive(value) for value in item.values()):
            return None
    columns = common_keys(items)
    return columns or None


def encode_array(
    key: str | None,
    items: list[Any],
    options: EncodingOptions,
    depth: int,
    writer: LineWriter,
) -> None:
    """Write ``items`` under ``key`` (None for a root array) at ``depth``."""
    lead = quote_key(key) if key is not None else ""
    write_array(lead, items, options, depth, writer, child_depth=depth + 1)


def write_array(
    lead: str,
    items: list[Any],
    options: EncodingOptions,
    depth: int,
    writer: LineWriter,
    *,
    child_depth: int,
) -> None:
    """Write an array whose header line starts with ``lead``.

    ``lead`` is a key, a list marker plus key, or empty; rows and list items
    go to ``child_depth``.
    """
    delimiter = options.delimiter.value
    header = array_header(len(items), delimiter)

    if not items:
        writer.push(depth, f"{lead}{header}")
        return

    if all(is_primitive(item) for item in items):
        writer.push(depth, f"{lead}{header}: {join_primitives(items, delimiter)}")
        return

    columns = tabular_columns(items)
    if columns:
        fields = delimiter.join(quote_key(column) for column in columns)
        writer.push(depth, f"{lead}{header}{{{fields}}}:")
        for item in items:
            writer.push(child_depth, join_primitives([item[column] for column in columns], delimiter))
        return

    writer.push(depth, f"{lead}{header}:")
    for item in items:
        encode_list_item(item, options, child_depth, writer)


def encode_list_item(item: Any, options: EncodingOptions, depth: int, writer: LineWriter) -> None:
    """Write one ``- `` element of a list-form array."""
    if is_primitive(item):
        writer.push(depth, f"{LIST_PREFIX}{encode_primitive(item, options.delimiter.value)}")
    elif isinstance(item, list):
        if not item:
            writer.push(depth, f"{LIST_PREFIX}[]")
        else:
            write_array(LIST_PREFIX, item, options, depth, writer, child_depth=depth + 1)
    elif isinstance(item, dict):
        encode_object_item(item, options, depth, writer)
    else:
        raise NotEncodable(item)


def encode_object_item(obj: dict[str, Any], options: EncodingOptions, depth: int, writer: LineWriter) -> None:
    """Write an object as a list item.

    The first field shares the marker line, so anything nested under it sits
    two levels below the marker; the remaining fields sit one level below.
    """
    from toonkit.engine.objects import encode_field, encode_object

    if not obj:
        writer.push(depth, LIST_MARKER)
        return

    fields = iter(obj.items())
    first_key, first_value = next(fields)
    lead = f"{LIST_PREFIX}{quote_key(first_key)}"

    if isinstance(first_value, list):
        write_array(lead, first_value, options, depth, writer, child_depth=depth + 2)
    elif isinstance(first_value, dict):
        writer.push(depth, f"{lead}:")
        if first_value:
            encode_object(first_value, options, depth + 2, writer)
    else:
        writer.push(depth, f"{lead}: {encode_primitive(first_value, options.delimiter.value)}")

    siblings = obj.keys()
    for key, value in fields:
        encode_field(key, value, options, depth + 1, writer, siblings=siblings)
