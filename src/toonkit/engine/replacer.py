"""Replacer pass: let the caller transform or drop nodes before rendering."""

from __future__ import annotations

from typing import Any, Callable

from toonkit.engine.normalize import DEFAULT_MAX_DEPTH, normalize, recursion_headroom

Path = tuple[str | int, ...]
Replacer = Callable[[str, Any, Path], Any]


class _Omit:
    """Sentinel a replacer returns to drop a field or array element."""

    def __repr__(self) -> str:
        return "OMIT"


OMIT = _Omit()


def apply_replacer(value: Any, replacer: Replacer, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Run ``replacer`` over every node of a normalized value.

    The root is visited with key ``""`` and an empty path and cannot be
    dropped. Object fields receive their key, array elements their index as
    a string; ``path`` holds the keys and integer indices from the root.
    Replacements are normalized again and their children visited in turn.
    """
    with recursion_headroom(max_depth):
        replaced = replacer("", value, ())
        if replaced is OMIT:
            replaced = value
        else:
            replaced = normalize(replaced, max_depth=max_depth)
        return _visit_children(replaced, replacer, (), 0, max_depth)


def _visit_children(value: Any, replacer: Replacer, path: Path, depth: int, limit: int) -> Any:
    if isinstance(value, dict):
        result: dict[str, Any] = {}
        for key, item in value.items():
            child = _replace(key, item, replacer, path + (key,), depth + 1, limit)
            if child is not OMIT:
                result[key] = child
        return result
    if isinstance(value, list):
        items: list[Any] = []
        for index, item in enumerate(value):
            child = _replace(str(index), item, replacer, path + (index,), depth + 1, limit)
            if child is not OMIT:
                items.append(child)
        return items
    return value


def _replace(key: str, value: Any, replacer: Replacer, path: Path, depth: int, limit: int) -> Any:
    replaced = replacer(key, value, path)
    if replaced is OMIT:
        return OMIT
    replaced = normalize(replaced, max_depth=limit, depth=depth)
    return _visit_children(replaced, replacer, path, depth, limit)
