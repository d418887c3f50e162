"""TOON (Token-Oriented Object Notation) encoder entry point.

Compact text format optimized for LLM consumption, fewer tokens than JSON.

Rules:
- key: value for scalars (strings quoted only when ambiguous)
- key[N]: v1,v2,v3 for primitive arrays
- Uniform object arrays -> key[N]{f1,f2}: header + delimited rows
- Other arrays -> key[N]: header + "- " list items
- Nested dicts -> indented key: blocks, optionally folded into a.b.c keys
- None -> null, booleans -> true/false, NaN/inf -> null
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from toonkit.contracts.common import NotEncodable, ToonError
from toonkit.contracts.options import EncodingOptions
from toonkit.engine.arrays import encode_array
from toonkit.engine.normalize import normalize, recursion_headroom
from toonkit.engine.objects import encode_object
from toonkit.engine.primitives import encode_primitive, is_primitive
from toonkit.engine.replacer import apply_replacer
from toonkit.engine.writer import LineWriter
from toonkit.io.config import coerce_options
from toonkit.observe.events import EventEmitter, Timer


def encode(
    value: Any,
    options: EncodingOptions | Mapping[str, Any] | None = None,
    *,
    emitter: EventEmitter | None = None,
    **overrides: Any,
) -> str:
    """Convert a Python value to TOON text.

    ``options`` may be an :class:`EncodingOptions`, a mapping of its fields or
    None; keyword ``overrides`` are applied on top, e.g.
    ``encode(data, delimiter="pipe", key_collapsing="safe")``.

    Raises:
        MaxDepthExceeded: when the value is nested deeper than ``max_depth``.
    """
    opts = coerce_options(options, overrides)
    events = emitter if emitter is not None else EventEmitter.from_env()
    events.emit("encode.start", {
        "delimiter": opts.delimiter.name.lower(),
        "key_collapsing": opts.key_collapsing,
    })

    with Timer() as timer, recursion_headroom(opts.max_depth):
        try:
            normalized = normalize(value, max_depth=opts.max_depth)
            if opts.replacer is not None:
                normalized = apply_replacer(normalized, opts.replacer, max_depth=opts.max_depth)
            text = encode_value(normalized, opts)
        except ToonError as e:
            events.emit("encode.error", e.to_detail().model_dump())
            raise
        except Exception as e:
            # Failures raised by replacers and to_toon() hooks
            events.emit("encode.error", {
                "code": "ERR_INTERNAL",
                "message": str(e),
                "details": {"type": type(e).__name__},
            })
            raise

    events.emit("encode.done", {
        "duration_ms": timer.elapsed_ms,
        "lines": text.count("\n") + 1 if text else 0,
        "chars": len(text),
    })
    return text


def encode_value(value: Any, options: EncodingOptions) -> str:
    """Render an already-normalized value."""
    if is_primitive(value):
        return encode_primitive(value, options.delimiter.value)

    writer = LineWriter(options.indent)
    with recursion_headroom(options.max_depth):
        if isinstance(value, list):
            encode_array(None, value, options, 0, writer)
        elif isinstance(value, dict):
            root_keys = frozenset(key for key in value if "." in key)
            encode_object(value, options, 0, writer, root_keys=root_keys)
        else:
            raise NotEncodable(value)
    return writer.render()
