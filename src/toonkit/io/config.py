"""Load encoding options from YAML files and ``TOON_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from toonkit.contracts.options import EncodingOptions

CONFIG_FILENAME = "toon.yaml"

# Options a config file or the environment may set; replacer is code-only
CONFIG_KEYS: frozenset[str] = frozenset({
    "delimiter", "key_collapsing", "flatten_depth", "indent", "max_depth",
})

ENV_VARS: dict[str, str] = {
    "TOON_DELIMITER": "delimiter",
    "TOON_KEY_COLLAPSING": "key_collapsing",
    "TOON_FLATTEN_DEPTH": "flatten_depth",
    "TOON_INDENT": "indent",
    "TOON_MAX_DEPTH": "max_depth",
}


def read_text_safe(path: str | Path) -> str:
    """Read a text file with UTF-8 BOM tolerance.

    Uses ``utf-8-sig`` encoding which silently strips a leading BOM when
    present, while reading plain UTF-8 correctly.
    """
    return Path(path).read_text(encoding="utf-8-sig")


def load_options(path: str | Path) -> EncodingOptions:
    """Load encoding options from a YAML mapping."""
    text = read_text_safe(path)
    data = yaml.safe_load(text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Options YAML must be a mapping/object.")

    unknown_keys = sorted(str(k) for k in set(data) - CONFIG_KEYS)
    if unknown_keys:
        raise ValueError(f"Unknown option keys: {', '.join(unknown_keys)}")

    return EncodingOptions(**data)


def load_options_from_dir(directory: str | Path) -> EncodingOptions | None:
    """Try to load toon.yaml from a directory. Returns None if not found."""
    path = Path(directory) / CONFIG_FILENAME
    if path.exists():
        return load_options(path)
    return None


def options_from_env(environ: Mapping[str, str] | None = None) -> EncodingOptions:
    """Build options from ``TOON_*`` variables; unset or empty ones keep defaults."""
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    for var, field in ENV_VARS.items():
        raw = env.get(var, "").strip()
        if raw:
            data[field] = raw
    return EncodingOptions(**data)


def coerce_options(
    options: EncodingOptions | Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None = None,
) -> EncodingOptions:
    """Merge ``overrides`` over ``options`` (a model, a mapping or None)."""
    if isinstance(options, EncodingOptions):
        if not overrides:
            return options
        # model_copy(update=...) does not validate
        return EncodingOptions(**{**_fields(options), **overrides})
    if options is None:
        base: dict[str, Any] = {}
    elif isinstance(options, Mapping):
        base = dict(options)
    else:
        raise TypeError(f"options must be EncodingOptions or a mapping, got {type(options).__name__}")
    return EncodingOptions(**{**base, **(overrides or {})})


def _fields(options: EncodingOptions) -> dict[str, Any]:
    return {name: getattr(options, name) for name in EncodingOptions.model_fields}
