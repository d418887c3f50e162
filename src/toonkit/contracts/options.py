"""Encoding options model."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Delimiter(str, Enum):
    """Field separator for inline arrays and tabular rows."""

    COMMA = ","
    PIPE = "|"
    TAB = "\t"


DELIMITER_NAMES: dict[str, Delimiter] = {
    "comma": Delimiter.COMMA,
    "pipe": Delimiter.PIPE,
    "tab": Delimiter.TAB,
}


class EncodingOptions(BaseModel):
    """Options controlling how a value is rendered as TOON."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    delimiter: Delimiter = Delimiter.COMMA
    key_collapsing: Literal["off", "safe"] = "off"
    flatten_depth: int | None = Field(default=None, ge=1)
    indent: int = Field(default=2, ge=1)
    max_depth: int = Field(default=1000, ge=1)
    # (key, value, path) -> value | OMIT
    replacer: Callable[..., Any] | None = None

    @field_validator("delimiter", mode="before")
    @classmethod
    def _delimiter_by_name(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() in DELIMITER_NAMES:
            return DELIMITER_NAMES[value.lower()]
        return value

    @field_validator("key_collapsing", mode="before")
    @classmethod
    def _collapsing_flag(cls, value: Any) -> Any:
        # YAML 1.1 reads a bare `off` as False
        if isinstance(value, bool):
            return "safe" if value else "off"
        if isinstance(value, str):
            return value.lower()
        return value

    @property
    def collapsing(self) -> bool:
        return self.key_collapsing == "safe"
