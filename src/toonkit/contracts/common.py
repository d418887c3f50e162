"""Common models and exceptions: error details, encoder failures, collapse results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ToonError(Exception):
    """Base class for every error raised while encoding."""

    code = "ERR_TOON"

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(code=self.code, message=str(self))


class MaxDepthExceeded(ToonError):
    """Raised when a value is nested deeper than the configured bound."""

    code = "ERR_MAX_DEPTH_EXCEEDED"

    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"Maximum nesting depth exceeded: depth {depth} > limit {limit}")
        self.depth = depth
        self.limit = limit

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            code=self.code,
            message=str(self),
            details={"depth": self.depth, "limit": self.limit},
        )


class NotEncodable(ToonError):
    """Raised when a non-primitive value reaches the primitive encoder."""

    code = "ERR_NOT_ENCODABLE"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Not a primitive value: {type(value).__name__}")
        self.value = value

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            code=self.code,
            message=str(self),
            details={"type": type(self.value).__name__},
        )


class CollapseResult(BaseModel):
    """Outcome of folding a chain of single-key objects into a dotted key."""

    collapsed_key: str
    remainder: dict[str, Any] | None = None
    leaf_value: Any = None
    segment_count: int
