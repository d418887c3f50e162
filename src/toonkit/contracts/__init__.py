"""Pydantic models and exceptions shared by the encoder."""

from toonkit.contracts.common import (
    CollapseResult,
    ErrorDetail,
    MaxDepthExceeded,
    NotEncodable,
    ToonError,
)
from toonkit.contracts.options import Delimiter, EncodingOptions

__all__ = [
    "CollapseResult",
    "Delimiter",
    "EncodingOptions",
    "ErrorDetail",
    "MaxDepthExceeded",
    "NotEncodable",
    "ToonError",
]
