"""Error handling for tracewire.

- ErrorCode: classification of Inject/Extract failures
- PropagationError/PropagationException: structured errors and exceptions
- One exception subclass per error code
"""

from .errors import (
    ErrorCode,
    InvalidCarrierError,
    InvalidSpanContextError,
    PropagationError,
    PropagationException,
    SpanContextCorruptedError,
    SpanContextNotFoundError,
    UnsupportedFormatError,
    exception_for,
    format_name,
)
from .types import BaggageDict, JsonDict, JsonMapping, JsonPrimitive, JsonValue

__all__ = [
    # Core errors
    "ErrorCode", "PropagationError", "PropagationException", "exception_for", "format_name",
    # Per-code exceptions
    "UnsupportedFormatError", "InvalidCarrierError", "SpanContextNotFoundError",
    "SpanContextCorruptedError", "InvalidSpanContextError",
    # Types
    "BaggageDict", "JsonDict", "JsonMapping", "JsonPrimitive", "JsonValue",
]
