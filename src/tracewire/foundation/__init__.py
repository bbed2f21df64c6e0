"""Foundation - building blocks for tracewire.

Contains: error handling, configuration, testing utilities.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "PropagationError", "PropagationException",
    "UnsupportedFormatError", "InvalidCarrierError", "SpanContextNotFoundError",
    "SpanContextCorruptedError", "InvalidSpanContextError",
    # Config
    "TracewireSettings", "LoggingSettings", "PropagationSettings", "get_settings", "clear_settings_cache",
    # Testing
    "MockTracer", "MockSpan", "MockSpanContext",
]


def __getattr__(name: str) -> object:
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "PropagationError", "PropagationException",
                "UnsupportedFormatError", "InvalidCarrierError", "SpanContextNotFoundError",
                "SpanContextCorruptedError", "InvalidSpanContextError"):
        from . import errors
        return getattr(errors, name)

    if name in ("TracewireSettings", "LoggingSettings", "PropagationSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)

    if name in ("MockTracer", "MockSpan", "MockSpanContext"):
        from . import testing
        return getattr(testing, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
