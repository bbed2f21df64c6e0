"""tracewire - span references and format-agnostic context propagation.

Defines how a span is started, how causal references between spans are
recorded, and how a span's identity and baggage cross process boundaries
through pluggable carrier formats.

Quick Start:
    >>> from tracewire import TEXT_MAP, MockTracer, SpanContextNotFoundError, child_of
    >>> from tracewire import MockSpanContext, TextMapPropagator, register_format
    >>>
    >>> tracer = MockTracer()
    >>> span = tracer.start_span("GetFeed")
    >>> span.set_baggage_item("user-id", "42")
    >>>
    >>> # Client side: inject into outgoing metadata
    >>> headers: dict[str, str] = {}
    >>> tracer.inject(span.context(), TEXT_MAP, headers)
    >>>
    >>> # Server side: extract and continue the trace
    >>> try:
    ...     parent = tracer.extract(TEXT_MAP, headers)
    ...     server_span = tracer.start_span("GetFeed.handle", child_of(parent))
    ... except SpanContextNotFoundError:
    ...     server_span = tracer.start_span("GetFeed.handle")

Custom formats are identity tokens, not strings:
    >>> GRPC_METADATA = register_format("grpc-metadata")
    >>> tracer.register_propagator(GRPC_METADATA, TextMapPropagator(MockSpanContext))
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core
from .core import (
    FinishOptions,
    LogData,
    Reference,
    ReferenceType,
    Span,
    SpanContext,
    StartSpanOption,
    StartSpanOptions,
    StartTime,
    Tags,
    Tracer,
    child_of,
    follows_from,
)

# Errors
from .foundation.errors import (
    ErrorCode,
    InvalidCarrierError,
    InvalidSpanContextError,
    PropagationError,
    PropagationException,
    SpanContextCorruptedError,
    SpanContextNotFoundError,
    UnsupportedFormatError,
)

# Config
from .foundation.config import TracewireSettings, clear_settings_cache, get_settings

# Propagation
from .io.propagation import (
    BINARY,
    TEXT_MAP,
    BinaryPropagator,
    BuiltinFormat,
    CustomFormat,
    Format,
    Propagator,
    TextMapCarrier,
    TextMapPropagator,
    TextMapReader,
    TextMapWriter,
    register_format,
)

# Runtime
from .runtime.noop import NoopTracer
from .runtime.globals import global_tracer, is_global_tracer_registered, reset_global_tracer, set_global_tracer
from .runtime.scope import EMPTY_SCOPE, Scope, bind, current_span, start_span_from_scope

# Testing
from .foundation.testing import MockSpan, MockSpanContext, MockTracer

__all__ = [
    "__version__",
    # Core
    "SpanContext", "Reference", "ReferenceType", "child_of", "follows_from",
    "StartSpanOption", "StartSpanOptions", "StartTime", "Tags", "FinishOptions", "LogData",
    "Span", "Tracer",
    # Errors
    "ErrorCode", "PropagationError", "PropagationException",
    "UnsupportedFormatError", "InvalidCarrierError", "SpanContextNotFoundError",
    "SpanContextCorruptedError", "InvalidSpanContextError",
    # Config
    "TracewireSettings", "get_settings", "clear_settings_cache",
    # Propagation
    "BuiltinFormat", "CustomFormat", "Format", "TEXT_MAP", "BINARY", "register_format",
    "TextMapReader", "TextMapWriter", "TextMapCarrier",
    "Propagator", "TextMapPropagator", "BinaryPropagator",
    # Runtime
    "NoopTracer", "global_tracer", "set_global_tracer", "is_global_tracer_registered", "reset_global_tracer",
    "Scope", "EMPTY_SCOPE", "bind", "current_span", "start_span_from_scope",
    # Testing
    "MockTracer", "MockSpan", "MockSpanContext",
]
