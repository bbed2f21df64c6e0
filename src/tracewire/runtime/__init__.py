"""Runtime: no-op tracer, global tracer slot, explicit scope helpers, observability.

Contents are imported lazily: ``tracewire.core`` itself logs through
``tracewire.runtime.observability``, so this package must not import core
at load time.
"""

from __future__ import annotations

__all__ = [
    # No-op
    "NoopTracer", "NoopSpan", "NoopSpanContext", "NOOP_TRACER", "NOOP_SPAN", "NOOP_SPAN_CONTEXT",
    # Global slot
    "global_tracer", "set_global_tracer", "is_global_tracer_registered", "reset_global_tracer",
    # Scope
    "Scope", "EMPTY_SCOPE", "bind", "current_span", "start_span_from_scope",
]

_NOOP = ("NoopTracer", "NoopSpan", "NoopSpanContext", "NOOP_TRACER", "NOOP_SPAN", "NOOP_SPAN_CONTEXT")
_GLOBALS = ("global_tracer", "set_global_tracer", "is_global_tracer_registered", "reset_global_tracer")
_SCOPE = ("Scope", "EMPTY_SCOPE", "bind", "current_span", "start_span_from_scope")


def __getattr__(name: str) -> object:
    """Lazy imports to avoid circular dependencies."""
    if name in _NOOP:
        from . import noop
        return getattr(noop, name)
    if name in _GLOBALS:
        from . import globals as _globals
        return getattr(_globals, name)
    if name in _SCOPE:
        from . import scope
        return getattr(scope, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
