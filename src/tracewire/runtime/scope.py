"""Explicit ambient scope.

Instead of binding the active span to an implicit execution context, a
Scope value is threaded through call chains. Scopes are immutable: binding
a span returns a new Scope and leaves the caller's untouched.

Example:
    >>> def handle(scope: Scope, request: Request) -> None:
    ...     span, scope = start_span_from_scope(scope, "handle")
    ...     with span:
    ...         load_user(scope, request.user_id)  # child of "handle"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tracewire.core import ReferenceType

from .globals import global_tracer

if TYPE_CHECKING:
    from tracewire.core import Span, StartSpanOption, Tracer


@dataclass(frozen=True, slots=True)
class Scope:
    """Immutable holder for the currently active span (if any)."""

    span: Span | None = None

    def bind(self, span: Span) -> Scope:
        return Scope(span=span)


EMPTY_SCOPE = Scope()


def bind(scope: Scope, span: Span) -> Scope:
    """Return a new scope whose active span is ``span``."""
    return scope.bind(span)


def current_span(scope: Scope) -> Span | None:
    """The active span of ``scope``, or None."""
    return scope.span


def start_span_from_scope(
    scope: Scope,
    operation_name: str,
    *options: StartSpanOption,
    tracer: Tracer | None = None,
) -> tuple[Span, Scope]:
    """Start a span under the scope's active span and bind it.

    The active span, when present, becomes a BLOCKED_PARENT reference placed
    before any caller-supplied options; otherwise a root span is started.
    Uses the global tracer unless ``tracer`` is given.

    Returns:
        The new span and a scope bound to it
    """
    tracer = tracer or global_tracer()
    if (parent := current_span(scope)) is not None:
        span = tracer.start_span(operation_name, ReferenceType.BLOCKED_PARENT.point(parent.context()), *options)
    else:
        span = tracer.start_span(operation_name, *options)
    return span, bind(scope, span)
