"""Tracer: span creation and format-dispatched Inject/Extract.

The base class owns the parts of the protocol that are the same for every
implementation:
- option application for start_span (subclasses implement
  ``start_span_with_options``)
- format -> propagator dispatch for inject/extract, with the error
  semantics below

Inject/Extract error semantics:
- unknown format: UnsupportedFormatError, raised before any carrier write
- context from another implementation: InvalidSpanContextError
- carrier of the wrong shape or a carrier that fails: InvalidCarrierError
  (the carrier's own exception is chained as ``__cause__``)
- no identity in the carrier: SpanContextNotFoundError
- malformed identity: SpanContextCorruptedError, no context returned

Usage:
    >>> tracer = MockTracer()
    >>> span = tracer.start_span("GetFeed")
    >>> carrier: dict[str, str] = {}
    >>> tracer.inject(span.context(), TEXT_MAP, carrier)
    >>> ctx = tracer.extract(TEXT_MAP, carrier)
    >>> child = tracer.start_span("GetFeed.db", child_of(ctx))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

from tracewire.foundation.config import PropagationSettings, get_settings
from tracewire.foundation.errors import (
    InvalidCarrierError,
    InvalidSpanContextError,
    PropagationException,
    UnsupportedFormatError,
    format_name,
)
from tracewire.io.propagation import Format, Propagator
from tracewire.runtime.observability.logging import get_logger

from .context import SpanContext
from .options import StartSpanOption, StartSpanOptions

if TYPE_CHECKING:
    from .span import Span

_log = get_logger("tracewire.tracer")


class Tracer(ABC):
    """Base tracer: span factory plus propagation dispatch.

    Subclasses set ``context_type`` to their SpanContext class, register one
    propagator per supported format and implement ``start_span_with_options``.
    Propagating tracers are expected to support BuiltinFormat.TEXT_MAP and
    BuiltinFormat.BINARY; a tracer that drops all propagation may instead
    override ``supports``, ``inject`` and ``extract``.

    Args:
        propagators: Initial format -> propagator table
        settings: Propagation settings (defaults to global settings)
    """

    context_type: ClassVar[type[SpanContext]] = SpanContext

    def __init__(
        self,
        propagators: Mapping[Format, Propagator] | None = None,
        *,
        settings: PropagationSettings | None = None,
    ) -> None:
        self._propagators: dict[Format, Propagator] = dict(propagators or {})
        self._settings = settings or get_settings().propagation

    # ─────────────────────────────────────────────────────────────────
    # Span creation
    # ─────────────────────────────────────────────────────────────────

    def start_span(self, operation_name: str, *options: StartSpanOption) -> Span:
        """Start a span, applying ``options`` in order. Never raises.

        Examples:
            >>> tracer.start_span("GetFeed")                       # root
            >>> tracer.start_span("GetFeed", child_of(parent.context()))
            >>> tracer.start_span(
            ...     "GetFeed",
            ...     ReferenceType.BLOCKED_PARENT.point(parent.context()),
            ...     Tags({"user_agent": ua}),
            ...     StartTime(request_ts),
            ... )
        """
        return self.start_span_with_options(StartSpanOptions.build(operation_name, *options))

    @abstractmethod
    def start_span_with_options(self, options: StartSpanOptions) -> Span:
        """Start a span from fully resolved options.

        Implementations inherit trace identity from
        ``options.first_intra_trace_reference()`` when present, else mint a
        new trace.
        """

    def _span_finished(self, span: Span) -> None:
        """Hook called once when ``span`` finishes."""

    # ─────────────────────────────────────────────────────────────────
    # Propagation
    # ─────────────────────────────────────────────────────────────────

    def register_propagator(self, fmt: Format, propagator: Propagator) -> None:
        """Support ``fmt`` using ``propagator`` (replaces any existing one)."""
        self._propagators[fmt] = propagator

    def supports(self, fmt: object) -> bool:
        return self._lookup(fmt) is not None

    def _lookup(self, fmt: object) -> Propagator | None:
        try:
            return self._propagators.get(fmt)  # type: ignore[arg-type]
        except TypeError:  # unhashable "format"
            return None

    def inject(self, span_context: SpanContext, format: object, carrier: object) -> None:  # noqa: A002
        """Encode ``span_context`` into ``carrier`` using ``format``.

        Raises:
            UnsupportedFormatError: format not supported; carrier untouched
            InvalidSpanContextError: context not produced by this tracer type
            InvalidCarrierError: carrier rejected the write
        """
        if (propagator := self._lookup(format)) is None:
            raise UnsupportedFormatError.create("inject", f"format {format_name(format)!r} is not supported", format=format)
        if not isinstance(span_context, self.context_type):
            raise InvalidSpanContextError.create(
                "inject",
                f"expected {self.context_type.__name__}, got {type(span_context).__name__}",
                format=format,
            )
        if (n := len(span_context.baggage)) > self._settings.max_baggage_items:
            raise InvalidCarrierError.create(
                "inject", f"{n} baggage items exceed limit of {self._settings.max_baggage_items}", format=format)
        try:
            propagator.inject(span_context, carrier)
        except PropagationException:
            raise
        except Exception as e:
            raise InvalidCarrierError.create("inject", f"carrier write failed: {e}", format=format) from e

    def extract(self, format: object, carrier: object) -> SpanContext:  # noqa: A002
        """Decode a span context from ``carrier`` using ``format``.

        Callers should treat SpanContextNotFoundError as "no incoming trace"
        and start a root span.

        Raises:
            UnsupportedFormatError: format not supported
            InvalidCarrierError: carrier is not readable, or failed while read
            SpanContextNotFoundError: carrier holds no trace identity
            SpanContextCorruptedError: identity present but malformed
        """
        if (propagator := self._lookup(format)) is None:
            raise UnsupportedFormatError.create("extract", f"format {format_name(format)!r} is not supported", format=format)
        try:
            return propagator.extract(carrier)
        except PropagationException as e:
            _log.debug("extract failed", format=format_name(format), code=str(e.error.code), reason=e.error.message)
            raise
        except Exception as e:
            _log.debug("extract failed", format=format_name(format), code="INVALID_CARRIER", reason=str(e))
            raise InvalidCarrierError.create("extract", f"carrier read failed: {e}", format=format) from e
