"""No-op tracer: every operation is free and has no effect.

``start_span`` returns one shared sentinel span whose context is one shared
sentinel context. ``inject`` writes nothing; ``extract`` always raises
SpanContextNotFoundError, so callers fall through to starting a root span.
This is the default global tracer until one is registered.
"""

from __future__ import annotations

from typing import Any, Self

from tracewire.core import FinishOptions, LogData, Span, SpanContext, StartSpanOptions, Tracer
from tracewire.foundation.errors import BaggageDict, SpanContextNotFoundError, format_name


class NoopSpanContext(SpanContext):
    """Context that stores nothing."""

    __slots__ = ()

    def set_baggage_item(self, key: str, value: str) -> Self:
        return self

    def baggage_item(self, key: str) -> str | None:
        return None

    @property
    def baggage(self) -> BaggageDict:
        return {}


class NoopSpan(Span):
    """Span that ignores every call."""

    __slots__ = ()

    def set_operation_name(self, operation_name: str) -> Self:
        return self

    def set_tag(self, key: str, value: Any) -> Self:
        return self

    def log(self, data: LogData) -> None:
        pass

    def finish_with_options(self, options: FinishOptions) -> None:
        pass


class NoopTracer(Tracer):
    """Tracer whose spans and propagation do nothing."""

    context_type = NoopSpanContext

    def __init__(self) -> None:
        super().__init__()

    def start_span_with_options(self, options: StartSpanOptions) -> Span:
        return NOOP_SPAN

    def supports(self, fmt: object) -> bool:
        """Every format is accepted and ignored."""
        return True

    def inject(self, span_context: SpanContext, format: object, carrier: object) -> None:  # noqa: A002
        pass

    def extract(self, format: object, carrier: object) -> SpanContext:  # noqa: A002
        raise SpanContextNotFoundError.create("extract", "noop tracer never extracts", format=format_name(format))


NOOP_TRACER = NoopTracer()
NOOP_SPAN_CONTEXT = NoopSpanContext()
NOOP_SPAN = NoopSpan(NOOP_TRACER, NOOP_SPAN_CONTEXT, "", 0.0)
