"""Span: the live handle for one timed unit of work.

A span starts open, accepts tags and logs, and finishes exactly once.
None of its operations raise; instrumentation must never add failure paths
to the code it observes. Mutations after finish are accepted and dropped.

Finish is linearizable against concurrent set_tag/log calls: anything that
acquired the span lock before finish is kept, anything after is ignored.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Self

from tracewire.foundation.errors import JsonDict

from .options import FinishOptions, LogData

if TYPE_CHECKING:
    from types import TracebackType

    from .context import SpanContext
    from .tracer import Tracer


class Span:
    """Base span with an open/finished state machine.

    Tracers create spans; user code should not instantiate them directly.
    Tracer-specific behavior on finish goes through ``Tracer._span_finished``.

    Example:
        >>> with tracer.start_span("search") as span:
        ...     span.set_tag("query", "python")
        ...     span.log_event("cache_miss")
    """

    __slots__ = (
        "_tracer", "_context", "_operation_name", "_start_time", "_finish_time",
        "_tags", "_logs", "_finished", "_lock",
    )

    def __init__(
        self,
        tracer: Tracer,
        context: SpanContext,
        operation_name: str,
        start_time: float,
        tags: JsonDict | None = None,
    ) -> None:
        self._tracer = tracer
        self._context = context
        self._operation_name = operation_name
        self._start_time = start_time
        self._finish_time: float | None = None
        self._tags: JsonDict = tags if tags is not None else {}
        self._logs: list[LogData] = []
        self._finished = False
        self._lock = threading.Lock()

    # ─────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────

    def context(self) -> SpanContext:
        """The span's context. Stays valid after finish for propagation."""
        return self._context

    def tracer(self) -> Tracer:
        """The tracer that created this span."""
        return self._tracer

    @property
    def operation_name(self) -> str:
        return self._operation_name

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def finish_time(self) -> float | None:
        return self._finish_time

    @property
    def duration_ms(self) -> float | None:
        """Duration in milliseconds, or None if not finished."""
        if self._finish_time is None:
            return None
        return (self._finish_time - self._start_time) * 1000

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def tags(self) -> JsonDict:
        """Copy of the current tags."""
        with self._lock:
            return dict(self._tags)

    @property
    def logs(self) -> list[LogData]:
        """Copy of the log records, in append order."""
        with self._lock:
            return list(self._logs)

    # ─────────────────────────────────────────────────────────────────
    # Mutation (open state only)
    # ─────────────────────────────────────────────────────────────────

    def set_operation_name(self, operation_name: str) -> Self:
        with self._lock:
            if not self._finished:
                self._operation_name = operation_name
        return self

    def set_tag(self, key: str, value: Any) -> Self:
        """Set a tag, returns self for chaining."""
        with self._lock:
            if not self._finished:
                self._tags[key] = value
        return self

    def log(self, data: LogData) -> None:
        """Append a structured log record."""
        with self._lock:
            if not self._finished:
                self._logs.append(data)

    def log_event(self, event: str) -> None:
        self.log(LogData(event=event))

    def log_event_with_payload(self, event: str, payload: Any) -> None:
        self.log(LogData(event=event, payload=payload))

    def set_baggage_item(self, key: str, value: str) -> Self:
        """Set baggage on this span's context (propagates to later children)."""
        self._context.set_baggage_item(key, value)
        return self

    def baggage_item(self, key: str) -> str | None:
        return self._context.baggage_item(key)

    # ─────────────────────────────────────────────────────────────────
    # Finish
    # ─────────────────────────────────────────────────────────────────

    def finish(self) -> None:
        """Finish at the current time."""
        self.finish_with_options(FinishOptions())

    def finish_with_options(self, options: FinishOptions) -> None:
        """Finish with an explicit timestamp and/or bulk logs. Second call is ignored."""
        with self._lock:
            if self._finished:
                return
            self._finish_time = options.resolved_finish_time()
            self._logs.extend(options.bulk_log_data)
            self._finished = True
        self._tracer._span_finished(self)

    # Context manager: finish on exit, flag errors
    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_val is not None:
            self.set_tag("error", True)
            self.log_event_with_payload("error", f"{type(exc_val).__name__}: {exc_val}")
        self.finish()

    def __repr__(self) -> str:
        state = "finished" if self._finished else "open"
        return f"<{type(self).__name__} {self._operation_name!r} {state} {self._context!r}>"
