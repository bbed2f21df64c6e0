"""Start and finish options for spans.

Start options are applied in order to a zero-valued StartSpanOptions:
scalar fields follow "later option wins", references accumulate.

Example:
    >>> opts = StartSpanOptions.build(
    ...     "GetFeed",
    ...     ReferenceType.BLOCKED_PARENT.point(parent.context()),
    ...     Tags({"user_agent": ua}),
    ...     StartTime(request_ts),
    ... )
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

from tracewire.foundation.errors import JsonDict

if TYPE_CHECKING:
    from .reference import Reference


@runtime_checkable
class StartSpanOption(Protocol):
    """Anything that can adjust StartSpanOptions."""

    def apply(self, options: StartSpanOptions) -> None: ...


@dataclass(slots=True)
class StartSpanOptions:
    """Resolved configuration for Tracer.start_span.

    Attributes:
        operation_name: Span name; not validated, empty is accepted
        references: Causal references in application order
        start_time: Unix timestamp, None or 0 means "now"
        tags: Initial tags; ownership passes to the span
    """

    operation_name: str = ""
    references: list[Reference] = field(default_factory=list)
    start_time: float | None = None
    tags: JsonDict | None = None

    @classmethod
    def build(cls, operation_name: str, *options: StartSpanOption) -> StartSpanOptions:
        """Apply ``options`` in order to a fresh instance."""
        resolved = cls(operation_name=operation_name)
        for opt in options:
            opt.apply(resolved)
        return resolved

    def apply(self, options: StartSpanOptions) -> None:
        """Use a whole options struct as a single option."""
        if self.operation_name:
            options.operation_name = self.operation_name
        options.references.extend(self.references)
        if self.start_time:
            options.start_time = self.start_time
        if self.tags is not None:
            options.tags = self.tags

    def resolved_start_time(self) -> float:
        return self.start_time or time.time()

    def resolved_tags(self) -> JsonDict:
        return self.tags if self.tags is not None else {}

    def first_intra_trace_reference(self) -> Reference | None:
        """The reference whose referent supplies inherited trace identity."""
        return next((ref for ref in self.references if ref.intra_trace), None)


@dataclass(frozen=True, slots=True)
class StartTime:
    """Explicit start timestamp (Unix seconds)."""

    timestamp: float

    def apply(self, options: StartSpanOptions) -> None:
        options.start_time = self.timestamp


class Tags(dict[str, Any]):
    """Tag mapping usable as a start option. Replaces any earlier Tags."""

    __slots__ = ()

    def merge(self, other: JsonDict) -> Self:
        """Merge ``other`` in place and return self."""
        self.update(other)
        return self

    def apply(self, options: StartSpanOptions) -> None:
        options.tags = self


@dataclass(slots=True)
class LogData:
    """One structured log record attached to a span."""

    event: str = ""
    payload: Any = None
    timestamp: float = field(default_factory=time.time)


@dataclass(slots=True)
class FinishOptions:
    """Options for Span.finish_with_options.

    Attributes:
        finish_time: Unix timestamp, None or 0 means "now"
        bulk_log_data: Logs appended after any logged incrementally
    """

    finish_time: float | None = None
    bulk_log_data: list[LogData] = field(default_factory=list)

    def resolved_finish_time(self) -> float:
        return self.finish_time or time.time()
