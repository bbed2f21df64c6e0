"""Core protocol types: SpanContext, references, options, Span and Tracer."""

from .context import SpanContext, normalize_baggage_key
from .options import FinishOptions, LogData, StartSpanOption, StartSpanOptions, StartTime, Tags
from .reference import Reference, ReferenceType, child_of, follows_from
from .span import Span
from .tracer import Tracer

__all__ = [
    # Context
    "SpanContext", "normalize_baggage_key",
    # References
    "Reference", "ReferenceType", "child_of", "follows_from",
    # Options
    "StartSpanOption", "StartSpanOptions", "StartTime", "Tags", "FinishOptions", "LogData",
    # Span / Tracer
    "Span", "Tracer",
]
