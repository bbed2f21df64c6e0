"""Testing utilities: an in-memory tracer recording finished spans."""

from .mock import MockSpan, MockSpanContext, MockTracer, next_mock_id

__all__ = ["MockSpan", "MockSpanContext", "MockTracer", "next_mock_id"]
