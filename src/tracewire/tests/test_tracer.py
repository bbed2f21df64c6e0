"""Tests for span creation, references, start options and the span lifecycle."""

from __future__ import annotations

import threading

import pytest

from tracewire import (
    FinishOptions,
    LogData,
    MockSpan,
    MockSpanContext,
    MockTracer,
    Reference,
    ReferenceType,
    StartSpanOptions,
    StartTime,
    Tags,
    child_of,
    follows_from,
)
from tracewire.foundation.testing import next_mock_id


@pytest.fixture
def tracer() -> MockTracer:
    return MockTracer()


# ═════════════════════════════════════════════════════════════════════════════
# References
# ═════════════════════════════════════════════════════════════════════════════


def test_point_builds_reference_without_side_effects() -> None:
    ctx = MockSpanContext(1, 1)
    ref = ReferenceType.RPC_CLIENT.point(ctx)

    assert ref == Reference(ReferenceType.RPC_CLIENT, ctx)
    assert ref.referent is ctx
    assert ref.intra_trace


def test_shorthands() -> None:
    ctx = MockSpanContext(1, 1)
    assert child_of(ctx).type is ReferenceType.BLOCKED_PARENT
    assert follows_from(ctx).type is ReferenceType.FINISHED_BEFORE


def test_all_reference_types_are_intra_trace() -> None:
    assert all(t.intra_trace for t in ReferenceType)


def test_reference_order_is_preserved() -> None:
    a, b = MockSpanContext(1, 1), MockSpanContext(2, 2)

    ab = StartSpanOptions.build("op", child_of(a), follows_from(b))
    ba = StartSpanOptions.build("op", follows_from(b), child_of(a))

    assert [r.referent for r in ab.references] == [a, b]
    assert [r.referent for r in ba.references] == [b, a]


def test_duplicate_references_are_kept() -> None:
    a = MockSpanContext(1, 1)
    opts = StartSpanOptions.build("op", child_of(a), child_of(a), follows_from(a))
    assert len(opts.references) == 3
    assert [r.type for r in opts.references] == [
        ReferenceType.BLOCKED_PARENT, ReferenceType.BLOCKED_PARENT, ReferenceType.FINISHED_BEFORE]


# ═════════════════════════════════════════════════════════════════════════════
# Start Options
# ═════════════════════════════════════════════════════════════════════════════


def test_later_scalar_options_win() -> None:
    opts = StartSpanOptions.build("op", StartTime(10.0), Tags({"a": 1}), StartTime(20.0), Tags({"b": 2}))
    assert opts.start_time == 20.0
    assert opts.tags == {"b": 2}


def test_options_struct_is_itself_an_option() -> None:
    parent = MockSpanContext(5, 6)
    preset = StartSpanOptions(references=[child_of(parent)], start_time=42.0)

    opts = StartSpanOptions.build("op", preset, Tags({"k": "v"}))

    assert opts.operation_name == "op"
    assert opts.start_time == 42.0
    assert opts.tags == {"k": "v"}
    assert opts.first_intra_trace_reference().referent is parent


def test_zero_start_time_means_now(tracer: MockTracer) -> None:
    span = tracer.start_span("op", StartTime(0))
    assert span.start_time > 0


def test_explicit_start_time_is_used(tracer: MockTracer) -> None:
    assert tracer.start_span("op", StartTime(1234.5)).start_time == 1234.5


def test_tags_initialize_span(tracer: MockTracer) -> None:
    span = tracer.start_span("op", Tags({"component": "db"}).merge({"peer.port": 5432}))
    assert span.tags == {"component": "db", "peer.port": 5432}


def test_empty_operation_name_is_accepted(tracer: MockTracer) -> None:
    assert tracer.start_span("").operation_name == ""


# ═════════════════════════════════════════════════════════════════════════════
# Trace Identity
# ═════════════════════════════════════════════════════════════════════════════


def test_root_spans_get_distinct_traces(tracer: MockTracer) -> None:
    roots = [tracer.start_span("op") for _ in range(20)]
    trace_ids = {s.context().trace_id for s in roots}

    assert len(trace_ids) == 20
    assert all(s.context().trace_id == s.context().span_id for s in roots)
    assert all(s.parent_id == 0 for s in roots)


def test_child_inherits_trace_and_baggage(tracer: MockTracer) -> None:
    parent = tracer.start_span("parent")
    parent.set_baggage_item("user", "ada")

    child = tracer.start_span("child", child_of(parent.context()))

    assert child.context().trace_id == parent.context().trace_id
    assert child.context().span_id != parent.context().span_id
    assert child.parent_id == parent.context().span_id
    assert child.baggage_item("user") == "ada"


def test_child_baggage_does_not_leak_to_parent(tracer: MockTracer) -> None:
    parent = tracer.start_span("parent")
    child = tracer.start_span("child", child_of(parent.context()))

    child.set_baggage_item("scratch", "1")

    assert parent.baggage_item("scratch") is None


def test_first_intra_trace_reference_wins(tracer: MockTracer) -> None:
    a, b = tracer.start_span("a"), tracer.start_span("b")
    span = tracer.start_span("c", follows_from(b.context()), child_of(a.context()))
    assert span.context().trace_id == b.context().trace_id
    assert span.parent_id == b.context().span_id


def test_mock_ids_are_monotonic(tracer: MockTracer) -> None:
    first, second = tracer.start_span("a"), tracer.start_span("b")
    assert second.context().span_id > first.context().span_id


# ═════════════════════════════════════════════════════════════════════════════
# Span Lifecycle
# ═════════════════════════════════════════════════════════════════════════════


def test_finish_records_once(tracer: MockTracer) -> None:
    span = tracer.start_span("op")
    span.finish()
    first_finish = span.finish_time
    span.finish()

    assert tracer.finished_spans() == [span]
    assert span.is_finished
    assert span.finish_time == first_finish
    assert span.duration_ms is not None and span.duration_ms >= 0


def test_mutation_after_finish_is_ignored(tracer: MockTracer) -> None:
    span = tracer.start_span("op")
    span.set_tag("before", 1).log_event("started")
    span.finish()

    span.set_tag("after", 2)
    span.set_operation_name("renamed")
    span.log_event("late")

    assert span.tags == {"before": 1}
    assert span.operation_name == "op"
    assert [entry.event for entry in span.logs] == ["started"]


def test_context_survives_finish(tracer: MockTracer) -> None:
    span = tracer.start_span("op")
    span.finish()
    child = tracer.start_span("after", follows_from(span.context()))
    assert child.context().trace_id == span.context().trace_id


def test_finish_with_options(tracer: MockTracer) -> None:
    span = tracer.start_span("op", StartTime(100.0))
    span.log_event("incremental")

    span.finish_with_options(FinishOptions(
        finish_time=101.5,
        bulk_log_data=[LogData(event="a", timestamp=100.5), LogData(event="b", payload={"n": 1}, timestamp=101.0)],
    ))

    assert span.finish_time == 101.5
    assert span.duration_ms == pytest.approx(1500.0)
    assert [entry.event for entry in span.logs] == ["incremental", "a", "b"]
    assert span.logs[2].payload == {"n": 1}


def test_log_event_with_payload(tracer: MockTracer) -> None:
    span = tracer.start_span("op")
    span.log_event_with_payload("retry", {"attempt": 2})
    assert span.logs[0].payload == {"attempt": 2}


def test_context_manager_finishes(tracer: MockTracer) -> None:
    with tracer.start_span("op") as span:
        span.set_tag("k", "v")

    assert tracer.finished_spans() == [span]
    assert "error" not in span.tags


def test_context_manager_flags_errors(tracer: MockTracer) -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with tracer.start_span("op"):
            raise RuntimeError("boom")

    (span,) = tracer.finished_spans()
    assert span.tags["error"] is True
    assert span.logs[-1].payload == "RuntimeError: boom"


def test_finished_spans_in_finish_order(tracer: MockTracer) -> None:
    a, b = tracer.start_span("a"), tracer.start_span("b")
    b.finish()
    a.finish()

    assert [s.operation_name for s in tracer.finished_spans()] == ["b", "a"]

    tracer.reset()
    assert tracer.finished_spans() == []


def test_span_knows_its_tracer(tracer: MockTracer) -> None:
    assert tracer.start_span("op").tracer() is tracer


# ═════════════════════════════════════════════════════════════════════════════
# Concurrency
# ═════════════════════════════════════════════════════════════════════════════


def test_concurrent_start_and_finish_loses_nothing(tracer: MockTracer) -> None:
    threads_n, spans_per_thread = 8, 200
    barrier = threading.Barrier(threads_n)

    def work() -> None:
        barrier.wait()
        for i in range(spans_per_thread):
            tracer.start_span(f"op-{i}").finish()

    threads = [threading.Thread(target=work) for _ in range(threads_n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    finished = tracer.finished_spans()
    assert len(finished) == threads_n * spans_per_thread
    assert len({s.context().span_id for s in finished}) == len(finished)


def test_concurrent_tags_before_finish_are_kept(tracer: MockTracer) -> None:
    span = tracer.start_span("op")

    def tag(n: int) -> None:
        for i in range(100):
            span.set_tag(f"t{n}-{i}", i)

    threads = [threading.Thread(target=tag, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    span.finish()

    assert len(span.tags) == 400


def test_concurrent_baggage_access() -> None:
    ctx = MockSpanContext(1, 1)

    def write(n: int) -> None:
        for i in range(100):
            ctx.set_baggage_item(f"k{n}-{i}", str(i))
            ctx.baggage  # noqa: B018

    threads = [threading.Thread(target=write, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(ctx.baggage) == 400


def test_mock_span_type(tracer: MockTracer) -> None:
    assert isinstance(tracer.start_span("op"), MockSpan)


def test_next_mock_id_shares_counter_with_tracers(tracer: MockTracer) -> None:
    before = next_mock_id()
    span = tracer.start_span("op")
    assert span.context().span_id > before


def test_mock_identity_is_read_only() -> None:
    ctx = MockSpanContext(7, 9)

    with pytest.raises(AttributeError):
        ctx.trace_id = 1  # type: ignore[misc]
    with pytest.raises(AttributeError):
        ctx.span_id = 1  # type: ignore[misc]

    assert (ctx.trace_id, ctx.span_id) == (7, 9)
    assert ctx.identity() == {"traceid": "7", "spanid": "9"}
