r"""Unit tests for trace context propagation."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from aretry.propagation import NoOpPropagator, default_propagator, inject_trace_context

TEST_URL = "https://api.example.com/data"


def create_span_context() -> SpanContext:
    return SpanContext(
        trace_id=0x0AF7651916CD43DD8448EB211C80319C,
        span_id=0xB7AD6B7169203331,
        is_remote=False,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )


def test_default_propagator_is_trace_context() -> None:
    assert isinstance(default_propagator(), TraceContextTextMapPropagator)


def test_default_propagator_returns_new_instance() -> None:
    assert default_propagator() is not default_propagator()


def test_inject_trace_context_traceparent() -> None:
    request = httpx.Request("GET", TEST_URL)
    context = trace.set_span_in_context(NonRecordingSpan(create_span_context()))

    inject_trace_context(request, TraceContextTextMapPropagator(), context=context)

    assert request.headers["traceparent"] == (
        "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-01"
    )


def test_inject_trace_context_without_span() -> None:
    """Test that nothing is injected when there is no active span."""
    request = httpx.Request("GET", TEST_URL)

    inject_trace_context(request, TraceContextTextMapPropagator())

    assert "traceparent" not in request.headers


def test_inject_trace_context_uses_given_propagator() -> None:
    propagator = Mock()
    request = httpx.Request("GET", TEST_URL)

    inject_trace_context(request, propagator, context=None)

    propagator.inject.assert_called_once_with(request.headers, context=None)


def test_noop_propagator() -> None:
    request = httpx.Request("GET", TEST_URL)
    context = trace.set_span_in_context(NonRecordingSpan(create_span_context()))
    propagator = NoOpPropagator()

    inject_trace_context(request, propagator, context=context)

    assert "traceparent" not in request.headers
    assert propagator.fields == set()
    assert propagator.extract({}, context=context) is context
