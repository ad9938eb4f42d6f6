r"""Trace context propagation for outbound requests.

The propagator is an explicit collaborator of each client instead of a
process-wide registry, so tests can substitute a no-op or deterministic
propagator per client. Any object implementing OpenTelemetry's
``TextMapPropagator.inject`` can be used.

Example:
    ```pycon
    >>> import httpx
    >>> from aretry.propagation import NoOpPropagator, inject_trace_context
    >>> request = httpx.Request("GET", "https://api.example.com/data")
    >>> inject_trace_context(request, NoOpPropagator())
    >>> "traceparent" in request.headers
    False

    ```
"""

from __future__ import annotations

__all__ = ["NoOpPropagator", "default_propagator", "inject_trace_context"]

from typing import TYPE_CHECKING, Any

from opentelemetry.context import get_current
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

if TYPE_CHECKING:
    import httpx
    from opentelemetry.context import Context
    from opentelemetry.propagators.textmap import CarrierT, Getter, Setter


class NoOpPropagator(TextMapPropagator):
    r"""Propagator that never reads nor writes any header."""

    def extract(
        self,
        carrier: CarrierT,
        context: Context | None = None,
        getter: Getter | None = None,
    ) -> Context:
        return context if context is not None else get_current()

    def inject(
        self,
        carrier: CarrierT,
        context: Context | None = None,
        setter: Setter | None = None,
    ) -> None:
        return None

    @property
    def fields(self) -> set[str]:
        return set()


def default_propagator() -> TextMapPropagator:
    r"""Create the propagator used when a client is given none.

    Returns:
        A new W3C Trace Context propagator (``traceparent`` and
        ``tracestate`` headers).
    """
    return TraceContextTextMapPropagator()


def inject_trace_context(
    request: httpx.Request,
    propagator: TextMapPropagator | Any,
    context: Context | None = None,
) -> None:
    r"""Inject the trace context into the headers of a request.

    Args:
        request: The request to annotate in place.
        propagator: The propagator writing the headers.
        context: The context holding the span to propagate. Defaults to
            the current context.
    """
    propagator.inject(request.headers, context=context)
