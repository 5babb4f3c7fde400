"""OpenTelemetry adapter – OtelTracer."""
from __future__ import annotations

import contextlib
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import SpanKind as OtelKind
from opentelemetry.trace import StatusCode

from srvkit.observability.tracing import Span, SpanKind, Tracer

_KIND_MAP = {
    SpanKind.INTERNAL: OtelKind.INTERNAL,
    SpanKind.SERVER: OtelKind.SERVER,
    SpanKind.CLIENT: OtelKind.CLIENT,
}


class _OtelSpan(Span):
    def __init__(self, span: Any) -> None:
        self._span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self._span.set_attribute(key, value)

    def set_status_ok(self) -> None:
        self._span.set_status(StatusCode.OK)

    def record_exception(self, exc: BaseException) -> None:
        self._span.record_exception(exc)
        self._span.set_status(StatusCode.ERROR, str(exc))


class OtelTracer(Tracer):
    """OpenTelemetry tracer adapter.

    Spans are created from the globally registered provider unless one is
    passed explicitly.
    """

    def __init__(self, instrumentation_name: str = "srvkit", tracer_provider: Any = None) -> None:
        self._tracer = trace.get_tracer(instrumentation_name, tracer_provider=tracer_provider)

    @contextlib.contextmanager
    def start_span(self, name: str, kind: SpanKind = SpanKind.INTERNAL, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
        with self._tracer.start_as_current_span(
            name,
            kind=_KIND_MAP.get(kind, OtelKind.INTERNAL),
            attributes=attributes,
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            yield _OtelSpan(span)


__all__ = ["OtelTracer"]
