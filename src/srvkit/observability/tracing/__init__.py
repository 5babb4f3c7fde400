"""Observability – distributed tracing ports."""
from srvkit.observability.tracing.ports import Span, SpanKind, Tracer
from srvkit.observability.tracing.noop import NoopTracer

__all__ = ["NoopTracer", "Span", "SpanKind", "Tracer"]
