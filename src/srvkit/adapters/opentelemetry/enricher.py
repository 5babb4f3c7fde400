"""OpenTelemetry adapter – OtelLoggingEnricher."""
from __future__ import annotations

from typing import Any

from opentelemetry import trace


class OtelLoggingEnricher:
    """structlog processor: correlate log events with the active span.

    Adds ``trace_id``/``span_id`` (hex, as the OTLP backends display them)
    and ``trace_sampled``.  Outside a span the event is left untouched, and
    values already present on the event win.
    """

    def __call__(self, logger: Any, method: Any, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        ctx = trace.get_current_span().get_span_context()
        if not ctx.is_valid:
            return event_dict
        event_dict.setdefault("trace_id", trace.format_trace_id(ctx.trace_id))
        event_dict.setdefault("span_id", trace.format_span_id(ctx.span_id))
        event_dict.setdefault("trace_sampled", ctx.trace_flags.sampled)
        return event_dict


__all__ = ["OtelLoggingEnricher"]
