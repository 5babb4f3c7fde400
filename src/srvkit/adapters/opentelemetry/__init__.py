"""OpenTelemetry adapter – tracer, logging enricher, provider setup."""
from srvkit.adapters.opentelemetry.enricher import OtelLoggingEnricher
from srvkit.adapters.opentelemetry.setup import configure_tracing, shutdown_tracing
from srvkit.adapters.opentelemetry.tracer import OtelTracer

__all__ = ["OtelLoggingEnricher", "OtelTracer", "configure_tracing", "shutdown_tracing"]
