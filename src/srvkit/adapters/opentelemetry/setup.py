"""OpenTelemetry adapter – tracer provider bootstrap.

Called once at process entry; the returned provider is handed back to
:func:`shutdown_tracing` on exit so buffered spans are flushed.
"""
from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from srvkit.config.app import OtelSettings
from srvkit.observability.logging.processors import get_logger

_log = get_logger(__name__)


def configure_tracing(settings: OtelSettings, env: str = "production") -> TracerProvider:
    """Build and register the global :class:`TracerProvider`.

    When tracing is disabled the provider is still registered, without an
    exporter, so spans are created but never leave the process.
    """
    resource = Resource.create(
        {
            SERVICE_NAME: settings.service_name,
            "deployment.environment": env,
        }
    )
    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.trace_sampler_arg)),
    )

    if settings.enabled:
        _log.info(
            "initializing opentelemetry tracer",
            service=settings.service_name,
            endpoint=settings.exporter_otlp_endpoint,
            insecure=settings.exporter_otlp_insecure,
        )
        exporter = OTLPSpanExporter(
            endpoint=settings.exporter_otlp_endpoint,
            insecure=settings.exporter_otlp_insecure,
        )
        provider.add_span_processor(BatchSpanProcessor(exporter))
    else:
        _log.info("opentelemetry tracing is disabled")

    trace.set_tracer_provider(provider)
    return provider


def shutdown_tracing(provider: TracerProvider | None) -> None:
    if provider is None:
        return
    try:
        provider.shutdown()
    except Exception as exc:  # noqa: BLE001
        _log.error("error shutting down tracer provider", error=str(exc))


__all__ = ["configure_tracing", "shutdown_tracing"]
