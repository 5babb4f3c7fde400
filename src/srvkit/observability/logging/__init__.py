"""Observability – structured logging helpers."""
from srvkit.observability.logging.factory import JsonLoggerFactory
from srvkit.observability.logging.processors import bind_context, get_logger

__all__ = ["JsonLoggerFactory", "bind_context", "get_logger"]
