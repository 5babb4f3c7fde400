"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from srvkit.adapters.opentelemetry.enricher import OtelLoggingEnricher

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_level(name: str | int) -> int:
    """Map ``"info"``/``"DEBUG"``/``20`` to a stdlib logging level."""
    if isinstance(name, int):
        return name
    return _LEVELS.get(name.strip().lower(), logging.INFO)


class JsonLoggerFactory:
    """Configure structlog on top of stdlib logging.

    Production renders one JSON object per line; development renders
    coloured key/value output.  Every event carries the logger name, level,
    ISO timestamp and, inside an active span, ``trace_id``/``span_id``.
    """

    @staticmethod
    def configure(level: int | str = logging.INFO, env: str = "production") -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="time"),
            structlog.processors.StackInfoRenderer(),
            OtelLoggingEnricher(),
        ]

        renderer: Any
        if env == "development":
            renderer = structlog.dev.ConsoleRenderer()
        else:
            renderer = structlog.processors.JSONRenderer()

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(parse_level(level))


__all__ = ["JsonLoggerFactory", "parse_level"]
