"""Observability – logger lookup and context binding."""
from __future__ import annotations

import contextlib
from typing import Any, Iterator

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger named *name* with *initial_values* bound.

    Safe to call at import time: the logger is resolved lazily, after
    :meth:`JsonLoggerFactory.configure` has run.
    """
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger


@contextlib.contextmanager
def bind_context(**values: Any) -> Iterator[None]:
    """Add *values* to every event logged by this task inside the block."""
    with structlog.contextvars.bound_contextvars(**values):
        yield


__all__ = ["bind_context", "get_logger"]
