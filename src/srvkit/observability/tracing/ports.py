"""Tracing ports.

Adapters and repositories only talk to :class:`Tracer`/:class:`Span`; the
OpenTelemetry binding lives in ``srvkit.adapters.opentelemetry`` and
:class:`~srvkit.observability.tracing.NoopTracer` is used when nothing is
injected.  Spans never record exceptions on their own: callers decide what
counts as a failure and call :meth:`Span.record_exception`.
"""
from __future__ import annotations

import abc
import contextlib
from enum import Enum
from typing import Any, AsyncIterator, Iterator, Mapping


class SpanKind(str, Enum):
    INTERNAL = "INTERNAL"
    SERVER = "SERVER"
    CLIENT = "CLIENT"


class Span(abc.ABC):
    @abc.abstractmethod
    def set_attribute(self, key: str, value: Any) -> None: ...

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        for key, value in attributes.items():
            self.set_attribute(key, value)

    @abc.abstractmethod
    def set_status_ok(self) -> None: ...

    @abc.abstractmethod
    def record_exception(self, exc: BaseException) -> None:
        """Attach *exc* to the span and mark the span as failed."""


class Tracer(abc.ABC):
    @abc.abstractmethod
    @contextlib.contextmanager
    def start_span(self, name: str, kind: SpanKind = SpanKind.INTERNAL, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
        """Open a child of the current span for the duration of the block."""

    @contextlib.asynccontextmanager
    async def start_async_span(self, name: str, kind: SpanKind = SpanKind.INTERNAL, attributes: dict[str, Any] | None = None) -> AsyncIterator[Span]:
        with self.start_span(name, kind, attributes) as span:
            yield span


__all__ = ["Span", "SpanKind", "Tracer"]
