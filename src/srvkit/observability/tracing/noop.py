"""NoopTracer – the default when no tracer is injected."""
from __future__ import annotations

import contextlib
from typing import Any, Iterator

from srvkit.observability.tracing.ports import Span, SpanKind, Tracer


class _DiscardingSpan(Span):
    __slots__ = ()

    def set_attribute(self, key: str, value: Any) -> None:
        return None

    def set_status_ok(self) -> None:
        return None

    def record_exception(self, exc: BaseException) -> None:
        return None


_SPAN = _DiscardingSpan()


class NoopTracer(Tracer):
    """Creates no spans; every ``start_span`` yields the same inert span."""

    @contextlib.contextmanager
    def start_span(self, name: str, kind: SpanKind = SpanKind.INTERNAL, attributes: dict[str, Any] | None = None) -> Iterator[Span]:  # noqa: ARG002
        yield _SPAN


__all__ = ["NoopTracer"]
