"""Kernel time – Clock protocol + implementations.

Timestamps written to storage are truncated to milliseconds because BSON
dates carry no finer precision; comparing a value read back from MongoDB with
the one that was written only works if both are truncated the same way.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


def _to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class Clock(Protocol):
    """Port: abstract clock for deterministic testing."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return _to_millis(datetime.now(UTC))


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = _to_millis(fixed)

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed = _to_millis(self._fixed + timedelta(**kwargs))


def utc_now() -> datetime:
    """Shorthand for ``SystemClock().now()``."""
    return SystemClock().now()


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now"]
