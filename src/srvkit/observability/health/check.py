from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from srvkit.kernel.time import utc_now
from srvkit.observability.logging import get_logger
from srvkit.resources.port import Resource

__all__ = ["HealthStatus", "STATUS_ERROR", "STATUS_OK", "check_health"]

STATUS_OK = "ok"
STATUS_ERROR = "error"

_log = get_logger(__name__)


@dataclass
class HealthStatus:
    name: str
    status: str
    message: str | None = None
    time: datetime = field(default_factory=utc_now)
    latency_ms: float = 0.0

    @property
    def healthy(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "status": self.status,
            "time": self.time.isoformat(),
            "latency_ms": round(self.latency_ms, 2),
        }
        if self.message:
            payload["message"] = self.message
        return payload


async def check_health(resource: Resource, *, logger: Any = None) -> HealthStatus:
    """Time a ``ping`` against *resource* and report the outcome."""
    log = logger or _log
    start = time.monotonic()
    try:
        await resource.ping()
    except Exception as exc:  # noqa: BLE001
        latency_ms = (time.monotonic() - start) * 1000
        reason = str(exc) or type(exc).__name__
        log.error(
            "resource health check failed",
            resource=resource.name,
            error=reason,
            duration_ms=round(latency_ms, 2),
        )
        return HealthStatus(
            name=resource.name,
            status=STATUS_ERROR,
            message=reason,
            latency_ms=latency_ms,
        )
    latency_ms = (time.monotonic() - start) * 1000
    log.debug(
        "resource health check passed",
        resource=resource.name,
        duration_ms=round(latency_ms, 2),
    )
    return HealthStatus(name=resource.name, status=STATUS_OK, latency_ms=latency_ms)
