from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Iterable

from srvkit.observability.health.check import HealthStatus, check_health
from srvkit.resources.port import Resource

__all__ = ["HealthReport", "check_all"]


@dataclass
class HealthReport:
    results: dict[str, HealthStatus] = field(default_factory=dict)

    @property
    def healthy(self) -> bool:
        return all(s.healthy for s in self.results.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "ok" if self.healthy else "error",
            "checks": {name: s.to_dict() for name, s in self.results.items()},
        }


async def check_all(resources: Iterable[Resource]) -> HealthReport:
    """Ping every resource concurrently; used for readiness reporting."""
    resources = list(resources)
    statuses = await asyncio.gather(*(check_health(r) for r in resources))
    return HealthReport(results={s.name: s for s in statuses})
