"""Observability – resource health checks."""
from srvkit.observability.health.check import HealthStatus, check_health
from srvkit.observability.health.registry import HealthReport, check_all

__all__ = ["HealthReport", "HealthStatus", "check_all", "check_health"]
