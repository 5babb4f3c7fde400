"""Infrastructure errors — I/O failures against external resources."""

from __future__ import annotations

from typing import Any

from srvkit.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class ConnectionError(InfrastructureError):  # noqa: A001
    """Failed to connect to an external resource (DB, cache, …)."""

    default_code = "connection_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"could not connect to '{resource}'", **kwargs)
        self.resource = resource


class ResourceNotConnectedError(InfrastructureError):
    """The resource was used before a successful ``connect``."""

    default_code = "resource_not_connected"

    def __init__(self, resource: str, **kwargs: Any) -> None:
        super().__init__(f"resource '{resource}' not connected", **kwargs)
        self.resource = resource


class ResourceInitializationError(InfrastructureError):
    """One or more resources failed to connect at startup.

    ``failures`` maps resource name to the exception it raised, in the order
    the resources were declared.
    """

    default_code = "resource_initialization_failed"

    def __init__(self, failures: dict[str, BaseException], **kwargs: Any) -> None:
        summary = "; ".join(f"{name}: {exc}" for name, exc in failures.items())
        super().__init__(f"failed to initialize resources: {summary}", **kwargs)
        self.failures = failures

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["failures"] = {name: str(exc) for name, exc in self.failures.items()}
        return base


class StorageError(InfrastructureError):
    """A storage operation failed for a reason outside the repository taxonomy.

    ``operation`` names what was attempted; the driver error is kept as
    ``cause``.
    """

    default_code = "storage_error"

    def __init__(
        self,
        operation: str,
        entity: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(f"failed to {operation} {entity}", **kwargs)
        self.operation = operation
        self.entity = entity


__all__ = [
    "ConnectionError",
    "InfrastructureError",
    "ResourceInitializationError",
    "ResourceNotConnectedError",
    "StorageError",
]
