"""Application-layer errors and the HTTP boundary helpers.

``AppError`` is what a transport adapter raises or returns: it carries a
status-code hint, a user-facing message and a free-form context map.
:func:`status_code_for` and :func:`user_message` classify any exception for
a response without leaking storage messages to clients.
"""

from __future__ import annotations

from typing import Any

from srvkit.kernel.errors.base import BaseError, iter_causes
from srvkit.kernel.errors.repository import (
    AlreadyExistsError,
    InvalidIDError,
    InvalidInputError,
    NotFoundError,
)


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnauthorizedError(ApplicationError):
    """Missing or invalid credentials."""

    default_code = "unauthorized"


class ForbiddenError(ApplicationError):
    """Authenticated principal lacks required permission."""

    default_code = "forbidden"


class AppError(ApplicationError):
    """Contextual error surfaced at the outermost boundary."""

    default_code = "app_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
        operational: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.context: dict[str, Any] = context or {}
        self.operational = operational

    def with_context(self, key: str, value: Any) -> "AppError":
        self.context[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["status_code"] = self.status_code
        base["context"] = self.context
        return base


def wrap(exc: BaseException, message: str) -> AppError:
    """Wrap *exc* under a user-facing *message*."""
    return AppError(message, cause=exc)


def bad_request(message: str) -> AppError:
    return AppError(message, status_code=400, code="bad_request")


def not_found(message: str) -> AppError:
    return AppError(message, status_code=404, code="not_found")


def internal(message: str) -> AppError:
    return AppError(message, status_code=500, code="internal", operational=True)


# ORDER MATTERS: more-specific subtypes first
_STATUS_MAP: list[tuple[type[BaseException], int]] = [
    (NotFoundError, 404),
    (InvalidIDError, 400),
    (InvalidInputError, 400),
    (AlreadyExistsError, 409),
    (UnauthorizedError, 401),
    (ForbiddenError, 403),
]


def status_code_for(exc: BaseException) -> int:
    """Return the HTTP status an adapter should answer *exc* with."""
    for current in iter_causes(exc):
        if isinstance(current, AppError) and current.status_code:
            return current.status_code
        for exc_type, status in _STATUS_MAP:
            if isinstance(current, exc_type):
                return status
    return 500


def user_message(exc: BaseException) -> str:
    """Return a message that is safe to show to a client."""
    if isinstance(exc, AppError) and exc.message:
        return exc.message
    if status_code_for(exc) >= 500:
        return "internal server error"
    if isinstance(exc, BaseError):
        return exc.message
    return str(exc)


def context_map(exc: BaseException) -> dict[str, Any]:
    if isinstance(exc, AppError):
        return exc.context
    return {}


__all__ = [
    "AppError",
    "ApplicationError",
    "ForbiddenError",
    "UnauthorizedError",
    "bad_request",
    "context_map",
    "internal",
    "not_found",
    "status_code_for",
    "user_message",
    "wrap",
]
