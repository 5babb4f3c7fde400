"""Repository errors — the closed taxonomy shared by every document type.

Higher layers match only against these classes, never against driver
exceptions.  Entity-specific names (``UserNotFoundError`` …) subclass them
rather than adding new conditions.
"""

from __future__ import annotations

from typing import Any

from srvkit.kernel.errors.base import BaseError


class RepositoryError(BaseError):
    """Base for the four repository conditions."""

    default_code = "repository_error"


class NotFoundError(RepositoryError):
    """No document matched the identifier or filter."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str = "document",
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class AlreadyExistsError(RepositoryError):
    """A storage-level uniqueness constraint was violated."""

    default_code = "already_exists"

    def __init__(self, resource: str = "document", message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"{resource} already exists", **kwargs)
        self.resource = resource


class InvalidIDError(RepositoryError):
    """The identifier cannot be used to address a document."""

    default_code = "invalid_id"

    def __init__(self, identifier: Any, **kwargs: Any) -> None:
        super().__init__(f"invalid document ID {identifier!r}", **kwargs)
        self.identifier = identifier


class InvalidInputError(RepositoryError):
    """The payload handed to the repository is unusable."""

    default_code = "invalid_input"

    def __init__(self, message: str = "invalid input", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "AlreadyExistsError",
    "InvalidIDError",
    "InvalidInputError",
    "NotFoundError",
    "RepositoryError",
]
