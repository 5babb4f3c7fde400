"""Kernel – framework-agnostic building blocks (errors, time)."""

from srvkit.kernel.errors import (
    AlreadyExistsError,
    BaseError,
    InvalidIDError,
    InvalidInputError,
    NotFoundError,
    RepositoryError,
)

__all__ = [
    "AlreadyExistsError",
    "BaseError",
    "InvalidIDError",
    "InvalidInputError",
    "NotFoundError",
    "RepositoryError",
]
