"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── RepositoryError         (repository.py)
    │   ├── NotFoundError
    │   ├── AlreadyExistsError
    │   ├── InvalidIDError
    │   └── InvalidInputError
    ├── ApplicationError        (application.py)
    │   ├── UnauthorizedError
    │   ├── ForbiddenError
    │   └── AppError
    └── InfrastructureError     (infrastructure.py)
        ├── ConnectionError
        ├── ResourceNotConnectedError
        ├── ResourceInitializationError
        └── StorageError
"""

from srvkit.kernel.errors.application import (
    AppError,
    ApplicationError,
    ForbiddenError,
    UnauthorizedError,
    context_map,
    status_code_for,
    user_message,
)
from srvkit.kernel.errors.base import BaseError, iter_causes
from srvkit.kernel.errors.infrastructure import (
    ConnectionError,
    InfrastructureError,
    ResourceInitializationError,
    ResourceNotConnectedError,
    StorageError,
)
from srvkit.kernel.errors.repository import (
    AlreadyExistsError,
    InvalidIDError,
    InvalidInputError,
    NotFoundError,
    RepositoryError,
)

__all__ = [
    "AlreadyExistsError",
    "AppError",
    "ApplicationError",
    "BaseError",
    "ConnectionError",
    "ForbiddenError",
    "InfrastructureError",
    "InvalidIDError",
    "InvalidInputError",
    "NotFoundError",
    "RepositoryError",
    "ResourceInitializationError",
    "ResourceNotConnectedError",
    "StorageError",
    "UnauthorizedError",
    "context_map",
    "iter_causes",
    "status_code_for",
    "user_message",
]
