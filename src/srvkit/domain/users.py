"""User entity, its repository port and entity-specific errors.

The errors subclass the repository taxonomy, so code that only knows about
``NotFoundError``/``AlreadyExistsError``/``InvalidInputError`` still
classifies them correctly.
"""

from __future__ import annotations

import abc
import dataclasses
import uuid
from datetime import datetime
from typing import Any

from srvkit.kernel.errors import AlreadyExistsError, InvalidInputError, NotFoundError
from srvkit.kernel.time import utc_now


class UserNotFoundError(NotFoundError):
    default_code = "user_not_found"

    def __init__(self, identifier: Any = None, **kwargs: Any) -> None:
        super().__init__("user", identifier, **kwargs)


class UserAlreadyExistsError(AlreadyExistsError):
    default_code = "user_already_exists"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        super().__init__("user", message, **kwargs)


class InvalidUserError(InvalidInputError):
    default_code = "invalid_user"

    def __init__(self, message: str = "invalid user data", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


@dataclasses.dataclass
class User:
    id: str = ""
    name: str = ""
    email: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


def generate_id() -> str:
    return uuid.uuid4().hex


def new_user(name: str, email: str) -> User:
    now = utc_now()
    return User(id=generate_id(), name=name, email=email, created_at=now, updated_at=now)


class UserRepository(abc.ABC):
    """Port: user persistence.

    ``update`` is partial: an empty ``name`` or ``email`` on the passed user
    leaves the stored value unchanged.
    """

    @abc.abstractmethod
    async def get_by_id(self, id: str) -> User | None:
        """Return the user, or ``None`` when there is none with that id."""

    @abc.abstractmethod
    async def list(self) -> list[User]: ...

    @abc.abstractmethod
    async def create(self, user: User) -> None:
        """Persist *user*, filling in its id and timestamps."""

    @abc.abstractmethod
    async def update(self, user: User) -> None: ...

    @abc.abstractmethod
    async def delete(self, id: str) -> None: ...


__all__ = [
    "InvalidUserError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserRepository",
    "generate_id",
    "new_user",
]
