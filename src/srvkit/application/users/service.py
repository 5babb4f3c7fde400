"""UserService — business rules for users on top of a :class:`UserRepository`.

``update`` and ``delete`` look the user up first so callers get a
``UserNotFoundError`` before anything is written.  That check and the write
are two separate calls: a user deleted in between is still reported as
``UserNotFoundError``, because the repository maps its own not-found result
to the same error.
"""

from __future__ import annotations

from typing import Any

from srvkit.domain.users import InvalidUserError, User, UserNotFoundError, UserRepository
from srvkit.kernel.errors import InvalidInputError
from srvkit.kernel.types import Email
from srvkit.observability.logging import get_logger

_log = get_logger(__name__)


def _normalise_email(raw: str) -> str:
    try:
        return str(Email(raw))
    except InvalidInputError as exc:
        raise InvalidUserError(exc.message, cause=exc) from exc


class UserService:
    def __init__(self, repository: UserRepository, *, logger: Any = None) -> None:
        self._repo = repository
        self._log = logger or _log

    async def get_by_id(self, id: str) -> User:
        self._log.debug("getting user by id", user_id=id)
        if not id:
            raise InvalidUserError("user id is required")

        try:
            user = await self._repo.get_by_id(id)
        except Exception as exc:
            self._log.error("failed to get user", user_id=id, error=str(exc))
            raise
        if user is None:
            raise UserNotFoundError(id)
        return user

    async def list(self) -> list[User]:
        self._log.debug("listing users")
        try:
            return await self._repo.list()
        except Exception as exc:
            self._log.error("failed to list users", error=str(exc))
            raise

    async def create(self, user: User) -> User:
        self._log.debug("creating user", user_name=user.name)
        if not user.name or not user.email:
            raise InvalidUserError("name and email are required")
        user.email = _normalise_email(user.email)

        try:
            await self._repo.create(user)
        except Exception as exc:
            self._log.error("failed to create user", error=str(exc))
            raise

        self._log.info("user created", user_id=user.id, user_name=user.name)
        return user

    async def update(self, user: User) -> User:
        """Change the non-empty fields of *user*; the rest stay as stored."""
        self._log.debug("updating user", user_id=user.id)
        if not user.id:
            raise InvalidUserError("user id is required")
        if not user.name and not user.email:
            raise InvalidUserError("nothing to update")
        if user.email:
            user.email = _normalise_email(user.email)

        await self._require(user.id, "update")
        try:
            await self._repo.update(user)
        except Exception as exc:
            self._log.error("failed to update user", user_id=user.id, error=str(exc))
            raise

        self._log.info("user updated", user_id=user.id)
        return user

    async def delete(self, id: str) -> None:
        self._log.debug("deleting user", user_id=id)
        if not id:
            raise InvalidUserError("user id is required")

        await self._require(id, "deletion")
        try:
            await self._repo.delete(id)
        except Exception as exc:
            self._log.error("failed to delete user", user_id=id, error=str(exc))
            raise

        self._log.info("user deleted", user_id=id)

    async def _require(self, id: str, purpose: str) -> None:
        try:
            existing = await self._repo.get_by_id(id)
        except Exception as exc:
            self._log.error(f"failed to get user for {purpose}", user_id=id, error=str(exc))
            raise
        if existing is None:
            raise UserNotFoundError(id)


__all__ = ["UserService"]
