"""Testing fakes – in-memory UserRepository."""
from __future__ import annotations

import asyncio
import contextlib
import dataclasses
from typing import AsyncIterator

from srvkit.domain.users import (
    User,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserRepository,
    generate_id,
)
from srvkit.kernel.time import Clock, SystemClock


class _ReadWriteLock:
    """Many readers or one writer."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writing = False

    @contextlib.asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writing)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                self._cond.notify_all()

    @contextlib.asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writing and self._readers == 0)
            self._writing = True
        try:
            yield
        finally:
            async with self._cond:
                self._writing = False
                self._cond.notify_all()


class InMemoryUserRepository(UserRepository):
    """Dict-backed :class:`UserRepository` for tests and local runs.

    Users are copied on the way in and out, so callers never share state
    with the store.  Email uniqueness is enforced the way the unique index
    does it for MongoDB.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._users: dict[str, User] = {}
        self._lock = _ReadWriteLock()
        self._clock = clock or SystemClock()

    async def get_by_id(self, id: str) -> User | None:
        async with self._lock.read():
            user = self._users.get(id)
            return dataclasses.replace(user) if user is not None else None

    async def list(self) -> list[User]:
        async with self._lock.read():
            return [dataclasses.replace(u) for u in self._users.values()]

    async def create(self, user: User) -> None:
        async with self._lock.write():
            user_id = user.id or generate_id()
            if user_id in self._users:
                raise UserAlreadyExistsError(f"user with id '{user_id}' already exists")
            if self._email_taken(user.email):
                raise UserAlreadyExistsError(f"user with email '{user.email}' already exists")
            now = self._clock.now()
            user.id = user_id
            user.created_at = user.created_at or now
            user.updated_at = user.updated_at or now
            self._users[user.id] = dataclasses.replace(user)

    async def update(self, user: User) -> None:
        async with self._lock.write():
            stored = self._users.get(user.id)
            if stored is None:
                raise UserNotFoundError(user.id)
            if user.email and self._email_taken(user.email, exclude=user.id):
                raise UserAlreadyExistsError(f"user with email '{user.email}' already exists")
            if user.name:
                stored.name = user.name
            if user.email:
                stored.email = user.email
            stored.updated_at = self._clock.now()
            user.updated_at = stored.updated_at

    async def delete(self, id: str) -> None:
        async with self._lock.write():
            if self._users.pop(id, None) is None:
                raise UserNotFoundError(id)

    def _email_taken(self, email: str, exclude: str | None = None) -> bool:
        return any(u.email == email and u.id != exclude for u in self._users.values())

    def clear(self) -> None:
        self._users.clear()

    def __len__(self) -> int:
        return len(self._users)


__all__ = ["InMemoryUserRepository"]
