"""Unit tests for the in-memory user repository."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from srvkit.domain.users import User, UserAlreadyExistsError, UserNotFoundError, new_user
from srvkit.kernel.time import FrozenClock
from srvkit.testing.fakes import InMemoryUserRepository

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class TestInMemoryUserRepository:
    def test_create_generates_id_and_timestamps(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository(clock=FrozenClock(NOW))
            user = User(name="Ann", email="ann@example.com")
            await repo.create(user)
            assert len(user.id) == 32
            assert user.created_at == NOW
            assert user.updated_at == NOW
            assert await repo.get_by_id(user.id) == user
        asyncio.run(run())

    def test_lookup_after_insert_with_given_id(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            user = new_user("Ann", "ann@example.com")
            await repo.create(user)
            found = await repo.get_by_id(user.id)
            assert found is not None
            assert (found.name, found.email) == ("Ann", "ann@example.com")
        asyncio.run(run())

    def test_missing_is_none(self) -> None:
        assert asyncio.run(InMemoryUserRepository().get_by_id("nope")) is None

    def test_duplicate_id(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            await repo.create(User(id="u1", name="Ann", email="ann@example.com"))
            with pytest.raises(UserAlreadyExistsError):
                await repo.create(User(id="u1", name="Bob", email="bob@example.com"))
        asyncio.run(run())

    def test_duplicate_email(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            await repo.create(User(name="Ann", email="ann@example.com"))
            rejected = User(name="Ann B", email="ann@example.com")
            with pytest.raises(UserAlreadyExistsError):
                await repo.create(rejected)
            assert len(repo) == 1
            assert rejected.id == ""
            assert rejected.created_at is None
        asyncio.run(run())

    def test_returns_copies(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            user = User(name="Ann", email="ann@example.com")
            await repo.create(user)
            user.name = "mutated by caller"
            found = await repo.get_by_id(user.id)
            assert found is not None and found.name == "Ann"
            found.name = "mutated again"
            listed = await repo.list()
            assert listed[0].name == "Ann"
        asyncio.run(run())

    def test_update_is_partial_and_stamps(self) -> None:
        async def run() -> None:
            clock = FrozenClock(NOW)
            repo = InMemoryUserRepository(clock=clock)
            user = User(name="Ann", email="ann@example.com")
            await repo.create(user)
            clock.advance(minutes=5)
            patch = User(id=user.id, name="Ann2")
            await repo.update(patch)
            stored = await repo.get_by_id(user.id)
            assert stored is not None
            assert stored.name == "Ann2"
            assert stored.email == "ann@example.com"
            assert stored.created_at == NOW
            assert stored.updated_at == clock.now() > stored.created_at
            assert patch.updated_at == stored.updated_at
        asyncio.run(run())

    def test_update_to_taken_email(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            ann = User(name="Ann", email="ann@example.com")
            await repo.create(ann)
            await repo.create(User(name="Bob", email="bob@example.com"))
            with pytest.raises(UserAlreadyExistsError):
                await repo.update(User(id=ann.id, email="bob@example.com"))
            await repo.update(User(id=ann.id, email="ann@example.com"))
        asyncio.run(run())

    def test_update_missing(self) -> None:
        with pytest.raises(UserNotFoundError):
            asyncio.run(InMemoryUserRepository().update(User(id="nope", name="x")))

    def test_delete_is_terminal(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            user = User(name="Ann", email="ann@example.com")
            await repo.create(user)
            await repo.delete(user.id)
            assert await repo.get_by_id(user.id) is None
            with pytest.raises(UserNotFoundError):
                await repo.delete(user.id)
        asyncio.run(run())

    def test_concurrent_creates_are_all_retrievable(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            users = [User(name=f"user{i}", email=f"user{i}@example.com") for i in range(50)]
            await asyncio.gather(*(repo.create(u) for u in users))
            found = await asyncio.gather(*(repo.get_by_id(u.id) for u in users))
            assert all(f is not None for f in found)
            assert len(await repo.list()) == 50
        asyncio.run(run())

    def test_concurrent_reads_and_writes(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            seed = User(name="Ann", email="ann@example.com")
            await repo.create(seed)

            async def rename(i: int) -> None:
                await repo.update(User(id=seed.id, name=f"Ann{i}"))

            await asyncio.gather(
                *(rename(i) for i in range(20)),
                *(repo.list() for _ in range(20)),
            )
            stored = await repo.get_by_id(seed.id)
            assert stored is not None and stored.name.startswith("Ann")
        asyncio.run(run())

    def test_clear(self) -> None:
        async def run() -> None:
            repo = InMemoryUserRepository()
            await repo.create(User(name="Ann", email="ann@example.com"))
            repo.clear()
            assert await repo.list() == []
        asyncio.run(run())
