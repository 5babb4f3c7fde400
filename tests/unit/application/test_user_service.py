"""Unit tests for UserService."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from srvkit.application.users import UserService
from srvkit.domain.users import InvalidUserError, User, UserAlreadyExistsError, UserNotFoundError
from srvkit.kernel.errors import InvalidInputError, StorageError
from srvkit.kernel.time import FrozenClock
from srvkit.testing.fakes import FakeClock, InMemoryUserRepository


def _service(clock: FrozenClock | None = None) -> tuple[UserService, InMemoryUserRepository, MagicMock]:
    repo = InMemoryUserRepository(clock=clock or FakeClock())
    logger = MagicMock()
    return UserService(repo, logger=logger), repo, logger


class TestCreate:
    def test_creates_and_normalises_email(self) -> None:
        async def run() -> None:
            svc, repo, logger = _service()
            user = await svc.create(User(name="Ann", email=" Ann@Example.com"))
            assert user.id
            assert user.email == "ann@example.com"
            assert await repo.get_by_id(user.id) == user
            logger.info.assert_called_once()
            assert logger.info.call_args.kwargs["user_id"] == user.id
        asyncio.run(run())

    @pytest.mark.parametrize(("name", "email"), [("", "ann@example.com"), ("Ann", ""), ("", "")])
    def test_name_and_email_required(self, name: str, email: str) -> None:
        svc, repo, _ = _service()
        with pytest.raises(InvalidUserError):
            asyncio.run(svc.create(User(name=name, email=email)))
        assert len(repo) == 0

    def test_malformed_email(self) -> None:
        svc, _, _ = _service()
        with pytest.raises(InvalidUserError) as exc_info:
            asyncio.run(svc.create(User(name="Ann", email="not-an-email")))
        assert isinstance(exc_info.value, InvalidInputError)

    def test_duplicate_email_is_logged_and_raised(self) -> None:
        async def run() -> None:
            svc, _, logger = _service()
            await svc.create(User(name="Ann", email="ann@example.com"))
            with pytest.raises(UserAlreadyExistsError):
                await svc.create(User(name="Other Ann", email="ANN@example.com"))
            logger.error.assert_called_once()
        asyncio.run(run())


class TestGetAndList:
    def test_empty_id(self) -> None:
        svc, _, _ = _service()
        with pytest.raises(InvalidUserError):
            asyncio.run(svc.get_by_id(""))

    def test_missing(self) -> None:
        svc, _, _ = _service()
        with pytest.raises(UserNotFoundError):
            asyncio.run(svc.get_by_id("nope"))

    def test_list(self) -> None:
        async def run() -> None:
            svc, _, _ = _service()
            await svc.create(User(name="Ann", email="ann@example.com"))
            await svc.create(User(name="Bob", email="bob@example.com"))
            assert sorted(u.name for u in await svc.list()) == ["Ann", "Bob"]
        asyncio.run(run())

    def test_storage_failure_is_logged_and_propagated(self) -> None:
        async def run() -> None:
            repo = MagicMock()
            repo.list = AsyncMock(side_effect=StorageError("find", "user"))
            logger = MagicMock()
            with pytest.raises(StorageError):
                await UserService(repo, logger=logger).list()
            logger.error.assert_called_once()
        asyncio.run(run())


class TestUpdate:
    def test_id_required(self) -> None:
        svc, _, _ = _service()
        with pytest.raises(InvalidUserError):
            asyncio.run(svc.update(User(name="x")))

    def test_nothing_to_update(self) -> None:
        svc, _, _ = _service()
        with pytest.raises(InvalidUserError):
            asyncio.run(svc.update(User(id="u1")))

    def test_missing_user_is_checked_first(self) -> None:
        async def run() -> None:
            repo = MagicMock()
            repo.get_by_id = AsyncMock(return_value=None)
            repo.update = AsyncMock()
            with pytest.raises(UserNotFoundError):
                await UserService(repo, logger=MagicMock()).update(User(id="u1", name="x"))
            repo.update.assert_not_awaited()
        asyncio.run(run())

    def test_concurrent_delete_still_reports_not_found(self) -> None:
        async def run() -> None:
            repo = MagicMock()
            repo.get_by_id = AsyncMock(return_value=User(id="u1", name="Ann"))
            repo.update = AsyncMock(side_effect=UserNotFoundError("u1"))
            with pytest.raises(UserNotFoundError):
                await UserService(repo, logger=MagicMock()).update(User(id="u1", name="x"))
        asyncio.run(run())

    def test_email_is_validated(self) -> None:
        async def run() -> None:
            svc, _, _ = _service()
            user = await svc.create(User(name="Ann", email="ann@example.com"))
            with pytest.raises(InvalidUserError):
                await svc.update(User(id=user.id, email="broken"))
        asyncio.run(run())


class TestDelete:
    def test_id_required(self) -> None:
        svc, _, _ = _service()
        with pytest.raises(InvalidUserError):
            asyncio.run(svc.delete(""))

    def test_delete_is_terminal(self) -> None:
        async def run() -> None:
            svc, _, _ = _service()
            user = await svc.create(User(name="Ann", email="ann@example.com"))
            await svc.delete(user.id)
            with pytest.raises(UserNotFoundError):
                await svc.get_by_id(user.id)
            with pytest.raises(UserNotFoundError):
                await svc.delete(user.id)
        asyncio.run(run())


class TestEndToEnd:
    def test_ann_lifecycle(self) -> None:
        async def run() -> None:
            clock = FakeClock()
            svc, _, _ = _service(clock)
            created = await svc.create(User(name="Ann", email="ann@example.com"))
            fetched = await svc.get_by_id(created.id)
            assert (fetched.name, fetched.email) == ("Ann", "ann@example.com")

            clock.advance(seconds=30)
            await svc.update(User(id=created.id, name="Ann2"))
            updated = await svc.get_by_id(created.id)
            assert updated.name == "Ann2"
            assert updated.email == "ann@example.com"
            assert updated.created_at == created.created_at
            assert updated.updated_at > created.updated_at

            await svc.delete(created.id)
            with pytest.raises(UserNotFoundError):
                await svc.get_by_id(created.id)
        asyncio.run(run())
