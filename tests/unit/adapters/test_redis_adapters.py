"""Unit tests for RedisResource — no running Redis required."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from srvkit.adapters.redis import RedisResource
from srvkit.config import RedisSettings
from srvkit.kernel.errors import ConnectionError, ResourceNotConnectedError


def _resource(**settings: Any) -> tuple[RedisResource, MagicMock, MagicMock]:
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    factory = MagicMock(return_value=client)
    resource = RedisResource(RedisSettings(**settings), logger=MagicMock(), client_factory=factory)
    return resource, factory, client


class TestRedisResource:
    def test_name(self) -> None:
        assert _resource()[0].name == "redis"

    def test_connect(self) -> None:
        async def run() -> None:
            resource, factory, client = _resource(host="cache", port=6380, db=1, timeout=2.0)
            await resource.connect()
            factory.assert_called_once_with(
                host="cache",
                port=6380,
                password=None,
                db=1,
                socket_timeout=2.0,
                socket_connect_timeout=2.0,
            )
            client.ping.assert_awaited_once()
            assert resource.client is client
        asyncio.run(run())

    def test_password_is_passed_when_set(self) -> None:
        async def run() -> None:
            resource, factory, _ = _resource(password="s3cret")
            await resource.connect()
            assert factory.call_args.kwargs["password"] == "s3cret"
        asyncio.run(run())

    def test_connect_failure_releases_client(self) -> None:
        async def run() -> None:
            resource, _, client = _resource()
            client.ping = AsyncMock(side_effect=OSError("connection refused"))
            with pytest.raises(ConnectionError) as exc_info:
                await resource.connect()
            assert exc_info.value.resource == "redis"
            client.aclose.assert_awaited_once()
            with pytest.raises(ResourceNotConnectedError):
                resource.client
        asyncio.run(run())

    def test_connect_wraps_client_construction_error(self) -> None:
        async def run() -> None:
            cause = ValueError("invalid connection options")
            resource = RedisResource(
                RedisSettings(), logger=MagicMock(), client_factory=MagicMock(side_effect=cause)
            )
            with pytest.raises(ConnectionError) as exc_info:
                await resource.connect()
            assert exc_info.value.__cause__ is cause
            with pytest.raises(ResourceNotConnectedError):
                resource.client
        asyncio.run(run())

    def test_ping_before_connect(self) -> None:
        with pytest.raises(ResourceNotConnectedError):
            asyncio.run(_resource()[0].ping())

    def test_ping_is_bounded_by_timeout(self) -> None:
        async def slow() -> None:
            await asyncio.sleep(5)

        async def run() -> None:
            resource, _, client = _resource(timeout=0.05)
            await resource.connect()
            client.ping = slow
            with pytest.raises(asyncio.TimeoutError):
                await resource.ping()
        asyncio.run(run())

    def test_close_is_idempotent(self) -> None:
        async def run() -> None:
            resource, _, client = _resource()
            await resource.close()
            await resource.connect()
            await resource.close()
            await resource.close()
            client.aclose.assert_awaited_once()
        asyncio.run(run())
