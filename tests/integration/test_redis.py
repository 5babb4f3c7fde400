"""Integration tests for the Redis resource.

Uses testcontainers to spawn a real Redis instance.
Run with: pytest tests/integration/test_redis.py -m integration -v
"""
from __future__ import annotations

import asyncio

import pytest
from testcontainers.redis import RedisContainer

from srvkit.adapters.redis import RedisResource
from srvkit.config import RedisSettings
from srvkit.kernel.errors import ConnectionError, ResourceNotConnectedError
from srvkit.observability.health import check_health


def _settings(container) -> RedisSettings:  # type: ignore[no-untyped-def]
    return RedisSettings(
        host=container.get_container_host_ip(),
        port=int(container.get_exposed_port(container.port)),
        timeout=2.0,
    )


@pytest.mark.integration
class TestRedisResourceIntegration:
    def test_connect_use_close(self) -> None:
        with RedisContainer() as container:

            async def run() -> None:
                resource = RedisResource(_settings(container))
                await resource.connect()
                await resource.client.set("k", "v")
                assert await resource.client.get("k") == b"v"
                assert (await check_health(resource)).healthy
                await resource.close()
                await resource.close()
                with pytest.raises(ResourceNotConnectedError):
                    await resource.ping()

            asyncio.run(run())

    def test_unreachable_server(self) -> None:
        settings = RedisSettings(host="127.0.0.1", port=1, timeout=0.5)
        with pytest.raises(ConnectionError):
            asyncio.run(RedisResource(settings).connect())
