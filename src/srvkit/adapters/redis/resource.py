"""Redis adapter – RedisResource."""
from __future__ import annotations

import asyncio
from typing import Any, Callable

import redis.asyncio as aioredis

from srvkit.config.app import RedisSettings
from srvkit.kernel.errors import ConnectionError, ResourceNotConnectedError
from srvkit.observability.logging import get_logger
from srvkit.observability.tracing import NoopTracer, SpanKind, Tracer
from srvkit.resources.port import Resource

_log = get_logger(__name__)


class RedisResource(Resource):
    """Owns the async Redis client used as the process cache."""

    def __init__(
        self,
        settings: RedisSettings,
        *,
        tracer: Tracer | None = None,
        logger: Any = None,
        client_factory: Callable[..., Any] = aioredis.Redis,
    ) -> None:
        self._settings = settings
        self._tracer = tracer or NoopTracer()
        self._log = logger or _log
        self._client_factory = client_factory
        self._client: Any = None

    @property
    def name(self) -> str:
        return "redis"

    @property
    def client(self) -> Any:
        if self._client is None:
            raise ResourceNotConnectedError(self.name)
        return self._client

    async def connect(self) -> None:
        attributes = {
            "db.system": "redis",
            "redis.host": self._settings.host,
            "redis.port": self._settings.port,
            "redis.db": self._settings.db,
        }
        with self._tracer.start_span("RedisResource.connect", SpanKind.CLIENT, attributes) as span:
            self._log.info(
                "connecting to redis",
                host=self._settings.host,
                port=self._settings.port,
                db=self._settings.db,
            )
            try:
                self._client = self._client_factory(
                    host=self._settings.host,
                    port=self._settings.port,
                    password=self._settings.password or None,
                    db=self._settings.db,
                    socket_timeout=self._settings.timeout,
                    socket_connect_timeout=self._settings.timeout,
                )
                await self.ping()
            except Exception as exc:
                span.record_exception(exc)
                self._log.error("failed to connect to redis", error=str(exc))
                client, self._client = self._client, None
                if client is not None:
                    await client.aclose()
                raise ConnectionError(self.name, cause=exc) from exc
            self._log.info("connected to redis")

    async def close(self) -> None:
        if self._client is None:
            return
        with self._tracer.start_span("RedisResource.close", SpanKind.CLIENT):
            self._log.info("closing redis connection")
            client, self._client = self._client, None
            await client.aclose()

    async def ping(self) -> None:
        if self._client is None:
            raise ResourceNotConnectedError(self.name)
        with self._tracer.start_span("RedisResource.ping", SpanKind.CLIENT) as span:
            try:
                await asyncio.wait_for(self._client.ping(), timeout=self._settings.timeout)
            except Exception as exc:
                span.record_exception(exc)
                raise


__all__ = ["RedisResource"]
