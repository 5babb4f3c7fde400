"""MongoDB adapter — MongoResource (motor client lifecycle)."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Sequence

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import IndexModel
from pymongo.errors import PyMongoError

from srvkit.config.app import DatabaseSettings
from srvkit.kernel.errors import ConnectionError, ResourceNotConnectedError, StorageError
from srvkit.observability.logging import get_logger
from srvkit.observability.tracing import NoopTracer, SpanKind, Tracer
from srvkit.resources.port import Resource

_log = get_logger(__name__)


class MongoResource(Resource):
    """Owns the motor client for one database.

    After :meth:`connect` the client is shared by every repository; motor is
    safe for concurrent use so no locking happens here.
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        *,
        tracer: Tracer | None = None,
        logger: Any = None,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
    ) -> None:
        self._settings = settings
        self._tracer = tracer or NoopTracer()
        self._log = logger or _log
        self._client_factory = client_factory
        self._client: Any = None
        self._db: Any = None

    @property
    def name(self) -> str:
        return "mongodb"

    @property
    def database(self) -> Any:
        if self._db is None:
            raise ResourceNotConnectedError(self.name)
        return self._db

    def collection(self, name: str) -> Any:
        return self.database[name]

    async def connect(self) -> None:
        attributes = {"db.system": "mongodb", "db.name": self._settings.name}
        with self._tracer.start_span("MongoResource.connect", SpanKind.CLIENT, attributes) as span:
            self._log.info(
                "connecting to database",
                database=self._settings.name,
                timeout_s=self._settings.timeout,
            )
            timeout_ms = int(self._settings.timeout * 1000)
            try:
                self._client = self._client_factory(
                    self._settings.uri,
                    serverSelectionTimeoutMS=timeout_ms,
                    connectTimeoutMS=timeout_ms,
                    tz_aware=True,
                )
                self._db = self._client[self._settings.name]
                await self.ping()
            except Exception as exc:
                span.record_exception(exc)
                self._log.error("failed to connect to database", error=str(exc))
                if self._client is not None:
                    self._client.close()
                self._client = self._db = None
                raise ConnectionError(self.name, cause=exc) from exc
            self._log.info("connected to database", database=self._settings.name)

    async def close(self) -> None:
        if self._client is None:
            return
        with self._tracer.start_span("MongoResource.close", SpanKind.CLIENT):
            self._log.info("closing database connection")
            client, self._client, self._db = self._client, None, None
            client.close()

    async def ping(self) -> None:
        if self._db is None:
            raise ResourceNotConnectedError(self.name)
        with self._tracer.start_span("MongoResource.ping", SpanKind.CLIENT) as span:
            try:
                await asyncio.wait_for(self._db.command("ping"), timeout=self._settings.timeout)
            except Exception as exc:
                span.record_exception(exc)
                raise

    async def ensure_indexes(self, collection: str, indexes: Sequence[IndexModel]) -> list[str]:
        """Create *indexes* on *collection*; existing identical indexes are kept."""
        try:
            return await self.collection(collection).create_indexes(list(indexes))
        except PyMongoError as exc:
            self._log.error("failed to create indexes", collection=collection, error=str(exc))
            raise StorageError("create indexes on", collection, cause=exc) from exc


__all__ = ["MongoResource"]
