"""Application bootstrap — explicit wiring of config, observability,
resources, the user repository and the user service.

Usage::

    async with Application(load_config()) as app:
        user = await app.users.create(User(name="Ann", email="ann@example.com"))

``start`` is fail-fast: if any resource cannot connect, whatever did connect
is closed again and :class:`ResourceInitializationError` propagates.
"""

from __future__ import annotations

from typing import Any

from opentelemetry.sdk.trace import TracerProvider

from srvkit.adapters.mongodb import MongoResource, MongoUserRepository
from srvkit.adapters.opentelemetry import OtelTracer, configure_tracing, shutdown_tracing
from srvkit.adapters.redis import RedisResource
from srvkit.application.users import UserService
from srvkit.config import Config, ConfigError
from srvkit.domain.users import UserRepository
from srvkit.kernel.time import Clock, SystemClock
from srvkit.observability.health import HealthReport, check_all
from srvkit.observability.logging import JsonLoggerFactory, get_logger
from srvkit.observability.tracing import NoopTracer, Tracer
from srvkit.resources import Resource, Resources, close_resources, init_resources

_log = get_logger(__name__)


class Application:
    """Process-wide container for the running service.

    *database*, *cache* and *user_repository* replace the defaults built from
    *config*; tests pass fakes here.  With ``configure_observability=False``
    the global structlog and OpenTelemetry state is left untouched and a
    no-op tracer is used.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        database: Resource | None = None,
        cache: Resource | None = None,
        user_repository: UserRepository | None = None,
        clock: Clock | None = None,
        configure_observability: bool = True,
    ) -> None:
        self.config = config or Config()
        self._database = database
        self._cache = cache
        self._user_repository = user_repository
        self._clock = clock or SystemClock()
        self._configure_observability = configure_observability
        self._provider: TracerProvider | None = None
        self._tracer: Tracer = NoopTracer()
        self._resources: Resources | None = None
        self._users: UserService | None = None

    @property
    def resources(self) -> Resources:
        if self._resources is None:
            raise RuntimeError("application not started")
        return self._resources

    @property
    def users(self) -> UserService:
        if self._users is None:
            raise RuntimeError("application not started")
        return self._users

    @property
    def tracer(self) -> Tracer:
        return self._tracer

    async def start(self) -> None:
        if self._configure_observability:
            JsonLoggerFactory.configure(self.config.app.log_level, self.config.app.env)
            self._provider = configure_tracing(self.config.otel, self.config.app.env)
            self._tracer = OtelTracer(self.config.otel.service_name, self._provider)

        _log.info("starting application", app=self.config.app.app_name, config=self.config.redacted())
        database = self._database or MongoResource(self.config.database, tracer=self._tracer)
        cache = self._cache or RedisResource(self.config.redis, tracer=self._tracer)
        resources = Resources(database=database, cache=cache)

        try:
            await init_resources(resources)
            repository = self._user_repository or await self._mongo_users(database)
        except Exception:
            await close_resources(resources, timeout=self.config.app.shutdown_timeout)
            shutdown_tracing(self._provider)
            self._provider = None
            raise

        self._resources = resources
        self._users = UserService(repository)
        _log.info("application started", app=self.config.app.app_name)

    async def _mongo_users(self, database: Resource) -> UserRepository:
        if not isinstance(database, MongoResource):
            raise ConfigError(
                f"no user repository for database resource {database.name!r}; pass user_repository"
            )
        repository = MongoUserRepository(database, tracer=self._tracer, clock=self._clock)
        await repository.ensure_indexes()
        return repository

    async def stop(self) -> None:
        """Close every resource and flush pending spans.  Never raises."""
        if self._resources is not None:
            _log.info("stopping application", app=self.config.app.app_name)
            await close_resources(self._resources, timeout=self.config.app.shutdown_timeout)
            self._resources = None
            self._users = None
        shutdown_tracing(self._provider)
        self._provider = None

    async def readiness(self) -> HealthReport:
        return await check_all(self.resources)

    async def __aenter__(self) -> "Application":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()


__all__ = ["Application"]
