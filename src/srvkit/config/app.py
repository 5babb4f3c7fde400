"""Process configuration groups and :func:`load_config`.

=================================  ===================================  =============================
Variable                           Field                                Default
=================================  ===================================  =============================
``APP_NAME``                       ``AppSettings.app_name``             ``srvkit``
``ENV``                            ``AppSettings.env``                  ``development``
``LOG_LEVEL``                      ``AppSettings.log_level``            ``info``
``SHUTDOWN_TIMEOUT``               ``AppSettings.shutdown_timeout``     ``5s``
``DB_URI``                         ``DatabaseSettings.uri``             ``mongodb://localhost:27017``
``DB_NAME``                        ``DatabaseSettings.name``            ``app``
``DB_TIMEOUT``                     ``DatabaseSettings.timeout``         ``5s``
``REDIS_HOST`` / ``REDIS_PORT``    ``RedisSettings.host`` / ``.port``   ``localhost`` / ``6379``
``REDIS_PASSWORD`` / ``REDIS_DB``  ``RedisSettings.password``/``.db``    ``""`` / ``0``
``REDIS_TIMEOUT``                  ``RedisSettings.timeout``            ``5s``
``OTEL_ENABLED``                   ``OtelSettings.enabled``             ``true``
``OTEL_SERVICE_NAME``              ``OtelSettings.service_name``        ``srvkit``
``OTEL_EXPORTER_OTLP_ENDPOINT``    ``OtelSettings.exporter_otlp_*``     ``localhost:4317``
``OTEL_EXPORTER_OTLP_INSECURE``    ``OtelSettings.exporter_otlp_*``     ``true``
``OTEL_TRACE_SAMPLER_ARG``         ``OtelSettings.trace_sampler_arg``   ``1.0``
=================================  ===================================  =============================
"""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Mapping

from srvkit.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from srvkit.config.validation import rules

ENVIRONMENTS = ("development", "test", "production")
LOG_LEVELS = ("debug", "info", "warning", "warn", "error", "critical")


@dataclasses.dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = ""

    app_name: str = "srvkit"
    env: str = "development"
    log_level: str = "info"
    shutdown_timeout: float = 5.0

    def _validate(self) -> None:
        rules.not_blank("APP_NAME", self.app_name)
        rules.one_of("ENV", self.env, ENVIRONMENTS)
        rules.one_of("LOG_LEVEL", self.log_level.lower(), LOG_LEVELS)
        rules.positive("SHUTDOWN_TIMEOUT", self.shutdown_timeout)


@dataclasses.dataclass
class DatabaseSettings(Settings):
    _prefix: ClassVar[str] = "DB"

    uri: str = dataclasses.field(default="mongodb://localhost:27017", metadata={"secret": True})
    name: str = "app"
    timeout: float = 5.0

    def _validate(self) -> None:
        rules.has_scheme("DB_URI", self.uri, "mongodb", "mongodb+srv")
        rules.not_blank("DB_NAME", self.name)
        rules.positive("DB_TIMEOUT", self.timeout)


@dataclasses.dataclass
class RedisSettings(Settings):
    _prefix: ClassVar[str] = "REDIS"

    host: str = "localhost"
    port: int = 6379
    password: str = dataclasses.field(default="", metadata={"secret": True})
    db: int = 0
    timeout: float = 5.0

    def _validate(self) -> None:
        rules.not_blank("REDIS_HOST", self.host)
        rules.in_range("REDIS_PORT", self.port, 1, 65535)
        rules.in_range("REDIS_DB", self.db, 0, 15)
        rules.positive("REDIS_TIMEOUT", self.timeout)


@dataclasses.dataclass
class OtelSettings(Settings):
    _prefix: ClassVar[str] = "OTEL"

    enabled: bool = True
    service_name: str = "srvkit"
    exporter_otlp_endpoint: str = "localhost:4317"
    exporter_otlp_insecure: bool = True
    trace_sampler_arg: float = 1.0

    def _validate(self) -> None:
        rules.in_range("OTEL_TRACE_SAMPLER_ARG", self.trace_sampler_arg, 0.0, 1.0)


@dataclasses.dataclass
class Config:
    app: AppSettings = dataclasses.field(default_factory=AppSettings)
    database: DatabaseSettings = dataclasses.field(default_factory=DatabaseSettings)
    redis: RedisSettings = dataclasses.field(default_factory=RedisSettings)
    otel: OtelSettings = dataclasses.field(default_factory=OtelSettings)

    def redacted(self) -> dict[str, Any]:
        return {
            **self.app.redacted(),
            **self.database.redacted(),
            **self.redis.redacted(),
            **self.otel.redacted(),
        }


def load_config(
    loader: SettingsLoader | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load every settings group through *loader* (environment by default)."""
    loader = loader or EnvSettingsLoader(environ)
    return Config(
        app=loader.load(AppSettings),
        database=loader.load(DatabaseSettings),
        redis=loader.load(RedisSettings),
        otel=loader.load(OtelSettings),
    )


__all__ = [
    "AppSettings",
    "Config",
    "DatabaseSettings",
    "ENVIRONMENTS",
    "OtelSettings",
    "RedisSettings",
    "load_config",
]
