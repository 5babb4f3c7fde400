"""Entry point: ``python -m srvkit`` runs until SIGINT/SIGTERM."""

from __future__ import annotations

import asyncio
import signal
import sys

from srvkit.app import Application
from srvkit.config import ConfigError, load_config
from srvkit.kernel.errors import ResourceInitializationError
from srvkit.observability.logging import bind_context, get_logger

_log = get_logger("srvkit")


async def serve() -> None:
    config = load_config()
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    if sys.platform != "win32":
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, stop.set)

    with bind_context(service=config.app.app_name, env=config.app.env):
        async with Application(config) as app:
            report = await app.readiness()
            _log.info("service ready", healthy=report.healthy)
            await stop.wait()
            _log.info("shutdown signal received")


def main() -> int:
    try:
        asyncio.run(serve())
    except ConfigError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2
    except ResourceInitializationError as exc:
        _log.error("startup failed", error=str(exc))
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
