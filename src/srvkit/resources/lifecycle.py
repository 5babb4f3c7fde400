"""Concurrent startup and shutdown of the process-wide resources.

Every resource is connected (or closed) in its own task and the caller waits
for all of them.  Resources must be mutually independent: there is no
ordering between them.  Nothing here retries.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from srvkit.kernel.errors import ResourceInitializationError
from srvkit.observability.logging import get_logger
from srvkit.resources.port import Resource

_log = get_logger(__name__)

DEFAULT_SHUTDOWN_TIMEOUT = 5.0
CANCEL_GRACE = 1.0


@dataclass
class Resources:
    """The fixed set of resources the process runs with."""

    database: Resource
    cache: Resource

    def __iter__(self) -> Iterator[Resource]:
        return iter((self.database, self.cache))

    def __len__(self) -> int:
        return 2


async def _timed(resource: Resource, action: str) -> float:
    start = time.monotonic()
    await getattr(resource, action)()
    return time.monotonic() - start


async def init_resources(resources: Iterable[Resource], *, logger: Any = None) -> None:
    """Connect every resource concurrently.

    Waits for all connects to finish even when one fails, then raises a single
    :class:`ResourceInitializationError` naming every resource that failed.
    The caller must treat that as fatal.
    """
    log = logger or _log
    resources = list(resources)
    log.info("initializing resources", count=len(resources))
    start = time.monotonic()

    outcomes = await asyncio.gather(
        *(_timed(r, "connect") for r in resources),
        return_exceptions=True,
    )

    failures: dict[str, BaseException] = {}
    for resource, outcome in zip(resources, outcomes):
        if isinstance(outcome, BaseException):
            log.error("failed to connect resource", resource=resource.name, error=str(outcome))
            failures[resource.name] = outcome
        else:
            log.info(
                "resource connected",
                resource=resource.name,
                duration_ms=round(outcome * 1000, 2),
            )

    if failures:
        first = next(iter(failures.values()))
        raise ResourceInitializationError(failures, cause=first)

    log.info(
        "all resources initialized",
        count=len(resources),
        duration_ms=round((time.monotonic() - start) * 1000, 2),
    )


async def close_resources(
    resources: Iterable[Resource],
    *,
    timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
    logger: Any = None,
) -> None:
    """Close every resource concurrently, best effort.

    Failures are logged and swallowed.  The whole sweep is bounded by
    *timeout*: closes still running at the deadline are cancelled, so a
    resource that ignores its own timeout cannot hold up shutdown.
    Cancelled closes get a short grace period to unwind before this returns.
    """
    log = logger or _log
    resources = list(resources)
    log.info("closing resources", count=len(resources))
    start = time.monotonic()

    tasks = {
        asyncio.ensure_future(_timed(r, "close")): r
        for r in resources
    }
    if not tasks:
        return
    done, pending = await asyncio.wait(tasks, timeout=timeout)

    for task in pending:
        task.cancel()
        log.error(
            "timed out closing resource",
            resource=tasks[task].name,
            timeout_s=timeout,
        )
    if pending:
        unwound, stuck = await asyncio.wait(pending, timeout=CANCEL_GRACE)
        for task in unwound:
            if not task.cancelled() and task.exception() is not None:
                log.error(
                    "failed to close resource",
                    resource=tasks[task].name,
                    error=repr(task.exception()),
                )
        for task in stuck:
            log.error("resource ignored cancellation", resource=tasks[task].name)

    failed = len(pending)
    for task, resource in tasks.items():
        if task not in done:
            continue
        exc = asyncio.CancelledError() if task.cancelled() else task.exception()
        if exc is not None:
            failed += 1
            log.error("failed to close resource", resource=resource.name, error=repr(exc))
        else:
            log.info(
                "resource closed",
                resource=resource.name,
                duration_ms=round(task.result() * 1000, 2),
            )

    log.info(
        "resources closed",
        count=len(resources),
        failed=failed,
        duration_ms=round((time.monotonic() - start) * 1000, 2),
    )


__all__ = ["CANCEL_GRACE", "DEFAULT_SHUTDOWN_TIMEOUT", "Resources", "close_resources", "init_resources"]
