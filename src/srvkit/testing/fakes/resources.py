"""Testing fakes – in-memory resources with injectable failures."""
from __future__ import annotations

import asyncio
from typing import Any

from srvkit.kernel.errors import ResourceNotConnectedError
from srvkit.resources.port import Resource


class InMemoryResource(Resource):
    """Resource that only flips a flag.

    ``connect_error``/``close_error`` are raised from the matching call;
    ``connect_delay``/``close_delay`` (seconds) make the call sleep first.
    ``connect_calls`` and ``close_calls`` count invocations.
    """

    def __init__(
        self,
        name: str,
        *,
        connect_error: BaseException | None = None,
        close_error: BaseException | None = None,
        connect_delay: float = 0.0,
        close_delay: float = 0.0,
    ) -> None:
        self._name = name
        self.connect_error = connect_error
        self.close_error = close_error
        self.connect_delay = connect_delay
        self.close_delay = close_delay
        self.connected = False
        self.connect_calls = 0
        self.close_calls = 0

    @property
    def name(self) -> str:
        return self._name

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.connect_delay:
            await asyncio.sleep(self.connect_delay)
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    async def close(self) -> None:
        self.close_calls += 1
        if self.close_delay:
            await asyncio.sleep(self.close_delay)
        if self.close_error is not None:
            raise self.close_error
        self.connected = False

    async def ping(self) -> None:
        if not self.connected:
            raise ResourceNotConnectedError(self._name)


class FakeDatabase(InMemoryResource):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__("mock-database", **kwargs)


class FakeCache(InMemoryResource):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__("mock-redis", **kwargs)


__all__ = ["FakeCache", "FakeDatabase", "InMemoryResource"]
