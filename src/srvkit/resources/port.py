"""Resource port — the contract every external dependency satisfies."""

from __future__ import annotations

import abc


class Resource(abc.ABC):
    """An external stateful dependency (database, cache, …).

    ``connect`` is called once at startup.  ``close`` must be safe on a
    resource that never connected or is already closed.  ``ping`` raises
    :class:`~srvkit.kernel.errors.ResourceNotConnectedError` when there is no
    live connection.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Stable identifier used in logs and health reports."""

    @abc.abstractmethod
    async def connect(self) -> None: ...

    @abc.abstractmethod
    async def close(self) -> None: ...

    @abc.abstractmethod
    async def ping(self) -> None: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = ["Resource"]
