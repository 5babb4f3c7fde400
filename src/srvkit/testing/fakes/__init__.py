"""Testing fakes – in-memory doubles for kernel ports."""
from srvkit.testing.fakes.clock import FakeClock
from srvkit.testing.fakes.resources import FakeCache, FakeDatabase, InMemoryResource
from srvkit.testing.fakes.users import InMemoryUserRepository
from srvkit.kernel.time import FrozenClock

__all__ = [
    "FakeCache",
    "FakeClock",
    "FakeDatabase",
    "FrozenClock",
    "InMemoryResource",
    "InMemoryUserRepository",
]
