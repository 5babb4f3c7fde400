"""Email address value object."""

from __future__ import annotations

import dataclasses
import re
from typing import Final

from srvkit.kernel.errors import InvalidInputError

MAX_LENGTH: Final = 254

_EMAIL_PATTERN: Final = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,}$")


@dataclasses.dataclass(frozen=True, slots=True)
class Email:
    """A syntactically valid address, trimmed and lower-cased.

    Construction raises :class:`InvalidInputError` for anything else; two
    spellings of the same address compare equal.
    """

    value: str

    def __post_init__(self) -> None:
        normalised = self.value.strip().lower()
        if len(normalised) > MAX_LENGTH or not _EMAIL_PATTERN.match(normalised):
            raise InvalidInputError(f"invalid email address {self.value!r}")
        object.__setattr__(self, "value", normalised)

    @property
    def domain(self) -> str:
        return self.value.rpartition("@")[2]

    def __str__(self) -> str:
        return self.value


__all__ = ["Email", "MAX_LENGTH"]
