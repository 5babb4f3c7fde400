"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

REDACTED = "***"


@dataclasses.dataclass
class Settings:
    """One group of environment-backed settings.

    The variable for a field is ``<_prefix>_<FIELD>`` upper-cased, or just
    ``<FIELD>`` with an empty prefix (``DB`` + ``uri`` → ``DB_URI``).  Fields
    declared with ``metadata={"secret": True}`` are masked by
    :meth:`redacted`.  Subclasses check their values in :meth:`_validate`,
    which runs on construction.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Raise ``InvalidSettingValueError`` for unusable values."""

    @classmethod
    def env_var(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def redacted(self) -> dict[str, Any]:
        """Field values keyed by variable name, secrets masked; safe to log."""
        values: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.metadata.get("secret") and value:
                value = REDACTED
            values[self.env_var(f.name)] = value
        return values


__all__ = ["REDACTED", "Settings"]
