"""MongoDB adapter — Document base dataclass and the BSON mapping step.

A document type is a keyword-only dataclass deriving from :class:`Document`.
Attribute names are Python names; the stored key defaults to the attribute
name and can be overridden with ``field(metadata={"bson": "storedName"})``.
``id`` is always stored as ``_id``.

Usage::

    @dataclasses.dataclass(kw_only=True)
    class ProductDocument(Document):
        name: str = ""
        unit_price: float = dataclasses.field(default=0.0, metadata={"bson": "unitPrice"})
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any, Mapping, TypeVar

from bson import ObjectId

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"

TDoc = TypeVar("TDoc", bound="Document")


@dataclasses.dataclass(kw_only=True)
class Document:
    """Stored record: identifier plus creation/update timestamps."""

    id: ObjectId | str | None = dataclasses.field(default=None, metadata={"bson": "_id"})
    created_at: datetime | None = dataclasses.field(default=None, metadata={"bson": CREATED_AT})
    updated_at: datetime | None = dataclasses.field(default=None, metadata={"bson": UPDATED_AT})

    @classmethod
    def storage_names(cls) -> dict[str, str]:
        """Map attribute name → stored key."""
        return {
            f.name: f.metadata.get("bson", f.name)
            for f in dataclasses.fields(cls)  # type: ignore[arg-type]
        }

    def to_bson(self) -> dict[str, Any]:
        """Encode for storage; an unset ``id`` is left for the server to assign."""
        payload: dict[str, Any] = {}
        for attr, key in self.storage_names().items():
            value = getattr(self, attr)
            if attr == "id" and value is None:
                continue
            payload[key] = value
        return payload

    @classmethod
    def from_bson(cls: type[TDoc], raw: Mapping[str, Any]) -> TDoc:
        """Decode a stored document; keys with no matching attribute are ignored."""
        kwargs = {
            attr: raw[key]
            for attr, key in cls.storage_names().items()
            if key in raw
        }
        return cls(**kwargs)

    def stamp(self, now: datetime) -> None:
        """Fill unset timestamps before the first write."""
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = now


def id_to_str(value: Any) -> str:
    """Render a stored identifier the way callers see it (hex for ObjectId)."""
    if isinstance(value, ObjectId):
        return str(value)
    return f"{value}"


def has_operators(update: Mapping[str, Any]) -> bool:
    """True when *update* is already an update expression (``$set`` …)."""
    return any(isinstance(key, str) and key.startswith("$") for key in update)


__all__ = ["CREATED_AT", "Document", "UPDATED_AT", "has_operators", "id_to_str"]
