"""MongoDB adapter — user repository on top of :class:`MongoRepository`."""

from __future__ import annotations

import dataclasses
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, IndexModel

from srvkit.adapters.mongodb.document import CREATED_AT, UPDATED_AT, Document, id_to_str
from srvkit.adapters.mongodb.repository import MongoRepository
from srvkit.adapters.mongodb.resource import MongoResource
from srvkit.domain.users import User, UserAlreadyExistsError, UserNotFoundError, UserRepository
from srvkit.kernel.errors import AlreadyExistsError, NotFoundError
from srvkit.kernel.time import Clock, SystemClock
from srvkit.observability.tracing import Tracer

COLLECTION = "users"

INDEXES = [
    IndexModel([("email", ASCENDING)], unique=True, name="email_unique"),
    IndexModel([(CREATED_AT, DESCENDING)], name="createdAt_desc"),
]


@dataclasses.dataclass(kw_only=True)
class UserDocument(Document):
    name: str = ""
    email: str = ""


def to_user(doc: UserDocument) -> User:
    return User(
        id=id_to_str(doc.id) if doc.id is not None else "",
        name=doc.name,
        email=doc.email,
        created_at=doc.created_at,
        updated_at=doc.updated_at,
    )


def to_document(user: User) -> UserDocument:
    doc = UserDocument(
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
    if user.id:
        # ids that are not ObjectId hex are legacy string ids
        doc.id = ObjectId(user.id) if ObjectId.is_valid(user.id) else user.id
    return doc


class MongoUserRepository(UserRepository):
    """Users stored one document per user in the ``users`` collection.

    Email uniqueness is enforced by the ``email_unique`` index (see
    :meth:`ensure_indexes`); this class only translates the resulting
    duplicate-key condition.
    """

    def __init__(
        self,
        resource: MongoResource,
        *,
        tracer: Tracer | None = None,
        logger: Any = None,
        clock: Clock | None = None,
    ) -> None:
        self._resource = resource
        self._clock = clock or SystemClock()
        self._repo: MongoRepository[UserDocument] = MongoRepository(
            resource.collection(COLLECTION),
            UserDocument,
            entity_name="user",
            tracer=tracer,
            logger=logger,
            clock=self._clock,
        )

    async def get_by_id(self, id: str) -> User | None:
        try:
            doc = await self._repo.find_by_id(id)
        except NotFoundError:
            return None
        return to_user(doc)

    async def list(self) -> list[User]:
        docs = await self._repo.find_all(sort=[(CREATED_AT, DESCENDING)])
        return [to_user(doc) for doc in docs]

    async def create(self, user: User) -> None:
        doc = to_document(user)
        doc.created_at = doc.updated_at = self._clock.now()
        try:
            user_id = await self._repo.insert_one(doc)
        except AlreadyExistsError as exc:
            raise UserAlreadyExistsError(f"user with email '{user.email}' already exists", cause=exc) from exc
        user.id = user_id
        user.created_at = doc.created_at
        user.updated_at = doc.updated_at

    async def update(self, user: User) -> None:
        fields = {key: value for key, value in (("name", user.name), ("email", user.email)) if value}
        now = self._clock.now()
        fields[UPDATED_AT] = now
        try:
            await self._repo.update_by_id(user.id, fields)
        except NotFoundError as exc:
            raise UserNotFoundError(user.id, cause=exc) from exc
        except AlreadyExistsError as exc:
            raise UserAlreadyExistsError(f"user with email '{user.email}' already exists", cause=exc) from exc
        user.updated_at = now

    async def delete(self, id: str) -> None:
        try:
            await self._repo.delete_by_id(id)
        except NotFoundError as exc:
            raise UserNotFoundError(id, cause=exc) from exc

    async def ensure_indexes(self) -> list[str]:
        return await self._resource.ensure_indexes(COLLECTION, INDEXES)


__all__ = [
    "COLLECTION",
    "INDEXES",
    "MongoUserRepository",
    "UserDocument",
    "to_document",
    "to_user",
]
