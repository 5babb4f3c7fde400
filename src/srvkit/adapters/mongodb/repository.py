"""MongoDB adapter — MongoRepository generic base."""

from __future__ import annotations

import contextlib
from typing import Any, Generic, Iterator, Mapping, Sequence, TypeVar

from bson import ObjectId
from pymongo.errors import BulkWriteError, DuplicateKeyError, PyMongoError

from srvkit.adapters.mongodb.document import UPDATED_AT, Document, has_operators, id_to_str
from srvkit.kernel.errors import (
    AlreadyExistsError,
    InfrastructureError,
    InvalidIDError,
    InvalidInputError,
    NotFoundError,
    RepositoryError,
    StorageError,
)
from srvkit.kernel.time import Clock, SystemClock
from srvkit.observability.logging import get_logger
from srvkit.observability.tracing import NoopTracer, Span, SpanKind, Tracer

TDocument = TypeVar("TDocument", bound=Document)

_DUPLICATE_KEY = 11000

_log = get_logger(__name__)


def _is_duplicate_key(exc: BulkWriteError) -> bool:
    return any(
        err.get("code") == _DUPLICATE_KEY
        for err in (exc.details or {}).get("writeErrors", [])
    )


class MongoRepository(Generic[TDocument]):
    """Generic data access over one MongoDB collection.

    Every outcome is expressed in the repository taxonomy
    (:class:`NotFoundError`, :class:`AlreadyExistsError`,
    :class:`InvalidIDError`, :class:`InvalidInputError`); any other driver
    failure is wrapped in :class:`StorageError` and logged.  Nothing is
    retried here.

    Identifiers are strings.  A 24-character hex string addresses an
    ``ObjectId``; anything else is matched literally against ``_id`` so that
    collections holding both id schemes keep working.  Pass
    ``strict_ids=True`` to reject non-ObjectId identifiers instead.

    Usage::

        repo = MongoRepository(db.products, ProductDocument, entity_name="product")
        pid = await repo.insert_one(ProductDocument(name="Widget"))
        product = await repo.find_by_id(pid)
    """

    def __init__(
        self,
        collection: Any,
        document_cls: type[TDocument],
        *,
        entity_name: str | None = None,
        tracer: Tracer | None = None,
        logger: Any = None,
        clock: Clock | None = None,
        strict_ids: bool = False,
    ) -> None:
        self._col = collection
        self._document_cls = document_cls
        self._entity = entity_name or collection.name
        self._tracer = tracer or NoopTracer()
        self._log = logger or _log
        self._clock = clock or SystemClock()
        self._strict_ids = strict_ids

    @property
    def collection(self) -> Any:
        return self._col

    @property
    def entity_name(self) -> str:
        return self._entity

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def _operation(self, op: str, verb: str, **attributes: Any) -> Iterator[Span]:
        """Span + error classification shared by every operation."""
        span_attributes = {
            "db.system": "mongodb",
            "db.collection": self._col.name,
            "entity": self._entity,
            **attributes,
        }
        with self._tracer.start_span(f"MongoRepository.{op}", SpanKind.CLIENT, span_attributes) as span:
            try:
                yield span
            except RepositoryError as exc:
                span.record_exception(exc)
                raise
            except DuplicateKeyError as exc:
                span.record_exception(exc)
                self._log.warning(f"{self._entity} already exists", op=op, **attributes)
                raise AlreadyExistsError(self._entity, cause=exc) from exc
            except BulkWriteError as exc:
                span.record_exception(exc)
                if _is_duplicate_key(exc):
                    self._log.warning(f"{self._entity} already exists", op=op, **attributes)
                    raise AlreadyExistsError(self._entity, cause=exc) from exc
                self._log_fault(op, verb, exc, attributes)
                raise StorageError(verb, self._entity, cause=exc) from exc
            except PyMongoError as exc:
                span.record_exception(exc)
                self._log_fault(op, verb, exc, attributes)
                raise StorageError(verb, self._entity, cause=exc) from exc
            except InfrastructureError as exc:
                span.record_exception(exc)
                self._log_fault(op, verb, exc, attributes)
                raise
            span.set_status_ok()

    def _log_fault(self, op: str, verb: str, exc: BaseException, attributes: dict[str, Any]) -> None:
        self._log.error(
            f"failed to {verb} {self._entity}",
            op=op,
            collection=self._col.name,
            entity=self._entity,
            error=str(exc),
            **attributes,
        )

    def _id_filter(self, id: Any) -> dict[str, Any]:
        if not isinstance(id, str) or not id:
            raise InvalidIDError(id)
        if ObjectId.is_valid(id):
            return {"_id": ObjectId(id)}
        if self._strict_ids:
            raise InvalidIDError(id)
        return {"_id": id}

    def _decode(self, raw: Mapping[str, Any]) -> TDocument:
        try:
            return self._document_cls.from_bson(raw)
        except (TypeError, ValueError) as exc:
            raise StorageError("decode", self._entity, cause=exc) from exc

    def _build_update(self, update: Any) -> dict[str, Any]:
        """Wrap plain field maps in ``$set`` and stamp ``updatedAt``.

        An ``updatedAt`` already present in ``$set`` is kept.  The caller's
        mapping is copied, never mutated.
        """
        if not isinstance(update, Mapping):
            raise InvalidInputError(f"update for {self._entity} must be a mapping")
        if has_operators(update):
            doc = dict(update)
        else:
            doc = {"$set": dict(update)}
        set_doc = doc.get("$set") or {}
        if not isinstance(set_doc, Mapping):
            raise InvalidInputError("$set must be a mapping")
        doc["$set"] = {**set_doc}
        if UPDATED_AT not in set_doc:
            doc["$set"][UPDATED_AT] = self._clock.now()
        return doc

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_by_id(self, id: str) -> TDocument:
        with self._operation("find_by_id", "find", id=str(id)):
            raw = await self._col.find_one(self._id_filter(id))
            if raw is None:
                raise NotFoundError(self._entity, id)
            return self._decode(raw)

    async def find_one(self, filter: Mapping[str, Any], **options: Any) -> TDocument:
        with self._operation("find_one", "find"):
            raw = await self._col.find_one(filter, **options)
            if raw is None:
                raise NotFoundError(self._entity)
            return self._decode(raw)

    async def find(self, filter: Mapping[str, Any] | None = None, **options: Any) -> list[TDocument]:
        """Return every match; pass ``sort``/``skip``/``limit`` through *options*."""
        with self._operation("find", "find") as span:
            cursor = self._col.find(filter or {}, **options)
            raws = await cursor.to_list(length=None)
            span.set_attribute("db.result_count", len(raws))
            return [self._decode(raw) for raw in raws]

    async def find_all(self, **options: Any) -> list[TDocument]:
        return await self.find({}, **options)

    async def count(self, filter: Mapping[str, Any] | None = None, **options: Any) -> int:
        with self._operation("count", "count"):
            return await self._col.count_documents(filter or {}, **options)

    async def exists(self, filter: Mapping[str, Any]) -> bool:
        return await self.count(filter, limit=1) > 0

    async def aggregate(self, pipeline: Sequence[Mapping[str, Any]], **options: Any) -> list[TDocument]:
        """Run *pipeline* as given and decode each result as a document."""
        with self._operation("aggregate", "aggregate") as span:
            cursor = self._col.aggregate(list(pipeline), **options)
            raws = await cursor.to_list(length=None)
            span.set_attribute("db.result_count", len(raws))
            return [self._decode(raw) for raw in raws]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def insert_one(self, document: TDocument) -> str:
        """Insert *document*, store the assigned id on it and return it."""
        with self._operation("insert_one", "insert"):
            document.stamp(self._clock.now())
            result = await self._col.insert_one(document.to_bson())
            document.id = result.inserted_id
            return id_to_str(result.inserted_id)

    async def insert_many(self, documents: Sequence[TDocument]) -> list[str]:
        """Insert all of *documents* or none of them.

        Ids are assigned up front.  If the batch fails the documents already
        written are deleted again before the error is raised: a bulk write
        error reports how many went in, while any other driver failure may
        have stopped anywhere, so every id assigned here is removed.  Ids the
        caller supplied are only rolled back when the bulk report covers them.
        """
        if not documents:
            raise InvalidInputError(f"no {self._entity} documents to insert")
        with self._operation("insert_many", "insert", count=len(documents)) as span:
            now = self._clock.now()
            assigned: list[TDocument] = []
            payloads: list[dict[str, Any]] = []
            for document in documents:
                if document.id is None:
                    document.id = ObjectId()
                    assigned.append(document)
                document.stamp(now)
                payloads.append(document.to_bson())
            try:
                await self._col.insert_many(payloads, ordered=True)
            except BulkWriteError as exc:
                written = (exc.details or {}).get("nInserted", 0)
                await self._rollback([p["_id"] for p in payloads[:written]], assigned)
                raise
            except PyMongoError:
                await self._rollback([d.id for d in assigned], assigned)
                raise
            span.set_attributes({"db.inserted_count": len(documents), "db.assigned_ids": len(assigned)})
            return [id_to_str(d.id) for d in documents]

    async def _rollback(self, ids: list[Any], assigned: list[TDocument]) -> None:
        for document in assigned:
            document.id = None
        if not ids:
            return
        try:
            await self._col.delete_many({"_id": {"$in": ids}})
        except PyMongoError as exc:
            self._log.error(
                f"failed to roll back {self._entity} batch",
                collection=self._col.name,
                ids=[id_to_str(i) for i in ids],
                error=str(exc),
            )

    async def update_by_id(self, id: str, update: Mapping[str, Any]) -> None:
        """Apply *update* to one document; ``updatedAt`` is always refreshed.

        A plain field map is wrapped in ``$set``; a map whose keys are update
        operators is used as is.
        """
        with self._operation("update_by_id", "update", id=str(id)):
            result = await self._col.update_one(self._id_filter(id), self._build_update(update))
            if result.matched_count == 0:
                raise NotFoundError(self._entity, id)

    async def update_one(self, filter: Mapping[str, Any], update: Mapping[str, Any], **options: Any) -> None:
        with self._operation("update_one", "update"):
            result = await self._col.update_one(filter, update, **options)
            if result.matched_count == 0 and result.upserted_id is None:
                raise NotFoundError(self._entity)

    async def update_many(self, filter: Mapping[str, Any], update: Mapping[str, Any], **options: Any) -> int:
        with self._operation("update_many", "update") as span:
            result = await self._col.update_many(filter, update, **options)
            span.set_attributes({"db.matched_count": result.matched_count, "db.modified_count": result.modified_count})
            return result.modified_count

    async def delete_by_id(self, id: str) -> None:
        with self._operation("delete_by_id", "delete", id=str(id)):
            result = await self._col.delete_one(self._id_filter(id))
            if result.deleted_count == 0:
                raise NotFoundError(self._entity, id)

    async def delete_one(self, filter: Mapping[str, Any]) -> None:
        with self._operation("delete_one", "delete"):
            result = await self._col.delete_one(filter)
            if result.deleted_count == 0:
                raise NotFoundError(self._entity)

    async def delete_many(self, filter: Mapping[str, Any]) -> int:
        with self._operation("delete_many", "delete") as span:
            result = await self._col.delete_many(filter)
            span.set_attribute("db.deleted_count", result.deleted_count)
            return result.deleted_count


__all__ = ["MongoRepository", "TDocument"]
