"""MongoDB document store provider.

Wraps ``pymongo.AsyncMongoClient`` to implement :class:`IDocumentStore`.
Documents are stored with native ``ObjectId`` primary keys; the adapter
converts between the ``"id"`` string the services use and Mongo's ``_id``
on every round-trip, so nothing above this layer imports ``bson``.

Failures from the driver are wrapped in :class:`DocumentStoreError`, or in
:class:`ProviderUnavailableError` when the server cannot be reached, so the
API middleware renders them like any other application error.
"""

from __future__ import annotations

from typing import Any

import structlog
from bson import ObjectId
from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from tokoro.config.settings import Settings
from tokoro.interfaces.document_store import IDocumentStore
from tokoro.utils.errors import DocumentStoreError, ProviderUnavailableError, TokoroError

logger = structlog.get_logger(logger_name=__name__)

# Indexes created on startup: (collection, field).  Tag lookups and the
# per-user listings filter on these.
_INDEXES: tuple[tuple[str, str], ...] = (
    ("places", "tags.name"),
    ("testimonials", "status"),
    ("testimonials", "user_id"),
    ("chat_histories", "user_id"),
    ("prompt_history", "user_id"),
)


def _to_key(document_id: str) -> ObjectId | str:
    """Convert a string id to the ``_id`` value it was stored under."""
    return ObjectId(document_id) if ObjectId.is_valid(document_id) else document_id


def _from_mongo(raw: dict[str, Any]) -> dict[str, Any]:
    document = dict(raw)
    document["id"] = str(document.pop("_id"))
    return document


class MongoDocumentStore(IDocumentStore):
    """Document store backed by a MongoDB database.

    Parameters
    ----------
    settings:
        Supplies ``mongodb_uri`` and ``mongodb_database``.
    client:
        Optional pre-built client; one is created from the URI otherwise.
    """

    def __init__(self, settings: Settings, client: AsyncMongoClient | None = None) -> None:
        self._uri = settings.mongodb_uri
        self._client = client or AsyncMongoClient(self._uri, serverSelectionTimeoutMS=5000)
        self._db = self._client[settings.mongodb_database]
        self._database_name = settings.mongodb_database

    # ------------------------------------------------------------------
    # IDocumentStore implementation
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        try:
            for collection, field in _INDEXES:
                await self._db[collection].create_index(field)
        except PyMongoError as exc:
            raise self._store_error("MongoDB initialisation failed", exc) from exc
        logger.info("mongo_store_initialized", database=self._database_name)

    async def close(self) -> None:
        await self._client.close()
        logger.info("mongo_store_closed")

    async def save(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        body = {key: value for key, value in document.items() if key != "id"}
        document_id = document.get("id")
        try:
            if document_id:
                await self._db[collection].replace_one(
                    {"_id": _to_key(document_id)}, body, upsert=True
                )
                stored_id = document_id
            else:
                result = await self._db[collection].insert_one(body)
                stored_id = str(result.inserted_id)
        except PyMongoError as exc:
            raise self._store_error(f"Save into '{collection}' failed", exc) from exc
        # insert_one adds _id to the body it was handed.
        body.pop("_id", None)
        return {**body, "id": stored_id}

    async def find_by_id(self, collection: str, document_id: str) -> dict[str, Any] | None:
        try:
            raw = await self._db[collection].find_one({"_id": _to_key(document_id)})
        except PyMongoError as exc:
            raise self._store_error(f"Lookup in '{collection}' failed", exc) from exc
        return _from_mongo(raw) if raw is not None else None

    async def find_all(
        self,
        collection: str,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        cursor = self._db[collection].find().skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return await self._collect(collection, cursor)

    async def find_where(
        self,
        collection: str,
        field: str,
        values: list[Any],
    ) -> list[dict[str, Any]]:
        if not values:
            return []
        if field == "id":
            query = {"_id": {"$in": [_to_key(value) for value in values]}}
        else:
            query = {field: {"$in": list(values)}}
        return await self._collect(collection, self._db[collection].find(query))

    async def count(self, collection: str) -> int:
        try:
            return await self._db[collection].count_documents({})
        except PyMongoError as exc:
            raise self._store_error(f"Count of '{collection}' failed", exc) from exc

    async def sample(self, collection: str, size: int) -> list[dict[str, Any]]:
        try:
            cursor = await self._db[collection].aggregate([{"$sample": {"size": size}}])
            return [_from_mongo(raw) for raw in await cursor.to_list()]
        except PyMongoError as exc:
            raise self._store_error(f"Sampling '{collection}' failed", exc) from exc

    async def remove(self, collection: str, document_id: str) -> bool:
        try:
            result = await self._db[collection].delete_one({"_id": _to_key(document_id)})
        except PyMongoError as exc:
            raise self._store_error(f"Delete from '{collection}' failed", exc) from exc
        return result.deleted_count > 0

    def get_provider_name(self) -> str:
        return "mongodb"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _collect(self, collection: str, cursor: Any) -> list[dict[str, Any]]:
        try:
            return [_from_mongo(raw) for raw in await cursor.to_list()]
        except PyMongoError as exc:
            raise self._store_error(f"Query on '{collection}' failed", exc) from exc

    def _store_error(self, action: str, exc: PyMongoError) -> TokoroError:
        if isinstance(exc, ConnectionFailure):
            return ProviderUnavailableError(
                message=f"MongoDB is unreachable: {action}",
                provider_name=self.get_provider_name(),
            )
        return DocumentStoreError(
            message=f"{action}: {exc}",
            provider_name=self.get_provider_name(),
        )
