"""In-memory document store provider.

Simple dict-of-dicts backend suitable for development, demos and tests.
Can be swapped for MongoDB via the IDocumentStore interface without touching
the services.  Documents are deep-copied on the way in and out so callers
never share mutable state with the store.
"""

from __future__ import annotations

import copy
import random
from typing import Any

import structlog
from bson import ObjectId

from tokoro.interfaces.document_store import IDocumentStore

logger = structlog.get_logger(logger_name=__name__)


def _field_values(document: dict[str, Any], path: str) -> list[Any]:
    """Collect every value reachable at dotted *path*, descending arrays."""
    if path == "id":
        return [document.get("id")]
    current: list[Any] = [document]
    for part in path.split("."):
        following: list[Any] = []
        for value in current:
            items = value if isinstance(value, list) else [value]
            for item in items:
                if isinstance(item, dict) and part in item:
                    following.append(item[part])
        current = following
    flat: list[Any] = []
    for value in current:
        if isinstance(value, list):
            flat.extend(value)
        else:
            flat.append(value)
    return flat


class MemoryDocumentStore(IDocumentStore):
    """Document store backed by one ``dict`` per collection.

    Identifiers are ObjectId hex strings, matching what the MongoDB store
    hands out, so ids look the same whichever backend is configured.
    Insertion order is preserved for ``find_all``.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    # ------------------------------------------------------------------
    # IDocumentStore implementation
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        logger.info("memory_store_initialized")

    async def close(self) -> None:
        logger.debug("memory_store_closed", collections=len(self._collections))

    async def save(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        stored = copy.deepcopy(document)
        document_id = stored.get("id") or str(ObjectId())
        stored["id"] = document_id
        self._collection(collection)[document_id] = stored
        logger.debug("memory_store_save", collection=collection, id=document_id)
        return copy.deepcopy(stored)

    async def find_by_id(self, collection: str, document_id: str) -> dict[str, Any] | None:
        found = self._collection(collection).get(document_id)
        return copy.deepcopy(found) if found is not None else None

    async def find_all(
        self,
        collection: str,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        documents = list(self._collection(collection).values())
        end = None if limit is None else skip + limit
        return copy.deepcopy(documents[skip:end])

    async def find_where(
        self,
        collection: str,
        field: str,
        values: list[Any],
    ) -> list[dict[str, Any]]:
        if not values:
            return []
        wanted = list(values)
        matches = [
            document
            for document in self._collection(collection).values()
            if any(value in wanted for value in _field_values(document, field))
        ]
        return copy.deepcopy(matches)

    async def count(self, collection: str) -> int:
        return len(self._collection(collection))

    async def sample(self, collection: str, size: int) -> list[dict[str, Any]]:
        documents = list(self._collection(collection).values())
        picked = random.sample(documents, min(size, len(documents)))
        return copy.deepcopy(picked)

    async def remove(self, collection: str, document_id: str) -> bool:
        removed = self._collection(collection).pop(document_id, None)
        logger.debug("memory_store_remove", collection=collection, id=document_id, removed=removed is not None)
        return removed is not None

    def get_provider_name(self) -> str:
        return "memory"
