"""Generic CRUD service, instantiated once per entity kind.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services.
# Pattern: One class, parameterized by an :class:`EntityKind` (route name,
#          collection, label, mapper).  Every resource in
#          ``tokoro/services/resources.py`` gets an instance; resources with
#          extra operations subclass it (PlaceService, TestimonialService...).
#
# Contract:
#   create     → map, stamp timestamps, save (store assigns the id)
#   get_by_id  → NotFoundError when the id is unknown
#   list_all   → every document, unbounded
#   list_page  → one window plus the collection total
#   update     → NotFoundError when unknown; otherwise full replace under
#                the same id.  The lookup and the replace are two round
#                trips, so a concurrent delete in between is last-write-wins.
#   delete     → NotFoundError when unknown; otherwise remove
#
# The store handle is passed in; nothing here reaches for a global.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar

import structlog
from pydantic import BaseModel

from tokoro.interfaces.document_store import IDocumentStore
from tokoro.models.document import Document
from tokoro.services.mapper import DocumentMapper
from tokoro.utils.errors import InvalidInputError, NotFoundError

logger = structlog.get_logger(logger_name=__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)
DocumentT = TypeVar("DocumentT", bound=Document)
ViewT = TypeVar("ViewT", bound=BaseModel)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(frozen=True)
class EntityKind(Generic[RequestT, DocumentT, ViewT]):
    """Everything the generic layers need to know about one resource.

    Attributes
    ----------
    name:
        Plural route segment, e.g. ``"blogs"`` → ``/api/blogs``.
    collection:
        Document store collection name.
    label:
        Singular human label used in error messages ("Blog not found: …").
    mapper:
        Request/document/view conversions.
    """

    name: str
    collection: str
    label: str
    mapper: DocumentMapper[RequestT, DocumentT, ViewT]


@dataclass(frozen=True)
class Page(Generic[ViewT]):
    items: list[ViewT]
    page: int
    size: int
    total: int


class EntityService(Generic[RequestT, DocumentT, ViewT]):
    """CRUD operations for one entity kind against an injected document store.

    Parameters
    ----------
    kind:
        The resource this instance serves.
    store:
        Document store shared by all services.
    clock:
        Returns "now" for timestamp stamping; injectable for tests.
    max_page_size:
        Upper bound applied to ``list_page`` sizes.
    """

    def __init__(
        self,
        kind: EntityKind[RequestT, DocumentT, ViewT],
        store: IDocumentStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
        max_page_size: int = 100,
    ) -> None:
        self._kind = kind
        self._mapper = kind.mapper
        self._store = store
        self._clock = clock
        self._max_page_size = max_page_size

    @property
    def kind(self) -> EntityKind[RequestT, DocumentT, ViewT]:
        return self._kind

    # ── Public CRUD ───────────────────────────────────────────────────

    async def create(self, request: RequestT) -> ViewT:
        document = await self._prepare_create(self._mapper.to_document(request))
        stored = await self._save(self._stamp(document))
        logger.info("entity_created", kind=self._kind.name, id=stored.id)
        return self._mapper.to_view(stored)

    async def get_by_id(self, entity_id: str) -> ViewT:
        return self._mapper.to_view(await self._require(entity_id))

    async def list_all(self) -> list[ViewT]:
        raw = await self._store.find_all(self._kind.collection)
        return self._mapper.to_views(self._load(item) for item in raw)

    async def list_page(self, page: int = 0, size: int = 20) -> Page[ViewT]:
        """Return the *page*-th window (zero-based) of *size* documents."""
        if page < 0:
            raise InvalidInputError(f"page must be >= 0, got {page}")
        if size < 1:
            raise InvalidInputError(f"size must be >= 1, got {size}")
        size = min(size, self._max_page_size)
        raw = await self._store.find_all(self._kind.collection, skip=page * size, limit=size)
        total = await self._store.count(self._kind.collection)
        return Page(
            items=self._mapper.to_views(self._load(item) for item in raw),
            page=page,
            size=size,
            total=total,
        )

    async def get_many(self, entity_ids: list[str]) -> list[ViewT]:
        """Return the documents for *entity_ids* in request order, skipping unknown ids."""
        if not entity_ids:
            return []
        found = {
            document.id: document
            for document in (
                self._load(item)
                for item in await self._store.find_where(self._kind.collection, "id", list(entity_ids))
            )
        }
        return [self._mapper.to_view(found[i]) for i in dict.fromkeys(entity_ids) if i in found]

    async def sample(self, count: int) -> list[ViewT]:
        if count < 1:
            raise InvalidInputError(f"count must be >= 1, got {count}")
        raw = await self._store.sample(self._kind.collection, count)
        return self._mapper.to_views(self._load(item) for item in raw)

    async def update(self, entity_id: str, request: RequestT) -> ViewT:
        existing = await self._require(entity_id)
        replacement = self._carry_over(existing, self._mapper.to_document(request))
        stored = await self._replace(existing, replacement)
        logger.info("entity_updated", kind=self._kind.name, id=entity_id)
        return self._mapper.to_view(stored)

    async def delete(self, entity_id: str) -> None:
        await self._require(entity_id)
        await self._store.remove(self._kind.collection, entity_id)
        logger.info("entity_deleted", kind=self._kind.name, id=entity_id)

    # ── Hooks for subclasses ──────────────────────────────────────────

    async def _prepare_create(self, document: DocumentT) -> DocumentT:
        """Adjust a freshly mapped document before its first save."""
        return document

    def _carry_over(self, existing: DocumentT, replacement: DocumentT) -> DocumentT:
        """Copy fields the request cannot express from *existing* into *replacement*."""
        return replacement

    # ── Store helpers ─────────────────────────────────────────────────

    async def _require(self, entity_id: str) -> DocumentT:
        raw = await self._store.find_by_id(self._kind.collection, entity_id)
        if raw is None:
            logger.info("entity_not_found", kind=self._kind.name, id=entity_id)
            raise NotFoundError(self._kind.label, entity_id)
        return self._load(raw)

    async def _find_where(self, field: str, values: list[Any]) -> list[DocumentT]:
        raw = await self._store.find_where(self._kind.collection, field, values)
        return [self._load(item) for item in raw]

    async def _replace(self, existing: DocumentT, replacement: DocumentT) -> DocumentT:
        """Save *replacement* under *existing*'s id, keeping its creation time."""
        replacement = replacement.model_copy(update={"id": existing.id})
        stamped = self._stamp(replacement, created_at=getattr(existing, "created_at", None))
        return await self._save(stamped)

    async def _save(self, document: DocumentT) -> DocumentT:
        # JSON mode keeps dates, enums and nested models portable across backends.
        raw = await self._store.save(self._kind.collection, document.model_dump(mode="json"))
        return self._load(raw)

    def _load(self, raw: dict[str, Any]) -> DocumentT:
        return self._mapper.document_model.model_validate(raw)

    def _stamp(self, document: DocumentT, *, created_at: datetime | None = None) -> DocumentT:
        fields = type(document).model_fields
        now = self._clock()
        updates: dict[str, Any] = {}
        if "created_at" in fields:
            updates["created_at"] = created_at or now
        if "updated_at" in fields:
            updates["updated_at"] = now
        return document.model_copy(update=updates) if updates else document
