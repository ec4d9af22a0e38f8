"""Place service: generic CRUD plus tag lookup and auto-tagging.

Places are found by the names of their tags; a place matches when any of
its tag names is among the requested ones.  Results are ranked by how many
requested names they carry, best first.

When a place is created without tags and a :class:`TagService` is wired in,
tags are generated from the place's name and description.  Generation
problems never block the create: a refusal or an LLM failure leaves the
tag list empty and is logged.
"""

from __future__ import annotations

from typing import Any

import structlog

from tokoro.models.dto import PlaceRequest, PlaceResponse
from tokoro.interfaces.document_store import IDocumentStore
from tokoro.models.place import Place
from tokoro.models.tags import Refusal
from tokoro.services.entity_service import EntityService
from tokoro.services.resources import PLACES
from tokoro.services.tag_service import TagService
from tokoro.utils.errors import InvalidInputError, LLMError

logger = structlog.get_logger(logger_name=__name__)


class PlaceService(EntityService[PlaceRequest, Place, PlaceResponse]):
    """CRUD for places plus tag-based lookup.

    Parameters
    ----------
    store:
        Document store shared by all services.
    tag_service:
        Optional generator used to tag places created without tags.
    auto_tag:
        Set ``False`` to store untagged places as-is even when a tag
        service is available.
    """

    def __init__(
        self,
        store: IDocumentStore,
        *,
        tag_service: TagService | None = None,
        auto_tag: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(PLACES, store, **kwargs)
        self._tag_service = tag_service
        self._auto_tag = auto_tag

    async def get_places_by_tags(self, names: list[str]) -> list[PlaceResponse]:
        """Return places carrying any of *names*, most matching tags first.

        Raises
        ------
        InvalidInputError
            If *names* contains no non-blank tag name.
        """
        wanted = [name for name in dict.fromkeys(n.strip() for n in names) if name]
        if not wanted:
            raise InvalidInputError("At least one tag name is required")

        places = await self._find_where("tags.name", wanted)
        wanted_set = set(wanted)

        def _hits(place: Place) -> int:
            return len({tag.name for tag in place.tags} & wanted_set)

        ranked = sorted(places, key=_hits, reverse=True)
        logger.info("places_by_tags", tags=len(wanted), matches=len(ranked))
        return self._mapper.to_views(ranked)

    async def _prepare_create(self, document: Place) -> Place:
        if document.tags or not self._auto_tag or self._tag_service is None:
            return document

        prompt = f"{document.name}. {document.description}".strip()
        try:
            result = await self._tag_service.generate_tags(prompt)
        except LLMError as exc:
            logger.warning("place_auto_tag_failed", place=document.name, error=str(exc)[:200])
            return document

        if isinstance(result, Refusal):
            logger.warning("place_auto_tag_refused", place=document.name, reason=result.reason)
            return document
        return document.model_copy(update={"tags": list(result.tags)})
