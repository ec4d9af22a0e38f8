"""Free-text place search: generate tags, then look places up by tag.

If tag generation refuses, the refusal is handed back unchanged and the
place lookup is skipped entirely.
"""

from __future__ import annotations

from typing import Union

import structlog

from tokoro.models.dto import PlaceResponse
from tokoro.models.tags import Refusal
from tokoro.services.place_service import PlaceService
from tokoro.services.tag_service import TagService

logger = structlog.get_logger(logger_name=__name__)

SearchResult = Union[list[PlaceResponse], Refusal]


class SearchService:
    """Composes the tag generator with the place service."""

    def __init__(self, tag_service: TagService, place_service: PlaceService) -> None:
        self._tag_service = tag_service
        self._place_service = place_service

    async def search(self, query: str) -> SearchResult:
        """Return the places matching *query*, or the generator's refusal."""
        generated = await self._tag_service.generate_tags(query)
        if isinstance(generated, Refusal):
            logger.info("search_refused", status=generated.status, reason=generated.reason)
            return generated

        names = generated.names()
        if not names:
            logger.info("search_no_tags")
            return []

        places = await self._place_service.get_places_by_tags(names)
        logger.info("search_complete", tags=names, results=len(places))
        return places
