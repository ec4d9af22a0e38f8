"""Testimonial service: generic CRUD plus moderation status handling.

Every create and every content update stores the testimonial as PENDING;
only :meth:`TestimonialService.update_status` moves it to APPROVED or
REJECTED.  The request DTO has no status field, so the document default
(PENDING) applies on both paths without a hook.
"""

from __future__ import annotations

import random
from typing import Any

import structlog

from tokoro.models.dto import TestimonialRequest, TestimonialResponse
from tokoro.interfaces.document_store import IDocumentStore
from tokoro.models.feedback import Testimonial, TestimonialStatus
from tokoro.services.entity_service import EntityService
from tokoro.services.resources import TESTIMONIALS
from tokoro.utils.errors import InvalidInputError

logger = structlog.get_logger(logger_name=__name__)


class TestimonialService(EntityService[TestimonialRequest, Testimonial, TestimonialResponse]):
    def __init__(self, store: IDocumentStore, **kwargs: Any) -> None:
        super().__init__(TESTIMONIALS, store, **kwargs)

    async def update_status(self, testimonial_id: str, status: TestimonialStatus) -> TestimonialResponse:
        existing = await self._require(testimonial_id)
        stored = await self._replace(existing, existing.model_copy(update={"status": status}))
        logger.info("testimonial_status_changed", id=testimonial_id, status=status.value)
        return self._mapper.to_view(stored)

    async def list_by_status(self, status: TestimonialStatus) -> list[TestimonialResponse]:
        return self._mapper.to_views(await self._find_where("status", [status.value]))

    async def list_by_user(self, user_id: str) -> list[TestimonialResponse]:
        return self._mapper.to_views(await self._find_where("user_id", [user_id]))

    async def random_approved(self, count: int) -> list[TestimonialResponse]:
        """Return up to *count* APPROVED testimonials in random order."""
        if count < 1:
            raise InvalidInputError(f"count must be >= 1, got {count}")
        approved = await self._find_where("status", [TestimonialStatus.APPROVED.value])
        return self._mapper.to_views(random.sample(approved, min(count, len(approved))))
