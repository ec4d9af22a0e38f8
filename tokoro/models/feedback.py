"""User feedback documents: ratings, reviews and testimonials.

All three reference users and places by id string only; nothing checks
that the referenced documents exist.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from tokoro.models.document import Document


class TestimonialStatus(str, Enum):
    """Moderation state of a testimonial.  New and edited ones start PENDING."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class UserRating(Document):
    """A 1–5 star rating of a place by a user."""

    user_id: str
    place_id: str
    value: int = Field(..., ge=1, le=5)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Review(Document):
    """A written review of a place.

    Stored as ``recommended``; the wire DTOs call it ``is_recommended``.
    """

    user_id: str
    place_id: str
    comment: str
    recommended: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Testimonial(Document):
    """A short public statement about the service itself."""

    user_id: str
    rating: int = Field(..., ge=1, le=5)
    message: str = Field(..., max_length=300)
    status: TestimonialStatus = TestimonialStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None
