"""Wire DTOs for every resource: the request and view side of each document.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (imported by services and by the API; imports nothing
#        above tokoro/models/).
# Pattern: All DTOs use ``frozen=True`` for immutability, matching the
#          documents next to them.
#
# Every resource has a pair:
#   - ``<Resource>Request`` : create/update body.  Never carries ``id`` or
#                              server-stamped timestamps.
#   - ``<Resource>Response``: the stored view: ``id`` plus timestamps.
#
# Nested value schemas are shared between both sides of a pair, so a
# request round-trips through the mapper unchanged.  Field constraints
# declared here are the InvalidInput channel: FastAPI rejects violations
# with 422 before a service is called.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from tokoro.models.feedback import TestimonialStatus


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ─── Shared nested schemas ────────────────────────────────────────────

class TagSchema(_Frozen):
    lang: str = Field(default="en", description="ISO 639-1 language code.")
    name: str = Field(..., min_length=1)


class CoordinateSchema(_Frozen):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class LocationSchema(_Frozen):
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    coordinate: CoordinateSchema


class CommentSchema(_Frozen):
    user_id: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ConversationSchema(_Frozen):
    prompt: str = Field(..., min_length=1, max_length=1000)
    place_ids: list[str] = Field(default_factory=list)


class UserPreferencesSchema(_Frozen):
    language: str = "en"
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class FavoritePromptSchema(_Frozen):
    id: str
    content: str
    added_at: datetime | None = None


class UserFavoritesSchema(_Frozen):
    place_ids: list[str] = Field(default_factory=list)
    prompts: list[FavoritePromptSchema] = Field(default_factory=list)


class ContactUsSchema(_Frozen):
    social_links: list[str] = Field(default_factory=list)
    phone_number: str | None = None


# ─── Places ───────────────────────────────────────────────────────────

class PlaceRequest(_Frozen):
    name: str = Field(..., min_length=1)
    description: str = ""
    location: LocationSchema
    category_id: str | None = None
    tags: list[TagSchema] = Field(
        default_factory=list,
        description="Leave empty to have tags generated from the description.",
    )
    pictures: list[str] = Field(default_factory=list)
    rating: float | None = Field(default=None, ge=0.0, le=5.0)


class PlaceResponse(PlaceRequest):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ─── Blogs ────────────────────────────────────────────────────────────

class BlogRequest(_Frozen):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    author_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    pictures: list[str] = Field(default_factory=list)
    comments: list[CommentSchema] = Field(default_factory=list)


class BlogResponse(BlogRequest):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ─── Ratings / reviews / testimonials ────────────────────────────────

class UserRatingRequest(_Frozen):
    user_id: str = Field(..., min_length=1)
    place_id: str = Field(..., min_length=1)
    value: int = Field(..., ge=1, le=5)


class UserRatingResponse(UserRatingRequest):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewRequest(_Frozen):
    user_id: str = Field(..., min_length=1)
    place_id: str = Field(..., min_length=1)
    comment: str = Field(..., min_length=1)
    is_recommended: bool = False


class ReviewResponse(ReviewRequest):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TestimonialRequest(_Frozen):
    user_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    message: str = Field(..., min_length=1, max_length=300)


class TestimonialResponse(TestimonialRequest):
    id: str
    status: TestimonialStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TestimonialStatusRequest(_Frozen):
    status: TestimonialStatus


# ─── History ──────────────────────────────────────────────────────────

class PromptHistoryRequest(_Frozen):
    prompt: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)


class PromptHistoryResponse(PromptHistoryRequest):
    id: str
    created_at: datetime | None = None


class ChatHistoryRequest(_Frozen):
    title: str = Field(..., min_length=1, max_length=255)
    user_id: str = Field(..., min_length=1)
    conversations: list[ConversationSchema] = Field(default_factory=list)


class ChatHistoryResponse(ChatHistoryRequest):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ─── Users / collections ─────────────────────────────────────────────

class UserRequest(_Frozen):
    """User profile.  Favorites are managed through their own endpoints."""

    username: str = Field(..., min_length=1)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    preferences: UserPreferencesSchema = Field(default_factory=UserPreferencesSchema)


class UserResponse(UserRequest):
    id: str
    favorites: UserFavoritesSchema = Field(default_factory=UserFavoritesSchema)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FavoritePromptRequest(_Frozen):
    content: str = Field(..., min_length=1, max_length=1000)


class CollectionRequest(_Frozen):
    name: str = Field(..., min_length=1)
    user_id: str | None = None
    place_ids: list[str] = Field(default_factory=list)


class CollectionResponse(CollectionRequest):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ─── Site content ─────────────────────────────────────────────────────

class AboutRequest(_Frozen):
    title: str = Field(..., min_length=1)
    subtitle: str = ""
    logo: str | None = None
    description: str = ""
    vision: str = ""
    mission: str = ""
    values: list[str] = Field(default_factory=list)
    established_date: date | None = None
    social_media: dict[str, str] = Field(default_factory=dict)


class AboutResponse(AboutRequest):
    id: str


class PrivacyRequest(_Frozen):
    title: str = Field(..., min_length=1)
    effective_date: date | None = None
    last_updated: date | None = None
    introduction: str = ""
    information_we_collect: dict[str, str] = Field(default_factory=dict)
    how_we_use_collected_information: dict[str, str] = Field(default_factory=dict)
    how_we_share_information: str = ""
    how_we_protect_information: str = ""
    your_rights: str = ""
    contact_us: ContactUsSchema = Field(default_factory=ContactUsSchema)


class PrivacyResponse(PrivacyRequest):
    id: str


class FeatureRequest(_Frozen):
    title: str = Field(..., min_length=1)
    description: str = ""
    picture: str | None = None


class FeatureResponse(FeatureRequest):
    id: str
