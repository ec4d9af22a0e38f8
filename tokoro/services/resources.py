"""Registry of every CRUD resource the API exposes.

Each :class:`EntityKind` binds a route name, a collection, a label and the
mapper between its request DTO, document and view DTO.  ``main.py`` builds
one service per entry and ``tokoro.api.crud`` one router per entry.
"""

from __future__ import annotations

from tokoro.models import dto
from tokoro.models.blog import Blog
from tokoro.models.feedback import Review, Testimonial, UserRating
from tokoro.models.history import ChatHistory, PromptHistory
from tokoro.models.place import Place
from tokoro.models.site import About, Feature, Privacy
from tokoro.models.user import Collection, User
from tokoro.services.entity_service import EntityKind
from tokoro.services.mapper import DocumentMapper, ReviewMapper

PLACES = EntityKind(
    name="places",
    collection="places",
    label="Place",
    mapper=DocumentMapper(dto.PlaceRequest, Place, dto.PlaceResponse),
)
BLOGS = EntityKind(
    name="blogs",
    collection="blogs",
    label="Blog",
    mapper=DocumentMapper(dto.BlogRequest, Blog, dto.BlogResponse),
)
USER_RATINGS = EntityKind(
    name="user-ratings",
    collection="user_ratings",
    label="User rating",
    mapper=DocumentMapper(dto.UserRatingRequest, UserRating, dto.UserRatingResponse),
)
REVIEWS = EntityKind(
    name="reviews",
    collection="reviews",
    label="Review",
    mapper=ReviewMapper(dto.ReviewRequest, Review, dto.ReviewResponse),
)
TESTIMONIALS = EntityKind(
    name="testimonials",
    collection="testimonials",
    label="Testimonial",
    mapper=DocumentMapper(dto.TestimonialRequest, Testimonial, dto.TestimonialResponse),
)
PROMPT_HISTORY = EntityKind(
    name="prompt-history",
    collection="prompt_history",
    label="Prompt history",
    mapper=DocumentMapper(dto.PromptHistoryRequest, PromptHistory, dto.PromptHistoryResponse),
)
CHAT_HISTORIES = EntityKind(
    name="chat-histories",
    collection="chat_histories",
    label="Chat history",
    mapper=DocumentMapper(dto.ChatHistoryRequest, ChatHistory, dto.ChatHistoryResponse),
)
COLLECTIONS = EntityKind(
    name="collections",
    collection="collections",
    label="Collection",
    mapper=DocumentMapper(dto.CollectionRequest, Collection, dto.CollectionResponse),
)
USERS = EntityKind(
    name="users",
    collection="users",
    label="User",
    mapper=DocumentMapper(dto.UserRequest, User, dto.UserResponse),
)
ABOUT = EntityKind(
    name="about",
    collection="about",
    label="About",
    mapper=DocumentMapper(dto.AboutRequest, About, dto.AboutResponse),
)
PRIVACY = EntityKind(
    name="privacy",
    collection="privacy",
    label="Privacy",
    mapper=DocumentMapper(dto.PrivacyRequest, Privacy, dto.PrivacyResponse),
)
FEATURES = EntityKind(
    name="features",
    collection="features",
    label="Feature",
    mapper=DocumentMapper(dto.FeatureRequest, Feature, dto.FeatureResponse),
)

ENTITY_KINDS: tuple[EntityKind, ...] = (
    PLACES,
    BLOGS,
    USER_RATINGS,
    REVIEWS,
    TESTIMONIALS,
    PROMPT_HISTORY,
    CHAT_HISTORIES,
    COLLECTIONS,
    USERS,
    ABOUT,
    PRIVACY,
    FEATURES,
)
