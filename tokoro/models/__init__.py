"""Tokoro domain models: re-exports all public model classes.

The models are organized by domain concern:
    - document.py: ``Document`` base (store-assigned id)
    - tags.py    : Tag / TagSet / Refusal value objects
    - place.py   : Place with Location and Coordinate
    - blog.py    : Blog with embedded Comments
    - feedback.py: UserRating, Review, Testimonial
    - history.py : PromptHistory, ChatHistory with Conversations
    - user.py    : User (preferences, favorites) and Collection
    - site.py    : About, Privacy, Feature editorial content
    - dto.py     : request / view DTO pair per resource (imported as a module,
                   not re-exported here)
"""

from __future__ import annotations

from tokoro.models.blog import Blog, Comment
from tokoro.models.document import Document
from tokoro.models.feedback import Review, Testimonial, TestimonialStatus, UserRating
from tokoro.models.history import ChatHistory, Conversation, PromptHistory
from tokoro.models.place import Coordinate, Location, Place
from tokoro.models.site import About, ContactUs, Feature, Privacy
from tokoro.models.tags import Refusal, Tag, TagGenerationResult, TagSet
from tokoro.models.user import (
    Collection,
    FavoritePrompt,
    User,
    UserFavorites,
    UserPreferences,
)

__all__ = [
    "About",
    "Blog",
    "ChatHistory",
    "Collection",
    "Comment",
    "ContactUs",
    "Conversation",
    "Coordinate",
    "Document",
    "FavoritePrompt",
    "Feature",
    "Location",
    "Place",
    "Privacy",
    "PromptHistory",
    "Refusal",
    "Review",
    "Tag",
    "TagGenerationResult",
    "TagSet",
    "Testimonial",
    "TestimonialStatus",
    "User",
    "UserFavorites",
    "UserPreferences",
    "UserRating",
]
