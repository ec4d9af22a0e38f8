"""User and collection documents.

Favorites live on the user document: favorite places are id references,
favorite prompts are small embedded records with their own uuid.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tokoro.models.document import Document


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str = "en"
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class FavoritePrompt(BaseModel):
    """A prompt the user pinned for reuse."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    added_at: datetime | None = None


class UserFavorites(BaseModel):
    model_config = ConfigDict(frozen=True)

    place_ids: list[str] = Field(default_factory=list)
    prompts: list[FavoritePrompt] = Field(default_factory=list)


class User(Document):
    username: str
    email: str
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    favorites: UserFavorites = Field(default_factory=UserFavorites)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Collection(Document):
    """A named list of places, e.g. "Weekend in Kyoto"."""

    name: str
    user_id: str | None = None
    place_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
