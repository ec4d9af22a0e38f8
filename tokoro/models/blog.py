"""Blog post documents with embedded comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tokoro.models.document import Document


class Comment(BaseModel):
    """A reader comment stored inside its blog post."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    value: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Blog(Document):
    title: str
    content: str
    author_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    pictures: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
