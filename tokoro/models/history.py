"""Prompt history and chat history documents."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tokoro.models.document import Document


class PromptHistory(Document):
    """One search prompt a user submitted."""

    prompt: str
    user_id: str
    created_at: datetime | None = None


class Conversation(BaseModel):
    """A prompt and the places that answered it."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., max_length=1000)
    place_ids: list[str] = Field(default_factory=list)


class ChatHistory(Document):
    """A titled thread of conversations belonging to one user."""

    title: str = Field(..., max_length=255)
    user_id: str
    conversations: list[Conversation] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
