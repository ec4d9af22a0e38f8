"""Tag value objects and the outcome types of tag generation.

``TagGenerationResult`` is a plain union: the caller branches on
``isinstance(result, Refusal)``.  A refusal is an ordinary return value,
never an exception.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    """A single localized tag, e.g. ``{"lang": "en", "name": "ramen"}``."""

    model_config = ConfigDict(frozen=True)

    lang: str = Field(default="en", description="ISO 639-1 language code.")
    name: str = Field(..., min_length=1, description="Tag text.")


class TagSet(BaseModel):
    """Tags produced by the generator for one prompt."""

    model_config = ConfigDict(frozen=True)

    tags: list[Tag] = Field(default_factory=list)

    def names(self) -> list[str]:
        """Return the tag names, de-duplicated, in first-seen order."""
        return list(dict.fromkeys(tag.name for tag in self.tags))


class Refusal(BaseModel):
    """The generator declined to answer.

    ``status`` is the HTTP status the API answers with when it passes the
    refusal on to the client.
    """

    model_config = ConfigDict(frozen=True)

    reason: str
    status: int = Field(default=400, ge=400, le=599)


TagGenerationResult = Union[TagSet, Refusal]
