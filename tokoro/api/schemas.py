"""API-only request and response envelopes.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: API.  Per-resource DTOs live in ``tokoro/models/dto.py`` so the
# services can return them without importing this package.  This module
# holds only the bodies that exist because of HTTP: the tag prompt, the
# page and error envelopes, and the health check.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from tokoro.models.dto import TagSchema

ViewT = TypeVar("ViewT", bound=BaseModel)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ─── Tags / search ────────────────────────────────────────────────────

class TagsRequest(_Frozen):
    message: str = Field(..., min_length=1, description="Free-text prompt to tag.")


class TagsResponse(_Frozen):
    tags: list[TagSchema] = Field(default_factory=list)


# ─── Envelopes ────────────────────────────────────────────────────────

class PageResponse(BaseModel, Generic[ViewT]):
    """One window of a collection listing."""

    model_config = ConfigDict(frozen=True)

    items: list[ViewT]
    page: int
    size: int
    total: int


class ErrorResponse(_Frozen):
    """Standard error body; refusals use the same shape."""

    message: str
    status: int


class HealthResponse(_Frozen):
    status: str
    document_store: str
    llm_provider: str | None = None
