"""Base class for persisted documents.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph: no imports from upper layers).
#
# A *document* is the shape an entity has inside the document store.  It is
# distinct from the wire DTOs in ``tokoro/models/dto.py``: the mapper in
# ``tokoro/services/mapper.py`` converts between the two.
#
#   - ``id`` is ``None`` until the store assigns one; after that it never
#     changes.
#   - Documents are frozen.  Changes produce a new instance through
#     ``model_copy(update={...})``.
#   - ``created_at`` / ``updated_at`` are declared per document.  The entity
#     service stamps whichever of them a document declares.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Common root of every stored document."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Store-assigned identifier.")
