"""Abstract base class for document store providers.

Defines the contract for the key-addressed persistence collaborator every
entity service talks to.  One collection per entity kind; documents are
plain ``dict`` objects whose identifier travels under the ``"id"`` key.
Implementations translate that key to whatever their backend uses (MongoDB
stores it as ``_id``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# Concrete implementations: MongoDocumentStore, MemoryDocumentStore
# Located in: tokoro/providers/store/
class IDocumentStore(ABC):
    """Contract for document persistence used by the entity services.

    All operations are async and each one is a single round-trip to the
    backend.  No operation validates cross-document references.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (connect, create indexes).  Safe to call twice."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the provider."""

    @abstractmethod
    async def save(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace a document.

        Parameters
        ----------
        collection:
            Collection name.
        document:
            Document body.  When it carries an ``"id"`` the stored document
            with that id is replaced (or created under that id); otherwise
            the store assigns a fresh identifier.

        Returns
        -------
        dict
            The stored document, including its ``"id"``.

        Raises
        ------
        tokoro.utils.errors.DocumentStoreError
            If the backend rejects the write.
        """

    @abstractmethod
    async def find_by_id(self, collection: str, document_id: str) -> dict[str, Any] | None:
        """Return the document stored under *document_id*, or ``None``."""

    @abstractmethod
    async def find_all(
        self,
        collection: str,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return documents of *collection*, optionally windowed.

        Order is the backend's natural order and is not guaranteed stable.
        """

    @abstractmethod
    async def find_where(
        self,
        collection: str,
        field: str,
        values: list[Any],
    ) -> list[dict[str, Any]]:
        """Return documents whose *field* matches any of *values*.

        Parameters
        ----------
        collection:
            Collection name.
        field:
            Dotted path into the document (``"status"``, ``"tags.name"``).
            Arrays along the path are descended, so a document matches when
            any element carries one of the values.  ``"id"`` addresses the
            document identifier.
        values:
            Candidate values; an empty list matches nothing.
        """

    @abstractmethod
    async def count(self, collection: str) -> int:
        """Return the number of documents in *collection*."""

    @abstractmethod
    async def sample(self, collection: str, size: int) -> list[dict[str, Any]]:
        """Return up to *size* documents chosen at random."""

    @abstractmethod
    async def remove(self, collection: str, document_id: str) -> bool:
        """Delete the document under *document_id*.

        Returns
        -------
        bool
            ``True`` if a document was removed, ``False`` if none matched.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this backend, e.g. ``"mongodb"``."""
