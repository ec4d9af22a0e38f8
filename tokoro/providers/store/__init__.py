"""Document store providers.

Two concrete implementations of IDocumentStore (tokoro/interfaces/document_store.py):
    - MongoDocumentStore : MongoDB via pymongo's async client (production)
    - MemoryDocumentStore: process-local dicts (development and tests)

main.py picks one from the DOCUMENT_STORE setting and hands the same
instance to every entity service.
"""

from tokoro.providers.store.memory_store import MemoryDocumentStore
from tokoro.providers.store.mongo_store import MongoDocumentStore

__all__ = ["MemoryDocumentStore", "MongoDocumentStore"]
