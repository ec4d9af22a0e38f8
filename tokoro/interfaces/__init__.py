"""Public interface definitions for external collaborators.

Services reach the database and the LLM only through these abstract base
classes.  Concrete adapters live in ``tokoro/providers/`` and are chosen in
``tokoro/main.py`` at startup, so tests can inject fakes.

    Interface        →  Concrete implementations (in tokoro/providers/)
    ───────────────────────────────────────────────────────────────────
    IDocumentStore   →  MongoDocumentStore, MemoryDocumentStore
    ILLMProvider     →  OpenAILLMProvider, OllamaLLMProvider
"""

from tokoro.interfaces.document_store import IDocumentStore
from tokoro.interfaces.llm_provider import ILLMProvider

__all__ = ["IDocumentStore", "ILLMProvider"]
