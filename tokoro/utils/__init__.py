"""Utility modules for Tokoro.

- **errors** -- Domain exception hierarchy rooted at TokoroError; the API
  middleware maps each subclass to an HTTP status.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from tokoro.utils.errors import (
    ConfigurationError,
    ContentRefusedError,
    DocumentStoreError,
    InvalidInputError,
    LLMError,
    NotFoundError,
    ProviderUnavailableError,
    TokoroError,
)
from tokoro.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "ContentRefusedError",
    "DocumentStoreError",
    "InvalidInputError",
    "LLMError",
    "NotFoundError",
    "ProviderUnavailableError",
    "TokoroError",
    "configure_logging",
    "get_logger",
]
