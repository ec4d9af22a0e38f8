"""Shared pytest fixtures for the Tokoro test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from tokoro.models import dto
from tokoro.interfaces.llm_provider import ILLMProvider
from tokoro.providers.store.memory_store import MemoryDocumentStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Deterministic clock: each call returns the next minute after ``start``."""

    def __init__(self, start: datetime | None = None) -> None:
        self._next = start or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self._next
        self._next = current + timedelta(minutes=1)
        return current


def place_request(name: str = "Ichiran Shibuya", tags: list[str] | None = None, **overrides: Any) -> dto.PlaceRequest:
    """Build a valid PlaceRequest with optional tag names."""
    fields: dict[str, Any] = {
        "name": name,
        "description": "Tonkotsu ramen in private booths.",
        "location": {
            "address": "1-22-7 Jinnan",
            "city": "Tokyo",
            "country": "Japan",
            "coordinate": {"latitude": 35.661, "longitude": 139.700},
        },
        "tags": [{"lang": "en", "name": tag} for tag in (tags or [])],
    }
    fields.update(overrides)
    return dto.PlaceRequest.model_validate(fields)


def place_payload(name: str = "Ichiran Shibuya", tags: list[str] | None = None) -> dict[str, Any]:
    """JSON body for ``POST /api/places``."""
    return place_request(name, tags).model_dump(mode="json")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    """Fresh in-memory document store per test."""
    return MemoryDocumentStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Return a minimal configuration for testing."""
    return {
        "app": {"name": "tokoro", "version": "0.1.0"},
        "tags": {"model": "gpt-4o-mini", "temperature": 1.0, "max_tokens": 2000},
        "pagination": {"default_size": 20, "max_size": 100},
        "places": {"auto_tag": True},
    }


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider that returns configurable responses.

    Default complete() returns one English tag and moderate() flags nothing.
    Override with mock_llm_provider.complete.return_value = "..." or
    mock_llm_provider.complete.side_effect = ... for specific tests.
    """
    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "mock-llm"
    mock.is_available.return_value = True
    mock.validate_credentials = AsyncMock(return_value=True)
    mock.moderate = AsyncMock(return_value=False)
    mock.complete = AsyncMock(return_value='{"tags": [{"lang": "en", "name": "ramen"}]}')
    return mock
