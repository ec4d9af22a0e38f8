"""Unit tests for factory functions in tokoro/main.py.

Tests document store selection, LLM provider priority, _build_all
assembly and the create_app factory, with no network access.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tokoro.config.settings import Settings
from tokoro.providers.store.memory_store import MemoryDocumentStore
from tokoro.services import resources
from tokoro.services.entity_service import EntityService
from tokoro.services.place_service import PlaceService
from tokoro.utils.errors import ConfigurationError


# ======================================================================
# Shared helpers
# ======================================================================


def _settings(**overrides) -> Settings:
    """Build a Settings instance with no LLM configured unless overridden."""
    defaults = {
        "openai_api_key": "",
        "openai_base_url": "",
        "openai_text_model": "",
        "ollama_base_url": "",
        "document_store": "memory",
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


# ======================================================================
# _build_document_store
# ======================================================================


class TestBuildDocumentStore:
    def test_memory(self) -> None:
        from tokoro.main import _build_document_store

        assert isinstance(_build_document_store(_settings()), MemoryDocumentStore)

    def test_mongodb(self) -> None:
        from tokoro.main import _build_document_store

        with patch("tokoro.providers.store.mongo_store.AsyncMongoClient") as client_cls:
            store = _build_document_store(_settings(document_store="MongoDB"))

        assert store.get_provider_name() == "mongodb"
        client_cls.assert_called_once()

    def test_unknown_backend(self) -> None:
        from tokoro.main import _build_document_store

        with pytest.raises(ConfigurationError):
            _build_document_store(_settings(document_store="redis"))


# ======================================================================
# _build_llm_provider
# ======================================================================


class TestBuildLLMProvider:
    """Tests for the _build_llm_provider factory: provider priority order."""

    def test_openai_priority(self) -> None:
        from tokoro.main import _build_llm_provider

        with patch("tokoro.providers.llm.openai_provider.openai.AsyncOpenAI"):
            provider = _build_llm_provider(
                _settings(openai_api_key="sk-test", ollama_base_url="http://localhost:11434")
            )
        assert provider.get_provider_name() == "openai"

    def test_ollama_fallback(self) -> None:
        from tokoro.main import _build_llm_provider

        with patch("tokoro.providers.llm.ollama_provider.openai.AsyncOpenAI"):
            provider = _build_llm_provider(_settings(ollama_base_url="http://localhost:11434"))
        assert provider.get_provider_name() == "ollama"

    def test_unavailable_provider_is_skipped(self) -> None:
        from tokoro.main import _build_llm_provider

        with (
            patch("tokoro.providers.llm.openai_provider.openai.AsyncOpenAI"),
            patch("tokoro.providers.llm.ollama_provider.openai.AsyncOpenAI"),
            patch("tokoro.main.OpenAILLMProvider.is_available", return_value=False),
        ):
            provider = _build_llm_provider(
                _settings(openai_api_key="sk-test", ollama_base_url="http://localhost:11434")
            )
        assert provider.get_provider_name() == "ollama"

    def test_config_model_reaches_openai(self) -> None:
        from tokoro.main import _build_llm_provider

        with patch("tokoro.providers.llm.openai_provider.openai.AsyncOpenAI"):
            provider = _build_llm_provider(_settings(openai_api_key="sk-test"), "gpt-4.1-mini")
        assert provider._text_model == "gpt-4.1-mini"

    def test_none_configured(self) -> None:
        from tokoro.main import _build_llm_provider

        assert _build_llm_provider(_settings()) is None


# ======================================================================
# _build_all
# ======================================================================


class TestBuildAll:
    def test_every_resource_has_a_service(self, mock_config, mock_llm_provider) -> None:
        from tokoro.main import _build_all

        components = _build_all(
            _settings(),
            mock_config,
            document_store=MemoryDocumentStore(),
            llm_provider=mock_llm_provider,
        )

        services = components["entity_services"]
        assert set(services) == {kind.name for kind in resources.ENTITY_KINDS}
        assert all(isinstance(svc, EntityService) for svc in services.values())
        assert services["places"] is components["place_service"]
        assert services["users"] is components["user_service"]
        assert services["blogs"].kind is resources.BLOGS

    def test_services_share_one_store(self, mock_config, mock_llm_provider) -> None:
        from tokoro.main import _build_all

        store = MemoryDocumentStore()
        components = _build_all(_settings(), mock_config, document_store=store, llm_provider=mock_llm_provider)

        assert components["document_store"] is store
        assert all(svc._store is store for svc in components["entity_services"].values())

    def test_search_wired_when_llm_present(self, mock_config, mock_llm_provider) -> None:
        from tokoro.main import _build_all

        components = _build_all(
            _settings(), mock_config, document_store=MemoryDocumentStore(), llm_provider=mock_llm_provider
        )

        assert components["tag_service"].provider_name == "mock-llm"
        assert components["search_service"] is not None

    def test_no_llm_disables_tags_and_search(self, mock_config) -> None:
        from tokoro.main import _build_all

        components = _build_all(_settings(), mock_config, document_store=MemoryDocumentStore())

        assert components["llm_provider"] is None
        assert components["tag_service"] is None
        assert components["search_service"] is None
        assert isinstance(components["place_service"], PlaceService)

    def test_page_size_from_config(self, mock_config, mock_llm_provider) -> None:
        from tokoro.main import _build_all

        mock_config["pagination"]["max_size"] = 7
        components = _build_all(
            _settings(), mock_config, document_store=MemoryDocumentStore(), llm_provider=mock_llm_provider
        )

        assert components["entity_services"]["features"]._max_page_size == 7


# ======================================================================
# create_app
# ======================================================================


class TestCreateApp:
    def test_returns_fastapi_with_all_routes(self) -> None:
        from tokoro.main import create_app

        application = create_app(components={})
        paths = set(application.openapi()["paths"])

        assert isinstance(application, FastAPI)
        assert "/health" in paths
        assert "/api/tags" in paths
        assert "/api/search/{query}" in paths
        for kind in resources.ENTITY_KINDS:
            assert f"/api/{kind.name}" in paths
            assert f"/api/{kind.name}/{{entity_id}}" in paths
            assert f"/api/{kind.name}/page" in paths


# ======================================================================
# Lifespan
# ======================================================================


def _event(mock_logger, method: str, event: str) -> dict:
    calls = [c for c in getattr(mock_logger, method).call_args_list if c.args and c.args[0] == event]
    assert calls, f"{event} was not logged"
    return calls[-1].kwargs


class TestLifespan:
    def test_startup_reports_component_settings(self, mock_config, mock_llm_provider) -> None:
        from tokoro.main import _build_all, create_app

        components = _build_all(
            _settings(app_env="staging"),
            mock_config,
            document_store=MemoryDocumentStore(),
            llm_provider=mock_llm_provider,
        )
        with patch("tokoro.main._logger") as mock_logger:
            with TestClient(create_app(components=components)) as client:
                assert client.app.state.settings.app_env == "staging"

        startup = _event(mock_logger, "info", "app_startup")
        assert startup["environment"] == "staging"
        assert startup["llm_provider"] == "mock-llm"
        assert startup["llm_verified"] is True
        mock_llm_provider.validate_credentials.assert_awaited_once()

    def test_unverified_credentials_are_logged(self, mock_config, mock_llm_provider) -> None:
        from tokoro.main import _build_all, create_app

        mock_llm_provider.validate_credentials = AsyncMock(return_value=False)
        components = _build_all(
            _settings(), mock_config, document_store=MemoryDocumentStore(), llm_provider=mock_llm_provider
        )
        with patch("tokoro.main._logger") as mock_logger:
            with TestClient(create_app(components=components)):
                pass

        assert _event(mock_logger, "warning", "llm_credentials_unverified")["provider"] == "mock-llm"
        assert _event(mock_logger, "info", "app_startup")["llm_verified"] is False

    def test_store_initialized_and_closed(self, mock_config) -> None:
        from tokoro.main import _build_all, create_app

        store = MemoryDocumentStore()
        store.initialize = AsyncMock()
        store.close = AsyncMock()
        components = _build_all(_settings(), mock_config, document_store=store)

        with TestClient(create_app(components=components)):
            store.initialize.assert_awaited_once()
            store.close.assert_not_awaited()
        store.close.assert_awaited_once()
