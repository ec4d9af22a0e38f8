"""Tokoro FastAPI application entry point.

Wires together the document store, the LLM provider, every entity service
and the routes via constructor injection.  Loads configuration from
``.env`` and ``config/config.yaml`` and configures structured logging.

Components are built by :func:`_build_all` and stored on ``app.state``
during the lifespan.  Tests pass a prebuilt ``components`` dict to
:func:`create_app` instead (e.g. an in-memory store and a mocked LLM).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from tokoro import __version__
from tokoro.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from tokoro.api.routes import build_api_router
from tokoro.config.loader import load_config
from tokoro.config.settings import Settings
from tokoro.interfaces.document_store import IDocumentStore
from tokoro.interfaces.llm_provider import ILLMProvider
from tokoro.providers.llm.ollama_provider import OllamaLLMProvider
from tokoro.providers.llm.openai_provider import OpenAILLMProvider
from tokoro.providers.store.memory_store import MemoryDocumentStore
from tokoro.providers.store.mongo_store import MongoDocumentStore
from tokoro.services import resources
from tokoro.services.entity_service import EntityService
from tokoro.services.history_service import ChatHistoryService, PromptHistoryService
from tokoro.services.place_service import PlaceService
from tokoro.services.search_service import SearchService
from tokoro.services.tag_service import TagService
from tokoro.services.testimonial_service import TestimonialService
from tokoro.services.user_service import CollectionService, UserService
from tokoro.utils.errors import ConfigurationError
from tokoro.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=config["logging"]["level"],
    app_env=config["app"]["env"],
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_document_store(app_settings: Settings) -> IDocumentStore:
    """Return the store named by ``DOCUMENT_STORE`` (``mongodb`` or ``memory``)."""
    backend = app_settings.document_store.lower()
    if backend == "mongodb":
        return MongoDocumentStore(settings=app_settings)
    if backend == "memory":
        return MemoryDocumentStore()
    raise ConfigurationError(
        message=f"Unknown DOCUMENT_STORE '{app_settings.document_store}' (expected 'mongodb' or 'memory')"
    )


def _build_llm_provider(app_settings: Settings, text_model: str = "") -> ILLMProvider | None:
    """Select the first available LLM provider.

    Candidates come from ``Settings.get_available_llm_providers`` in priority
    order (OpenAI -> Ollama).  Returns ``None`` when none is available; tag
    generation and search then answer 503.
    """
    for name in app_settings.get_available_llm_providers():
        provider: ILLMProvider
        if name == "openai":
            provider = OpenAILLMProvider(settings=app_settings, text_model=text_model)
        else:
            provider = OllamaLLMProvider(settings=app_settings)
        if provider.is_available():
            return provider
    return None


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(
    app_settings: Settings,
    app_config: dict[str, Any] | None = None,
    *,
    document_store: IDocumentStore | None = None,
    llm_provider: ILLMProvider | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    ``document_store`` / ``llm_provider`` override the settings-based choice.
    """
    app_config = config if app_config is None else app_config
    tags_config = app_config.get("tags", {})
    pagination = app_config.get("pagination", {})
    service_kwargs = {"max_page_size": pagination.get("max_size", 100)}

    # -- Providers --
    store = document_store or _build_document_store(app_settings)
    llm = llm_provider or _build_llm_provider(app_settings, tags_config.get("model", ""))

    # -- Tag generation / search --
    tag_service = None
    if llm is not None:
        tag_service = TagService(
            llm,
            temperature=tags_config.get("temperature", 1.0),
            max_tokens=tags_config.get("max_tokens", 2000),
        )
    else:
        _logger.warning("llm_not_configured", msg="Tag generation and search are disabled.")

    # -- Entity services --
    place_service = PlaceService(
        store,
        tag_service=tag_service,
        auto_tag=app_config.get("places", {}).get("auto_tag", True),
        **service_kwargs,
    )
    testimonial_service = TestimonialService(store, **service_kwargs)
    prompt_history_service = PromptHistoryService(store, **service_kwargs)
    chat_history_service = ChatHistoryService(store, **service_kwargs)
    collection_service = CollectionService(store, **service_kwargs)
    user_service = UserService(store, **service_kwargs)

    specialised: dict[str, EntityService] = {
        resources.PLACES.name: place_service,
        resources.TESTIMONIALS.name: testimonial_service,
        resources.PROMPT_HISTORY.name: prompt_history_service,
        resources.CHAT_HISTORIES.name: chat_history_service,
        resources.COLLECTIONS.name: collection_service,
        resources.USERS.name: user_service,
    }
    entity_services: dict[str, EntityService] = {
        kind.name: specialised.get(kind.name) or EntityService(kind, store, **service_kwargs)
        for kind in resources.ENTITY_KINDS
    }

    search_service = (
        SearchService(tag_service=tag_service, place_service=place_service)
        if tag_service is not None
        else None
    )

    return {
        "settings": app_settings,
        "document_store": store,
        "llm_provider": llm,
        "entity_services": entity_services,
        "place_service": place_service,
        "testimonial_service": testimonial_service,
        "prompt_history_service": prompt_history_service,
        "chat_history_service": chat_history_service,
        "collection_service": collection_service,
        "user_service": user_service,
        "tag_service": tag_service,
        "search_service": search_service,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Wire components onto app.state, initialise the store, close it on shutdown."""
    components = getattr(application.state, "components", None) or _build_all(settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    app_settings: Settings = components.get("settings") or settings
    store: IDocumentStore = components["document_store"]
    await store.initialize()

    llm = components.get("llm_provider")
    llm_verified = await llm.validate_credentials() if llm is not None else False
    if llm is not None and not llm_verified:
        _logger.warning(
            "llm_credentials_unverified",
            provider=llm.get_provider_name(),
            msg="Tag generation and search will fail until the provider answers.",
        )

    _logger.info(
        "app_startup",
        version=__version__,
        environment=app_settings.app_env,
        document_store=store.get_provider_name(),
        llm_provider=llm.get_provider_name() if llm is not None else None,
        llm_verified=llm_verified,
        resources=len(components["entity_services"]),
    )

    yield

    await store.close()
    _logger.info("app_shutdown", message="Document store closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(components: dict[str, Any] | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    components:
        Optional prebuilt components (see :func:`_build_all`).  When
        omitted, the lifespan builds them from the environment.
    """
    application = FastAPI(
        title="Tokoro API",
        version=__version__,
        description=(
            "Places, blogs, ratings, reviews and testimonials over a MongoDB "
            "document store, plus AI tag generation and tag-driven place search."
        ),
        lifespan=_lifespan,
    )
    application.state.components = components

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    app_settings: Settings = (components or {}).get("settings") or settings
    configure_cors(application, allowed_origins=app_settings.cors_allowed_origins)
    register_exception_handlers(application)

    # -- API routes --
    application.include_router(
        build_api_router(default_page_size=config.get("pagination", {}).get("default_size", 20))
    )

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "tokoro.main:app",
        host=config["app"]["host"],
        port=config["app"]["port"],
        reload=(config["app"]["env"] == "development"),
    )
