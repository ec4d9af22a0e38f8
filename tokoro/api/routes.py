"""Resource-specific routes and the assembled API router.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: API (FastAPI route handlers).
# Pattern: Routes access services via ``request.app.state.<name>``; no
#          ``Depends()`` for singleton services.
#
# The uniform CRUD surface comes from ``tokoro.api.crud``.  This module adds
# the extra endpoints some resources have and stitches everything into one
# ``router`` (see build_api_router).  Extra routers are included *before* the
# CRUD catch-all ``/{entity_id}``, so literal segments win.
#
#   GET    /api/places/batch?ids=...              : places by id list
#   GET    /api/places/random/{count}             : random sample
#   GET    /api/places/tags?names=...             : places by tag names
#   PATCH  /api/testimonials/{id}/status          : moderate
#   GET    /api/testimonials/status/{status}      : by status
#   GET    /api/testimonials/user/{user_id}       : by author
#   GET    /api/testimonials/random/{count}       : approved sample
#   GET    /api/chat-histories/user/{user_id}     : by user
#   POST   /api/chat-histories/{id}/conversations : append
#   POST   /api/collections/{id}/places/{place_id}: add place
#   DELETE /api/collections/{id}/places/{place_id}: remove place
#   GET    /api/users/{id}/favorites              : favorites
#   POST   /api/users/{id}/favorites/places/{pid} : add favorite place
#   DELETE /api/users/{id}/favorites/places/{pid} : remove favorite place
#   POST   /api/users/{id}/favorites/prompts      : pin a prompt
#   DELETE /api/users/{id}/favorites/prompts/{pid}: unpin a prompt
#   GET    /api/prompt-history/user/{user_id}     : by user
#   POST   /api/tags                              : generate tags
#   GET    /api/search/{query}                    : tag-driven search
#   GET    /health                                : liveness + backends
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from tokoro.api.crud import build_crud_router
from tokoro.api.middleware import error_response
from tokoro.api.schemas import HealthResponse, TagsRequest, TagsResponse
from tokoro.models.dto import (
    ChatHistoryResponse,
    CollectionResponse,
    ConversationSchema,
    FavoritePromptRequest,
    FavoritePromptSchema,
    PlaceResponse,
    PromptHistoryResponse,
    TagSchema,
    TestimonialResponse,
    TestimonialStatusRequest,
    UserFavoritesSchema,
)
from tokoro.models.feedback import TestimonialStatus
from tokoro.models.tags import Refusal
from tokoro.services import resources

logger = structlog.get_logger(logger_name=__name__)


# ── Service accessor ──────────────────────────────────────────────────
def _get_service(request: Request, name: str) -> Any:
    """Retrieve a service from app state; raise 503 if it is not wired."""
    svc = getattr(request.app.state, name, None)
    if svc is None:
        raise HTTPException(status_code=503, detail=f"{name.replace('_', ' ').capitalize()} unavailable")
    return svc


def _refusal_response(refusal: Refusal) -> JSONResponse:
    return error_response(refusal.reason, refusal.status)


# ── Places ────────────────────────────────────────────────────────────
places_router = APIRouter()


@places_router.get("/batch", response_model=list[PlaceResponse])
async def get_places_batch(
    request: Request,
    ids: list[str] = Query(...),
) -> list[PlaceResponse]:
    """Return the places for the given ids; unknown ids are skipped."""
    return await _get_service(request, "place_service").get_many(ids)


@places_router.get("/random/{count}", response_model=list[PlaceResponse])
async def get_random_places(request: Request, count: int) -> list[PlaceResponse]:
    return await _get_service(request, "place_service").sample(count)


@places_router.get("/tags", response_model=list[PlaceResponse])
async def get_places_by_tags(
    request: Request,
    names: list[str] = Query(...),
) -> list[PlaceResponse]:
    """Return places carrying any of the tag *names*, best match first."""
    return await _get_service(request, "place_service").get_places_by_tags(names)


# ── Testimonials ──────────────────────────────────────────────────────
testimonials_router = APIRouter()


@testimonials_router.patch("/{testimonial_id}/status", response_model=TestimonialResponse)
async def update_testimonial_status(
    request: Request,
    testimonial_id: str,
    body: TestimonialStatusRequest,
) -> TestimonialResponse:
    return await _get_service(request, "testimonial_service").update_status(
        testimonial_id, body.status
    )


@testimonials_router.get("/status/{status}", response_model=list[TestimonialResponse])
async def get_testimonials_by_status(
    request: Request,
    status: TestimonialStatus,
) -> list[TestimonialResponse]:
    return await _get_service(request, "testimonial_service").list_by_status(status)


@testimonials_router.get("/user/{user_id}", response_model=list[TestimonialResponse])
async def get_testimonials_by_user(request: Request, user_id: str) -> list[TestimonialResponse]:
    return await _get_service(request, "testimonial_service").list_by_user(user_id)


@testimonials_router.get("/random/{count}", response_model=list[TestimonialResponse])
async def get_random_testimonials(request: Request, count: int) -> list[TestimonialResponse]:
    """Return up to *count* approved testimonials in random order."""
    return await _get_service(request, "testimonial_service").random_approved(count)


# ── Chat histories ────────────────────────────────────────────────────
chat_histories_router = APIRouter()


@chat_histories_router.get("/user/{user_id}", response_model=list[ChatHistoryResponse])
async def get_chat_histories_by_user(request: Request, user_id: str) -> list[ChatHistoryResponse]:
    return await _get_service(request, "chat_history_service").list_by_user(user_id)


@chat_histories_router.post("/{chat_id}/conversations", response_model=ChatHistoryResponse)
async def add_conversation(
    request: Request,
    chat_id: str,
    body: ConversationSchema,
) -> ChatHistoryResponse:
    return await _get_service(request, "chat_history_service").add_conversation(chat_id, body)


# ── Collections ───────────────────────────────────────────────────────
collections_router = APIRouter()


@collections_router.post("/{collection_id}/places/{place_id}", response_model=CollectionResponse)
async def add_place_to_collection(
    request: Request,
    collection_id: str,
    place_id: str,
) -> CollectionResponse:
    return await _get_service(request, "collection_service").add_place(collection_id, place_id)


@collections_router.delete("/{collection_id}/places/{place_id}", response_model=CollectionResponse)
async def remove_place_from_collection(
    request: Request,
    collection_id: str,
    place_id: str,
) -> CollectionResponse:
    return await _get_service(request, "collection_service").remove_place(collection_id, place_id)


# ── Users / favorites ─────────────────────────────────────────────────
users_router = APIRouter()


@users_router.get("/{user_id}/favorites", response_model=UserFavoritesSchema)
async def get_favorites(request: Request, user_id: str) -> UserFavoritesSchema:
    return await _get_service(request, "user_service").get_favorites(user_id)


@users_router.post("/{user_id}/favorites/places/{place_id}", response_model=UserFavoritesSchema)
async def add_favorite_place(request: Request, user_id: str, place_id: str) -> UserFavoritesSchema:
    return await _get_service(request, "user_service").add_favorite_place(user_id, place_id)


@users_router.delete("/{user_id}/favorites/places/{place_id}", response_model=UserFavoritesSchema)
async def remove_favorite_place(request: Request, user_id: str, place_id: str) -> UserFavoritesSchema:
    return await _get_service(request, "user_service").remove_favorite_place(user_id, place_id)


@users_router.post("/{user_id}/favorites/prompts", response_model=FavoritePromptSchema)
async def add_favorite_prompt(
    request: Request,
    user_id: str,
    body: FavoritePromptRequest,
) -> FavoritePromptSchema:
    return await _get_service(request, "user_service").add_favorite_prompt(user_id, body.content)


@users_router.delete("/{user_id}/favorites/prompts/{prompt_id}", response_model=UserFavoritesSchema)
async def remove_favorite_prompt(request: Request, user_id: str, prompt_id: str) -> UserFavoritesSchema:
    return await _get_service(request, "user_service").remove_favorite_prompt(user_id, prompt_id)


# ── Prompt history ────────────────────────────────────────────────────
prompt_history_router = APIRouter()


@prompt_history_router.get("/user/{user_id}", response_model=list[PromptHistoryResponse])
async def get_prompt_history_by_user(request: Request, user_id: str) -> list[PromptHistoryResponse]:
    return await _get_service(request, "prompt_history_service").list_by_user(user_id)


# ── Tags and search ───────────────────────────────────────────────────
search_router = APIRouter(prefix="/api", tags=["search"])


@search_router.post("/tags", response_model=TagsResponse)
async def generate_tags(request: Request, body: TagsRequest) -> Any:
    """Generate tags for a prompt; a refusal answers with its own status."""
    result = await _get_service(request, "tag_service").generate_tags(body.message)
    if isinstance(result, Refusal):
        return _refusal_response(result)
    return TagsResponse(tags=[TagSchema(lang=tag.lang, name=tag.name) for tag in result.tags])


@search_router.get("/search/{query}", response_model=list[PlaceResponse])
async def search_places(request: Request, query: str) -> Any:
    """Find places for a free-text query via generated tags."""
    result = await _get_service(request, "search_service").search(query)
    if isinstance(result, Refusal):
        return _refusal_response(result)
    return result


# ── Health ────────────────────────────────────────────────────────────
health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    store = _get_service(request, "document_store")
    tag_service = getattr(request.app.state, "tag_service", None)
    return HealthResponse(
        status="ok",
        document_store=store.get_provider_name(),
        llm_provider=tag_service.provider_name if tag_service is not None else None,
    )


# ── Assembly ──────────────────────────────────────────────────────────
_EXTRA_ROUTERS: dict[str, APIRouter] = {
    resources.PLACES.name: places_router,
    resources.TESTIMONIALS.name: testimonials_router,
    resources.CHAT_HISTORIES.name: chat_histories_router,
    resources.COLLECTIONS.name: collections_router,
    resources.USERS.name: users_router,
    resources.PROMPT_HISTORY.name: prompt_history_router,
}


def build_api_router(default_page_size: int = 20) -> APIRouter:
    """Assemble CRUD routers for every registered resource plus search and health."""
    api_router = APIRouter()
    for kind in resources.ENTITY_KINDS:
        api_router.include_router(
            build_crud_router(
                kind,
                extra=_EXTRA_ROUTERS.get(kind.name),
                default_page_size=default_page_size,
            )
        )
    api_router.include_router(search_router)
    api_router.include_router(health_router)
    return api_router
