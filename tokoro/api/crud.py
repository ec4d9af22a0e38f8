"""Generic CRUD router factory.

``build_crud_router(kind)`` produces the uniform REST surface for one
:class:`EntityKind`:

    GET    /api/{name}/page?page=&size=  → PageResponse[View]
    GET    /api/{name}                   → list[View]
    POST   /api/{name}                   → View
    GET    /api/{name}/{id}              → View   (404 when unknown)
    PUT    /api/{name}/{id}              → View   (404 when unknown)
    DELETE /api/{name}/{id}              → 204    (404 when unknown)

Resource-specific routes are passed as ``extra`` and included first, so
literal paths like ``/batch`` win over the ``/{entity_id}`` catch-all.

This module has no ``from __future__ import annotations``:
FastAPI must see the real request/view classes chosen at build time, and
string annotations naming factory locals cannot be resolved later.
"""

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Query, Request, Response

from tokoro.api.schemas import PageResponse
from tokoro.services.entity_service import EntityKind, EntityService

logger = structlog.get_logger(logger_name=__name__)


# ── Service accessor ──────────────────────────────────────────────────
def get_entity_service(request: Request, name: str) -> EntityService:
    """Retrieve the service for resource *name* from app state; 503 if missing."""
    services = getattr(request.app.state, "entity_services", None) or {}
    svc = services.get(name)
    if svc is None:
        raise HTTPException(status_code=503, detail=f"Service for '{name}' unavailable")
    return svc


def build_crud_router(
    kind: EntityKind,
    *,
    extra: APIRouter | None = None,
    default_page_size: int = 20,
) -> APIRouter:
    """Build the CRUD router for *kind*, mounted at ``/api/{kind.name}``."""
    request_model: Any = kind.mapper.request_model
    view_model: Any = kind.mapper.view_model
    page_model: Any = PageResponse[view_model]

    router = APIRouter(prefix=f"/api/{kind.name}", tags=[kind.name])
    if extra is not None:
        router.include_router(extra)

    @router.get("/page", response_model=page_model)
    async def list_page(
        request: Request,
        page: int = Query(default=0, ge=0),
        size: int = Query(default=default_page_size, ge=1),
    ):
        result = await get_entity_service(request, kind.name).list_page(page, size)
        return page_model(items=result.items, page=result.page, size=result.size, total=result.total)

    @router.get("", response_model=list[view_model])
    async def list_all(request: Request):
        return await get_entity_service(request, kind.name).list_all()

    @router.post("", response_model=view_model)
    async def create(request: Request, body: request_model):
        return await get_entity_service(request, kind.name).create(body)

    @router.get("/{entity_id}", response_model=view_model)
    async def get_by_id(request: Request, entity_id: str):
        return await get_entity_service(request, kind.name).get_by_id(entity_id)

    @router.put("/{entity_id}", response_model=view_model)
    async def update(request: Request, entity_id: str, body: request_model):
        return await get_entity_service(request, kind.name).update(entity_id, body)

    @router.delete("/{entity_id}", status_code=204, response_class=Response)
    async def delete(request: Request, entity_id: str):
        await get_entity_service(request, kind.name).delete(entity_id)
        return Response(status_code=204)

    logger.debug("crud_router_built", resource=kind.name, prefix=router.prefix)
    return router
