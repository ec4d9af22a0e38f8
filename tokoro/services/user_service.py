"""User and collection services.

Users own their favorites: place ids and pinned prompts are embedded in the
user document.  The user request DTO cannot express favorites, so a profile
update carries the stored favorites over instead of wiping them.

Adding something that is already present and removing a place that is
absent are no-ops; removing an unknown favorite prompt is a NotFoundError
because the caller addressed it by its own id.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import structlog

from tokoro.models.dto import (
    CollectionRequest,
    CollectionResponse,
    FavoritePromptSchema,
    UserFavoritesSchema,
    UserRequest,
    UserResponse,
)
from tokoro.interfaces.document_store import IDocumentStore
from tokoro.models.user import Collection, FavoritePrompt, User, UserFavorites
from tokoro.services.entity_service import EntityService
from tokoro.services.resources import COLLECTIONS, USERS
from tokoro.utils.errors import NotFoundError

logger = structlog.get_logger(logger_name=__name__)


def _favorites_view(favorites: UserFavorites) -> UserFavoritesSchema:
    return UserFavoritesSchema.model_validate(favorites.model_dump())


class UserService(EntityService[UserRequest, User, UserResponse]):
    def __init__(self, store: IDocumentStore, **kwargs: Any) -> None:
        super().__init__(USERS, store, **kwargs)

    def _carry_over(self, existing: User, replacement: User) -> User:
        return replacement.model_copy(update={"favorites": existing.favorites})

    # ── Favorites ─────────────────────────────────────────────────────

    async def get_favorites(self, user_id: str) -> UserFavoritesSchema:
        user = await self._require(user_id)
        return _favorites_view(user.favorites)

    async def add_favorite_place(self, user_id: str, place_id: str) -> UserFavoritesSchema:
        user = await self._require(user_id)
        if place_id in user.favorites.place_ids:
            return _favorites_view(user.favorites)
        favorites = user.favorites.model_copy(
            update={"place_ids": [*user.favorites.place_ids, place_id]}
        )
        stored = await self._save_favorites(user, favorites)
        logger.info("favorite_place_added", user_id=user_id, place_id=place_id)
        return _favorites_view(stored.favorites)

    async def remove_favorite_place(self, user_id: str, place_id: str) -> UserFavoritesSchema:
        user = await self._require(user_id)
        if place_id not in user.favorites.place_ids:
            return _favorites_view(user.favorites)
        favorites = user.favorites.model_copy(
            update={"place_ids": [p for p in user.favorites.place_ids if p != place_id]}
        )
        stored = await self._save_favorites(user, favorites)
        logger.info("favorite_place_removed", user_id=user_id, place_id=place_id)
        return _favorites_view(stored.favorites)

    async def add_favorite_prompt(self, user_id: str, content: str) -> FavoritePromptSchema:
        user = await self._require(user_id)
        prompt = FavoritePrompt(id=str(uuid4()), content=content, added_at=self._clock())
        favorites = user.favorites.model_copy(
            update={"prompts": [*user.favorites.prompts, prompt]}
        )
        await self._save_favorites(user, favorites)
        logger.info("favorite_prompt_added", user_id=user_id, prompt_id=prompt.id)
        return FavoritePromptSchema.model_validate(prompt.model_dump())

    async def remove_favorite_prompt(self, user_id: str, prompt_id: str) -> UserFavoritesSchema:
        user = await self._require(user_id)
        remaining = [p for p in user.favorites.prompts if p.id != prompt_id]
        if len(remaining) == len(user.favorites.prompts):
            raise NotFoundError("Favorite prompt", prompt_id)
        stored = await self._save_favorites(
            user, user.favorites.model_copy(update={"prompts": remaining})
        )
        logger.info("favorite_prompt_removed", user_id=user_id, prompt_id=prompt_id)
        return _favorites_view(stored.favorites)

    async def _save_favorites(self, user: User, favorites: UserFavorites) -> User:
        return await self._replace(user, user.model_copy(update={"favorites": favorites}))


class CollectionService(EntityService[CollectionRequest, Collection, CollectionResponse]):
    def __init__(self, store: IDocumentStore, **kwargs: Any) -> None:
        super().__init__(COLLECTIONS, store, **kwargs)

    async def add_place(self, collection_id: str, place_id: str) -> CollectionResponse:
        existing = await self._require(collection_id)
        if place_id in existing.place_ids:
            return self._mapper.to_view(existing)
        stored = await self._replace(
            existing,
            existing.model_copy(update={"place_ids": [*existing.place_ids, place_id]}),
        )
        return self._mapper.to_view(stored)

    async def remove_place(self, collection_id: str, place_id: str) -> CollectionResponse:
        existing = await self._require(collection_id)
        if place_id not in existing.place_ids:
            return self._mapper.to_view(existing)
        stored = await self._replace(
            existing,
            existing.model_copy(update={"place_ids": [p for p in existing.place_ids if p != place_id]}),
        )
        return self._mapper.to_view(stored)
