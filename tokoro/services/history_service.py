"""Prompt history and chat history services."""

from __future__ import annotations

from typing import Any

import structlog

from tokoro.models.dto import (
    ChatHistoryRequest,
    ChatHistoryResponse,
    ConversationSchema,
    PromptHistoryRequest,
    PromptHistoryResponse,
)
from tokoro.interfaces.document_store import IDocumentStore
from tokoro.models.history import ChatHistory, Conversation, PromptHistory
from tokoro.services.entity_service import EntityService
from tokoro.services.resources import CHAT_HISTORIES, PROMPT_HISTORY

logger = structlog.get_logger(logger_name=__name__)


class PromptHistoryService(EntityService[PromptHistoryRequest, PromptHistory, PromptHistoryResponse]):
    def __init__(self, store: IDocumentStore, **kwargs: Any) -> None:
        super().__init__(PROMPT_HISTORY, store, **kwargs)

    async def list_by_user(self, user_id: str) -> list[PromptHistoryResponse]:
        return self._mapper.to_views(await self._find_where("user_id", [user_id]))


class ChatHistoryService(EntityService[ChatHistoryRequest, ChatHistory, ChatHistoryResponse]):
    def __init__(self, store: IDocumentStore, **kwargs: Any) -> None:
        super().__init__(CHAT_HISTORIES, store, **kwargs)

    async def list_by_user(self, user_id: str) -> list[ChatHistoryResponse]:
        return self._mapper.to_views(await self._find_where("user_id", [user_id]))

    async def add_conversation(
        self,
        chat_id: str,
        conversation: ConversationSchema,
    ) -> ChatHistoryResponse:
        """Append *conversation* to the chat and re-stamp ``updated_at``."""
        existing = await self._require(chat_id)
        appended = Conversation.model_validate(conversation.model_dump())
        updated = existing.model_copy(
            update={"conversations": [*existing.conversations, appended]}
        )
        stored = await self._replace(existing, updated)
        logger.info("conversation_added", chat_id=chat_id, conversations=len(stored.conversations))
        return self._mapper.to_view(stored)
