"""Unit tests for prompt history and chat history services."""

from __future__ import annotations

import pytest

from tokoro.models import dto
from tokoro.services.history_service import ChatHistoryService, PromptHistoryService
from tokoro.utils.errors import NotFoundError


class TestPromptHistory:
    @pytest.mark.asyncio
    async def test_list_by_user(self, memory_store, clock) -> None:
        service = PromptHistoryService(memory_store, clock=clock)
        await service.create(dto.PromptHistoryRequest(prompt="ramen", user_id="u1"))
        await service.create(dto.PromptHistoryRequest(prompt="onsen", user_id="u2"))

        mine = await service.list_by_user("u1")

        assert [p.prompt for p in mine] == ["ramen"]
        assert mine[0].created_at is not None


class TestChatHistory:
    @pytest.fixture
    def service(self, memory_store, clock) -> ChatHistoryService:
        return ChatHistoryService(memory_store, clock=clock)

    @pytest.mark.asyncio
    async def test_add_conversation_appends_and_restamps(self, service) -> None:
        chat = await service.create(dto.ChatHistoryRequest(title="Tokyo trip", user_id="u1"))

        updated = await service.add_conversation(
            chat.id, dto.ConversationSchema(prompt="sushi for breakfast", place_ids=["p1"])
        )

        assert [c.prompt for c in updated.conversations] == ["sushi for breakfast"]
        assert updated.created_at == chat.created_at
        assert updated.updated_at > chat.updated_at

    @pytest.mark.asyncio
    async def test_add_conversation_unknown_chat(self, service) -> None:
        with pytest.raises(NotFoundError):
            await service.add_conversation("missing", dto.ConversationSchema(prompt="hi"))

    @pytest.mark.asyncio
    async def test_list_by_user(self, service) -> None:
        await service.create(dto.ChatHistoryRequest(title="a", user_id="u1"))
        await service.create(dto.ChatHistoryRequest(title="b", user_id="u1"))
        await service.create(dto.ChatHistoryRequest(title="c", user_id="u2"))
        assert [c.title for c in await service.list_by_user("u1")] == ["a", "b"]
