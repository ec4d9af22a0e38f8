"""Unit tests for the generic EntityService against the in-memory store."""

from __future__ import annotations

from datetime import date

import pytest

from tests.conftest import FakeClock, place_request
from tokoro.models import dto
from tokoro.providers.store.memory_store import MemoryDocumentStore
from tokoro.services import resources
from tokoro.services.entity_service import EntityService
from tokoro.utils.errors import InvalidInputError, NotFoundError


def _blog_request(title: str = "Kyoto in autumn") -> dto.BlogRequest:
    return dto.BlogRequest(
        title=title,
        content="Maple leaves everywhere.",
        author_ids=["u1"],
        tags=["kyoto", "autumn"],
    )


@pytest.fixture
def blogs(memory_store: MemoryDocumentStore, clock: FakeClock) -> EntityService:
    return EntityService(resources.BLOGS, memory_store, clock=clock)


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_returns_view(self, blogs: EntityService) -> None:
        created = await blogs.create(_blog_request())
        assert isinstance(created, dto.BlogResponse)
        assert created.id
        assert created.title == "Kyoto in autumn"

    @pytest.mark.asyncio
    async def test_get_returns_what_was_created(self, blogs: EntityService) -> None:
        created = await blogs.create(_blog_request())
        assert await blogs.get_by_id(created.id) == created

    @pytest.mark.asyncio
    async def test_create_stamps_both_timestamps(self, blogs: EntityService, clock: FakeClock) -> None:
        created = await blogs.create(_blog_request())
        assert created.created_at is not None
        assert created.created_at == created.updated_at

    @pytest.mark.asyncio
    async def test_two_creates_get_distinct_ids(self, blogs: EntityService) -> None:
        first = await blogs.create(_blog_request("one"))
        second = await blogs.create(_blog_request("two"))
        assert first.id != second.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("kind", "request_body"),
        [
            (resources.PLACES, place_request()),
            (resources.USER_RATINGS, dto.UserRatingRequest(user_id="u1", place_id="p1", value=4)),
            (
                resources.REVIEWS,
                dto.ReviewRequest(user_id="u1", place_id="p1", comment="Good", is_recommended=True),
            ),
            (
                resources.BLOGS,
                dto.BlogRequest.model_validate({
                    "title": "Kyoto in autumn",
                    "content": "Maple leaves everywhere.",
                    "author_ids": ["u1"],
                    "comments": [{"user_id": "u2", "value": "Lovely"}],
                }),
            ),
            (resources.TESTIMONIALS, dto.TestimonialRequest(user_id="u1", rating=5, message="Found an onsen.")),
            (resources.PROMPT_HISTORY, dto.PromptHistoryRequest(prompt="ramen", user_id="u1")),
            (
                resources.CHAT_HISTORIES,
                dto.ChatHistoryRequest.model_validate({
                    "title": "Osaka trip",
                    "user_id": "u1",
                    "conversations": [{"prompt": "street food", "place_ids": ["p1", "p2"]}],
                }),
            ),
            (
                resources.USERS,
                dto.UserRequest.model_validate({
                    "username": "hana",
                    "email": "hana@example.com",
                    "preferences": {"language": "ja", "tags": ["onsen"], "categories": ["spa"]},
                }),
            ),
            (resources.COLLECTIONS, dto.CollectionRequest(name="Weekend", place_ids=["p1"])),
            (
                resources.ABOUT,
                dto.AboutRequest(title="About us", established_date=date(2020, 4, 1)),
            ),
            (resources.PRIVACY, dto.PrivacyRequest(title="Privacy", effective_date=date(2024, 1, 1))),
            (resources.FEATURES, dto.FeatureRequest(title="Search by mood")),
        ],
    )
    async def test_round_trip_for_every_kind(self, memory_store, kind, request_body) -> None:
        service = EntityService(kind, memory_store)
        created = await service.create(request_body)
        fetched = await service.get_by_id(created.id)
        assert fetched == created
        for field in type(request_body).model_fields:
            assert getattr(fetched, field) == getattr(request_body, field), field

    @pytest.mark.asyncio
    async def test_editorial_dates_are_not_stamped(self, memory_store, clock) -> None:
        service = EntityService(resources.ABOUT, memory_store, clock=clock)
        created = await service.create(dto.AboutRequest(title="About", established_date=date(2019, 6, 1)))
        assert created.established_date == date(2019, 6, 1)
        assert not hasattr(created, "created_at")


class TestNotFound:
    @pytest.mark.asyncio
    async def test_get_unknown_id(self, blogs: EntityService) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await blogs.get_by_id("nope")
        assert exc_info.value.message == "Blog not found: nope"

    @pytest.mark.asyncio
    async def test_update_unknown_id_creates_nothing(self, blogs, memory_store) -> None:
        with pytest.raises(NotFoundError):
            await blogs.update("nope", _blog_request())
        assert await memory_store.count("blogs") == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, blogs: EntityService) -> None:
        with pytest.raises(NotFoundError):
            await blogs.delete("nope")

    @pytest.mark.asyncio
    async def test_get_after_delete(self, blogs: EntityService) -> None:
        created = await blogs.create(_blog_request())
        await blogs.delete(created.id)
        with pytest.raises(NotFoundError):
            await blogs.get_by_id(created.id)
        assert await blogs.list_all() == []


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_replaces_fields_and_keeps_id(self, blogs: EntityService) -> None:
        created = await blogs.create(_blog_request())
        updated = await blogs.update(
            created.id,
            dto.BlogRequest(title="Kyoto in winter", content="Snow.", tags=["kyoto"]),
        )
        assert updated.id == created.id
        assert updated.title == "Kyoto in winter"
        assert updated.author_ids == []
        assert await blogs.get_by_id(created.id) == updated

    @pytest.mark.asyncio
    async def test_update_keeps_created_at_and_restamps_updated_at(self, blogs: EntityService) -> None:
        created = await blogs.create(_blog_request())
        updated = await blogs.update(created.id, _blog_request("Again"))
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at


class TestListing:
    @pytest.mark.asyncio
    async def test_list_all_includes_created(self, blogs: EntityService) -> None:
        created = [await blogs.create(_blog_request(f"post {i}")) for i in range(3)]
        listed = await blogs.list_all()
        assert {view.id for view in listed} == {view.id for view in created}

    @pytest.mark.asyncio
    async def test_list_page_windows_and_total(self, blogs: EntityService) -> None:
        for i in range(5):
            await blogs.create(_blog_request(f"post {i}"))
        page = await blogs.list_page(page=1, size=2)
        assert [view.title for view in page.items] == ["post 2", "post 3"]
        assert page.total == 5
        assert (page.page, page.size) == (1, 2)

    @pytest.mark.asyncio
    async def test_list_page_clamps_size(self, memory_store) -> None:
        service = EntityService(resources.FEATURES, memory_store, max_page_size=3)
        page = await service.list_page(0, 50)
        assert page.size == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("page", "size"), [(-1, 10), (0, 0)])
    async def test_list_page_rejects_bad_window(self, blogs, page, size) -> None:
        with pytest.raises(InvalidInputError):
            await blogs.list_page(page, size)

    @pytest.mark.asyncio
    async def test_get_many_keeps_request_order_and_skips_unknown(self, blogs) -> None:
        first = await blogs.create(_blog_request("first"))
        second = await blogs.create(_blog_request("second"))
        found = await blogs.get_many([second.id, "missing", first.id, second.id])
        assert [view.title for view in found] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_get_many_empty(self, blogs) -> None:
        assert await blogs.get_many([]) == []

    @pytest.mark.asyncio
    async def test_sample(self, blogs) -> None:
        for i in range(4):
            await blogs.create(_blog_request(f"post {i}"))
        assert len(await blogs.sample(2)) == 2
        with pytest.raises(InvalidInputError):
            await blogs.sample(0)


class TestBlogScenario:
    @pytest.mark.asyncio
    async def test_comment_thread_lifecycle(self, blogs: EntityService) -> None:
        created = await blogs.create(_blog_request())
        with_comment = await blogs.update(
            created.id,
            dto.BlogRequest(
                title=created.title,
                content=created.content,
                author_ids=created.author_ids,
                tags=created.tags,
                comments=[dto.CommentSchema(user_id="u2", value="Beautiful photos")],
            ),
        )
        assert [c.value for c in with_comment.comments] == ["Beautiful photos"]
        assert with_comment.created_at == created.created_at

        await blogs.delete(created.id)
        with pytest.raises(NotFoundError):
            await blogs.update(created.id, _blog_request())
