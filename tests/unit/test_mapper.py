"""Unit tests for DTO <-> document mapping."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from tokoro.models import dto
from tokoro.models.blog import Blog
from tokoro.models.feedback import Review
from tokoro.models.tags import Tag
from tokoro.services import resources
from tokoro.services.mapper import DocumentMapper, ReviewMapper


class TestDocumentMapper:
    def test_request_to_document_converts_nested_values(self) -> None:
        mapper = resources.PLACES.mapper
        request = dto.PlaceRequest.model_validate(
            {
                "name": "Ichiran",
                "location": {
                    "address": "1-22-7 Jinnan",
                    "city": "Tokyo",
                    "country": "Japan",
                    "coordinate": {"latitude": 35.66, "longitude": 139.70},
                },
                "tags": [{"lang": "en", "name": "ramen"}],
            }
        )

        document = mapper.to_document(request)

        assert document.id is None
        assert document.created_at is None
        assert document.tags == [Tag(lang="en", name="ramen")]
        assert document.location.coordinate.latitude == 35.66

    def test_document_to_view_carries_id_and_timestamps(self) -> None:
        mapper = DocumentMapper(dto.BlogRequest, Blog, dto.BlogResponse)
        stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
        document = Blog(
            id="b1",
            title="Kyoto in autumn",
            content="Leaves.",
            comments=[{"user_id": "u1", "value": "Lovely"}],
            created_at=stamp,
            updated_at=stamp,
        )

        view = mapper.to_view(document)

        assert isinstance(view, dto.BlogResponse)
        assert view.id == "b1"
        assert view.created_at == stamp
        assert view.comments[0].value == "Lovely"

    def test_to_views_keeps_order(self) -> None:
        mapper = resources.FEATURES.mapper
        documents = [
            mapper.document_model(id=str(i), title=f"feature {i}") for i in range(3)
        ]
        assert [view.id for view in mapper.to_views(documents)] == ["0", "1", "2"]


class TestReviewMapper:
    def test_wire_name_is_stored_as_recommended(self) -> None:
        mapper = ReviewMapper(dto.ReviewRequest, Review, dto.ReviewResponse)
        request = dto.ReviewRequest(
            user_id="u1", place_id="p1", comment="Great broth", is_recommended=True
        )

        document = mapper.to_document(request)

        assert document.recommended is True

    def test_stored_name_is_shown_as_is_recommended(self) -> None:
        mapper = resources.REVIEWS.mapper
        view = mapper.to_view(
            Review(id="r1", user_id="u1", place_id="p1", comment="Meh", recommended=False)
        )
        assert view.is_recommended is False
        assert view.id == "r1"


# Every request field populated, nested values included.
_FULL_REQUESTS: dict[str, dict] = {
    "places": {
        "name": "Ichiran",
        "description": "Tonkotsu ramen.",
        "location": {
            "address": "1-22-7 Jinnan",
            "city": "Tokyo",
            "country": "Japan",
            "coordinate": {"latitude": 35.66, "longitude": 139.70},
        },
        "category_id": "food",
        "tags": [{"lang": "en", "name": "ramen"}, {"lang": "ja", "name": "ラーメン"}],
        "pictures": ["ichiran.jpg"],
        "rating": 4.5,
    },
    "blogs": {
        "title": "Kyoto in autumn",
        "content": "Leaves.",
        "author_ids": ["u1"],
        "tags": ["kyoto"],
        "pictures": ["maple.jpg"],
        "comments": [
            {
                "user_id": "u2",
                "value": "Lovely",
                "created_at": datetime(2024, 5, 1, tzinfo=timezone.utc),
            }
        ],
    },
    "user-ratings": {"user_id": "u1", "place_id": "p1", "value": 3},
    "reviews": {"user_id": "u1", "place_id": "p1", "comment": "Great broth", "is_recommended": True},
    "testimonials": {"user_id": "u1", "rating": 5, "message": "Found an onsen."},
    "prompt-history": {"prompt": "quiet cafe", "user_id": "u1"},
    "chat-histories": {
        "title": "Osaka trip",
        "user_id": "u1",
        "conversations": [{"prompt": "street food", "place_ids": ["p1", "p2"]}],
    },
    "collections": {"name": "Weekend", "user_id": "u1", "place_ids": ["p1"]},
    "users": {
        "username": "hana",
        "email": "hana@example.com",
        "preferences": {"language": "ja", "tags": ["onsen"], "categories": ["spa"]},
    },
    "about": {
        "title": "About Tokoro",
        "subtitle": "Places worth the trip",
        "values": ["curiosity"],
        "established_date": date(2021, 4, 1),
        "social_media": {"instagram": "@tokoro"},
    },
    "privacy": {
        "title": "Privacy",
        "effective_date": date(2024, 1, 1),
        "information_we_collect": {"usage": "Searches you run."},
        "contact_us": {"social_links": ["https://example.com"], "phone_number": "+81 3 0000 0000"},
    },
    "features": {"title": "Search by mood", "description": "Describe a vibe.", "picture": "mood.png"},
}


def test_every_kind_has_a_full_request() -> None:
    assert set(_FULL_REQUESTS) == {kind.name for kind in resources.ENTITY_KINDS}


@pytest.mark.parametrize("kind", resources.ENTITY_KINDS, ids=lambda kind: kind.name)
def test_view_of_document_reproduces_request(kind) -> None:
    mapper = kind.mapper
    request = mapper.request_model.model_validate(_FULL_REQUESTS[kind.name])

    document = mapper.to_document(request).model_copy(update={"id": "doc-1"})
    view = mapper.to_view(document)

    assert view.id == "doc-1"
    for field in mapper.request_model.model_fields:
        assert getattr(view, field) == getattr(request, field), field
