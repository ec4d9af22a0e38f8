"""Mapping between wire DTOs and stored documents.

A :class:`DocumentMapper` is a pure, stateless pair of conversions for one
entity kind:

    to_document(request)  : <Resource>Request  → document model
    to_view(document)     : document model     → <Resource>Response

Fields are matched by name.  Nested value objects are dumped to plain data
and re-validated into the target's own nested types, so the wire DTOs and
the domain models never import each other.  Fields missing from the source
(the store-assigned ``id``, server timestamps) fall back to the target's
defaults on the way in and are read from the document on the way out.

Where the wire name and the stored name differ, a subclass overrides
:meth:`_request_to_fields` / :meth:`_document_to_fields`
(see :class:`ReviewMapper`).
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, TypeVar

from pydantic import BaseModel

from tokoro.models.document import Document

RequestT = TypeVar("RequestT", bound=BaseModel)
DocumentT = TypeVar("DocumentT", bound=Document)
ViewT = TypeVar("ViewT", bound=BaseModel)


class DocumentMapper(Generic[RequestT, DocumentT, ViewT]):
    """Converts one resource's request DTO, document and view DTO.

    Parameters
    ----------
    request_model:
        Pydantic class of the create/update body.
    document_model:
        Pydantic class persisted in the store.
    view_model:
        Pydantic class returned to clients.
    """

    def __init__(
        self,
        request_model: type[RequestT],
        document_model: type[DocumentT],
        view_model: type[ViewT],
    ) -> None:
        self.request_model = request_model
        self.document_model = document_model
        self.view_model = view_model

    def to_document(self, request: RequestT) -> DocumentT:
        return self.document_model.model_validate(self._request_to_fields(request))

    def to_view(self, document: DocumentT) -> ViewT:
        return self.view_model.model_validate(self._document_to_fields(document))

    def to_views(self, documents: Iterable[DocumentT]) -> list[ViewT]:
        return [self.to_view(document) for document in documents]

    def _request_to_fields(self, request: RequestT) -> dict[str, Any]:
        return request.model_dump()

    def _document_to_fields(self, document: DocumentT) -> dict[str, Any]:
        return document.model_dump()


class ReviewMapper(DocumentMapper):
    """Reviews store ``recommended`` but speak ``is_recommended`` on the wire."""

    def _request_to_fields(self, request: BaseModel) -> dict[str, Any]:
        fields = request.model_dump()
        fields["recommended"] = fields.pop("is_recommended", False)
        return fields

    def _document_to_fields(self, document: Document) -> dict[str, Any]:
        fields = document.model_dump()
        fields["is_recommended"] = fields.pop("recommended", False)
        return fields
