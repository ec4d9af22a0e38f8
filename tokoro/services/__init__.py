"""Business services.

- **mapper**: DTO ↔ document conversion (``DocumentMapper``, ``ReviewMapper``)
- **entity_service**: generic CRUD (``EntityService``, ``EntityKind``, ``Page``)
- **resources**: the ``EntityKind`` registry for all twelve resources
- **place_service, testimonial_service, history_service, user_service**:
  resources with operations beyond CRUD
- **tag_service**: LLM tag generation with moderation and refusals
- **search_service**: tag generation composed with place lookup
"""
