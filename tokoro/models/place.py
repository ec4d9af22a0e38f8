"""Place documents: a point of interest with a location and searchable tags."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tokoro.models.document import Document
from tokoro.models.tags import Tag


class Coordinate(BaseModel):
    """WGS84 latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class Location(BaseModel):
    """Postal address plus coordinate."""

    model_config = ConfigDict(frozen=True)

    address: str
    city: str
    country: str
    coordinate: Coordinate


class Place(Document):
    """A place users can search for, rate and review."""

    name: str
    description: str = ""
    location: Location
    category_id: str | None = None
    tags: list[Tag] = Field(default_factory=list)
    pictures: list[str] = Field(default_factory=list)
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    created_at: datetime | None = None
    updated_at: datetime | None = None
