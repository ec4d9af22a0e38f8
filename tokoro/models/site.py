"""Site content documents: about page, privacy policy and feature cards.

These are editorial records.  Their dates (``established_date``,
``effective_date``, ``last_updated``) are content, supplied by the editor,
and are never stamped by the service.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from tokoro.models.document import Document


class About(Document):
    title: str
    subtitle: str = ""
    logo: str | None = None
    description: str = ""
    vision: str = ""
    mission: str = ""
    values: list[str] = Field(default_factory=list)
    established_date: date | None = None
    social_media: dict[str, str] = Field(default_factory=dict)


class ContactUs(BaseModel):
    model_config = ConfigDict(frozen=True)

    social_links: list[str] = Field(default_factory=list)
    phone_number: str | None = None


class Privacy(Document):
    title: str
    effective_date: date | None = None
    last_updated: date | None = None
    introduction: str = ""
    information_we_collect: dict[str, str] = Field(default_factory=dict)
    how_we_use_collected_information: dict[str, str] = Field(default_factory=dict)
    how_we_share_information: str = ""
    how_we_protect_information: str = ""
    your_rights: str = ""
    contact_us: ContactUs = Field(default_factory=ContactUs)


class Feature(Document):
    """A product feature card on the landing page."""

    title: str
    description: str = ""
    picture: str | None = None
