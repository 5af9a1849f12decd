"""Representative-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RepresentativeCreate(BaseModel):
    """Schema for adding a representative to the directory."""

    name: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    level: Literal["federal", "state", "local"]
    electorate: str | None = None
    party: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    profile_image_url: str | None = None
    biography: str | None = None


class RepresentativeResponse(BaseModel):
    """Schema for representative information returned by the API."""

    id: int
    name: str
    title: str
    level: str
    electorate: str | None
    party: str | None
    email: str | None
    phone: str | None
    website: str | None
    profile_image_url: str | None
    biography: str | None

    model_config = ConfigDict(from_attributes=True)
