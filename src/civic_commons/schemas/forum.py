"""Forum-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ForumCreate(BaseModel):
    """Schema for creating a new forum."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: Literal["location", "topic"]
    location: str | None = None
    parent_id: int | None = None
    tags: list[str] = Field(default_factory=list)


class ForumResponse(BaseModel):
    """Schema for forum information returned by the API."""

    id: int
    name: str
    description: str | None
    type: str
    location: str | None
    parent_id: int | None
    tags: list[str]
    member_count: int
    post_count: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
