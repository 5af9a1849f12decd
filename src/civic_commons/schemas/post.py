"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post or reply."""

    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    forum_id: int
    parent_id: int | None = Field(None, description="Parent post ID for replies")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    content: str
    author_id: str
    forum_id: int
    parent_id: int | None
    upvotes: int
    downvotes: int
    is_sticky: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
