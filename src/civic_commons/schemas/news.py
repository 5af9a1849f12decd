"""News-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NewsArticleCreate(BaseModel):
    """Schema for submitting a news article by hand."""

    title: str = Field(..., min_length=1, max_length=500)
    summary: str | None = None
    content: str | None = None
    author: str | None = None
    source: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=1024)
    image_url: str | None = None
    category: str | None = None
    location: str | None = None
    published_at: datetime


class NewsArticleResponse(BaseModel):
    """Schema for news article information returned by the API."""

    id: int
    title: str
    summary: str | None
    content: str | None
    author: str | None
    source: str
    url: str
    image_url: str | None
    category: str | None
    location: str | None
    published_at: datetime

    model_config = ConfigDict(from_attributes=True)
