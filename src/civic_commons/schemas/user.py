"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Schema for the authenticated user's profile."""

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    display_name: str
    profile_image_url: str | None
    location: str | None
    bio: str | None
    interests: list[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
