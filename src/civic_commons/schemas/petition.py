"""Petition-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from civic_commons.db.time import ensure_utc


class PetitionCreate(BaseModel):
    """Schema for creating a new petition."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1)
    target_signatures: int = Field(..., gt=0)
    category: str | None = None
    external_url: str | None = None
    deadline: datetime | None = None

    @field_validator("deadline")
    @classmethod
    def _deadline_as_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class PetitionResponse(BaseModel):
    """Schema for petition information returned by the API."""

    id: int
    title: str
    description: str
    target_signatures: int
    current_signatures: int
    creator_id: str
    category: str | None
    external_url: str | None
    status: str
    deadline: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SignRequest(BaseModel):
    """Schema for signing a petition."""

    comment: str | None = Field(None, max_length=2000)


class SignatureAck(BaseModel):
    """Acknowledgement carrying the petition's counter and status after signing."""

    message: str = "Petition signed"
    petition_id: int
    current_signatures: int
    target_signatures: int
    status: str


class SignatureResponse(BaseModel):
    """Schema for a single signature row."""

    petition_id: int
    user_id: str
    comment: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
