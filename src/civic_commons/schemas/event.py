"""Event-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from civic_commons.db.time import ensure_utc


class EventCreate(BaseModel):
    """Schema for creating a new event."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    location: str | None = None
    start_time: datetime
    end_time: datetime | None = None
    category: str | None = None
    is_virtual: bool = False
    meeting_url: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @model_validator(mode="after")
    def _check_time_range(self) -> "EventCreate":
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class EventResponse(BaseModel):
    """Schema for event information returned by the API."""

    id: int
    title: str
    description: str | None
    location: str | None
    start_time: datetime
    end_time: datetime | None
    organizer_id: str
    category: str | None
    attendee_count: int
    is_virtual: bool
    meeting_url: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AttendanceRequest(BaseModel):
    """Schema for setting the caller's RSVP; the status is checked by the ledger."""

    status: str = "attending"


class AttendanceAck(BaseModel):
    """Acknowledgement carrying the event's recomputed attendee count."""

    message: str = "Attendance updated"
    event_id: int
    status: str
    attendee_count: int


class AttendeeResponse(BaseModel):
    """Schema for a single RSVP row."""

    event_id: int
    user_id: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
