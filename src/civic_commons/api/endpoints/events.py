"""Event and attendance endpoints for the Civic Commons API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from civic_commons.api.dependencies import CurrentUserDep, StorageDep
from civic_commons.core.errors import NotFoundError
from civic_commons.models import Event, EventAttendee
from civic_commons.schemas.event import (
    AttendanceAck,
    AttendanceRequest,
    AttendeeResponse,
    EventCreate,
    EventResponse,
)
from civic_commons.services.attendance import AttendanceLedger
from civic_commons.storage.base import DEFAULT_LIST_LIMIT, DEFAULT_SHORT_LIST_LIMIT

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=list[EventResponse])
async def list_events(
    storage: StorageDep,
    upcoming: bool = False,
    category: str | None = None,
    limit: Annotated[int | None, Query(ge=1, le=200)] = None,
) -> list[Event]:
    """List events.

    ``upcoming`` returns future events soonest first; ``category`` filters by
    category. Without either, all events are returned newest start first.
    """
    if upcoming:
        return storage.list_upcoming_events(limit or DEFAULT_SHORT_LIST_LIMIT)
    if category:
        events = storage.list_events_by_category(category)
        return events[:limit] if limit else events
    return storage.list_events(limit or DEFAULT_LIST_LIMIT)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, storage: StorageDep) -> Event:
    """Get a specific event by ID."""
    event = storage.get_event(event_id)
    if event is None:
        raise NotFoundError("Event", event_id)
    return event


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    current_user: CurrentUserDep,
    storage: StorageDep,
) -> Event:
    """Create a new event organized by the caller."""
    with storage.transaction():
        event = storage.create_event(
            Event(**event_data.model_dump(), organizer_id=current_user.id)
        )
    return event


@router.post("/{event_id}/attend", response_model=AttendanceAck)
async def attend_event(
    event_id: int,
    current_user: CurrentUserDep,
    storage: StorageDep,
    attendance: AttendanceRequest | None = None,
) -> AttendanceAck:
    """Set the caller's RSVP; the body may be omitted to mean ``attending``."""
    request = attendance or AttendanceRequest()
    event = AttendanceLedger(storage).set_attendance(event_id, current_user.id, request.status)
    return AttendanceAck(
        event_id=event.id,
        status=request.status,
        attendee_count=event.attendee_count,
    )


@router.get("/{event_id}/attendees", response_model=list[AttendeeResponse])
async def list_attendees(event_id: int, storage: StorageDep) -> list[EventAttendee]:
    """List every RSVP for an event."""
    return AttendanceLedger(storage).list_attendees(event_id)


@router.get("/{event_id}/my-status", response_model=AttendeeResponse | None)
async def get_my_status(
    event_id: int,
    current_user: CurrentUserDep,
    storage: StorageDep,
) -> EventAttendee | None:
    """Return the caller's RSVP for an event, or null."""
    if storage.get_event(event_id) is None:
        raise NotFoundError("Event", event_id)
    return AttendanceLedger(storage).get_user_status(event_id, current_user.id)
