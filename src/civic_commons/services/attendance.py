"""Attendance ledger for civic events."""
from __future__ import annotations

import logging

from civic_commons.core.errors import InvalidArgumentError, NotFoundError
from civic_commons.models import Event, EventAttendee
from civic_commons.models.event import ATTENDANCE_ATTENDING, ATTENDANCE_STATUSES
from civic_commons.storage import Storage

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Keeps a single current RSVP per (event, user) and the event's attendee count."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def set_attendance(
        self, event_id: int, user_id: str, status: str = ATTENDANCE_ATTENDING
    ) -> Event:
        """Upsert the caller's RSVP and recompute ``attendee_count``.

        Only ``attending`` rows are counted, so moving from ``attending`` to
        ``maybe`` lowers the count.

        Raises:
            InvalidArgumentError: If ``status`` is not a known RSVP status.
            NotFoundError: If the event does not exist.
        """
        if status not in ATTENDANCE_STATUSES:
            raise InvalidArgumentError(f"Invalid attendance status: {status!r}")

        with self.storage.transaction():
            event = self.storage.get_event(event_id, for_update=True)
            if event is None:
                raise NotFoundError("Event", event_id)

            existing = self.storage.get_event_attendee(event_id, user_id)
            if existing is None:
                self.storage.add_event_attendee(
                    EventAttendee(event_id=event_id, user_id=user_id, status=status)
                )
            elif existing.status != status:
                existing.status = status

            event.attendee_count = self.storage.count_event_attendees(
                event_id, ATTENDANCE_ATTENDING
            )

        logger.debug(
            "Set attendance of %s on event %d to %s (attending=%d)",
            user_id,
            event_id,
            status,
            event.attendee_count,
        )
        return event

    def get_user_status(self, event_id: int, user_id: str) -> EventAttendee | None:
        """Return the caller's RSVP row for an event, if any."""
        return self.storage.get_event_attendee(event_id, user_id)

    def list_attendees(self, event_id: int) -> list[EventAttendee]:
        """Return every RSVP row for an event.

        Raises:
            NotFoundError: If the event does not exist.
        """
        if self.storage.get_event(event_id) is None:
            raise NotFoundError("Event", event_id)
        return self.storage.list_event_attendees(event_id)
