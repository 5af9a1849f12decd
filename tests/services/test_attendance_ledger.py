"""Tests for the event attendance ledger."""

from __future__ import annotations

from datetime import timedelta

import pytest

from civic_commons.core.errors import InvalidArgumentError, NotFoundError
from civic_commons.db.time import utcnow
from civic_commons.models import Event, User
from civic_commons.services.attendance import AttendanceLedger
from civic_commons.storage import Storage


@pytest.fixture()
def event(any_storage: Storage) -> Event:
    with any_storage.transaction():
        for user_id in ("A", "B"):
            any_storage.upsert_user(User(id=user_id))
        return any_storage.create_event(
            Event(
                title="Community Clean-up Day",
                start_time=utcnow() + timedelta(days=14),
                organizer_id="A",
                category="volunteer",
            )
        )


def test_attending_then_maybe_drops_count(any_storage: Storage, event: Event) -> None:
    ledger = AttendanceLedger(any_storage)

    assert ledger.set_attendance(event.id, "A", "attending").attendee_count == 1
    assert ledger.set_attendance(event.id, "A", "maybe").attendee_count == 0

    row = ledger.get_user_status(event.id, "A")
    assert row is not None
    assert row.status == "maybe"


def test_default_status_is_attending(any_storage: Storage, event: Event) -> None:
    updated = AttendanceLedger(any_storage).set_attendance(event.id, "A")

    assert updated.attendee_count == 1


def test_only_attending_rows_are_counted(any_storage: Storage, event: Event) -> None:
    ledger = AttendanceLedger(any_storage)
    ledger.set_attendance(event.id, "A", "attending")
    updated = ledger.set_attendance(event.id, "B", "not_attending")

    assert updated.attendee_count == 1
    assert updated.attendee_count == any_storage.count_event_attendees(event.id, "attending")
    assert len(ledger.list_attendees(event.id)) == 2


def test_repeated_rsvp_is_idempotent(any_storage: Storage, event: Event) -> None:
    ledger = AttendanceLedger(any_storage)
    ledger.set_attendance(event.id, "A", "attending")
    updated = ledger.set_attendance(event.id, "A", "attending")

    assert updated.attendee_count == 1
    assert len(ledger.list_attendees(event.id)) == 1


def test_invalid_status_rejected(any_storage: Storage, event: Event) -> None:
    ledger = AttendanceLedger(any_storage)

    with pytest.raises(InvalidArgumentError):
        ledger.set_attendance(event.id, "A", "perhaps")

    assert ledger.get_user_status(event.id, "A") is None


def test_missing_event(any_storage: Storage, event: Event) -> None:
    ledger = AttendanceLedger(any_storage)

    with pytest.raises(NotFoundError):
        ledger.set_attendance(event.id + 1000, "A", "attending")
    with pytest.raises(NotFoundError):
        ledger.list_attendees(event.id + 1000)
