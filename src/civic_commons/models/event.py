"""SQLAlchemy models for civic events and their attendance ledger."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from civic_commons.db.session import Base
from civic_commons.db.time import utcnow

ATTENDANCE_ATTENDING = "attending"
ATTENDANCE_MAYBE = "maybe"
ATTENDANCE_NOT_ATTENDING = "not_attending"
ATTENDANCE_STATUSES = frozenset(
    {ATTENDANCE_ATTENDING, ATTENDANCE_MAYBE, ATTENDANCE_NOT_ATTENDING}
)


class Event(Base):
    """Scheduled civic event such as a town hall or volunteer day.

    ``attendee_count`` counts only ``attending`` rows in ``event_attendees``.
    """

    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    organizer_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id"),
        nullable=False,
    )
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    attendee_count: Mapped[int] = mapped_column(default=0, nullable=False)
    is_virtual: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    meeting_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class EventAttendee(Base):
    """A user's current RSVP for an event, one row per (event, user)."""

    __tablename__ = "event_attendees"
    __table_args__ = (
        CheckConstraint(
            "status IN ('attending', 'maybe', 'not_attending')",
            name="ck_event_attendees_status",
        ),
        Index("ix_event_attendees_event_id_status", "event_id", "status"),
    )

    event_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("events.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id"),
        primary_key=True,
    )
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ATTENDANCE_ATTENDING
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
