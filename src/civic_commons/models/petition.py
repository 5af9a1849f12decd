"""SQLAlchemy models for petitions and their signature ledger."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from civic_commons.db.session import Base
from civic_commons.db.time import utcnow

# Petition lifecycle codes:
# active = accepting signatures, closed = withdrawn or expired,
# successful = signature target reached.
PETITION_STATUS_ACTIVE = "active"
PETITION_STATUS_CLOSED = "closed"
PETITION_STATUS_SUCCESSFUL = "successful"
PETITION_STATUSES = frozenset(
    {PETITION_STATUS_ACTIVE, PETITION_STATUS_CLOSED, PETITION_STATUS_SUCCESSFUL}
)


class Petition(Base):
    """Petition collecting signatures toward a target.

    ``current_signatures`` only moves through the atomic increment in the
    signature ledger and never decreases.
    """

    __tablename__ = "petitions"
    __table_args__ = (
        CheckConstraint("target_signatures > 0", name="ck_petitions_target_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    target_signatures: Mapped[int] = mapped_column(Integer, nullable=False)
    current_signatures: Mapped[int] = mapped_column(default=0, nullable=False)
    creator_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id"),
        nullable=False,
    )
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Link to a mirrored petition on an external platform.
    external_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=PETITION_STATUS_ACTIVE, index=True
    )
    deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class PetitionSignature(Base):
    """A user's signature on a petition, at most one per (petition, user)."""

    __tablename__ = "petition_signatures"

    petition_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("petitions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id"),
        primary_key=True,
    )
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
