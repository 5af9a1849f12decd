"""SQLAlchemy models for forum posts."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from civic_commons.db.session import Base
from civic_commons.db.time import utcnow


class Post(Base):
    """Forum post or reply.

    ``upvotes`` and ``downvotes`` are denormalized counts over ``post_votes``
    and are only ever written by the vote ledger.
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_forum_id_created_at", "forum_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id"),
        nullable=False,
    )
    forum_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("forums.id"),
        nullable=False,
    )

    # Parent chain for replies; top-level posts have parent_id = NULL.
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("posts.id"),
        nullable=True,
        index=True,
    )

    upvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    downvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    is_sticky: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
