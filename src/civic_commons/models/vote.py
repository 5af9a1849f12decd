# src/civic_commons/models/vote.py
"""Models capturing voting interactions on posts."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from civic_commons.db.session import Base
from civic_commons.db.time import utcnow

VOTE_UPVOTE = "upvote"
VOTE_DOWNVOTE = "downvote"
VOTE_TYPES = frozenset({VOTE_UPVOTE, VOTE_DOWNVOTE})


class PostVote(Base):
    """A user's current vote on a post.

    One mutable row per (post, user); switching direction rewrites
    ``vote_type`` in place.
    """

    __tablename__ = "post_votes"
    __table_args__ = (
        CheckConstraint(
            "vote_type IN ('upvote', 'downvote')",
            name="ck_post_votes_vote_type",
        ),
        Index("ix_post_votes_post_id_vote_type", "post_id", "vote_type"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id"),
        primary_key=True,
    )

    # Composite primary key prevents duplicate votes from the same user.

    vote_type: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
