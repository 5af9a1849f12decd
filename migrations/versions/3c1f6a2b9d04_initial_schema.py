"""initial schema

Revision ID: 3c1f6a2b9d04
Revises:
Create Date: 2026-10-16 09:12:41.502318

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f6a2b9d04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*, updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False))
    return columns


def upgrade() -> None:
    """Create users, content tables and the three ledgers."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=255), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=True, unique=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("profile_image_url", sa.String(length=1024), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("interests", sa.JSON(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "forums",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("forums.id"), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("member_count", sa.Integer(), nullable=False),
        sa.Column("post_count", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_forums_type", "forums", ["type"])

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(length=255), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("forum_id", sa.Integer(), sa.ForeignKey("forums.id"), nullable=False),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("posts.id"), nullable=True),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("is_sticky", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_posts_parent_id", "posts", ["parent_id"])
    op.create_index("ix_posts_forum_id_created_at", "posts", ["forum_id", "created_at"])

    op.create_table(
        "post_votes",
        sa.Column(
            "post_id",
            sa.Integer(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", sa.String(length=255), sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("vote_type", sa.String(length=10), nullable=False),
        *_timestamps(updated=False),
        sa.CheckConstraint(
            "vote_type IN ('upvote', 'downvote')",
            name="ck_post_votes_vote_type",
        ),
    )
    op.create_index(
        "ix_post_votes_post_id_vote_type", "post_votes", ["post_id", "vote_type"]
    )

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=500), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "organizer_id", sa.String(length=255), sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("attendee_count", sa.Integer(), nullable=False),
        sa.Column("is_virtual", sa.Boolean(), nullable=False),
        sa.Column("meeting_url", sa.String(length=1024), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_events_start_time", "events", ["start_time"])
    op.create_index("ix_events_category", "events", ["category"])

    op.create_table(
        "event_attendees",
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", sa.String(length=255), sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("status", sa.String(length=50), nullable=False),
        *_timestamps(updated=False),
        sa.CheckConstraint(
            "status IN ('attending', 'maybe', 'not_attending')",
            name="ck_event_attendees_status",
        ),
    )
    op.create_index(
        "ix_event_attendees_event_id_status", "event_attendees", ["event_id", "status"]
    )

    op.create_table(
        "petitions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("target_signatures", sa.Integer(), nullable=False),
        sa.Column("current_signatures", sa.Integer(), nullable=False),
        sa.Column("creator_id", sa.String(length=255), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("external_url", sa.String(length=1024), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("target_signatures > 0", name="ck_petitions_target_positive"),
    )
    op.create_index("ix_petitions_status", "petitions", ["status"])

    op.create_table(
        "petition_signatures",
        sa.Column(
            "petition_id",
            sa.Integer(),
            sa.ForeignKey("petitions.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", sa.String(length=255), sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("comment", sa.Text(), nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "representatives",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("level", sa.String(length=50), nullable=False),
        sa.Column("electorate", sa.String(length=255), nullable=True),
        sa.Column("party", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("website", sa.String(length=1024), nullable=True),
        sa.Column("profile_image_url", sa.String(length=1024), nullable=True),
        sa.Column("biography", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_representatives_level", "representatives", ["level"])

    op.create_table(
        "news_articles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("author", sa.String(length=255), nullable=True),
        sa.Column("source", sa.String(length=255), nullable=False),
        sa.Column("url", sa.String(length=1024), nullable=False, unique=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index("ix_news_articles_category", "news_articles", ["category"])
    op.create_index("ix_news_articles_published_at", "news_articles", ["published_at"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_table("news_articles")
    op.drop_table("representatives")
    op.drop_table("petition_signatures")
    op.drop_table("petitions")
    op.drop_table("event_attendees")
    op.drop_table("events")
    op.drop_table("post_votes")
    op.drop_table("posts")
    op.drop_table("forums")
    op.drop_table("users")
