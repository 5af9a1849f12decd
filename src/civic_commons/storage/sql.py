"""SQLAlchemy-backed storage used by the API in production."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Select, asc, desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from civic_commons.core.errors import ConflictError, InvalidArgumentError
from civic_commons.db.session import SessionLocal
from civic_commons.db.time import utcnow
from civic_commons.models import (
    Event,
    EventAttendee,
    Forum,
    NewsArticle,
    Petition,
    PetitionSignature,
    Post,
    PostVote,
    Representative,
    User,
)
from civic_commons.models.event import ATTENDANCE_ATTENDING
from civic_commons.models.petition import PETITION_STATUS_ACTIVE

from .base import DEFAULT_LIST_LIMIT, DEFAULT_SHORT_LIST_LIMIT

__all__ = ["SqlStorage", "session_scope"]

logger = logging.getLogger(__name__)


@contextmanager
def session_scope() -> Iterator[SqlStorage]:
    """Yield a ``SqlStorage`` over a fresh session for work outside a request."""
    with SessionLocal() as db:
        yield SqlStorage(db)


# SQLSTATE for unique_violation; psycopg exposes it as ``sqlstate`` on the driver error.
_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    sqlstate = getattr(exc.orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == _UNIQUE_VIOLATION
    return "unique" in str(exc.orig).lower()


_USER_PROFILE_FIELDS = (
    "email",
    "first_name",
    "last_name",
    "profile_image_url",
    "location",
    "bio",
    "interests",
)


class SqlStorage:
    """Storage implementation over a synchronous SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        """Initialize the storage with a SQLAlchemy session."""
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[SqlStorage]:
        """Commit the enclosed writes together or roll all of them back."""
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def _count(self, stmt: Select[tuple[int]]) -> int:
        # Pending ORM changes must be visible to the aggregate query.
        self.session.flush()
        return int(self.session.scalar(stmt) or 0)

    def _add(self, record: object) -> None:
        self.session.add(record)
        self.session.flush()

    # Users
    def get_user(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def upsert_user(self, user: User) -> User:
        existing = self.session.get(User, user.id)
        if existing is None:
            self._add(user)
            return user

        for field in _USER_PROFILE_FIELDS:
            value = getattr(user, field)
            if value is not None:
                setattr(existing, field, value)
        existing.updated_at = utcnow()
        self.session.flush()
        return existing

    # Forums
    def list_forums(self, forum_type: str | None = None) -> list[Forum]:
        stmt = select(Forum)
        if forum_type is not None:
            stmt = stmt.where(Forum.type == forum_type)
        return list(self.session.scalars(stmt.order_by(asc(Forum.name))))

    def get_forum(self, forum_id: int) -> Forum | None:
        return self.session.get(Forum, forum_id)

    def create_forum(self, forum: Forum) -> Forum:
        self._add(forum)
        return forum

    # Posts
    def list_posts_by_forum(self, forum_id: int, limit: int = DEFAULT_LIST_LIMIT) -> list[Post]:
        stmt = (
            select(Post)
            .where(Post.forum_id == forum_id, Post.parent_id.is_(None))
            .order_by(desc(Post.created_at), desc(Post.id))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def get_post(self, post_id: int, *, for_update: bool = False) -> Post | None:
        stmt = select(Post).where(Post.id == post_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def create_post(self, post: Post) -> Post:
        self._add(post)
        return post

    def list_post_replies(self, parent_id: int) -> list[Post]:
        stmt = (
            select(Post)
            .where(Post.parent_id == parent_id)
            .order_by(asc(Post.created_at), asc(Post.id))
        )
        return list(self.session.scalars(stmt))

    def search_posts(self, query: str, limit: int = DEFAULT_SHORT_LIST_LIMIT) -> list[Post]:
        stmt = (
            select(Post)
            .where(Post.title.ilike(f"%{query}%"))
            .order_by(desc(Post.created_at), desc(Post.id))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    # Vote ledger
    def get_post_vote(self, post_id: int, user_id: str) -> PostVote | None:
        return self.session.get(PostVote, (post_id, user_id))

    def add_post_vote(self, vote: PostVote) -> PostVote:
        self._add(vote)
        return vote

    def count_post_votes(self, post_id: int, vote_type: str) -> int:
        return self._count(
            select(func.count())
            .select_from(PostVote)
            .where(PostVote.post_id == post_id, PostVote.vote_type == vote_type)
        )

    # Events
    def list_events(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Event]:
        stmt = select(Event).order_by(desc(Event.start_time)).limit(limit)
        return list(self.session.scalars(stmt))

    def list_upcoming_events(self, limit: int = DEFAULT_SHORT_LIST_LIMIT) -> list[Event]:
        stmt = (
            select(Event)
            .where(Event.start_time >= utcnow())
            .order_by(asc(Event.start_time))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def list_events_by_category(self, category: str) -> list[Event]:
        stmt = select(Event).where(Event.category == category).order_by(asc(Event.start_time))
        return list(self.session.scalars(stmt))

    def get_event(self, event_id: int, *, for_update: bool = False) -> Event | None:
        stmt = select(Event).where(Event.id == event_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def create_event(self, event: Event) -> Event:
        self._add(event)
        return event

    # Attendance ledger
    def get_event_attendee(self, event_id: int, user_id: str) -> EventAttendee | None:
        return self.session.get(EventAttendee, (event_id, user_id))

    def add_event_attendee(self, attendee: EventAttendee) -> EventAttendee:
        self._add(attendee)
        return attendee

    def count_event_attendees(self, event_id: int, status: str) -> int:
        return self._count(
            select(func.count())
            .select_from(EventAttendee)
            .where(EventAttendee.event_id == event_id, EventAttendee.status == status)
        )

    def list_event_attendees(self, event_id: int) -> list[EventAttendee]:
        stmt = (
            select(EventAttendee)
            .where(EventAttendee.event_id == event_id)
            .order_by(asc(EventAttendee.created_at))
        )
        return list(self.session.scalars(stmt))

    # Petitions
    def list_petitions(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Petition]:
        stmt = select(Petition).order_by(desc(Petition.created_at), desc(Petition.id)).limit(limit)
        return list(self.session.scalars(stmt))

    def list_active_petitions(self, limit: int = DEFAULT_SHORT_LIST_LIMIT) -> list[Petition]:
        stmt = (
            select(Petition)
            .where(Petition.status == PETITION_STATUS_ACTIVE)
            .order_by(desc(Petition.created_at), desc(Petition.id))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def get_petition(self, petition_id: int, *, for_update: bool = False) -> Petition | None:
        stmt = select(Petition).where(Petition.id == petition_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def create_petition(self, petition: Petition) -> Petition:
        self._add(petition)
        return petition

    # Signature ledger
    def get_petition_signature(self, petition_id: int, user_id: str) -> PetitionSignature | None:
        return self.session.get(PetitionSignature, (petition_id, user_id))

    def add_petition_signature(self, signature: PetitionSignature) -> PetitionSignature:
        if self.get_petition_signature(signature.petition_id, signature.user_id) is not None:
            raise ConflictError("Petition already signed by this user")

        self.session.add(signature)
        try:
            self.session.flush()
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise ConflictError("Petition already signed by this user") from exc
            raise InvalidArgumentError(
                "Signature references an unknown petition or user"
            ) from exc
        return signature

    def increment_petition_signatures(self, petition: Petition) -> int:
        self.session.flush()
        self.session.execute(
            update(Petition)
            .where(Petition.id == petition.id)
            .values(current_signatures=Petition.current_signatures + 1)
            .execution_options(synchronize_session=False)
        )
        self.session.refresh(petition, attribute_names=["current_signatures"])
        return petition.current_signatures

    def count_petition_signatures(self, petition_id: int) -> int:
        return self._count(
            select(func.count())
            .select_from(PetitionSignature)
            .where(PetitionSignature.petition_id == petition_id)
        )

    def list_petition_signatures(self, petition_id: int) -> list[PetitionSignature]:
        stmt = (
            select(PetitionSignature)
            .where(PetitionSignature.petition_id == petition_id)
            .order_by(asc(PetitionSignature.created_at))
        )
        return list(self.session.scalars(stmt))

    # Representatives
    def list_representatives(self, level: str | None = None) -> list[Representative]:
        stmt = select(Representative)
        if level is not None:
            stmt = stmt.where(Representative.level == level)
        return list(self.session.scalars(stmt.order_by(asc(Representative.name))))

    def create_representative(self, representative: Representative) -> Representative:
        self._add(representative)
        return representative

    # News
    def list_news(
        self, category: str | None = None, limit: int = DEFAULT_LIST_LIMIT
    ) -> list[NewsArticle]:
        stmt = select(NewsArticle)
        if category is not None:
            stmt = stmt.where(NewsArticle.category == category)
        stmt = stmt.order_by(desc(NewsArticle.published_at)).limit(limit)
        return list(self.session.scalars(stmt))

    def create_news_article(self, article: NewsArticle) -> NewsArticle:
        existing = self.session.scalars(
            select(NewsArticle.id).where(NewsArticle.url == article.url)
        ).first()
        if existing is not None:
            raise ConflictError("News article already exists")

        self.session.add(article)
        try:
            self.session.flush()
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise ConflictError("News article already exists") from exc
            raise
        return article

    # Analytics
    def summarize(self) -> dict[str, int]:
        def total(model: type[Any]) -> int:
            return self._count(select(func.count()).select_from(model))

        summary = {
            "users": total(User),
            "forums": total(Forum),
            "posts": total(Post),
            "events": total(Event),
            "petitions": total(Petition),
            "representatives": total(Representative),
            "news_articles": total(NewsArticle),
            "votes": total(PostVote),
            "signatures": total(PetitionSignature),
            "attendances": self._count(
                select(func.count())
                .select_from(EventAttendee)
                .where(EventAttendee.status == ATTENDANCE_ATTENDING)
            ),
        }
        logger.debug("Computed analytics summary: %s", summary)
        return summary
