"""Dict-backed storage for tests and local experiments.

Records are the same ORM classes the SQL backend uses, held as transient
instances. Column defaults that the database would normally apply on insert
are filled in by ``_fill_defaults``.
"""
from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from itertools import count
from typing import Any, TypeVar

from civic_commons.core.errors import ConflictError
from civic_commons.db.time import ensure_utc, utcnow
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

__all__ = ["MemoryStorage"]

RecordT = TypeVar("RecordT")

_USER_PROFILE_FIELDS = (
    "email",
    "first_name",
    "last_name",
    "profile_image_url",
    "location",
    "bio",
    "interests",
)


def _fill_defaults(record: Any) -> None:
    """Apply Python-side column defaults to attributes left unset."""
    for column in record.__table__.columns:
        if column.default is None or getattr(record, column.key, None) is not None:
            continue
        default = column.default
        value = default.arg(None) if default.is_callable else default.arg
        setattr(record, column.key, value)


def _newest_first(records: list[RecordT], key: str) -> list[RecordT]:
    return sorted(
        records,
        key=lambda r: (ensure_utc(getattr(r, key)), getattr(r, "id", 0)),
        reverse=True,
    )


def _oldest_first(records: list[RecordT], key: str) -> list[RecordT]:
    return sorted(records, key=lambda r: (ensure_utc(getattr(r, key)), getattr(r, "id", 0)))


class MemoryStorage:
    """Storage implementation keeping every table in a dictionary.

    A single re-entrant lock serializes transactions, standing in for the
    row locks the SQL backend takes.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._ids = {
            name: count(1)
            for name in ("forums", "posts", "events", "petitions", "representatives", "news")
        }
        self.users: dict[str, User] = {}
        self.forums: dict[int, Forum] = {}
        self.posts: dict[int, Post] = {}
        self.events: dict[int, Event] = {}
        self.petitions: dict[int, Petition] = {}
        self.representatives: dict[int, Representative] = {}
        self.news_articles: dict[int, NewsArticle] = {}
        self.post_votes: dict[tuple[int, str], PostVote] = {}
        self.event_attendees: dict[tuple[int, str], EventAttendee] = {}
        self.petition_signatures: dict[tuple[int, str], PetitionSignature] = {}

    @contextmanager
    def transaction(self) -> Iterator[MemoryStorage]:
        with self._lock:
            yield self

    def _insert(self, table: dict[int, Any], sequence: str, record: Any) -> Any:
        with self._lock:
            _fill_defaults(record)
            record.id = next(self._ids[sequence])
            table[record.id] = record
            return record

    # Users
    def get_user(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    def upsert_user(self, user: User) -> User:
        with self._lock:
            existing = self.users.get(user.id)
            if existing is None:
                _fill_defaults(user)
                self.users[user.id] = user
                return user

            for field in _USER_PROFILE_FIELDS:
                value = getattr(user, field)
                if value is not None:
                    setattr(existing, field, value)
            existing.updated_at = utcnow()
            return existing

    # Forums
    def list_forums(self, forum_type: str | None = None) -> list[Forum]:
        forums = [f for f in self.forums.values() if forum_type is None or f.type == forum_type]
        return sorted(forums, key=lambda f: f.name)

    def get_forum(self, forum_id: int) -> Forum | None:
        return self.forums.get(forum_id)

    def create_forum(self, forum: Forum) -> Forum:
        return self._insert(self.forums, "forums", forum)

    # Posts
    def list_posts_by_forum(self, forum_id: int, limit: int = DEFAULT_LIST_LIMIT) -> list[Post]:
        posts = [
            p for p in self.posts.values() if p.forum_id == forum_id and p.parent_id is None
        ]
        return _newest_first(posts, "created_at")[:limit]

    def get_post(self, post_id: int, *, for_update: bool = False) -> Post | None:
        return self.posts.get(post_id)

    def create_post(self, post: Post) -> Post:
        return self._insert(self.posts, "posts", post)

    def list_post_replies(self, parent_id: int) -> list[Post]:
        replies = [p for p in self.posts.values() if p.parent_id == parent_id]
        return _oldest_first(replies, "created_at")

    def search_posts(self, query: str, limit: int = DEFAULT_SHORT_LIST_LIMIT) -> list[Post]:
        needle = query.lower()
        matches = [p for p in self.posts.values() if needle in p.title.lower()]
        return _newest_first(matches, "created_at")[:limit]

    # Vote ledger
    def get_post_vote(self, post_id: int, user_id: str) -> PostVote | None:
        return self.post_votes.get((post_id, user_id))

    def add_post_vote(self, vote: PostVote) -> PostVote:
        with self._lock:
            _fill_defaults(vote)
            self.post_votes[(vote.post_id, vote.user_id)] = vote
            return vote

    def count_post_votes(self, post_id: int, vote_type: str) -> int:
        return sum(
            1
            for vote in self.post_votes.values()
            if vote.post_id == post_id and vote.vote_type == vote_type
        )

    # Events
    def list_events(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Event]:
        return _newest_first(list(self.events.values()), "start_time")[:limit]

    def list_upcoming_events(self, limit: int = DEFAULT_SHORT_LIST_LIMIT) -> list[Event]:
        now = utcnow()
        upcoming = [e for e in self.events.values() if ensure_utc(e.start_time) >= now]
        return _oldest_first(upcoming, "start_time")[:limit]

    def list_events_by_category(self, category: str) -> list[Event]:
        matches = [e for e in self.events.values() if e.category == category]
        return _oldest_first(matches, "start_time")

    def get_event(self, event_id: int, *, for_update: bool = False) -> Event | None:
        return self.events.get(event_id)

    def create_event(self, event: Event) -> Event:
        return self._insert(self.events, "events", event)

    # Attendance ledger
    def get_event_attendee(self, event_id: int, user_id: str) -> EventAttendee | None:
        return self.event_attendees.get((event_id, user_id))

    def add_event_attendee(self, attendee: EventAttendee) -> EventAttendee:
        with self._lock:
            _fill_defaults(attendee)
            self.event_attendees[(attendee.event_id, attendee.user_id)] = attendee
            return attendee

    def count_event_attendees(self, event_id: int, status: str) -> int:
        return sum(
            1
            for row in self.event_attendees.values()
            if row.event_id == event_id and row.status == status
        )

    def list_event_attendees(self, event_id: int) -> list[EventAttendee]:
        rows = [row for row in self.event_attendees.values() if row.event_id == event_id]
        return sorted(rows, key=lambda row: ensure_utc(row.created_at))

    # Petitions
    def list_petitions(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Petition]:
        return _newest_first(list(self.petitions.values()), "created_at")[:limit]

    def list_active_petitions(self, limit: int = DEFAULT_SHORT_LIST_LIMIT) -> list[Petition]:
        active = [p for p in self.petitions.values() if p.status == PETITION_STATUS_ACTIVE]
        return _newest_first(active, "created_at")[:limit]

    def get_petition(self, petition_id: int, *, for_update: bool = False) -> Petition | None:
        return self.petitions.get(petition_id)

    def create_petition(self, petition: Petition) -> Petition:
        return self._insert(self.petitions, "petitions", petition)

    # Signature ledger
    def get_petition_signature(self, petition_id: int, user_id: str) -> PetitionSignature | None:
        return self.petition_signatures.get((petition_id, user_id))

    def add_petition_signature(self, signature: PetitionSignature) -> PetitionSignature:
        key = (signature.petition_id, signature.user_id)
        with self._lock:
            if key in self.petition_signatures:
                raise ConflictError("Petition already signed by this user")
            _fill_defaults(signature)
            self.petition_signatures[key] = signature
            return signature

    def increment_petition_signatures(self, petition: Petition) -> int:
        with self._lock:
            petition.current_signatures += 1
            return petition.current_signatures

    def count_petition_signatures(self, petition_id: int) -> int:
        return sum(1 for pid, _ in self.petition_signatures if pid == petition_id)

    def list_petition_signatures(self, petition_id: int) -> list[PetitionSignature]:
        rows = [s for s in self.petition_signatures.values() if s.petition_id == petition_id]
        return sorted(rows, key=lambda s: ensure_utc(s.created_at))

    # Representatives
    def list_representatives(self, level: str | None = None) -> list[Representative]:
        reps = [r for r in self.representatives.values() if level is None or r.level == level]
        return sorted(reps, key=lambda r: r.name)

    def create_representative(self, representative: Representative) -> Representative:
        return self._insert(self.representatives, "representatives", representative)

    # News
    def list_news(
        self, category: str | None = None, limit: int = DEFAULT_LIST_LIMIT
    ) -> list[NewsArticle]:
        articles = [
            a for a in self.news_articles.values() if category is None or a.category == category
        ]
        return _newest_first(articles, "published_at")[:limit]

    def create_news_article(self, article: NewsArticle) -> NewsArticle:
        with self._lock:
            if any(existing.url == article.url for existing in self.news_articles.values()):
                raise ConflictError("News article already exists")
            return self._insert(self.news_articles, "news", article)

    # Analytics
    def summarize(self) -> dict[str, int]:
        return {
            "users": len(self.users),
            "forums": len(self.forums),
            "posts": len(self.posts),
            "events": len(self.events),
            "petitions": len(self.petitions),
            "representatives": len(self.representatives),
            "news_articles": len(self.news_articles),
            "votes": len(self.post_votes),
            "signatures": len(self.petition_signatures),
            "attendances": sum(
                1 for row in self.event_attendees.values() if row.status == ATTENDANCE_ATTENDING
            ),
        }
