"""Storage protocol shared by the SQL and in-memory backends.

Ledger services and API handlers depend on this protocol only; the concrete
backend is injected (``SqlStorage`` per request in production,
``MemoryStorage`` in tests and local experiments).

Write methods do not commit. Callers group related writes inside
``transaction()``, which commits on success and rolls back on error.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

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

DEFAULT_LIST_LIMIT = 50
DEFAULT_SHORT_LIST_LIMIT = 20


@runtime_checkable
class Storage(Protocol):
    """Capability set required by the ledgers and the REST layer."""

    def transaction(self) -> AbstractContextManager[Storage]:
        """Return a context manager scoping one atomic unit of work."""
        ...

    # Users
    def get_user(self, user_id: str) -> User | None: ...

    def upsert_user(self, user: User) -> User:
        """Insert the user or overwrite the profile fields of an existing one."""
        ...

    # Forums
    def list_forums(self, forum_type: str | None = None) -> list[Forum]: ...

    def get_forum(self, forum_id: int) -> Forum | None: ...

    def create_forum(self, forum: Forum) -> Forum: ...

    # Posts
    def list_posts_by_forum(
        self, forum_id: int, limit: int = DEFAULT_LIST_LIMIT
    ) -> list[Post]: ...

    def get_post(self, post_id: int, *, for_update: bool = False) -> Post | None:
        """Return a post; ``for_update`` locks the row until the transaction ends."""
        ...

    def create_post(self, post: Post) -> Post: ...

    def list_post_replies(self, parent_id: int) -> list[Post]: ...

    def search_posts(
        self, query: str, limit: int = DEFAULT_SHORT_LIST_LIMIT
    ) -> list[Post]: ...

    # Vote ledger
    def get_post_vote(self, post_id: int, user_id: str) -> PostVote | None: ...

    def add_post_vote(self, vote: PostVote) -> PostVote: ...

    def count_post_votes(self, post_id: int, vote_type: str) -> int: ...

    # Events
    def list_events(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Event]: ...

    def list_upcoming_events(
        self, limit: int = DEFAULT_SHORT_LIST_LIMIT
    ) -> list[Event]: ...

    def list_events_by_category(self, category: str) -> list[Event]: ...

    def get_event(self, event_id: int, *, for_update: bool = False) -> Event | None: ...

    def create_event(self, event: Event) -> Event: ...

    # Attendance ledger
    def get_event_attendee(self, event_id: int, user_id: str) -> EventAttendee | None: ...

    def add_event_attendee(self, attendee: EventAttendee) -> EventAttendee: ...

    def count_event_attendees(self, event_id: int, status: str) -> int: ...

    def list_event_attendees(self, event_id: int) -> list[EventAttendee]: ...

    # Petitions
    def list_petitions(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Petition]: ...

    def list_active_petitions(
        self, limit: int = DEFAULT_SHORT_LIST_LIMIT
    ) -> list[Petition]: ...

    def get_petition(
        self, petition_id: int, *, for_update: bool = False
    ) -> Petition | None: ...

    def create_petition(self, petition: Petition) -> Petition: ...

    # Signature ledger
    def get_petition_signature(
        self, petition_id: int, user_id: str
    ) -> PetitionSignature | None: ...

    def add_petition_signature(self, signature: PetitionSignature) -> PetitionSignature:
        """Insert a signature; raises ``ConflictError`` if the user already signed."""
        ...

    def increment_petition_signatures(self, petition: Petition) -> int:
        """Atomically add one to ``current_signatures`` and return the new value."""
        ...

    def count_petition_signatures(self, petition_id: int) -> int: ...

    def list_petition_signatures(self, petition_id: int) -> list[PetitionSignature]: ...

    # Representatives
    def list_representatives(self, level: str | None = None) -> list[Representative]: ...

    def create_representative(self, representative: Representative) -> Representative: ...

    # News
    def list_news(
        self, category: str | None = None, limit: int = DEFAULT_LIST_LIMIT
    ) -> list[NewsArticle]: ...

    def create_news_article(self, article: NewsArticle) -> NewsArticle:
        """Insert an article; raises ``ConflictError`` when the URL already exists."""
        ...

    # Analytics
    def summarize(self) -> dict[str, int]:
        """Return row totals keyed by the names used in the analytics summary."""
        ...
