"""Tests for behaviour shared by both storage backends."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from civic_commons.core.errors import ConflictError, InvalidArgumentError
from civic_commons.db.time import utcnow
from civic_commons.models import (
    Event,
    Forum,
    NewsArticle,
    Petition,
    PetitionSignature,
    Post,
    User,
)
from civic_commons.storage import MemoryStorage, SqlStorage, Storage


def test_both_backends_satisfy_protocol(storage: SqlStorage) -> None:
    assert isinstance(storage, Storage)
    assert isinstance(MemoryStorage(), Storage)


def test_upsert_user_updates_profile(any_storage: Storage) -> None:
    with any_storage.transaction():
        any_storage.upsert_user(User(id="u1", first_name="Ada"))
    with any_storage.transaction():
        updated = any_storage.upsert_user(User(id="u1", location="Riverside"))

    assert updated.first_name == "Ada"
    assert updated.location == "Riverside"
    assert updated.interests == []


def test_duplicate_signature_rejected_by_storage(any_storage: Storage) -> None:
    with any_storage.transaction():
        petition = any_storage.create_petition(
            Petition(title="t", description="d", target_signatures=5, creator_id="c")
        )
        any_storage.add_petition_signature(
            PetitionSignature(petition_id=petition.id, user_id="u1")
        )

    with pytest.raises(ConflictError), any_storage.transaction():
        any_storage.add_petition_signature(
            PetitionSignature(petition_id=petition.id, user_id="u1")
        )

    assert any_storage.count_petition_signatures(petition.id) == 1


class _DriverError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__(f"SQLSTATE {sqlstate}")
        self.sqlstate = sqlstate


@pytest.mark.parametrize(
    ("sqlstate", "expected"),
    [("23505", ConflictError), ("23503", InvalidArgumentError)],
)
def test_signature_integrity_errors_are_classified(
    storage: SqlStorage, mocker, sqlstate: str, expected: type[Exception]
) -> None:
    with storage.transaction():
        petition = storage.create_petition(
            Petition(title="t", description="d", target_signatures=5, creator_id="c")
        )
    mocker.patch.object(
        storage.session,
        "flush",
        side_effect=IntegrityError("INSERT INTO petition_signatures", {}, _DriverError(sqlstate)),
    )

    with pytest.raises(expected):
        storage.add_petition_signature(
            PetitionSignature(petition_id=petition.id, user_id="ghost")
        )

def test_duplicate_news_url_rejected(any_storage: Storage) -> None:
    def article(title: str) -> NewsArticle:
        return NewsArticle(
            title=title,
            source="Wire",
            url="https://example.com/a",
            published_at=utcnow(),
        )

    with any_storage.transaction():
        any_storage.create_news_article(article("first"))

    with pytest.raises(ConflictError), any_storage.transaction():
        any_storage.create_news_article(article("second"))

    assert [a.title for a in any_storage.list_news()] == ["first"]


def test_posts_by_forum_exclude_replies(any_storage: Storage) -> None:
    with any_storage.transaction():
        forum = any_storage.create_forum(Forum(name="Riverside District", type="location"))
        first = any_storage.create_post(
            Post(title="First", content="c", author_id="u", forum_id=forum.id)
        )
        any_storage.create_post(
            Post(title="Reply", content="c", author_id="u", forum_id=forum.id, parent_id=first.id)
        )
        second = any_storage.create_post(
            Post(title="Second", content="c", author_id="u", forum_id=forum.id)
        )

    listed = any_storage.list_posts_by_forum(forum.id)
    assert [p.id for p in listed] == [second.id, first.id]
    assert [p.title for p in any_storage.list_post_replies(first.id)] == ["Reply"]
    assert [p.title for p in any_storage.list_posts_by_forum(forum.id, limit=1)] == ["Second"]


def test_upcoming_events_soonest_first(any_storage: Storage) -> None:
    now = utcnow()
    with any_storage.transaction():
        for title, offset in (("later", 10), ("past", -2), ("sooner", 3)):
            any_storage.create_event(
                Event(title=title, start_time=now + timedelta(days=offset), organizer_id="u")
            )

    assert [e.title for e in any_storage.list_upcoming_events()] == ["sooner", "later"]
    assert [e.title for e in any_storage.list_events()] == ["later", "sooner", "past"]


def test_active_petitions_only(any_storage: Storage) -> None:
    with any_storage.transaction():
        for title, status in (("open", "active"), ("done", "successful"), ("shut", "closed")):
            any_storage.create_petition(
                Petition(
                    title=title,
                    description="d",
                    target_signatures=10,
                    creator_id="c",
                    status=status,
                )
            )

    assert [p.title for p in any_storage.list_active_petitions()] == ["open"]
    assert len(any_storage.list_petitions()) == 3
