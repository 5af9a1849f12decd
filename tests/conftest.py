# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("NEWS_INGESTION_ENABLED", "false")

from civic_commons.api.dependencies import get_storage  # noqa: E402
from civic_commons.core.security import create_access_token  # noqa: E402
from civic_commons.db.session import Base  # noqa: E402
from civic_commons.db.time import utcnow  # noqa: E402
from civic_commons.main import app as fastapi_app  # noqa: E402
from civic_commons.models import Event, Forum, Petition, Post, User  # noqa: E402
from civic_commons.storage import MemoryStorage, SqlStorage, Storage  # noqa: E402

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    TestingSessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def storage(db_session: Session) -> SqlStorage:
    return SqlStorage(db_session)


@pytest.fixture(params=["memory", "sql"])
def any_storage(request: pytest.FixtureRequest) -> Storage:
    """Run a test once against each storage backend."""
    if request.param == "memory":
        return MemoryStorage()
    return SqlStorage(request.getfixturevalue("db_session"))


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_storage_dependency(app: FastAPI, request: pytest.FixtureRequest) -> Iterator[None]:
    # Only API tests need the override; service tests never touch the app.
    if "client" not in request.fixturenames:
        yield
        return

    storage = request.getfixturevalue("storage")
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_storage, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(storage: SqlStorage) -> Callable[..., User]:
    def _make_user(user_id: str | None = None, **profile: object) -> User:
        user_id = user_id or f"user-{next(_USER_COUNTER)}"
        with storage.transaction():
            return storage.upsert_user(User(id=user_id, **profile))

    return _make_user


def bearer_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user("alice", first_name="Alice", last_name="Able", email="alice@example.com")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("bob", first_name="Bob")


@pytest.fixture()
def auth_headers(test_user: User) -> dict[str, str]:
    return bearer_headers(test_user.id)


@pytest.fixture()
def other_headers(other_user: User) -> dict[str, str]:
    return bearer_headers(other_user.id)


@pytest.fixture()
def test_forum(storage: SqlStorage) -> Forum:
    with storage.transaction():
        return storage.create_forum(
            Forum(name="Downtown Community", type="location", location="Downtown")
        )


@pytest.fixture()
def test_post(storage: SqlStorage, test_forum: Forum, test_user: User) -> Post:
    with storage.transaction():
        return storage.create_post(
            Post(
                title="Bike lanes on Main Street",
                content="Should we add protected bike lanes?",
                author_id=test_user.id,
                forum_id=test_forum.id,
            )
        )


@pytest.fixture()
def test_event(storage: SqlStorage, test_user: User) -> Event:
    start = utcnow() + timedelta(days=7)
    with storage.transaction():
        return storage.create_event(
            Event(
                title="Town Hall Meeting",
                location="City Hall",
                start_time=start,
                end_time=start + timedelta(hours=2),
                organizer_id=test_user.id,
                category="town_hall",
            )
        )


@pytest.fixture()
def test_petition(storage: SqlStorage, test_user: User) -> Petition:
    with storage.transaction():
        return storage.create_petition(
            Petition(
                title="Better lighting in Central Park",
                description="Install LED lighting along the park paths.",
                target_signatures=3,
                creator_id=test_user.id,
                category="safety",
            )
        )


@pytest.fixture()
def headers_for() -> Callable[[str], dict[str, str]]:
    return bearer_headers
