"""Tests for auth, analytics, health and error handling."""

from fastapi import status
from fastapi.testclient import TestClient

from civic_commons.api.dependencies import get_storage


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root(client) -> None:
    body = client.get("/").json()

    assert body["name"] == "Civic Commons"
    assert body["docs"] == "/docs"


def test_auth_user(client, auth_headers) -> None:
    response = client.get("/api/auth/user", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == "alice"
    assert body["display_name"] == "Alice Able"
    assert body["interests"] == []


def test_auth_user_rejects_bad_token(client) -> None:
    response = client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"detail": "Could not validate credentials"}


def test_auth_user_rejects_unknown_user(client, headers_for) -> None:
    response = client.get("/api/auth/user", headers=headers_for("ghost"))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"detail": "User not found"}


def test_analytics_summary_counts_ledgers(
    client, auth_headers, other_headers, test_post, test_event, test_petition
) -> None:
    client.post(f"/api/posts/{test_post.id}/vote", json={"vote_type": "upvote"}, headers=auth_headers)
    client.post(f"/api/events/{test_event.id}/attend", json={"status": "attending"}, headers=auth_headers)
    client.post(f"/api/events/{test_event.id}/attend", json={"status": "maybe"}, headers=other_headers)
    client.post(f"/api/petitions/{test_petition.id}/sign", json={}, headers=other_headers)

    summary = client.get("/api/analytics/summary").json()

    assert summary == {
        "users": 2,
        "forums": 1,
        "posts": 1,
        "events": 1,
        "petitions": 1,
        "representatives": 0,
        "news_articles": 0,
        "votes": 1,
        "signatures": 1,
        "attendances": 1,
    }


def test_unhandled_error_is_json_500(app, storage, mocker) -> None:
    mocker.patch.object(storage, "summarize", side_effect=RuntimeError("boom"))
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/analytics/summary")
    finally:
        app.dependency_overrides.pop(get_storage, None)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Internal server error"}
