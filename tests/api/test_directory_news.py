"""Tests for representative and news endpoints."""

from fastapi import status


def test_representatives_by_level(client, auth_headers) -> None:
    for name, level in (("Sarah Chen", "state"), ("Maria Rodriguez", "local")):
        response = client.post(
            "/api/representatives/",
            json={"name": name, "title": "Official", "level": level},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED

    local = client.get("/api/representatives/", params={"level": "local"}).json()
    assert [r["name"] for r in local] == ["Maria Rodriguez"]

    everyone = client.get("/api/representatives/").json()
    assert [r["name"] for r in everyone] == ["Maria Rodriguez", "Sarah Chen"]


def test_create_news_and_reject_duplicate_url(client, auth_headers) -> None:
    article = {
        "title": "Council approves new community center",
        "source": "City News",
        "url": "https://example.com/community-center",
        "category": "local",
        "published_at": "2026-10-01T09:00:00Z",
    }

    created = client.post("/api/news/", json=article, headers=auth_headers)
    assert created.status_code == status.HTTP_201_CREATED

    duplicate = client.post("/api/news/", json={**article, "title": "Again"}, headers=auth_headers)
    assert duplicate.status_code == status.HTTP_409_CONFLICT

    assert len(client.get("/api/news/").json()) == 1


def test_news_listing_newest_first_and_by_category(client, auth_headers) -> None:
    for n, category in ((1, "local"), (3, "politics"), (2, "local")):
        client.post(
            "/api/news/",
            json={
                "title": f"Story {n}",
                "source": "Wire",
                "url": f"https://example.com/story-{n}",
                "category": category,
                "published_at": f"2026-10-0{n}T09:00:00Z",
            },
            headers=auth_headers,
        )

    titles = [a["title"] for a in client.get("/api/news/").json()]
    assert titles == ["Story 3", "Story 2", "Story 1"]

    local = client.get("/api/news/", params={"category": "local", "limit": 1}).json()
    assert [a["title"] for a in local] == ["Story 2"]
