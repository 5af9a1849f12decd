"""Tests for post vote endpoints."""

from fastapi import status


def test_upvote_returns_counters(client, auth_headers, test_post) -> None:
    response = client.post(
        f"/api/posts/{test_post.id}/vote",
        json={"vote_type": "upvote"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message"] == "Vote recorded"
    assert (body["upvotes"], body["downvotes"]) == (1, 0)


def test_vote_switch_scenario(client, auth_headers, other_headers, test_post) -> None:
    url = f"/api/posts/{test_post.id}/vote"

    client.post(url, json={"vote_type": "upvote"}, headers=auth_headers)
    client.post(url, json={"vote_type": "downvote"}, headers=other_headers)
    response = client.post(url, json={"vote_type": "downvote"}, headers=auth_headers)

    assert (response.json()["upvotes"], response.json()["downvotes"]) == (0, 2)
    post = client.get(f"/api/posts/{test_post.id}").json()
    assert (post["upvotes"], post["downvotes"]) == (0, 2)


def test_invalid_vote_type_is_bad_request(client, auth_headers, test_post) -> None:
    response = client.post(
        f"/api/posts/{test_post.id}/vote",
        json={"vote_type": "sideways"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Invalid vote type" in response.json()["detail"]


def test_missing_vote_type_is_validation_error(client, auth_headers, test_post) -> None:
    response = client.post(f"/api/posts/{test_post.id}/vote", json={}, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_vote_nonexistent_post(client, auth_headers) -> None:
    response = client.post("/api/posts/99999/vote", json={"vote_type": "upvote"}, headers=auth_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Post not found"}


def test_vote_requires_authentication(client, test_post) -> None:
    response = client.post(f"/api/posts/{test_post.id}/vote", json={"vote_type": "upvote"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["www-authenticate"] == "Bearer"


def test_my_vote(client, auth_headers, test_post) -> None:
    url = f"/api/posts/{test_post.id}/my-vote"
    assert client.get(url, headers=auth_headers).json() is None

    client.post(f"/api/posts/{test_post.id}/vote", json={"vote_type": "downvote"}, headers=auth_headers)
    vote = client.get(url, headers=auth_headers).json()

    assert vote["vote_type"] == "downvote"
    assert vote["user_id"] == "alice"
