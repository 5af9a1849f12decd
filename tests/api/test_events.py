"""Tests for event and attendance endpoints."""

from datetime import timedelta

from fastapi import status

from civic_commons.db.time import utcnow


def test_create_event(client, auth_headers) -> None:
    start = utcnow() + timedelta(days=10)
    response = client.post(
        "/api/events/",
        json={
            "title": "Budget Planning Workshop",
            "start_time": start.isoformat(),
            "end_time": (start + timedelta(minutes=90)).isoformat(),
            "category": "workshop",
            "is_virtual": True,
            "meeting_url": "https://meet.example.com/budget-workshop",
        },
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["organizer_id"] == "alice"
    assert body["attendee_count"] == 0


def test_create_event_rejects_inverted_times(client, auth_headers) -> None:
    start = utcnow() + timedelta(days=1)
    response = client.post(
        "/api/events/",
        json={
            "title": "Backwards",
            "start_time": start.isoformat(),
            "end_time": (start - timedelta(hours=1)).isoformat(),
        },
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_attend_then_maybe(client, auth_headers, test_event) -> None:
    url = f"/api/events/{test_event.id}/attend"

    first = client.post(url, json={"status": "attending"}, headers=auth_headers)
    assert first.status_code == status.HTTP_200_OK
    assert first.json()["attendee_count"] == 1

    second = client.post(url, json={"status": "maybe"}, headers=auth_headers)
    assert second.json()["attendee_count"] == 0

    my_status = client.get(f"/api/events/{test_event.id}/my-status", headers=auth_headers)
    assert my_status.json()["status"] == "maybe"


def test_attend_defaults_to_attending(client, auth_headers, other_headers, test_event) -> None:
    url = f"/api/events/{test_event.id}/attend"
    client.post(url, headers=auth_headers)
    response = client.post(url, json={}, headers=other_headers)

    assert response.json()["attendee_count"] == 2
    attendees = client.get(f"/api/events/{test_event.id}/attendees").json()
    assert sorted(a["user_id"] for a in attendees) == ["alice", "bob"]


def test_invalid_status_is_bad_request(client, auth_headers, test_event) -> None:
    response = client.post(
        f"/api/events/{test_event.id}/attend",
        json={"status": "perhaps"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_attend_missing_event(client, auth_headers) -> None:
    response = client.post("/api/events/777/attend", json={}, headers=auth_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Event not found"


def test_list_upcoming_and_by_category(client, auth_headers, test_event) -> None:
    past_start = utcnow() - timedelta(days=3)
    client.post(
        "/api/events/",
        json={"title": "Last week's cleanup", "start_time": past_start.isoformat(), "category": "volunteer"},
        headers=auth_headers,
    )

    upcoming = client.get("/api/events/", params={"upcoming": True}).json()
    assert [e["id"] for e in upcoming] == [test_event.id]

    volunteer = client.get("/api/events/", params={"category": "volunteer"}).json()
    assert [e["title"] for e in volunteer] == ["Last week's cleanup"]

    everything = client.get("/api/events/").json()
    assert len(everything) == 2
