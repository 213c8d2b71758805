"""Calendar event API tests."""

import pytest


async def _event(client, headers, **fields):
    body = {"title": "Event", "day": 1, "month": 1, "year": 2026, **fields}
    r = await client.post("/api/calendar/events", headers=headers, json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_create_event_defaults(client, auth_headers):
    event = await _event(client, auth_headers, title="Dentist", day=12, month=5)
    assert event["color"] == "bright-blue"
    assert event["description"] == ""
    assert (event["day"], event["month"], event["year"]) == (12, 5, 2026)


@pytest.mark.asyncio
async def test_create_event_out_of_range(client, auth_headers):
    r = await client.post(
        "/api/calendar/events",
        headers=auth_headers,
        json={"title": "Bad", "day": 32, "month": 1, "year": 2026},
    )
    assert r.status_code == 400

    r = await client.post(
        "/api/calendar/events",
        headers=auth_headers,
        json={"title": "Bad", "day": 1, "month": 13, "year": 2026},
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_sorted_by_date(client, auth_headers):
    await _event(client, auth_headers, title="late", day=20, month=3)
    await _event(client, auth_headers, title="early", day=2, month=3)
    await _event(client, auth_headers, title="next-year", day=1, month=1, year=2027)

    r = await client.get("/api/calendar/events", headers=auth_headers)
    assert [e["title"] for e in r.json()["data"]] == ["early", "late", "next-year"]


@pytest.mark.asyncio
async def test_month_filter_needs_year(client, auth_headers):
    await _event(client, auth_headers, title="march", month=3)
    await _event(client, auth_headers, title="april", month=4)

    r = await client.get(
        "/api/calendar/events", headers=auth_headers, params={"month": 3, "year": 2026}
    )
    assert [e["title"] for e in r.json()["data"]] == ["march"]

    # month alone is ignored
    r = await client.get("/api/calendar/events", headers=auth_headers, params={"month": 3})
    assert r.json()["count"] == 2


@pytest.mark.asyncio
async def test_update_and_delete_event(client, auth_headers):
    event = await _event(client, auth_headers, title="Meeting")
    r = await client.put(
        f"/api/calendar/events/{event['id']}",
        headers=auth_headers,
        json={"color": "emerald-green", "day": 9},
    )
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["color"] == "emerald-green"
    assert updated["day"] == 9
    assert updated["title"] == "Meeting"

    r = await client.delete(f"/api/calendar/events/{event['id']}", headers=auth_headers)
    assert r.status_code == 200
    r = await client.get(f"/api/calendar/events/{event['id']}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Event not found"


@pytest.mark.asyncio
async def test_whitespace_only_event_title_rejected(client, auth_headers):
    r = await client.post(
        "/api/calendar/events",
        headers=auth_headers,
        json={"title": " ", "day": 1, "month": 1, "year": 2026},
    )
    assert r.status_code == 400
