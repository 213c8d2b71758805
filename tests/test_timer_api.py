"""Focus-timer API tests — sessions, today's summary, persisted settings."""

from datetime import datetime, timedelta, timezone

import pytest


async def _session(client, headers, **fields):
    body = {"duration": 25, "timer_type": "pomodoro", **fields}
    r = await client.post("/api/timer/sessions", headers=headers, json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_save_session(client, auth_headers):
    s = await _session(client, auth_headers, notes="deep focus")
    assert s["duration"] == 25
    assert s["timer_type"] == "pomodoro"
    assert s["completed"] is True
    assert s["notes"] == "deep focus"
    assert s["start_time"] and s["end_time"]


@pytest.mark.asyncio
async def test_session_validation(client, auth_headers):
    r = await client.post(
        "/api/timer/sessions", headers=auth_headers, json={"duration": 0, "timer_type": "pomodoro"}
    )
    assert r.status_code == 400
    r = await client.post(
        "/api/timer/sessions", headers=auth_headers, json={"duration": 5, "timer_type": "nap"}
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_filters(client, auth_headers):
    now = datetime.now(timezone.utc)
    old = (now - timedelta(days=10)).isoformat()
    await _session(client, auth_headers, timer_type="pomodoro", start_time=old, end_time=old)
    await _session(client, auth_headers, timer_type="break", duration=5)
    await _session(client, auth_headers, timer_type="deep-work", duration=50)

    r = await client.get("/api/timer/sessions", headers=auth_headers)
    assert r.json()["count"] == 3

    r = await client.get("/api/timer/sessions", headers=auth_headers, params={"timer_type": "break"})
    assert [s["duration"] for s in r.json()["data"]] == [5]

    since = (now - timedelta(days=1)).isoformat()
    r = await client.get("/api/timer/sessions", headers=auth_headers, params={"start_date": since})
    assert r.json()["count"] == 2

    r = await client.get("/api/timer/sessions", headers=auth_headers, params={"limit": 1})
    assert r.json()["count"] == 1


@pytest.mark.asyncio
async def test_today_summary(client, auth_headers):
    await _session(client, auth_headers, timer_type="pomodoro", duration=25)
    await _session(client, auth_headers, timer_type="deep-work", duration=50)
    await _session(client, auth_headers, timer_type="break", duration=5)
    await _session(client, auth_headers, timer_type="custom", duration=10)

    r = await client.get("/api/timer/sessions/today", headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 4
    assert body["summary"] == {
        "total_sessions": 4,
        "focus_sessions": 2,
        "break_sessions": 1,
        "total_focus_time": 75,
        "total_break_time": 5,
        "streak_maintained": True,
    }


@pytest.mark.asyncio
async def test_today_summary_empty(client, auth_headers):
    r = await client.get("/api/timer/sessions/today", headers=auth_headers)
    assert r.json()["summary"]["total_sessions"] == 0
    assert r.json()["summary"]["streak_maintained"] is False


@pytest.mark.asyncio
async def test_update_and_delete_session(client, auth_headers):
    s = await _session(client, auth_headers)
    r = await client.put(
        f"/api/timer/sessions/{s['id']}", headers=auth_headers, json={"notes": "interrupted", "duration": 12}
    )
    assert r.status_code == 200
    assert r.json()["data"]["notes"] == "interrupted"
    assert r.json()["data"]["duration"] == 12
    assert r.json()["data"]["timer_type"] == "pomodoro"

    r = await client.delete(f"/api/timer/sessions/{s['id']}", headers=auth_headers)
    assert r.status_code == 200
    r = await client.get(f"/api/timer/sessions/{s['id']}", headers=auth_headers)
    assert r.status_code == 404


# ═══════════════════════════════════════════════════════════
# Timer settings
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_default_timer_settings(client, auth_headers):
    r = await client.get("/api/timer/settings", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"] == {
        "focus_duration": 1500,
        "break_duration": 300,
        "long_break_duration": 900,
        "sessions_before_long_break": 4,
        "auto_start_breaks": True,
        "auto_start_focus": False,
        "sound_enabled": True,
        "notifications": True,
    }


@pytest.mark.asyncio
async def test_timer_settings_merge_and_persist(client, auth_headers):
    r = await client.put(
        "/api/timer/settings", headers=auth_headers, json={"focus_duration": 3000, "sound_enabled": False}
    )
    assert r.status_code == 200
    assert r.json()["data"]["focus_duration"] == 3000
    assert r.json()["data"]["break_duration"] == 300

    r = await client.get("/api/timer/settings", headers=auth_headers)
    assert r.json()["data"]["focus_duration"] == 3000
    assert r.json()["data"]["sound_enabled"] is False


@pytest.mark.asyncio
async def test_timer_settings_per_user(client, auth_headers, other_headers):
    await client.put("/api/timer/settings", headers=auth_headers, json={"focus_duration": 3000})
    r = await client.get("/api/timer/settings", headers=other_headers)
    assert r.json()["data"]["focus_duration"] == 1500


@pytest.mark.asyncio
async def test_timer_settings_validation(client, auth_headers):
    r = await client.put("/api/timer/settings", headers=auth_headers, json={"focus_duration": 5})
    assert r.status_code == 400
