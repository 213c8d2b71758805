"""User settings API tests."""

import pytest


@pytest.mark.asyncio
async def test_default_settings(client, auth_headers):
    r = await client.get("/api/settings", headers=auth_headers)
    assert r.status_code == 200
    settings = r.json()["data"]
    assert settings["dark_mode"] is True
    assert settings["accent_color"] == "electric-red"
    assert settings["notifications"] == {
        "email": True,
        "push": True,
        "sounds": False,
        "reminders": True,
    }
    assert settings["privacy"]["profile_visible"] is True


@pytest.mark.asyncio
async def test_replace_settings_fills_defaults(client, auth_headers):
    r = await client.put(
        "/api/settings",
        headers=auth_headers,
        json={"settings": {"accent_color": "bright-blue", "notifications": {"push": False}}},
    )
    assert r.status_code == 200
    settings = r.json()["data"]
    assert settings["accent_color"] == "bright-blue"
    assert settings["notifications"]["push"] is False
    assert settings["notifications"]["email"] is True
    assert settings["dark_mode"] is True

    r = await client.get("/api/settings", headers=auth_headers)
    assert r.json()["data"]["accent_color"] == "bright-blue"


@pytest.mark.asyncio
async def test_invalid_accent_color(client, auth_headers):
    r = await client.put(
        "/api/settings", headers=auth_headers, json={"settings": {"accent_color": "pink"}}
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_dark_mode_toggle(client, auth_headers):
    r = await client.put("/api/settings/dark-mode", headers=auth_headers, json={"dark_mode": False})
    assert r.status_code == 200
    assert r.json()["data"] is False

    r = await client.get("/api/settings", headers=auth_headers)
    assert r.json()["data"]["dark_mode"] is False

    r = await client.get("/api/auth/me", headers=auth_headers)
    assert r.json()["data"]["settings"]["dark_mode"] is False


@pytest.mark.asyncio
async def test_settings_are_per_user(client, auth_headers, other_headers):
    await client.put("/api/settings/dark-mode", headers=auth_headers, json={"dark_mode": False})
    r = await client.get("/api/settings", headers=other_headers)
    assert r.json()["data"]["dark_mode"] is True
