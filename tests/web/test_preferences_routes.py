"""Tests for display preference routes."""


def test_default_theme(client, auth_headers):
    res = client.get("/api/preferences", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"theme": "light"}


def test_toggle_dark(client, auth_headers):
    res = client.put("/api/preferences", headers=auth_headers, json={"theme": "dark"})
    assert res.json() == {"theme": "dark"}
    assert client.get("/api/preferences", headers=auth_headers).json()["theme"] == "dark"


def test_unknown_theme(client, auth_headers):
    res = client.put("/api/preferences", headers=auth_headers, json={"theme": "neon"})
    assert res.status_code == 422
