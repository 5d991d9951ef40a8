"""Multi-user isolation tests: two users can't see each other's data."""


def test_mood_isolation(client, auth_headers, auth_headers_b):
    res = client.put("/api/moods/2024-03-15", headers=auth_headers, json={"mood": 1, "note": "A private"})
    assert res.status_code == 201

    assert len(client.get("/api/moods", headers=auth_headers).json()) == 1
    assert client.get("/api/moods", headers=auth_headers_b).json() == []


def test_same_date_for_both_users(client, auth_headers, auth_headers_b):
    client.put("/api/moods/2024-03-15", headers=auth_headers, json={"mood": 1})
    res = client.put("/api/moods/2024-03-15", headers=auth_headers_b, json={"mood": 5})
    assert res.status_code == 201

    assert client.get("/api/moods/2024-03-15", headers=auth_headers).json()["mood"] == 1
    assert client.get("/api/moods/2024-03-15", headers=auth_headers_b).json()["mood"] == 5


def test_preferences_isolation(client, auth_headers, auth_headers_b):
    client.put("/api/preferences", headers=auth_headers, json={"theme": "dark"})
    assert client.get("/api/preferences", headers=auth_headers_b).json()["theme"] == "light"


def test_signout_only_affects_own_token(client, auth_headers, auth_headers_b):
    client.post("/api/auth/signout", headers=auth_headers)
    assert client.get("/api/moods", headers=auth_headers_b).status_code == 200
