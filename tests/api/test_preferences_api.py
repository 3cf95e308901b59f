"""HTTP surface for user preferences."""
from __future__ import annotations


def test_get_returns_defaults(client):
    resp = client.get("/preferences")

    assert resp.status_code == 200
    data = resp.json()
    assert data["user_id"] == "default"
    assert data["theme"] == "SYSTEM"
    assert data["language"] == "pt-BR"


def test_patch_applies_only_sent_fields(client):
    resp = client.patch("/preferences", json={"theme": "dark", "window_width": 1600})

    assert resp.status_code == 200
    data = resp.json()
    assert data["theme"] == "DARK"
    assert data["window_width"] == 1600
    assert data["window_height"] == 720
    assert client.get("/preferences").json()["theme"] == "DARK"


def test_patch_for_named_user(client):
    client.patch("/preferences", params={"user_id": "alice"}, json={"language": "en-US"})

    assert client.get("/preferences", params={"user_id": "alice"}).json()["language"] == "en-US"
    assert client.get("/preferences").json()["language"] == "pt-BR"


def test_explicit_null_clears_position(client):
    client.patch("/preferences", json={"window_x": 10, "window_y": 20})

    data = client.patch("/preferences", json={"window_x": None}).json()

    assert data["window_x"] is None
    assert data["window_y"] == 20


def test_rule_violation_is_400(client):
    resp = client.patch("/preferences", json={"auto_save_interval_ms": 1000})

    assert resp.status_code == 400
    assert resp.json()["error"] == "ValidationError"


def test_unknown_theme_is_400(client):
    assert client.patch("/preferences", json={"theme": "NEON"}).status_code == 400
