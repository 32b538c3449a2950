"""Tests for ui/app.py: HTTP surface over the store and engines."""

import json

import pytest
from fastapi.testclient import TestClient

from ui.app import app, reset_stores


@pytest.fixture
def client(workspace):
    reset_stores()
    yield TestClient(app)
    reset_stores()


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": "true"}


def test_state(client):
    data = client.get("/api/state").json()
    assert [h["id"] for h in data["habits"]] == ["a", "b"]
    assert data["logs"]["2024-03-02"] == {"a": True, "b": True}


def test_add_and_delete_habit(client, workspace):
    res = client.post("/api/habits", json={"name": "Stretch"}).json()
    assert res["ok"] is True
    habit_id = res["habit"]["id"]
    saved = json.loads((workspace / "state.json").read_text(encoding="utf-8"))
    assert habit_id in [h["id"] for h in saved["habits"]]

    assert client.delete(f"/api/habits/{habit_id}").json()["ok"] is True
    assert client.delete(f"/api/habits/{habit_id}").status_code == 404


def test_add_blank_habit_is_noop(client):
    res = client.post("/api/habits", json={"name": "  "}).json()
    assert res == {"ok": False, "habit": None}
    assert len(client.get("/api/state").json()["habits"]) == 2


def test_toggle_and_mood(client):
    res = client.post("/api/toggle", json={"habitId": "b", "date": "2024-03-01"}).json()
    assert res["done"] is True
    client.post("/api/mood", json={"date": "2024-03-03", "mood": "Relaxed"})
    state = client.get("/api/state").json()
    assert state["logs"]["2024-03-01"]["b"] is True
    assert state["moods"]["2024-03-03"] == "Relaxed"


def test_toggle_bad_date(client):
    res = client.post("/api/toggle", json={"habitId": "a", "date": "03/01/2024"})
    assert res.status_code == 400
    res = client.post("/api/toggle", json={"habitId": "a", "date": "20240301"})
    assert res.status_code == 400


def test_streaks(client):
    data = client.get("/api/streaks", params={"today": "2024-03-02"}).json()
    assert data["streaks"]["a"] == {"current": 2, "best": 2}
    assert data["streaks"]["b"] == {"current": 1, "best": 1}


def test_summary(client):
    data = client.get("/api/summary", params={"month": "2024-03"}).json()
    assert data["month"] == "2024-03"
    assert data["completion"] == {"totalCompleted": 3, "totalPossible": 62, "percentage": 5}
    assert data["moods"]["Happy"] == 1
    assert data["moods"]["Stressed"] == 1
    assert data["trend"][0]["percentage"] == 50
    assert data["growth"] == 0


def test_summary_bad_month(client):
    assert client.get("/api/summary", params={"month": "March"}).status_code == 400


def test_heatmap(client):
    data = client.get("/api/heatmap/2024").json()
    assert len(data["days"]) == 366
    assert data["leadingPad"] == 1
    by_key = {d["dateKey"]: d for d in data["days"]}
    assert by_key["2024-03-01"]["level"] == 2
    assert by_key["2024-03-02"]["level"] == 4
    assert data["weeks"][0][0] is None


def test_grid(client):
    data = client.get("/api/grid", params={"month": "2024-03", "today": "2024-03-02"}).json()
    assert sum(len(w["days"]) for w in data["weeks"]) == 31
    assert data["totals"][0]["completed"] == 1
    run = next(h for h in data["habits"] if h["id"] == "a")
    assert run["progress"]["done"] == 2
    assert run["streak"] == {"current": 2, "best": 2}
    assert data["moods"]["2024-03-01"] == "Happy"


def test_grid_focused(client):
    data = client.get(
        "/api/grid", params={"month": "2024-03", "today": "2024-03-02", "focused": "true"}
    ).json()
    assert data["weeks"] == [{"week": 9, "days": ["2024-03-02"]}]


def test_export(client):
    res = client.get("/api/export")
    assert res.status_code == 200
    assert "habitflow-backup-" in res.headers["content-disposition"]
    assert set(res.json()) == {"habits", "logs", "moods"}


def test_export_writes_nothing_to_workspace(client, workspace):
    before = sorted(p.name for p in workspace.iterdir())
    client.get("/api/export")
    assert sorted(p.name for p in workspace.iterdir()) == before


def test_heatmap_last_supported_year(client):
    data = client.get("/api/heatmap/9999").json()
    assert len(data["days"]) == 365
    assert data["days"][-1]["dateKey"] == "9999-12-31"
    assert client.get("/api/heatmap/10000").status_code == 400
