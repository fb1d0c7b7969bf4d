import pytest
from fastapi.testclient import TestClient

from core.storage import JsonFileStore, PersistenceAdapter
from core.store import WellnessStore, set_store
from web.backend.app import create_app

TODAY = "2026-03-10"


@pytest.fixture
def store(tmp_path):
    store = WellnessStore.from_persistence(
        PersistenceAdapter(JsonFileStore(tmp_path)), today_provider=lambda: TODAY
    )
    set_store(store)
    yield store
    set_store(None)


@pytest.fixture
def client(store):
    return TestClient(create_app())


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_list_seed_habits(client):
    habits = client.get("/api/v1/habits").json()["habits"]

    assert [h["name"] for h in habits] == ["Meditate for 10 mins", "Read 10 pages", "Morning walk"]
    assert all(h["completedToday"] is False for h in habits)


def test_create_habit_and_reject_blank_name(client, store):
    resp = client.post("/api/v1/habits", json={"name": "Read", "category": "Study", "goal": "10 pages"})

    assert resp.status_code == 200
    assert resp.json()["habit"]["target"] == 10

    resp = client.post("/api/v1/habits", json={"name": "   ", "category": "Study"})
    assert resp.status_code == 400
    assert len(store.habits) == 4


def test_progress_and_toggle_keep_views_consistent(client, store):
    habit_id = client.post(
        "/api/v1/habits", json={"name": "Read", "category": "Study", "goal": "10 pages"}
    ).json()["habit"]["id"]

    view = client.post(f"/api/v1/habits/{habit_id}/progress", json={"value": 10}).json()["habit"]
    assert view["completedToday"] is True
    assert view["progress"] == 10

    view = client.post(f"/api/v1/habits/{habit_id}/progress", json={"value": 5}).json()["habit"]
    assert view["completedToday"] is False
    assert view["progress"] == 5

    view = client.post(f"/api/v1/habits/{habit_id}/toggle", json={"completed": True}).json()["habit"]
    assert view["progress"] == 10
    assert client.get("/api/v1/logs/today").json()["habitProgress"][habit_id] == 10


def test_unknown_habit_returns_404(client):
    assert client.put("/api/v1/habits/missing", json={"name": "x"}).status_code == 404
    assert client.delete("/api/v1/habits/missing").status_code == 404
    assert client.post("/api/v1/habits/missing/toggle", json={"completed": True}).status_code == 404
    assert client.get("/api/v1/habits/missing/streak").status_code == 404


def test_edit_and_delete(client, store):
    resp = client.put("/api/v1/habits/2", json={"goal": "20 pages"})

    assert resp.json()["habit"]["target"] == 20
    assert client.delete("/api/v1/habits/2").json()["success"] is True
    assert store.get_habit("2") is None


def test_suggestions(client, store):
    suggestions = client.get("/api/v1/habits/suggestions").json()["suggestions"]
    assert suggestions[0]["name"] == "Deep Work Session"

    resp = client.post("/api/v1/habits/suggestions/0")
    assert resp.json()["habit"]["goal"] == "60 mins"
    assert client.post("/api/v1/habits/suggestions/99").status_code == 404


def test_patch_today_log_merges_fields(client):
    client.patch("/api/v1/logs/today", json={"waterIntake": 3})
    client.patch("/api/v1/logs/today", json={"mood": "Happy", "stressLevel": 15})

    log = client.get("/api/v1/logs/today").json()
    assert log["waterIntake"] == 3
    assert log["mood"] == "Happy"
    assert log["moodEmoji"] == "😊"
    assert log["stressLevel"] == 10
    assert len(client.get("/api/v1/logs").json()["logs"]) == 1


def test_patch_today_log_requires_fields(client):
    assert client.patch("/api/v1/logs/today", json={}).status_code == 400


def test_dashboard_and_weekly(client):
    client.post("/api/v1/habits/1/toggle", json={"completed": True})

    dashboard = client.get("/api/v1/insights/dashboard").json()
    assert dashboard["completedToday"] == 1
    assert dashboard["overallProgress"] == 33
    assert dashboard["habits"][0]["goal"] == "Daily"

    weekly = client.get("/api/v1/insights/weekly").json()
    assert len(weekly["categoryBalance"]) == 4
    assert len(weekly["trend"]) == 7
    assert weekly["averageWaterIntake"] == 0
    assert [a["unlocked"] for a in weekly["achievements"]] == [True, False, False, False]


def test_export_import_reset(client, store, tmp_path):
    resp = client.get("/api/v1/settings/export")
    assert "zenith-backup-2026-03-10.json" in resp.headers["content-disposition"]
    document = resp.json()
    assert document["version"] == "1.0"

    assert client.post("/api/v1/settings/import", json={"habits": [], "logs": []}).status_code == 200
    assert store.habits == []

    assert client.post("/api/v1/settings/import", json={"foo": 1}).status_code == 400
    assert store.habits == []

    client.post("/api/v1/settings/import", json=document)
    assert len(store.habits) == 3

    client.post("/api/v1/settings/reset")
    assert [h.id for h in store.habits] == ["1", "2", "3"]
    assert (tmp_path / "zenith_habits.json").exists()


def test_patch_today_log_with_null_numbers_keeps_values(client):
    client.patch("/api/v1/logs/today", json={"waterIntake": 4, "stressLevel": 7})

    resp = client.patch("/api/v1/logs/today", json={"waterIntake": None, "stressLevel": None})
    assert resp.status_code == 200

    log = client.get("/api/v1/logs/today").json()
    assert log["waterIntake"] == 4
    assert log["stressLevel"] == 7


def test_progress_with_infinite_value_is_clamped(client):
    client.put("/api/v1/habits/2", json={"goal": "10 pages"})

    resp = client.post(
        "/api/v1/habits/2/progress",
        content='{"value": Infinity}',
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 200
    assert resp.json()["habit"]["progress"] == 10
    assert resp.json()["habit"]["completedToday"] is True
