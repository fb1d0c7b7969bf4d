import json

import pytest

import core.logger as logger_module
from core.exceptions import PersistenceError
from core.models import DailyLog, Habit, HabitCategory, Mood
from core.storage import JsonFileStore, MemoryStore, PersistenceAdapter


@pytest.fixture
def corruption_log_dir(tmp_path, monkeypatch):
    logs_dir = tmp_path / "logs"
    monkeypatch.setattr(logger_module, "LOGS_DIR", logs_dir)
    return logs_dir


def test_missing_keys_load_seed_habits_and_no_logs():
    habits, logs = PersistenceAdapter(MemoryStore()).load()

    assert [h.name for h in habits] == ["Meditate for 10 mins", "Read 10 pages", "Morning walk"]
    assert logs == []


def test_json_file_store_round_trip(tmp_path):
    adapter = PersistenceAdapter(JsonFileStore(tmp_path))
    habits = [Habit(id="a", name="Walk", category=HabitCategory.PHYSICAL_HEALTH, completed_dates=["2026-03-10"])]
    logs = [DailyLog(date="2026-03-10", mood=Mood.SAD, habit_progress={"a": 1})]

    adapter.save(habits, logs)
    loaded_habits, loaded_logs = PersistenceAdapter(JsonFileStore(tmp_path)).load()

    assert loaded_habits == habits
    assert loaded_logs == logs
    stored = json.loads((tmp_path / "zenith_habits.json").read_text(encoding="utf-8"))
    assert stored[0]["completedDates"] == ["2026-03-10"]


def test_empty_stored_list_is_respected():
    backend = MemoryStore({"zenith_habits": "[]"})

    assert PersistenceAdapter(backend).load_habits() == []


def test_corrupt_blob_falls_back_and_is_dumped(corruption_log_dir):
    backend = MemoryStore({"zenith_habits": "{not json", "zenith_logs": '{"date": "x"}'})

    habits, logs = PersistenceAdapter(backend).load()

    assert len(habits) == 3
    assert logs == []
    dump = (corruption_log_dir / "corruption_dump.log").read_text(encoding="utf-8")
    assert "zenith_habits" in dump
    assert "zenith_logs" in dump


def test_bad_records_are_skipped():
    backend = MemoryStore({
        "zenith_habits": json.dumps([{"id": "a", "name": "Walk"}, {"name": "no id"}]),
    })

    habits = PersistenceAdapter(backend).load_habits()

    assert [h.id for h in habits] == ["a"]
    assert habits[0].category == HabitCategory.SELF_CARE


def test_clear_removes_only_json_files(tmp_path):
    (tmp_path / "backups").mkdir()
    backend = JsonFileStore(tmp_path)
    backend.set("zenith_habits", "[]")

    backend.clear()

    assert backend.get("zenith_habits") is None
    assert (tmp_path / "backups").exists()


def test_write_failure_raises_persistence_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file", encoding="utf-8")
    adapter = PersistenceAdapter(JsonFileStore(blocker / "data"))

    with pytest.raises(PersistenceError):
        adapter.save([], [])
