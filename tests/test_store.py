import pytest

from core.constants import SMART_SUGGESTIONS
from core.exceptions import HabitNotFoundError, HabitValidationError, ImportFormatError, PersistenceError
from core.models import DailyLog, Habit, HabitCategory, Mood
from core.storage import MemoryStore, PersistenceAdapter
from core.store import WellnessStore

TODAY = "2026-03-10"


@pytest.fixture
def store():
    return WellnessStore(
        habits=[Habit(id="read", name="Read 10 pages", category=HabitCategory.STUDY, goal="10 pages")],
        logs=[],
        today_provider=lambda: TODAY,
    )


def test_default_store_starts_with_seed_habits():
    store = WellnessStore(today_provider=lambda: TODAY)

    assert [h.id for h in store.habits] == ["1", "2", "3"]
    assert all(h.completed_dates == [] for h in store.habits)
    assert store.logs == []


def test_create_habit_assigns_fresh_id_and_defaults(store):
    habit = store.create_habit("  Stretch  ", "Physical Health", goal="5 mins")

    assert habit.name == "Stretch"
    assert habit.category == HabitCategory.PHYSICAL_HEALTH
    assert habit.icon == "🧘"
    assert habit.completed_dates == []
    assert habit.id not in {"read"}
    assert store.get_habit(habit.id) == habit


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_habit_rejects_empty_name(store, name):
    with pytest.raises(HabitValidationError):
        store.create_habit(name, HabitCategory.STUDY)

    assert len(store.habits) == 1


def test_edit_habit_keeps_history(store):
    store.toggle_habit("read", True)

    updated = store.edit_habit("read", name="Read 20 pages", goal="20 pages", completedDates=[])

    assert updated.name == "Read 20 pages"
    assert updated.goal == "20 pages"
    assert updated.completed_dates == [TODAY]


def test_edit_and_delete_unknown_habit_are_noops(store):
    before = store.habits

    assert store.edit_habit("missing", name="x") is None
    assert store.delete_habit("missing") is False
    assert store.habits == before
    with pytest.raises(HabitNotFoundError):
        store.require_habit("missing")


def test_delete_habit_leaves_orphan_progress(store):
    store.set_habit_progress("read", 4)

    assert store.delete_habit("read") is True
    assert store.habits == []
    assert store.today_log().habit_progress == {"read": 4}


def test_toggle_keeps_completion_and_progress_in_step(store):
    habit = store.toggle_habit("read", True)

    assert habit.completed_dates == [TODAY]
    assert store.today_log().habit_progress["read"] == 10

    habit = store.toggle_habit("read", False)

    assert habit.completed_dates == []
    assert store.today_log().habit_progress["read"] == 0


def test_toggle_unknown_habit_changes_nothing(store):
    assert store.toggle_habit("missing", True) is None
    assert store.logs == []


def test_set_progress_end_to_end(store):
    store.set_habit_progress("read", 10)
    assert TODAY in store.get_habit("read").completed_dates
    assert store.today_log().habit_progress["read"] == 10

    store.set_habit_progress("read", 5)
    assert TODAY not in store.get_habit("read").completed_dates
    assert store.today_log().habit_progress["read"] == 5
    assert len(store.logs) == 1


def test_progress_updates_preserve_other_habits(store):
    other = store.create_habit("Walk", HabitCategory.PHYSICAL_HEALTH)

    store.toggle_habit(other.id, True)
    store.set_habit_progress("read", 3)

    assert store.today_log().habit_progress == {other.id: 1, "read": 3}


def test_today_log_is_not_persisted_until_updated(store):
    log = store.today_log()

    assert log.date == TODAY
    assert store.logs == []


def test_update_today_log_merges_and_clamps(store):
    store.update_today_log({"waterIntake": 3})
    store.update_today_log({"mood": "Happy", "stressLevel": 14})
    log = store.update_today_log({"sleepHours": -2})

    assert log.water_intake == 3
    assert log.mood == Mood.HAPPY
    assert log.stress_level == 10
    assert log.sleep_hours == 0
    assert len(store.logs) == 1


def test_apply_suggestion_creates_habit(store):
    habit = store.apply_suggestion(0)

    assert habit.name == SMART_SUGGESTIONS[0]["name"]
    assert habit.goal == SMART_SUGGESTIONS[0]["goal"]
    with pytest.raises(HabitValidationError):
        store.apply_suggestion(len(SMART_SUGGESTIONS))


def test_import_bulk_replaces_everything(store):
    store.import_bulk([], [])

    assert store.habits == []
    assert store.logs == []


def test_import_bulk_accepts_wire_records(store):
    store.import_bulk(
        [{"id": "x", "name": "Journal", "category": "Self-Care", "completedDates": [TODAY, TODAY]}],
        [{"date": TODAY, "waterIntake": 6, "habitProgress": {"x": 1}}],
    )

    assert store.get_habit("x").completed_dates == [TODAY]
    assert store.today_log().water_intake == 6


def test_import_bulk_rejects_non_lists(store):
    with pytest.raises(ImportFormatError):
        store.import_bulk(None, [])

    assert [h.id for h in store.habits] == ["read"]


def test_reset_restores_seeds_and_clears_backend(store):
    backend = MemoryStore()
    store.attach_persistence(PersistenceAdapter(backend))
    store.update_today_log({"journal": "notes"})

    store.reset_all()

    assert [h.id for h in store.habits] == ["1", "2", "3"]
    assert store.logs == []
    assert backend.get("zenith_logs") == "[]"


def test_subscribers_see_every_commit(store):
    seen = []
    unsubscribe = store.subscribe(lambda habits, logs: seen.append((len(habits), len(logs))))

    store.create_habit("Walk", HabitCategory.PHYSICAL_HEALTH)
    store.update_today_log({"waterIntake": 1})
    unsubscribe()
    store.delete_habit("read")

    assert seen == [(2, 0), (2, 1)]


def test_from_persistence_round_trip():
    backend = MemoryStore()
    first = WellnessStore.from_persistence(PersistenceAdapter(backend), today_provider=lambda: TODAY)
    first.toggle_habit("1", True)
    first.update_today_log({"mood": "Energetic"})

    second = WellnessStore.from_persistence(PersistenceAdapter(backend), today_provider=lambda: TODAY)

    assert second.get_habit("1").completed_dates == [TODAY]
    assert second.today_log().mood == Mood.ENERGETIC
    assert second.today_log().habit_progress == {"1": 1}


class _FailingStore(MemoryStore):
    def set(self, key, value):
        raise PersistenceError("disk full", key=key)


def test_write_failure_surfaces_but_memory_state_stands():
    store = WellnessStore.from_persistence(
        PersistenceAdapter(_FailingStore()), today_provider=lambda: TODAY
    )

    with pytest.raises(PersistenceError):
        store.create_habit("Walk", HabitCategory.PHYSICAL_HEALTH)

    assert "Walk" in [h.name for h in store.habits]


def test_completion_never_contradicts_progress(store):
    for action in (
        lambda: store.toggle_habit("read", True),
        lambda: store.set_habit_progress("read", 7),
        lambda: store.set_habit_progress("read", 99),
        lambda: store.toggle_habit("read", False),
    ):
        action()
        done = TODAY in store.get_habit("read").completed_dates
        assert done == (store.today_log().habit_progress["read"] == 10)


def test_logs_for_other_dates_survive_updates():
    past = DailyLog(date="2026-03-01", water_intake=9)
    store = WellnessStore(habits=[], logs=[past], today_provider=lambda: TODAY)

    store.update_today_log({"waterIntake": 1})

    assert store.logs[0] == past
