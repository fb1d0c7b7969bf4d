from core.log_reconciliation import apply_log_update, default_log, get_today_log
from core.models import DailyLog, Mood

TODAY = "2026-03-10"


def test_get_today_log_synthesizes_default_without_inserting():
    history = [DailyLog(date="2026-03-09", water_intake=2)]

    log = get_today_log(history, TODAY)

    assert log.date == TODAY
    assert log.mood is None
    assert log.stress_level == 5
    assert log.journal == ""
    assert log.water_intake == 0
    assert log.sleep_hours == 0
    assert log.exercise_minutes == 0
    assert log.habit_progress == {}
    assert len(history) == 1


def test_get_today_log_returns_stored_row():
    stored = DailyLog(date=TODAY, sleep_hours=8)

    assert get_today_log([stored], TODAY) is stored


def test_apply_log_update_preserves_unnamed_fields():
    history = [DailyLog(date=TODAY, mood=Mood.HAPPY, sleep_hours=7)]

    updated = apply_log_update(history, TODAY, {"waterIntake": 3})

    log = get_today_log(updated, TODAY)
    assert log.mood == Mood.HAPPY
    assert log.sleep_hours == 7
    assert log.water_intake == 3
    # Original history is not mutated.
    assert history[0].water_intake == 0


def test_apply_log_update_inserts_default_row_when_missing():
    updated = apply_log_update([], TODAY, {"mood": "Sad"})

    assert len(updated) == 1
    assert updated[0].date == TODAY
    assert updated[0].mood == Mood.SAD
    assert updated[0].stress_level == default_log(TODAY).stress_level


def test_apply_log_update_is_idempotent():
    patch = {"journal": "quiet day", "sleepHours": 6}

    once = apply_log_update([], TODAY, patch)
    twice = apply_log_update(once, TODAY, patch)

    assert once == twice


def test_apply_log_update_leaves_other_dates_untouched():
    yesterday = DailyLog(date="2026-03-09", water_intake=5)
    tomorrow = DailyLog(date="2026-03-11", water_intake=1)

    updated = apply_log_update([yesterday, tomorrow], TODAY, {"waterIntake": 2})

    assert updated[0] is yesterday
    assert updated[1] is tomorrow
    assert updated[2].date == TODAY


def test_unknown_fields_are_ignored():
    updated = apply_log_update([], TODAY, {"heartRate": 80, "sleep_hours": 9})

    assert updated[0].sleep_hours == 9
    assert not hasattr(updated[0], "heartRate")


def test_stress_level_is_not_clamped_at_this_layer():
    updated = apply_log_update([], TODAY, {"stressLevel": 14})

    assert updated[0].stress_level == 14
