"""
Log Reconciliation Engine for Zenith.

Derives the single "today" record from the append-only log history:
- get_today_log: stored row for the date, or a synthesized default (not inserted)
- apply_log_update: pure field-wise merge of a partial update into the history

No implicit recomputation happens here; callers supply a consistent
habitProgress map alongside completion changes (see core.habit_progress).
"""
import dataclasses
from typing import Any, Dict, List, Optional

from core.config_manager import config
from core.logger import get_logger
from core.models import LOG_WIRE_FIELDS, DailyLog, mood_from_str

logger = get_logger("log_reconciliation")

# Attribute names a patch may set; "date" is the row key and never merged.
_MERGEABLE_ATTRS = {attr for attr in LOG_WIRE_FIELDS.values() if attr != "date"}


def default_log(today: str) -> DailyLog:
    """Return the blank log a day starts with."""
    return DailyLog(
        date=today,
        mood=None,
        stress_level=config.DEFAULT_STRESS_LEVEL,
        journal="",
        water_intake=0,
        sleep_hours=0,
        exercise_minutes=0,
        habit_progress={},
    )


def find_log(history: List[DailyLog], day: str) -> Optional[DailyLog]:
    for log in history:
        if log.date == day:
            return log
    return None


def get_today_log(history: List[DailyLog], today: str) -> DailyLog:
    """
    Return the stored log for ``today`` or a synthesized default.

    The default is never inserted into ``history``; it only becomes durable
    once a field is updated through apply_log_update.
    """
    existing = find_log(history, today)
    if existing is not None:
        return existing
    return default_log(today)


def normalize_fields(partial_fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a partial update to DailyLog attribute names.

    Accepts wire names ("waterIntake") and attribute names ("water_intake").
    Unknown names are dropped rather than rejected.
    """
    normalized: Dict[str, Any] = {}
    for key, value in (partial_fields or {}).items():
        attr = LOG_WIRE_FIELDS.get(key, key)
        if attr not in _MERGEABLE_ATTRS:
            logger.debug(f"Ignoring unknown log field: {key}")
            continue
        if attr == "mood":
            value = mood_from_str(value)
        elif attr == "habit_progress":
            value = dict(value or {})
        normalized[attr] = value
    return normalized


def apply_log_update(
    history: List[DailyLog],
    today: str,
    partial_fields: Dict[str, Any],
) -> List[DailyLog]:
    """
    Pure function: merge ``partial_fields`` into today's row and return a new history.

    Only the named fields change. Rows for other dates are carried over
    untouched and in order; a missing row is created from the default log
    and appended. Applying the same patch twice yields the same history.
    """
    updates = normalize_fields(partial_fields)

    new_history: List[DailyLog] = []
    merged = False
    for log in history:
        if log.date == today and not merged:
            new_history.append(dataclasses.replace(log, **updates))
            merged = True
        else:
            new_history.append(log)

    if not merged:
        new_history.append(dataclasses.replace(default_log(today), **updates))

    return new_history
