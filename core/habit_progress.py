"""
Habit Progress Tracker for Zenith.

Keeps the two representations of a day's completion in step:
- Habit.completed_dates (per-habit completion set)
- DailyLog.habit_progress (per-log numeric progress)

Every operation returns the updated habit plus a log patch for
core.log_reconciliation.apply_log_update; neither input is mutated.
"""
import dataclasses
import math
import re
from typing import Any, Dict, Optional, Tuple

from core.models import Habit
from core.utils import clamp

_FIRST_INTEGER = re.compile(r"\d+")

LogPatch = Dict[str, Any]


def parse_goal_target(goal: Optional[str]) -> int:
    """
    Extract the numeric target embedded in a free-text goal.

    "10 pages" -> 10, "Daily" -> 1, None -> 1, "Every hour" -> 1.
    A parsed 0 is coerced to 1 so a habit can never be complete by default.
    """
    if not goal:
        return 1
    match = _FIRST_INTEGER.search(goal)
    if not match:
        return 1
    return max(int(match.group(0)), 1)


def habit_target(habit: Habit) -> int:
    return parse_goal_target(habit.goal)


def _with_date(habit: Habit, day: str) -> Habit:
    if day in habit.completed_dates:
        return dataclasses.replace(habit, completed_dates=list(habit.completed_dates))
    return dataclasses.replace(habit, completed_dates=list(habit.completed_dates) + [day])


def _without_date(habit: Habit, day: str) -> Habit:
    return dataclasses.replace(
        habit, completed_dates=[d for d in habit.completed_dates if d != day]
    )


def _progress_patch(
    progress: Optional[Dict[str, int]], habit_id: str, value: int
) -> LogPatch:
    merged = dict(progress or {})
    merged[habit_id] = value
    return {"habitProgress": merged}


def toggle_completion(
    habit: Habit,
    today: str,
    completed: bool,
    progress: Optional[Dict[str, int]] = None,
) -> Tuple[Habit, LogPatch]:
    """
    Mark a habit done or not done for ``today``.

    Args:
        habit: Habit to update
        today: YYYY-MM-DD
        completed: True to complete, False to clear
        progress: today's current habitProgress map, preserved in the patch

    Returns:
        (updated habit, log patch)
    """
    if completed:
        return _with_date(habit, today), _progress_patch(progress, habit.id, habit_target(habit))
    return _without_date(habit, today), _progress_patch(progress, habit.id, 0)


def set_progress(
    habit: Habit,
    today: str,
    raw_value: float,
    progress: Optional[Dict[str, int]] = None,
) -> Tuple[Habit, LogPatch]:
    """
    Record numeric progress for ``today``, clamped to [0, target].

    Infinities clamp to the nearest bound; NaN counts as 0.

    Completion membership follows ``clamped == target``; when it already
    matches, completed_dates is returned unchanged.
    """
    target = habit_target(habit)
    raw = float(raw_value)
    if math.isnan(raw):
        raw = 0.0
    value = int(clamp(raw, 0, target))
    patch = _progress_patch(progress, habit.id, value)

    already_done = today in habit.completed_dates
    if value == target and not already_done:
        return _with_date(habit, today), patch
    if value != target and already_done:
        return _without_date(habit, today), patch
    return habit, patch
