"""
Derived Statistics Engine for Zenith.

Read-only aggregates over the committed habit list and log history:
completion ratio, 7-day category balance, trend series, averages,
streaks and achievement predicates. Nothing here mutates its inputs.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from core.config_manager import config
from core.constants import MOTIVATIONAL_QUOTES
from core.log_reconciliation import find_log
from core.models import Achievement, DailyLog, Habit, HabitCategory
from core.utils import DateLike, last_n_days, to_date


# --- Daily figures ---

def completed_today_count(habits: List[Habit], today: str) -> int:
    return sum(1 for h in habits if today in h.completed_dates)


def daily_completion_ratio(habits: List[Habit], today: str) -> float:
    """Habits completed today over all habits; 0.0 when there are none."""
    if not habits:
        return 0.0
    return completed_today_count(habits, today) / len(habits)


def total_completions(habits: List[Habit]) -> int:
    return sum(len(h.completed_dates) for h in habits)


# --- Weekly figures ---

def category_balance(
    habits: List[Habit],
    today: DateLike,
    days: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Per-category completion percentage over the trailing window.

    Returns:
        One entry per category, in enum order:
        {"category", "subject", "value" (0-100), "fullMark": 100}
    """
    days = days or config.BALANCE_WINDOW_DAYS
    window = set(last_n_days(today, days))
    stats = []
    for category in HabitCategory:
        in_category = [h for h in habits if h.category == category]
        possible = len(in_category) * days
        actual = sum(
            1 for h in in_category for d in set(h.completed_dates) if d in window
        )
        stats.append({
            "category": category.value,
            "subject": category.value.split(" ")[0],
            "value": (actual / possible) * 100 if possible > 0 else 0,
            "fullMark": 100,
        })
    return stats


def trend_series(
    habits: List[Habit],
    logs: List[DailyLog],
    today: DateLike,
    days: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Trailing-window chart series, oldest first; days without a log read as 0."""
    days = days or config.TREND_WINDOW_DAYS
    series = []
    for day in last_n_days(today, days):
        log = find_log(logs, day)
        series.append({
            "date": day,
            "day": to_date(day).strftime("%a"),
            "stressLevel": log.stress_level if log else 0,
            "waterIntake": log.water_intake if log else 0,
            "sleepHours": log.sleep_hours if log else 0,
            "habits": completed_today_count(habits, day),
        })
    return series


def _mean(values: List[int]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def average_water_intake(logs: List[DailyLog]) -> float:
    return _mean([log.water_intake for log in logs])


def average_sleep_hours(logs: List[DailyLog]) -> float:
    return _mean([log.sleep_hours for log in logs])


def total_water_intake(logs: List[DailyLog]) -> int:
    return sum(log.water_intake for log in logs)


# --- Streaks ---

def _run_ending_at(dates: set, end) -> int:
    count = 0
    cursor = end
    while cursor.isoformat() in dates:
        count += 1
        cursor -= timedelta(days=1)
    return count


def _streak_from_dates(dates: Iterable[str], today: DateLike) -> int:
    date_set = set(dates)
    end = to_date(today)
    if end.isoformat() not in date_set:
        # Today still open: a run ending yesterday is alive.
        end -= timedelta(days=1)
    return _run_ending_at(date_set, end)


def current_streak(habit: Habit, today: DateLike) -> int:
    """Consecutive completed days ending today, or yesterday if today is not done yet."""
    return _streak_from_dates(habit.completed_dates, today)


def best_streak(habit: Habit) -> int:
    """Longest run of consecutive completed days."""
    parsed = set()
    for d in habit.completed_dates:
        try:
            parsed.add(to_date(d))
        except ValueError:
            continue
    best = 0
    for day in parsed:
        if day - timedelta(days=1) in parsed:
            continue
        length = 1
        while day + timedelta(days=length) in parsed:
            length += 1
        best = max(best, length)
    return best


def overall_streak(habits: List[Habit], today: DateLike) -> int:
    """Streak of check-in days, a check-in day being any day with one or more completions."""
    check_in_days = {d for h in habits for d in h.completed_dates}
    return _streak_from_dates(check_in_days, today)


def profile_summary(habits: List[Habit], today: DateLike) -> Dict[str, int]:
    return {
        "streak": overall_streak(habits, today),
        "totalCheckIns": total_completions(habits),
    }


# --- Achievements ---

def has_any_completion(habits: List[Habit]) -> bool:
    return total_completions(habits) >= 1


def reached_total_completions(habits: List[Habit]) -> bool:
    return total_completions(habits) >= config.ACHIEVEMENT_TOTAL_COMPLETIONS


def reached_water_total(logs: List[DailyLog]) -> bool:
    return total_water_intake(logs) > config.ACHIEVEMENT_WATER_TOTAL


def reached_meditation_count(habits: List[Habit]) -> bool:
    keyword = config.ACHIEVEMENT_MEDITATION_KEYWORD
    habit = next((h for h in habits if keyword in h.name), None)
    if habit is None:
        return False
    return len(habit.completed_dates) >= config.ACHIEVEMENT_MEDITATION_COMPLETIONS


def achievements(habits: List[Habit], logs: List[DailyLog]) -> List[Achievement]:
    """Threshold badges, recomputed on every read."""
    return [
        Achievement("sprout", "Sprout", "Day 1 Complete", "🌱", has_any_completion(habits)),
        Achievement("flawless", "Flawless", "Full Week Goal", "💎", reached_total_completions(habits)),
        Achievement("deep_sea", "Deep Sea", "10L Water Total", "🌊", reached_water_total(logs)),
        Achievement("zen_master", "Zen Master", "5 Meditations", "🧠", reached_meditation_count(habits)),
    ]


# --- Dashboard extras ---

def quote_of_the_day(today: DateLike) -> str:
    day_of_year = to_date(today).timetuple().tm_yday
    return MOTIVATIONAL_QUOTES[day_of_year % len(MOTIVATIONAL_QUOTES)]


def needs_hydration_nudge(log: DailyLog, now: Optional[datetime] = None) -> bool:
    """Afternoon reminder when nothing has been drunk yet."""
    now = now or datetime.now()
    return now.hour >= config.HYDRATION_NUDGE_HOUR and log.water_intake == 0
