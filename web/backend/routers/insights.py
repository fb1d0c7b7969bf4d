from fastapi import APIRouter

from core.config_manager import config
from core.habit_progress import habit_target
from core.models import achievement_to_dict, log_to_dict
from core.statistics import (
    achievements,
    average_sleep_hours,
    average_water_intake,
    category_balance,
    completed_today_count,
    daily_completion_ratio,
    needs_hydration_nudge,
    profile_summary,
    quote_of_the_day,
    total_completions,
    trend_series,
)
from core.store import get_store

router = APIRouter()


@router.get("/dashboard")
def dashboard():
    store = get_store()
    habits = store.habits
    today = store.today()
    today_log = store.today_log()
    ratio = daily_completion_ratio(habits, today)

    return {
        "date": today,
        "completedToday": completed_today_count(habits, today),
        "totalHabits": len(habits),
        "completionRatio": ratio,
        "overallProgress": round(ratio * 100),
        "todayLog": log_to_dict(today_log),
        "quote": quote_of_the_day(today),
        "hydrationNudge": needs_hydration_nudge(today_log),
        "profile": profile_summary(habits, today),
        "habits": [
            {
                "id": h.id,
                "name": h.name,
                "icon": h.icon,
                "goal": h.goal or "Daily",
                "target": habit_target(h),
                "progress": today_log.habit_progress.get(h.id, 0),
                "completed": today in h.completed_dates,
            }
            for h in habits[: config.DASHBOARD_HABIT_LIMIT]
        ],
    }


@router.get("/weekly")
def weekly():
    store = get_store()
    habits, logs = store.habits, store.logs
    today = store.today()

    return {
        "categoryBalance": category_balance(habits, today),
        "trend": trend_series(habits, logs, today),
        "averageWaterIntake": average_water_intake(logs),
        "averageSleepHours": round(average_sleep_hours(logs), 1),
        "totalCompletions": total_completions(habits),
        "achievements": [achievement_to_dict(a) for a in achievements(habits, logs)],
    }
