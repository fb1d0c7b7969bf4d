"""
Core Data Models for Zenith.
Defines habits, daily wellness logs and achievements, plus their JSON wire mapping.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from core.exceptions import ImportFormatError
from core.logger import get_logger

logger = get_logger("models")

DEFAULT_ICON = "🧘"


class HabitCategory(str, Enum):
    MENTAL_HEALTH = "Mental Health"
    PHYSICAL_HEALTH = "Physical Health"
    STUDY = "Study"
    SELF_CARE = "Self-Care"


class Mood(str, Enum):
    HAPPY = "Happy"
    NORMAL = "Normal"
    SAD = "Sad"
    STRESSED = "Stressed"
    ENERGETIC = "Energetic"

    @property
    def emoji(self) -> str:
        return MOOD_EMOJIS[self]


MOOD_EMOJIS = {
    Mood.HAPPY: "😊",
    Mood.NORMAL: "😐",
    Mood.SAD: "😔",
    Mood.STRESSED: "😫",
    Mood.ENERGETIC: "⚡",
}


@dataclass
class Habit:
    """A recurring activity tracked per calendar day."""
    id: str
    name: str
    category: HabitCategory
    icon: str = DEFAULT_ICON
    goal: Optional[str] = None             # e.g. "10 pages", "30 minutes"
    reminder_time: Optional[str] = None    # "08:00", stored only
    completed_dates: List[str] = field(default_factory=list)  # YYYY-MM-DD, unique
    streak: int = 0                        # wire compatibility; live value is derived on read

    def is_completed_on(self, day: str) -> bool:
        return day in self.completed_dates


@dataclass
class DailyLog:
    """Per-date wellness metrics and per-habit numeric progress."""
    date: str
    mood: Optional[Mood] = None
    stress_level: int = 5                  # 0-10
    journal: str = ""
    water_intake: int = 0                  # cups
    sleep_hours: int = 0
    exercise_minutes: int = 0
    habit_progress: Dict[str, int] = field(default_factory=dict)


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    icon: str
    unlocked: bool = False


# --- Wire mapping (camelCase keys, compatible with exported backups) ---

# wire name -> attribute name
HABIT_WIRE_FIELDS = {
    "id": "id",
    "name": "name",
    "category": "category",
    "icon": "icon",
    "goal": "goal",
    "reminderTime": "reminder_time",
    "completedDates": "completed_dates",
    "streak": "streak",
}

LOG_WIRE_FIELDS = {
    "date": "date",
    "mood": "mood",
    "stressLevel": "stress_level",
    "journal": "journal",
    "waterIntake": "water_intake",
    "sleepHours": "sleep_hours",
    "exerciseMinutes": "exercise_minutes",
    "habitProgress": "habit_progress",
}


def category_from_str(value: Any) -> HabitCategory:
    if isinstance(value, HabitCategory):
        return value
    try:
        return HabitCategory(value)
    except ValueError:
        # Accept enum member names too ("STUDY", "self_care")
        name = str(value or "").strip().upper().replace("-", "_").replace(" ", "_")
        if name in HabitCategory.__members__:
            return HabitCategory[name]
        logger.warning(f"Unknown habit category {value!r}, falling back to Self-Care")
        return HabitCategory.SELF_CARE


def mood_from_str(value: Any) -> Optional[Mood]:
    if value is None or isinstance(value, Mood):
        return value
    try:
        return Mood(value)
    except ValueError:
        name = str(value).strip().upper()
        if name in Mood.__members__:
            return Mood[name]
        logger.warning(f"Unknown mood {value!r}, treating as unset")
        return None


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def unique_dates(dates: List[str]) -> List[str]:
    """Drop duplicate dates, keeping first occurrence order."""
    return list(dict.fromkeys(dates))


def habit_to_dict(h: Habit) -> dict:
    return {
        "id": h.id,
        "name": h.name,
        "category": h.category.value,
        "icon": h.icon,
        "goal": h.goal,
        "reminderTime": h.reminder_time,
        "completedDates": list(h.completed_dates),
        "streak": h.streak,
    }


def dict_to_habit(d: dict) -> Habit:
    if not isinstance(d, dict) or "id" not in d or not d.get("name"):
        raise ImportFormatError(f"Unrecognized habit record: {str(d)[:80]}")
    return Habit(
        id=str(d["id"]),
        name=d["name"],
        category=category_from_str(d.get("category")),
        icon=d.get("icon") or DEFAULT_ICON,
        goal=d.get("goal") or None,
        reminder_time=d.get("reminderTime", d.get("reminder_time")) or None,
        completed_dates=unique_dates(
            [str(x) for x in d.get("completedDates", d.get("completed_dates")) or []]
        ),
        streak=_as_int(d.get("streak", 0)),
    )


def log_to_dict(log: DailyLog) -> dict:
    return {
        "date": log.date,
        "mood": log.mood.value if log.mood else None,
        "stressLevel": log.stress_level,
        "journal": log.journal,
        "waterIntake": log.water_intake,
        "sleepHours": log.sleep_hours,
        "exerciseMinutes": log.exercise_minutes,
        "habitProgress": dict(log.habit_progress),
    }


def dict_to_log(d: dict) -> DailyLog:
    if not isinstance(d, dict) or not d.get("date"):
        raise ImportFormatError(f"Unrecognized log record: {str(d)[:80]}")
    progress = d.get("habitProgress", d.get("habit_progress")) or {}
    if not isinstance(progress, dict):
        progress = {}
    return DailyLog(
        date=str(d["date"]),
        mood=mood_from_str(d.get("mood")),
        stress_level=_as_int(d.get("stressLevel", d.get("stress_level", 5)), 5),
        journal=d.get("journal") or "",
        water_intake=_as_int(d.get("waterIntake", d.get("water_intake", 0))),
        sleep_hours=_as_int(d.get("sleepHours", d.get("sleep_hours", 0))),
        exercise_minutes=_as_int(d.get("exerciseMinutes", d.get("exercise_minutes", 0))),
        habit_progress={str(k): _as_int(v) for k, v in progress.items()},
    )


def achievement_to_dict(a: Achievement) -> dict:
    return {
        "id": a.id,
        "title": a.title,
        "description": a.description,
        "icon": a.icon,
        "unlocked": a.unlocked,
    }
