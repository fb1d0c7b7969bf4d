"""
Built-in catalog: seed habits, habit suggestions, icon palette and daily quotes.
"""
from typing import List

from core.models import Habit, HabitCategory

HABIT_ICONS = ["🧘", "📖", "🚶", "💧", "🍎", "💻", "💤", "🌿", "🎯", "⚡", "🏃", "🎨", "🎹", "🧹", "🥗"]

# (id, name, category, icon)
_SEED = [
    ("1", "Meditate for 10 mins", HabitCategory.MENTAL_HEALTH, "🧘"),
    ("2", "Read 10 pages", HabitCategory.STUDY, "📖"),
    ("3", "Morning walk", HabitCategory.PHYSICAL_HEALTH, "🚶"),
]


def initial_habits() -> List[Habit]:
    """Fresh copies of the seed habits restored on first run and on reset."""
    return [
        Habit(id=habit_id, name=name, category=category, icon=icon)
        for habit_id, name, category, icon in _SEED
    ]


SMART_SUGGESTIONS = [
    {"name": "Deep Work Session", "category": HabitCategory.STUDY, "icon": "💻", "goal": "60 mins", "reminder": "09:00"},
    {"name": "Posture Check", "category": HabitCategory.SELF_CARE, "icon": "🧘", "goal": "Every hour", "reminder": "14:00"},
    {"name": "No Junk Food", "category": HabitCategory.PHYSICAL_HEALTH, "icon": "🍎", "goal": "All day", "reminder": ""},
    {"name": "Gratitude Journal", "category": HabitCategory.MENTAL_HEALTH, "icon": "🌿", "goal": "3 things", "reminder": "21:00"},
    {"name": "Morning Stretch", "category": HabitCategory.PHYSICAL_HEALTH, "icon": "🏃", "goal": "5 mins", "reminder": "07:30"},
    {"name": "Read for Fun", "category": HabitCategory.SELF_CARE, "icon": "📖", "goal": "10 pages", "reminder": "20:30"},
]

MOTIVATIONAL_QUOTES = [
    "Your direction is more important than your speed.",
    "Small daily improvements are the key to staggering long-term results.",
    "Be stubborn about your goals but flexible about your methods.",
    "Growth is often a quiet, slow process.",
    "Self-care is not a luxury, it's a necessity.",
    "You don't have to be perfect to be amazing.",
    "Success is the sum of small efforts repeated day in and day out.",
]
