import sys
import os
from datetime import date, timedelta

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from core.constants import initial_habits
from core.habit_progress import habit_target
from core.models import DailyLog, Mood
from core.storage import PersistenceAdapter

DEMO_DAYS = 14
MOOD_CYCLE = [Mood.HAPPY, Mood.NORMAL, Mood.ENERGETIC, Mood.NORMAL, Mood.STRESSED, Mood.HAPPY, Mood.SAD]


def seed_demo_data(days: int = DEMO_DAYS) -> None:
    print("Injecting demo data...")
    persistence = PersistenceAdapter()
    habits = initial_habits()
    habits[1].goal = "10 pages"
    logs = []

    today = date.today()
    for offset in range(days, 0, -1):
        day = (today - timedelta(days=offset)).isoformat()
        progress = {}
        for i, habit in enumerate(habits):
            # Habit i skips every (i + 3)th day
            if offset % (i + 3) == 0:
                progress[habit.id] = 0
                continue
            progress[habit.id] = habit_target(habit)
            habit.completed_dates.append(day)

        logs.append(DailyLog(
            date=day,
            mood=MOOD_CYCLE[offset % len(MOOD_CYCLE)],
            stress_level=3 + offset % 5,
            journal="",
            water_intake=4 + offset % 4,
            sleep_hours=6 + offset % 3,
            exercise_minutes=20 if offset % 2 else 0,
            habit_progress=progress,
        ))

    persistence.save(habits, logs)
    print(f"✅ Added {len(habits)} habits and {len(logs)} daily logs")
    print("\nDone. Run 'zenith stats' or open /api/v1/insights/weekly.")


if __name__ == "__main__":
    seed_demo_data()
