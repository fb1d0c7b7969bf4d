from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from core.constants import HABIT_ICONS, SMART_SUGGESTIONS
from core.exceptions import HabitNotFoundError, HabitValidationError, PersistenceError
from core.habit_progress import habit_target
from core.models import Habit, HabitCategory, habit_to_dict
from core.statistics import best_streak, current_streak
from core.store import get_store

router = APIRouter()


class HabitCreateRequest(BaseModel):
    name: str
    category: HabitCategory = HabitCategory.SELF_CARE
    icon: Optional[str] = None
    goal: Optional[str] = None
    reminder_time: Optional[str] = None


class HabitUpdateRequest(BaseModel):
    name: Optional[str] = None
    category: Optional[HabitCategory] = None
    icon: Optional[str] = None
    goal: Optional[str] = None
    reminder_time: Optional[str] = None


class ToggleRequest(BaseModel):
    completed: bool


class ProgressRequest(BaseModel):
    value: float


def _habit_view(habit: Habit, today: str, progress: Optional[dict] = None) -> dict:
    data = habit_to_dict(habit)
    data["target"] = habit_target(habit)
    data["completedToday"] = today in habit.completed_dates
    data["progress"] = (progress or {}).get(habit.id, 0)
    data["currentStreak"] = current_streak(habit, today)
    return data


def _persistence_failed(e: PersistenceError) -> HTTPException:
    return HTTPException(status_code=503, detail=e.get_user_message())


@router.get("")
def list_habits():
    store = get_store()
    today = store.today()
    progress = store.today_log().habit_progress
    return {"habits": [_habit_view(h, today, progress) for h in store.habits]}


@router.post("")
def create_habit(req: HabitCreateRequest):
    store = get_store()
    try:
        habit = store.create_habit(
            req.name, req.category, req.icon, req.goal, req.reminder_time
        )
    except HabitValidationError as e:
        raise HTTPException(status_code=400, detail=e.get_user_message())
    except PersistenceError as e:
        raise _persistence_failed(e)
    return {"success": True, "habit": _habit_view(habit, store.today())}


@router.get("/suggestions")
def list_suggestions():
    return {
        "suggestions": [
            {**s, "category": s["category"].value, "index": i}
            for i, s in enumerate(SMART_SUGGESTIONS)
        ],
        "icons": HABIT_ICONS,
    }


@router.post("/suggestions/{index}")
def apply_suggestion(index: int):
    store = get_store()
    try:
        habit = store.apply_suggestion(index)
    except HabitValidationError as e:
        raise HTTPException(status_code=404, detail=e.get_user_message())
    except PersistenceError as e:
        raise _persistence_failed(e)
    return {"success": True, "habit": _habit_view(habit, store.today())}


@router.put("/{habit_id}")
def edit_habit(habit_id: str, req: HabitUpdateRequest):
    store = get_store()
    fields = req.model_dump(exclude_unset=True)
    try:
        habit = store.edit_habit(habit_id, **fields)
    except HabitValidationError as e:
        raise HTTPException(status_code=400, detail=e.get_user_message())
    except PersistenceError as e:
        raise _persistence_failed(e)
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"success": True, "habit": _habit_view(habit, store.today())}


@router.delete("/{habit_id}")
def delete_habit(habit_id: str):
    try:
        deleted = get_store().delete_habit(habit_id)
    except PersistenceError as e:
        raise _persistence_failed(e)
    if not deleted:
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"success": True, "habit_id": habit_id}


@router.post("/{habit_id}/toggle")
def toggle_habit(habit_id: str, req: ToggleRequest):
    store = get_store()
    try:
        habit = store.toggle_habit(habit_id, req.completed)
    except PersistenceError as e:
        raise _persistence_failed(e)
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return {
        "success": True,
        "habit": _habit_view(habit, store.today(), store.today_log().habit_progress),
    }


@router.post("/{habit_id}/progress")
def update_progress(habit_id: str, req: ProgressRequest):
    store = get_store()
    try:
        habit = store.set_habit_progress(habit_id, req.value)
    except PersistenceError as e:
        raise _persistence_failed(e)
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return {
        "success": True,
        "habit": _habit_view(habit, store.today(), store.today_log().habit_progress),
    }


@router.get("/{habit_id}/streak")
def habit_streak(habit_id: str):
    store = get_store()
    try:
        habit = store.require_habit(habit_id)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.get_user_message())
    return {
        "habit_id": habit_id,
        "current": current_streak(habit, store.today()),
        "best": best_streak(habit),
        "total": len(habit.completed_dates),
    }
