from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from core.exceptions import PersistenceError
from core.models import Mood, log_to_dict
from core.store import get_store

router = APIRouter()


class LogUpdateRequest(BaseModel):
    mood: Optional[Mood] = None
    stressLevel: Optional[int] = None
    journal: Optional[str] = None
    waterIntake: Optional[int] = None
    sleepHours: Optional[int] = None
    exerciseMinutes: Optional[int] = None


@router.get("")
def list_logs():
    logs = sorted(get_store().logs, key=lambda log: log.date)
    return {"logs": [log_to_dict(log) for log in logs]}


@router.get("/today")
def get_today_log():
    store = get_store()
    log = store.today_log()
    data = log_to_dict(log)
    data["moodEmoji"] = log.mood.emoji if log.mood else None
    return data


@router.patch("/today")
def update_today_log(req: LogUpdateRequest):
    """
    Merge wellness fields into today's log.

    Only fields present in the request body change; an explicit
    {"mood": null} clears the mood.
    """
    fields = req.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        log = get_store().update_today_log(fields)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=e.get_user_message())
    return {"success": True, "log": log_to_dict(log)}
