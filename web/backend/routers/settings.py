from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import JSONResponse

from core.backup import build_export, export_filename, parse_import
from core.exceptions import ImportFormatError, PersistenceError
from core.store import get_store

router = APIRouter()


@router.get("/export")
def export_data():
    store = get_store()
    document = build_export(store.habits, store.logs)
    filename = export_filename(store.today())
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import")
def import_data(payload: Any = Body(...)):
    """Wholesale replace from a backup document; nothing is merged."""
    try:
        habits, logs = parse_import(payload)
    except ImportFormatError as e:
        raise HTTPException(status_code=400, detail=e.get_user_message())

    try:
        get_store().import_bulk(habits, logs)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=e.get_user_message())
    return {
        "success": True,
        "message": "Success! Your data has been restored.",
        "habits": len(habits),
        "logs": len(logs),
    }


@router.post("/reset")
def reset_data() -> Dict[str, Any]:
    store = get_store()
    try:
        store.reset_all()
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=e.get_user_message())
    return {"success": True, "habits": len(store.habits), "logs": len(store.logs)}
