"""
Backup Manager for Zenith.

Builds the export document, writes dated backup files and validates
import payloads before they reach WellnessStore.import_bulk.
"""
import json
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.config_manager import config
from core.exceptions import ImportFormatError, PersistenceError
from core.logger import get_logger
from core.models import DailyLog, Habit, dict_to_habit, dict_to_log, habit_to_dict, log_to_dict
from core.paths import BACKUP_DIR

logger = get_logger("backup")

BACKUP_PREFIX = "zenith-backup-"


def export_filename(today: Optional[str] = None) -> str:
    """zenith-backup-YYYY-MM-DD.json"""
    return f"{BACKUP_PREFIX}{today or date.today().isoformat()}.json"


def build_export(
    habits: List[Habit],
    logs: List[DailyLog],
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """The single JSON document handed to the user on export."""
    return {
        "habits": [habit_to_dict(h) for h in habits],
        "logs": [log_to_dict(log) for log in logs],
        "version": config.EXPORT_VERSION,
        "exportedAt": (exported_at or datetime.now()).isoformat(),
    }


def parse_import(payload: Any) -> Tuple[List[Habit], List[DailyLog]]:
    """
    Validate an import document and convert its records.

    Args:
        payload: Parsed JSON (dict) or raw JSON text.

    Returns:
        (habits, logs) ready for a wholesale replace.

    Raises:
        ImportFormatError: not JSON, or missing the habits/logs collections.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ImportFormatError(
                "Error reading file. Please make sure it's a valid Zenith backup."
            ) from e

    if not isinstance(payload, dict) or "habits" not in payload or "logs" not in payload:
        raise ImportFormatError()
    if not isinstance(payload["habits"], list) or not isinstance(payload["logs"], list):
        raise ImportFormatError()

    habits = [dict_to_habit(item) for item in payload["habits"]]
    logs = [dict_to_log(item) for item in payload["logs"]]
    return habits, logs


def ensure_backup_dir(directory: Optional[Path] = None) -> Path:
    target = Path(directory) if directory is not None else BACKUP_DIR
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(f"Backup directory unavailable: {e}") from e
    return target


def write_export(habits: List[Habit], logs: List[DailyLog], path: Path) -> Path:
    """Write the export document to ``path``."""
    path = Path(path)
    document = build_export(habits, logs)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise PersistenceError(f"Failed to write export {path.name}: {e}") from e
    return path


def create_backup(
    habits: List[Habit],
    logs: List[DailyLog],
    directory: Optional[Path] = None,
    today: Optional[str] = None,
) -> Path:
    """
    Write the export document to a dated file.

    A second backup on the same day overwrites the first.

    Returns:
        Path to the written backup.
    """
    target_dir = Path(directory) if directory is not None else BACKUP_DIR
    path = write_export(habits, logs, target_dir / export_filename(today))
    logger.info(f"Backup written: {path}")
    return path


def load_backup(path: Path) -> Tuple[List[Habit], List[DailyLog]]:
    """Read and validate a backup or export file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise PersistenceError(f"Failed to read {path.name}: {e}") from e
    return parse_import(raw)


def list_backups(directory: Optional[Path] = None) -> List[Dict[str, Any]]:
    """
    List backup files with metadata, newest first.
    """
    target_dir = ensure_backup_dir(directory)

    backups = []
    for path in target_dir.glob(f"{BACKUP_PREFIX}*.json"):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            backups.append({
                "path": str(path),
                "filename": path.name,
                "exported_at": data.get("exportedAt"),
                "version": data.get("version"),
                "habit_count": len(data.get("habits", [])),
                "log_count": len(data.get("logs", [])),
                "size_bytes": path.stat().st_size,
            })
        except (json.JSONDecodeError, OSError, AttributeError):
            continue

    backups.sort(key=lambda x: x.get("exported_at") or "", reverse=True)
    return backups


def cleanup_old_backups(
    retention_days: Optional[int] = None,
    directory: Optional[Path] = None,
) -> int:
    """
    Remove backups older than the retention period.

    Returns:
        Number of backups removed.
    """
    retention_days = retention_days if retention_days is not None else config.BACKUP_RETENTION_DAYS
    target_dir = ensure_backup_dir(directory)
    cutoff = datetime.now() - timedelta(days=retention_days)
    removed = 0

    for path in target_dir.glob(f"{BACKUP_PREFIX}*.json"):
        try:
            mtime = datetime.fromtimestamp(path.stat().st_mtime)
            if mtime < cutoff:
                path.unlink()
                removed += 1
        except OSError:
            continue

    if removed:
        logger.info(f"Removed {removed} old backups")
    return removed
