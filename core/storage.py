"""
Persistence Adapter for Zenith.

Two independently keyed JSON blobs hold the habit list and the log history.
The key-value provider is pluggable:
- JsonFileStore: one <key>.json file per key under the data directory
- MemoryStore: in-process dict, for tests and throwaway sessions

Writes are best-effort: no transaction, no fsync. A failure surfaces as
PersistenceError; the in-memory state stays authoritative.
"""
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from core.config_manager import config
from core.constants import initial_habits
from core.exceptions import ImportFormatError, PersistenceError
from core.logger import get_logger, log_corruption
from core.models import DailyLog, Habit, dict_to_habit, dict_to_log, habit_to_dict, log_to_dict
from core.paths import DATA_DIR

logger = get_logger("storage")


class KeyValueStore(ABC):
    """String keys to serialized string values."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every key owned by this store."""
        pass


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """Key-value store backed by <directory>/<key>.json files."""

    def __init__(self, directory: Optional[Path] = None):
        self._dir = Path(directory) if directory is not None else DATA_DIR

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to read {path.name}: {e}", key=key) from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(value)
        except OSError as e:
            raise PersistenceError(f"Failed to write {path.name}: {e}", key=key) from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            if path.exists():
                path.unlink()
        except OSError as e:
            raise PersistenceError(f"Failed to delete {path.name}: {e}", key=key) from e

    def clear(self) -> None:
        if not self._dir.exists():
            return
        for path in self._dir.glob("*.json"):
            try:
                path.unlink()
            except OSError as e:
                raise PersistenceError(f"Failed to delete {path.name}: {e}", key=path.stem) from e


class PersistenceAdapter:
    """Loads and saves the full habit list and log history."""

    def __init__(
        self,
        backend: Optional[KeyValueStore] = None,
        habits_key: Optional[str] = None,
        logs_key: Optional[str] = None,
    ):
        self.backend = backend if backend is not None else JsonFileStore()
        self.habits_key = habits_key or config.HABITS_STORAGE_KEY
        self.logs_key = logs_key or config.LOGS_STORAGE_KEY

    def _read_list(self, key: str) -> Optional[list]:
        raw = self.backend.get(key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            log_corruption(key, raw, str(e))
            return None
        if not isinstance(data, list):
            log_corruption(key, raw, "expected a JSON array")
            return None
        return data

    def load_habits(self) -> List[Habit]:
        data = self._read_list(self.habits_key)
        if data is None:
            return initial_habits()
        habits = []
        for item in data:
            try:
                habits.append(dict_to_habit(item))
            except ImportFormatError as e:
                logger.warning(f"Skipping stored habit: {e.message}")
        return habits

    def load_logs(self) -> List[DailyLog]:
        data = self._read_list(self.logs_key)
        if data is None:
            return []
        logs = []
        for item in data:
            try:
                logs.append(dict_to_log(item))
            except ImportFormatError as e:
                logger.warning(f"Skipping stored log: {e.message}")
        return logs

    def load(self) -> Tuple[List[Habit], List[DailyLog]]:
        habits = self.load_habits()
        logs = self.load_logs()
        logger.info(f"Loaded {len(habits)} habits and {len(logs)} logs")
        return habits, logs

    def save(self, habits: List[Habit], logs: List[DailyLog]) -> None:
        try:
            habits_blob = json.dumps([habit_to_dict(h) for h in habits], ensure_ascii=False)
            logs_blob = json.dumps([log_to_dict(log) for log in logs], ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to serialize state: {e}") from e

        try:
            self.backend.set(self.habits_key, habits_blob)
            self.backend.set(self.logs_key, logs_blob)
        except PersistenceError as e:
            logger.error(e.get_user_message())
            raise

    def clear(self) -> None:
        self.backend.clear()
