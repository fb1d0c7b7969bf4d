"""
Entity Store for Zenith.

The single writable owner of the habit list and the log history.
Every mutation builds new collections, swaps them in under a lock and then
notifies subscribers; persistence attaches as one such subscriber.
"""
import dataclasses
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.config_manager import config
from core.constants import SMART_SUGGESTIONS, initial_habits
from core.exceptions import HabitNotFoundError, HabitValidationError, ImportFormatError
from core.habit_progress import set_progress, toggle_completion
from core.log_reconciliation import apply_log_update, get_today_log, normalize_fields
from core.logger import get_logger
from core.models import (
    DEFAULT_ICON,
    HABIT_WIRE_FIELDS,
    DailyLog,
    Habit,
    category_from_str,
    dict_to_habit,
    dict_to_log,
)
from core.storage import PersistenceAdapter
from core.utils import clamp, today_iso

logger = get_logger("store")

Listener = Callable[[List[Habit], List[DailyLog]], None]

EDITABLE_HABIT_FIELDS = ("name", "category", "icon", "goal", "reminder_time")
_NON_NEGATIVE_LOG_FIELDS = ("water_intake", "sleep_hours", "exercise_minutes")


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _validate_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise HabitValidationError("Habit name must not be empty", field="name")
    return cleaned


class WellnessStore:
    """Owns habits and logs; the only place state is replaced."""

    def __init__(
        self,
        habits: Optional[List[Habit]] = None,
        logs: Optional[List[DailyLog]] = None,
        today_provider: Callable[[], str] = today_iso,
    ):
        self._habits: List[Habit] = list(habits) if habits is not None else initial_habits()
        self._logs: List[DailyLog] = list(logs or [])
        self._today_provider = today_provider
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self._persistence: Optional[PersistenceAdapter] = None

    # ---------------------------------------------------------------------
    # Construction & observers
    # ---------------------------------------------------------------------
    @classmethod
    def from_persistence(
        cls,
        persistence: PersistenceAdapter,
        today_provider: Callable[[], str] = today_iso,
    ) -> "WellnessStore":
        """Hydrate from storage and save after every committed mutation."""
        habits, logs = persistence.load()
        store = cls(habits=habits, logs=logs, today_provider=today_provider)
        store.attach_persistence(persistence)
        return store

    def attach_persistence(self, persistence: PersistenceAdapter) -> None:
        self._persistence = persistence
        self.subscribe(persistence.save)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(
        self,
        habits: Optional[List[Habit]] = None,
        logs: Optional[List[DailyLog]] = None,
    ) -> None:
        with self._lock:
            if habits is not None:
                self._habits = habits
            if logs is not None:
                self._logs = logs
            snapshot_habits, snapshot_logs = list(self._habits), list(self._logs)
            for listener in list(self._listeners):
                listener(snapshot_habits, snapshot_logs)

    # ---------------------------------------------------------------------
    # Query operations
    # ---------------------------------------------------------------------
    @property
    def habits(self) -> List[Habit]:
        return list(self._habits)

    @property
    def logs(self) -> List[DailyLog]:
        return list(self._logs)

    def today(self) -> str:
        return self._today_provider()

    def today_log(self) -> DailyLog:
        return get_today_log(self._logs, self.today())

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        return None

    def require_habit(self, habit_id: str) -> Habit:
        habit = self.get_habit(habit_id)
        if habit is None:
            raise HabitNotFoundError(habit_id)
        return habit

    def _new_id(self) -> str:
        existing = {h.id for h in self._habits}
        while True:
            candidate = f"habit_{uuid.uuid4().hex[:8]}"
            if candidate not in existing:
                return candidate

    def _replace_habit(self, updated: Habit) -> List[Habit]:
        return [updated if h.id == updated.id else h for h in self._habits]

    # ---------------------------------------------------------------------
    # Habit CRUD
    # ---------------------------------------------------------------------
    def create_habit(
        self,
        name: str,
        category: Any,
        icon: Optional[str] = None,
        goal: Optional[str] = None,
        reminder_time: Optional[str] = None,
    ) -> Habit:
        cleaned = _validate_name(name)
        with self._lock:
            habit = Habit(
                id=self._new_id(),
                name=cleaned,
                category=category_from_str(category),
                icon=icon or DEFAULT_ICON,
                goal=_clean_optional(goal),
                reminder_time=_clean_optional(reminder_time),
                completed_dates=[],
                streak=0,
            )
            self._commit(habits=self._habits + [habit])
        logger.info(f"Habit created: {habit.id} ({habit.name})")
        return habit

    def edit_habit(self, habit_id: str, **fields: Any) -> Optional[Habit]:
        """
        Replace display/config fields of a habit.

        Only name, category, icon, goal and reminder_time are editable;
        id, completed_dates and streak are never touched. Unknown id -> None.
        """
        updates: Dict[str, Any] = {}
        for key, value in fields.items():
            attr = HABIT_WIRE_FIELDS.get(key, key)
            if attr not in EDITABLE_HABIT_FIELDS:
                logger.debug(f"Ignoring non-editable habit field: {key}")
                continue
            if attr == "name":
                value = _validate_name(value)
            elif attr == "category":
                value = category_from_str(value)
            elif attr in ("goal", "reminder_time"):
                value = _clean_optional(value)
            elif attr == "icon":
                value = value or DEFAULT_ICON
            updates[attr] = value

        with self._lock:
            habit = self.get_habit(habit_id)
            if habit is None:
                logger.warning(f"Edit ignored, habit not found: {habit_id}")
                return None
            updated = dataclasses.replace(habit, **updates)
            self._commit(habits=self._replace_habit(updated))
        return updated

    def delete_habit(self, habit_id: str) -> bool:
        """Remove a habit. Historical habitProgress entries for it are left in place."""
        with self._lock:
            if self.get_habit(habit_id) is None:
                logger.warning(f"Delete ignored, habit not found: {habit_id}")
                return False
            self._commit(habits=[h for h in self._habits if h.id != habit_id])
        logger.info(f"Habit deleted: {habit_id}")
        return True

    def apply_suggestion(self, index: int) -> Habit:
        try:
            suggestion = SMART_SUGGESTIONS[index]
        except (IndexError, TypeError):
            raise HabitValidationError(f"No suggestion at index {index}", field="index")
        return self.create_habit(
            suggestion["name"],
            suggestion["category"],
            suggestion["icon"],
            suggestion["goal"],
            suggestion["reminder"],
        )

    # ---------------------------------------------------------------------
    # Progress
    # ---------------------------------------------------------------------
    def _apply_progress(
        self,
        habit_id: str,
        operation: Callable[[Habit, str, Dict[str, int]], Tuple[Habit, Dict[str, Any]]],
    ) -> Optional[Habit]:
        with self._lock:
            habit = self.get_habit(habit_id)
            if habit is None:
                logger.warning(f"Progress ignored, habit not found: {habit_id}")
                return None
            today = self.today()
            current = get_today_log(self._logs, today)
            updated, patch = operation(habit, today, current.habit_progress)
            self._commit(
                habits=self._replace_habit(updated),
                logs=apply_log_update(self._logs, today, patch),
            )
        return updated

    def toggle_habit(self, habit_id: str, completed: bool) -> Optional[Habit]:
        return self._apply_progress(
            habit_id,
            lambda habit, today, progress: toggle_completion(habit, today, completed, progress),
        )

    def set_habit_progress(self, habit_id: str, value: float) -> Optional[Habit]:
        return self._apply_progress(
            habit_id,
            lambda habit, today, progress: set_progress(habit, today, value, progress),
        )

    # ---------------------------------------------------------------------
    # Daily log
    # ---------------------------------------------------------------------
    def update_today_log(self, fields: Dict[str, Any]) -> DailyLog:
        """
        Producer path for wellness fields.

        Clamps stress into its range and negative counts to 0, then merges.
        A null numeric field leaves the stored value as it is.
        """
        updates = normalize_fields(fields)
        for attr in ("stress_level",) + _NON_NEGATIVE_LOG_FIELDS:
            if attr in updates and updates[attr] is None:
                del updates[attr]
        if "stress_level" in updates:
            updates["stress_level"] = clamp(
                int(updates["stress_level"]),
                config.STRESS_LEVEL_MIN,
                config.STRESS_LEVEL_MAX,
            )
        for attr in _NON_NEGATIVE_LOG_FIELDS:
            if attr in updates:
                updates[attr] = max(int(updates[attr]), 0)
        if "journal" in updates:
            updates["journal"] = str(updates["journal"] or "")

        with self._lock:
            today = self.today()
            self._commit(logs=apply_log_update(self._logs, today, updates))
            return get_today_log(self._logs, today)

    # ---------------------------------------------------------------------
    # Bulk operations
    # ---------------------------------------------------------------------
    def import_bulk(self, habits: Any, logs: Any) -> None:
        """Wholesale replace of both collections; no merge, no de-duplication."""
        if not isinstance(habits, list) or not isinstance(logs, list):
            raise ImportFormatError()
        new_habits = [h if isinstance(h, Habit) else dict_to_habit(h) for h in habits]
        new_logs = [log if isinstance(log, DailyLog) else dict_to_log(log) for log in logs]
        self._commit(habits=new_habits, logs=new_logs)
        logger.info(f"Imported {len(new_habits)} habits and {len(new_logs)} logs")

    def reset_all(self) -> None:
        """Clear persisted state and restore the seed habits."""
        with self._lock:
            if self._persistence is not None:
                self._persistence.clear()
            self._commit(habits=initial_habits(), logs=[])
        logger.info("All data reset to seed habits")


# ---------------------------------------------------------------------
# Process-wide store used by the web and CLI surfaces
# ---------------------------------------------------------------------
_STORE: Optional[WellnessStore] = None
_STORE_LOCK = threading.Lock()


def get_store() -> WellnessStore:
    global _STORE
    with _STORE_LOCK:
        if _STORE is None:
            _STORE = WellnessStore.from_persistence(PersistenceAdapter())
        return _STORE


def set_store(store: Optional[WellnessStore]) -> None:
    """Install (or drop, with None) the process-wide store."""
    global _STORE
    with _STORE_LOCK:
        _STORE = store
