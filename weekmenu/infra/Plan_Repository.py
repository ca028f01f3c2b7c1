"""Plan store: PlanEntry rows keyed by (date, meal type), persisted as a JSON list.

The (date, meal type) pair is unique. insert_entry refuses a second row for the same
pair with ConflictError; callers resolve that by fetching the existing row and updating it.
"""
import logging
from datetime import date
from typing import List, Optional
from uuid import uuid4

from weekmenu.domain.Plan import PlanEntry
from weekmenu.domain.errors import ConflictError, StoreError, ValidationError
from weekmenu.events.Event_Bus import EventBus
from weekmenu.events.event_helpers import publish_plan_changed
from weekmenu.infra.json_store import JsonFileStore
from weekmenu.infra.paths import PLAN_FILE
from weekmenu.utilities.constants import MEAL_TYPES

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, path=None, bus: Optional[EventBus] = None):
        self._store = JsonFileStore(path or PLAN_FILE)
        self._bus = bus

    def _load(self) -> List[PlanEntry]:
        rows = self._store.read([])
        if not isinstance(rows, list):
            raise StoreError(f"Unexpected plan document in {self._store.path.name}")
        try:
            return [PlanEntry.from_dict(r) for r in rows]
        except (TypeError, ValueError) as e:
            logger.error("Corrupt plan entry in %s: %s", self._store.path, e)
            raise StoreError(f"Corrupt plan entry: {e}") from e

    def _save(self, entries: List[PlanEntry]) -> None:
        entries.sort(key=lambda e: (e.plan_date, e.meal_type))
        self._store.write([e.to_dict() for e in entries])

    def list_entries(self, start: date, end: date) -> List[PlanEntry]:
        """Entries whose date falls in the closed range [start, end]."""
        return [e for e in self._load() if start <= e.plan_date <= end]

    def get_entry(self, plan_date: date, meal_type: str) -> Optional[PlanEntry]:
        for e in self._load():
            if e.slot == (plan_date, meal_type):
                return e
        return None

    def insert_entry(self, plan_date: date, meal_type: str, recipe_id: str) -> PlanEntry:
        if meal_type not in MEAL_TYPES:
            raise ValidationError(f"Invalid meal type '{meal_type}'")
        with self._store.lock:
            entries = self._load()
            if any(e.slot == (plan_date, meal_type) for e in entries):
                raise ConflictError(plan_date, meal_type)
            entry = PlanEntry(str(uuid4()), plan_date, meal_type, recipe_id)
            entries.append(entry)
            self._save(entries)
        publish_plan_changed("assigned", plan_date, meal_type, self._bus)
        return entry

    def update_entry(self, entry_id: str, recipe_id: str) -> Optional[PlanEntry]:
        """Point an entry at another recipe. Returns None when the entry no longer exists."""
        with self._store.lock:
            entries = self._load()
            for entry in entries:
                if entry.id == entry_id:
                    entry.recipe_id = recipe_id
                    break
            else:
                logger.info("Plan entry %s vanished before update", entry_id)
                return None
            self._save(entries)
        publish_plan_changed("assigned", entry.plan_date, entry.meal_type, self._bus)
        return entry

    def delete_entry(self, entry_id: str) -> None:
        """Deleting an entry that is already gone is not an error (last write wins)."""
        with self._store.lock:
            entries = self._load()
            removed = [e for e in entries if e.id == entry_id]
            if not removed:
                logger.info("Plan entry %s already removed", entry_id)
                return
            self._save([e for e in entries if e.id != entry_id])
        publish_plan_changed("unassigned", removed[0].plan_date, removed[0].meal_type, self._bus)


__all__ = ['PlanRepository']
