"""Checklist store: week key -> list of checked grocery item keys (JSON key-value file).

Each week is independent. Stale keys (items no longer in the week's list) are kept;
they are harmless and disappear when the week is cleared.
"""
import logging
from typing import Optional

from weekmenu.domain.Checklist import ChecklistState
from weekmenu.domain.errors import StoreError
from weekmenu.events.Event_Bus import EventBus
from weekmenu.events.event_helpers import publish_checklist_changed
from weekmenu.infra.json_store import JsonFileStore
from weekmenu.infra.paths import CHECKLIST_FILE
from weekmenu.utilities.constants import CHECKLIST_KEY_PREFIX

logger = logging.getLogger(__name__)


def _storage_key(week_key: str) -> str:
    return f"{CHECKLIST_KEY_PREFIX}{week_key}"


class ChecklistRepository:
    def __init__(self, path=None, bus: Optional[EventBus] = None):
        self._store = JsonFileStore(path or CHECKLIST_FILE)
        self._bus = bus

    def _load_all(self) -> dict:
        data = self._store.read({})
        if not isinstance(data, dict):
            raise StoreError(f"Unexpected checklist document in {self._store.path.name}")
        return data

    def load(self, week_key: str) -> ChecklistState:
        saved = self._load_all().get(_storage_key(week_key))
        if not isinstance(saved, list):
            if saved is not None:
                logger.warning("Ignoring malformed checklist for week %s", week_key)
            return ChecklistState(week_key)
        return ChecklistState(week_key, [k for k in saved if isinstance(k, str)])

    def save(self, state: ChecklistState) -> None:
        with self._store.lock:
            data = self._load_all()
            if state.checked_keys:
                data[_storage_key(state.week_key)] = state.to_list()
            else:
                data.pop(_storage_key(state.week_key), None)
            self._store.write(data)
        publish_checklist_changed(state.week_key, len(state), self._bus)

    def delete(self, week_key: str) -> None:
        with self._store.lock:
            data = self._load_all()
            if data.pop(_storage_key(week_key), None) is not None:
                self._store.write(data)
        publish_checklist_changed(week_key, 0, self._bus)

    def toggle(self, week_key: str, item_key: str) -> ChecklistState:
        """Atomic load-toggle-save for one item of one week."""
        with self._store.lock:
            state = self.load(week_key)
            state.toggle(item_key)
            self.save(state)
        return state


__all__ = ['ChecklistRepository']
