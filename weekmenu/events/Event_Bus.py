"""Simple Event Bus / Observer implementation for store change signals.

Event names used so far:
  recipes.changed -> payload {"action": "created"|"updated"|"deleted", "recipe_id": str}
  plan.changed    -> payload {"action": "assigned"|"unassigned", "date": str, "meal_type": str}
  checklist.changed -> payload {"week_key": str, "count": int}

Subscribers are callables taking (event_name, payload). Stores publish after a
successful write; readers such as the weekly grid use the signal to drop cached data
instead of polling the stores.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
RECIPES_CHANGED = "recipes.changed"
PLAN_CHANGED = "plan.changed"
CHECKLIST_CHANGED = "checklist.changed"


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any = None):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                # Listener errors are logged, never raised to the publisher
                logger.exception("Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()

__all__ = ['EventBus', 'GLOBAL_EVENT_BUS', 'RECIPES_CHANGED', 'PLAN_CHANGED', 'CHECKLIST_CHANGED']
