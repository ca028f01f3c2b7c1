"""Event helper utilities.

Thin publishers used by the stores so payload shapes stay in one place.

Quick import:
    from weekmenu.events.event_helpers import (
        publish_recipes_changed, publish_plan_changed, publish_checklist_changed
    )
"""
from __future__ import annotations
from datetime import date
from typing import Optional

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    RECIPES_CHANGED, PLAN_CHANGED, CHECKLIST_CHANGED,
)

__all__ = [
    'publish_recipes_changed', 'publish_plan_changed', 'publish_checklist_changed',
    'RECIPES_CHANGED', 'PLAN_CHANGED', 'CHECKLIST_CHANGED',
]


def publish_recipes_changed(action: str, recipe_id: str, bus: Optional[EventBus] = None):
    """Publish a recipes.changed event."""
    (bus or GLOBAL_EVENT_BUS).publish(RECIPES_CHANGED, {
        'action': action,
        'recipe_id': recipe_id,
    })


def publish_plan_changed(action: str, plan_date: date, meal_type: str, bus: Optional[EventBus] = None):
    """Publish a plan.changed event."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_CHANGED, {
        'action': action,
        'date': plan_date.isoformat(),
        'meal_type': meal_type,
    })


def publish_checklist_changed(week_key: str, count: int, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(CHECKLIST_CHANGED, {
        'week_key': week_key,
        'count': count,
    })
