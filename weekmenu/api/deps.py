"""Store instances shared by the routes, and error mapping for the HTTP edge.

Repositories are module-level so their locks are shared by every request. Tests swap
them through app.dependency_overrides.
"""
import logging
from contextlib import contextmanager
from datetime import date
from typing import Optional

from fastapi import HTTPException

from weekmenu.domain.errors import ConflictError, StoreError, ValidationError
from weekmenu.events.Event_Bus import GLOBAL_EVENT_BUS, EventBus
from weekmenu.infra.Checklist_Repository import ChecklistRepository
from weekmenu.infra.Plan_Repository import PlanRepository
from weekmenu.infra.Recipe_Repository import RecipeRepository
from weekmenu.logic.planner.weeks import week_start_for

logger = logging.getLogger("weekmenu_app")

_recipe_repo = RecipeRepository(bus=GLOBAL_EVENT_BUS)
_plan_repo = PlanRepository(bus=GLOBAL_EVENT_BUS)
_checklist_repo = ChecklistRepository(bus=GLOBAL_EVENT_BUS)


def get_event_bus() -> EventBus:
    return GLOBAL_EVENT_BUS


def get_recipe_repo() -> RecipeRepository:
    return _recipe_repo


def get_plan_repo() -> PlanRepository:
    return _plan_repo


def get_checklist_repo() -> ChecklistRepository:
    return _checklist_repo


def resolve_week(start: Optional[date]) -> date:
    """Monday of the requested week; the current week when no start is given."""
    return week_start_for(start or date.today())


@contextmanager
def http_errors():
    """Translate planner errors into HTTP responses."""
    try:
        yield
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        logger.warning("Unresolved slot conflict: %s", e)
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError as e:
        logger.error("Store failure: %s", e)
        raise HTTPException(status_code=503, detail=f"Store error: {e}")
