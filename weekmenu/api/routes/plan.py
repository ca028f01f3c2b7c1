from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from weekmenu.api.deps import (
    get_event_bus, get_plan_repo, get_recipe_repo, http_errors, resolve_week,
)
from weekmenu.events.Event_Bus import EventBus
from weekmenu.infra.Plan_Repository import PlanRepository
from weekmenu.infra.Recipe_Repository import RecipeRepository
from weekmenu.infra.pdf_utils import generate_pdf_for_week
from weekmenu.logic.planner.grid import WeeklyGrid, add_to_today
from weekmenu.logic.planner.weeks import shift_week, week_range
from weekmenu.utilities.constants import MEAL_TYPES
from weekmenu.utilities.validators import AddToTodayInput, SlotAssignInput

router = APIRouter(prefix="/api/plan", tags=["plan"])


def _serialize_view(grid: WeeklyGrid):
    days = []
    for row in grid.view():
        days.append({
            'date': row['date'].isoformat(),
            'day': row['day'],
            'meals': {m: (r.to_dict() if r else None) for m, r in row['meals'].items()},
        })
    start, end = week_range(grid.week_start)
    return {
        'week_start': start.isoformat(),
        'week_end': end.isoformat(),
        'previous_week': shift_week(start, -1).isoformat(),
        'next_week': shift_week(start, 1).isoformat(),
        'meal_types': list(MEAL_TYPES),
        'days': days,
        'recipes': [r.to_dict() for r in grid.recipes],
    }


@router.get("")
def get_week(start: Optional[date] = Query(default=None, description="Any date of the week"),
             plan_repo: PlanRepository = Depends(get_plan_repo),
             recipe_repo: RecipeRepository = Depends(get_recipe_repo),
             bus: EventBus = Depends(get_event_bus)):
    with http_errors(), WeeklyGrid(resolve_week(start), plan_repo, recipe_repo, bus=bus) as grid:
        return _serialize_view(grid)


@router.put("/slot")
def assign_slot(payload: SlotAssignInput,
                plan_repo: PlanRepository = Depends(get_plan_repo),
                recipe_repo: RecipeRepository = Depends(get_recipe_repo),
                bus: EventBus = Depends(get_event_bus)):
    """Assign a recipe to (date, meal type); recipe_id null or "none" clears the slot."""
    with http_errors(), WeeklyGrid(payload.date, plan_repo, recipe_repo, bus=bus) as grid:
        grid.assign_slot(payload.date, payload.meal_type, payload.recipe_id)
        return {
            'date': payload.date.isoformat(),
            'meal_type': payload.meal_type,
            'recipe_id': grid.get_slot(payload.date, payload.meal_type),
        }


@router.post("/today")
def add_recipe_to_today(payload: AddToTodayInput,
                        plan_repo: PlanRepository = Depends(get_plan_repo),
                        recipe_repo: RecipeRepository = Depends(get_recipe_repo),
                        bus: EventBus = Depends(get_event_bus)):
    with http_errors():
        entry = add_to_today(payload.recipe_id, payload.meal_type, plan_repo, recipe_repo, bus=bus)
    return {'status': 'success', 'entry': entry.to_dict()}


@router.get("/pdf")
def export_week_pdf(start: Optional[date] = Query(default=None),
                    plan_repo: PlanRepository = Depends(get_plan_repo),
                    recipe_repo: RecipeRepository = Depends(get_recipe_repo),
                    bus: EventBus = Depends(get_event_bus)):
    week_start = resolve_week(start)
    with http_errors(), WeeklyGrid(week_start, plan_repo, recipe_repo, bus=bus) as grid:
        rows = grid.view()
    pdf_bytes = generate_pdf_for_week(rows, week_start)
    filename = f"meal_plan_{week_start.isoformat()}.pdf"
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})
