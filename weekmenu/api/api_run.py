from datetime import date
from typing import Optional
import logging

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from weekmenu.api.deps import (
    get_checklist_repo, get_plan_repo, get_recipe_repo, http_errors, resolve_week,
)
from weekmenu.api.routes import plan, recipes
from weekmenu.infra.Checklist_Repository import ChecklistRepository
from weekmenu.infra.Plan_Repository import PlanRepository
from weekmenu.infra.Recipe_Repository import RecipeRepository
from weekmenu.infra.pdf_utils import generate_pdf_for_grocery_list
from weekmenu.logic.grocery.formatting import grocery_list_payload, grocery_list_text
from weekmenu.logic.grocery.list_builder import build_grocery_list
from weekmenu.logic.planner.weeks import shift_week, week_key, week_range
from weekmenu.utilities.validators import ChecklistClearInput, ChecklistToggleInput

# Logging
logger = logging.getLogger("weekmenu_app")

# Initialize FastAPI app
app = FastAPI(title="Weekly Menu Planner API")

# Include routers
app.include_router(recipes.router)
app.include_router(plan.router)


@app.on_event("startup")
def _startup_log():
    logger.info("Weekly Menu Planner API started")


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    # Echoed inputs are dropped: a body number like 1e400 parses to inf, which JSON cannot encode
    errors = [{k: v for k, v in err.items() if k not in ('input', 'ctx')} for err in exc.errors()]
    return JSONResponse(status_code=422, content={'detail': jsonable_encoder(errors)})


def _week_header(week_start: date):
    start, end = week_range(week_start)
    return {
        'week_start': start.isoformat(),
        'week_end': end.isoformat(),
        'week_key': week_key(start),
        'previous_week': shift_week(start, -1).isoformat(),
        'next_week': shift_week(start, 1).isoformat(),
    }


# -------------------- API: Grocery List (JSON) --------------------
@app.get('/api/grocery-list')
@app.get('/api/grocery-list/')
def api_grocery_list(start: Optional[date] = Query(default=None, description="Any date of the week"),
                     plan_repo: PlanRepository = Depends(get_plan_repo),
                     recipe_repo: RecipeRepository = Depends(get_recipe_repo),
                     checklist_repo: ChecklistRepository = Depends(get_checklist_repo)):
    """Aggregated, categorized grocery list for the week with checked flags overlaid.

    A store failure answers 503; an empty plan answers 200 with no categories.
    """
    week_start = resolve_week(start)
    with http_errors():
        groups = build_grocery_list(week_start, plan_repo, recipe_repo)
        checklist = checklist_repo.load(week_key(week_start))
    payload = grocery_list_payload(groups, checklist)
    logger.info("Grocery list week=%s items=%s checked=%s",
                week_start, payload['count'], payload['checked_count'])
    return {**_week_header(week_start), **payload}


@app.get('/api/grocery-list/text', response_class=PlainTextResponse)
def api_grocery_list_text(start: Optional[date] = Query(default=None),
                          plan_repo: PlanRepository = Depends(get_plan_repo),
                          recipe_repo: RecipeRepository = Depends(get_recipe_repo)):
    """Copy-to-clipboard text of the grocery list."""
    with http_errors():
        groups = build_grocery_list(resolve_week(start), plan_repo, recipe_repo)
    return grocery_list_text(groups)


@app.get('/api/grocery-list/pdf')
def api_grocery_list_pdf(start: Optional[date] = Query(default=None),
                         plan_repo: PlanRepository = Depends(get_plan_repo),
                         recipe_repo: RecipeRepository = Depends(get_recipe_repo),
                         checklist_repo: ChecklistRepository = Depends(get_checklist_repo)):
    week_start = resolve_week(start)
    with http_errors():
        groups = build_grocery_list(week_start, plan_repo, recipe_repo)
        checklist = checklist_repo.load(week_key(week_start))
    pdf_bytes = generate_pdf_for_grocery_list(groups, week_start, checklist)
    filename = f"grocery_list_{week_start.isoformat()}.pdf"
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})


# -------------------- API: Checklist --------------------
@app.post('/api/grocery-list/checklist/toggle')
def api_checklist_toggle(payload: ChecklistToggleInput,
                         checklist_repo: ChecklistRepository = Depends(get_checklist_repo)):
    key = week_key(payload.start)
    with http_errors():
        state = checklist_repo.toggle(key, payload.key)
    return {
        'week_key': key,
        'key': payload.key,
        'checked': state.is_checked(payload.key),
        'checked_keys': state.to_list(),
    }


@app.post('/api/grocery-list/checklist/clear')
def api_checklist_clear(payload: ChecklistClearInput,
                        checklist_repo: ChecklistRepository = Depends(get_checklist_repo)):
    key = week_key(payload.start)
    with http_errors():
        checklist_repo.delete(key)
    logger.info("Checklist cleared week=%s", key)
    return {'week_key': key, 'cleared': True}
