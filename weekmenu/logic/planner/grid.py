"""Weekly grid model: 7 days x 4 meal types, each slot Empty or Assigned(recipe id).

Slot writes go through one upsert protocol because (date, meal type) is the natural key:
update the entry the grid already knows about, otherwise insert; if the insert hits a
uniqueness conflict (another writer created the row meanwhile), fetch that row and update
it. That retry happens once; a second failure is raised to the caller. Last write wins.

The grid keeps the week's entries and the recipe set in memory. Instead of re-fetching
recipes on a timer it listens for recipes.changed / plan.changed on the event bus and
reloads lazily on the next read; refresh_recipes() forces a reload on demand.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from weekmenu.domain.Plan import PlanEntry
from weekmenu.domain.Recipe import Recipe
from weekmenu.domain.errors import ConflictError, ValidationError
from weekmenu.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS, PLAN_CHANGED, RECIPES_CHANGED
from weekmenu.logic.planner.weeks import week_days, week_range, week_start_for
from weekmenu.utilities.constants import MEAL_TYPES, UNASSIGNED_VALUES

logger = logging.getLogger(__name__)


class WeeklyGrid:
    def __init__(self, week_start: date, plan_repo, recipe_repo, bus: Optional[EventBus] = None):
        self.week_start = week_start_for(week_start)
        self._plan_repo = plan_repo
        self._recipe_repo = recipe_repo
        self._bus = bus or GLOBAL_EVENT_BUS
        self._entries: Dict[Tuple[date, str], PlanEntry] = {}
        self._recipes: Dict[str, Recipe] = {}
        self._entries_stale = True
        self._recipes_stale = True
        self._bus.subscribe(RECIPES_CHANGED, self._on_recipes_changed)
        self._bus.subscribe(PLAN_CHANGED, self._on_plan_changed)

    def close(self):
        """Stop listening for change signals."""
        self._bus.unsubscribe(RECIPES_CHANGED, self._on_recipes_changed)
        self._bus.unsubscribe(PLAN_CHANGED, self._on_plan_changed)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # --- Change signals ------------------------------------------------------
    def _on_recipes_changed(self, event_name: str, payload: Any):
        self._recipes_stale = True

    def _on_plan_changed(self, event_name: str, payload: Any):
        self._entries_stale = True

    # --- Cached reads ----------------------------------------------------------
    def refresh_recipes(self) -> List[Recipe]:
        recipes = self._recipe_repo.list_recipes()
        self._recipes = {r.id: r for r in recipes}
        self._recipes_stale = False
        return recipes

    def refresh_entries(self):
        start, end = week_range(self.week_start)
        self._entries = {e.slot: e for e in self._plan_repo.list_entries(start, end)}
        self._entries_stale = False

    @property
    def recipes(self) -> List[Recipe]:
        """Current recipe set, ordered by name."""
        if self._recipes_stale:
            self.refresh_recipes()
        return sorted(self._recipes.values(), key=lambda r: r.name.lower())

    def _known_recipes(self) -> Dict[str, Recipe]:
        if self._recipes_stale:
            self.refresh_recipes()
        return self._recipes

    def _entry(self, plan_date: date, meal_type: str) -> Optional[PlanEntry]:
        if self._entries_stale:
            self.refresh_entries()
        return self._entries.get((plan_date, meal_type))

    def _check_slot(self, plan_date: date, meal_type: str):
        if meal_type not in MEAL_TYPES:
            raise ValidationError(f"Invalid meal type '{meal_type}'")
        start, end = week_range(self.week_start)
        if not start <= plan_date <= end:
            raise ValidationError(f"{plan_date} is outside the week of {self.week_start}")

    # --- Slots -----------------------------------------------------------------
    def get_slot(self, plan_date: date, meal_type: str) -> Optional[str]:
        self._check_slot(plan_date, meal_type)
        entry = self._entry(plan_date, meal_type)
        return entry.recipe_id if entry else None

    def assign_slot(self, plan_date: date, meal_type: str, recipe_id: Optional[str]) -> Optional[PlanEntry]:
        """Assign a recipe to a slot, or clear it when recipe_id is None / "none" / "".

        Raises:
            ValidationError: unknown meal type, date outside the week, or a recipe id
                that is not in the current recipe set. The slot is left unchanged.
            ConflictError / StoreError: the store write failed even after the retry.
        """
        self._check_slot(plan_date, meal_type)
        if recipe_id in UNASSIGNED_VALUES:
            self._unassign(plan_date, meal_type)
            return None

        if recipe_id not in self._known_recipes():
            raise ValidationError(f"Recipe id '{recipe_id}' not found in recipes")

        try:
            entry = self._upsert(plan_date, meal_type, recipe_id)
        finally:
            self.refresh_entries()
        logger.info("Slot %s %s -> %s", plan_date, meal_type, recipe_id)
        return entry

    def _upsert(self, plan_date: date, meal_type: str, recipe_id: str) -> PlanEntry:
        existing = self._entry(plan_date, meal_type)
        if existing:
            updated = self._plan_repo.update_entry(existing.id, recipe_id)
            if updated:
                return updated
            # Removed by someone else since we loaded it; fall through to insert
        try:
            return self._plan_repo.insert_entry(plan_date, meal_type, recipe_id)
        except ConflictError:
            logger.info("Slot %s %s created concurrently, updating instead", plan_date, meal_type)
            current = self._plan_repo.get_entry(plan_date, meal_type)
            updated = self._plan_repo.update_entry(current.id, recipe_id) if current else None
            if updated is None:
                raise
            return updated

    def _unassign(self, plan_date: date, meal_type: str):
        existing = self._entry(plan_date, meal_type)
        if existing is None:
            return
        try:
            self._plan_repo.delete_entry(existing.id)
        finally:
            self.refresh_entries()
        logger.info("Slot %s %s cleared", plan_date, meal_type)

    # --- Views -----------------------------------------------------------------
    def week_days(self) -> List[date]:
        return week_days(self.week_start)

    def assignments(self) -> List[PlanEntry]:
        if self._entries_stale:
            self.refresh_entries()
        return sorted(self._entries.values(), key=lambda e: (e.plan_date, MEAL_TYPES.index(e.meal_type)))

    def view(self) -> List[Dict[str, Any]]:
        """Rows per day with the Recipe in each slot.

        Entries pointing at a recipe that is no longer in the recipe set render as empty.
        """
        recipes = self._known_recipes()
        rows = []
        for d in self.week_days():
            meals: Dict[str, Optional[Recipe]] = {}
            for meal_type in MEAL_TYPES:
                entry = self._entry(d, meal_type)
                recipe = recipes.get(entry.recipe_id) if entry else None
                if entry and recipe is None:
                    logger.debug("Skipping entry %s: recipe %s not found", entry.id, entry.recipe_id)
                meals[meal_type] = recipe
            rows.append({'date': d, 'day': d.strftime('%A'), 'meals': meals})
        return rows


def add_to_today(recipe_id: str, meal_type: str, plan_repo, recipe_repo,
                 today: Optional[date] = None, bus: Optional[EventBus] = None) -> PlanEntry:
    """Recipe library shortcut: put a recipe into today's slot for meal_type."""
    today = today or date.today()
    with WeeklyGrid(today, plan_repo, recipe_repo, bus=bus) as grid:
        return grid.assign_slot(today, meal_type, recipe_id)


__all__ = ['WeeklyGrid', 'add_to_today']
