"""Grocery list builder.

Provides build_grocery_list(week_start, plan_repo, recipe_repo): the ingredients of every
recipe planned in [week_start, week_start + 6], merged by aggregation key, sorted by
name and grouped into shopping categories.

Each planned slot contributes its recipe's lines once, so a recipe planned twice counts
twice. Lines sharing a key but spelled with a different unit still sum numerically; the
first-seen name and unit are kept for display. There is no unit conversion.
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Tuple

from weekmenu.domain.GroceryItem import AggregatedItem
from weekmenu.domain.Plan import PlanEntry
from weekmenu.domain.Recipe import IngredientLine
from weekmenu.logic.grocery.categorizer import group_by_category
from weekmenu.logic.grocery.normalizer import normalize
from weekmenu.logic.planner.weeks import week_range

logger = logging.getLogger(__name__)

GroceryGroups = List[Tuple[str, List[AggregatedItem]]]


def aggregate_ingredients(entries: Iterable[PlanEntry], lines: Iterable[IngredientLine]) -> List[AggregatedItem]:
    """Merge the lines of every entry's recipe; result sorted case-insensitively by name."""
    by_recipe: Dict[str, List[IngredientLine]] = {}
    for line in lines:
        by_recipe.setdefault(line.recipe_id, []).append(line)

    aggregated: Dict[str, AggregatedItem] = {}
    for entry in entries:
        for line in by_recipe.get(entry.recipe_id, []):
            key = normalize(line.name, line.unit)
            if key in aggregated:
                aggregated[key].add(line.amount)
            else:
                aggregated[key] = AggregatedItem(key, line.name, line.amount, line.unit)

    # sorted() is stable, so equal names keep first-seen order
    return sorted(aggregated.values(), key=lambda item: item.name.lower())


def build_grocery_list(week_start: date, plan_repo, recipe_repo) -> GroceryGroups:
    """Compute the categorized grocery list for one week.

    Args:
        week_start: first day of the 7-day window (normally a Monday).
        plan_repo: store exposing list_entries(start, end).
        recipe_repo: store exposing list_ingredients(recipe_ids).

    Returns:
        [(category, [AggregatedItem, ...]), ...] in category order; [] when nothing is planned.

    Raises:
        StoreError: a store call failed. Nothing partial is returned.
    """
    start, end = week_range(week_start)
    entries = plan_repo.list_entries(start, end)
    if not entries:
        logger.debug("No meals planned between %s and %s", start, end)
        return []

    recipe_ids = {e.recipe_id for e in entries if e.recipe_id}
    if not recipe_ids:
        return []

    lines = recipe_repo.list_ingredients(recipe_ids)
    logger.debug("Aggregating %d entries, %d recipes, %d ingredient lines",
                 len(entries), len(recipe_ids), len(lines))
    items = aggregate_ingredients(entries, lines)
    return group_by_category(items)


def flatten(groups: GroceryGroups) -> List[AggregatedItem]:
    return [item for _, items in groups for item in items]


__all__ = ['build_grocery_list', 'aggregate_ingredients', 'flatten', 'GroceryGroups']
