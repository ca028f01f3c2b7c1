"""Recipe library helpers: search by recipe or ingredient name, filter by category."""
from typing import Dict, Iterable, List, Optional

from weekmenu.domain.Recipe import IngredientLine, Recipe

ALL_CATEGORIES = "All"
UNCATEGORIZED = "Uncategorized"


def recipe_categories(recipes: Iterable[Recipe]) -> List[str]:
    """'All' first, then each distinct category in first-seen order."""
    seen: List[str] = []
    for r in recipes:
        label = r.category or UNCATEGORIZED
        if label not in seen:
            seen.append(label)
    return [ALL_CATEGORIES] + seen


def filter_recipes(recipes: Iterable[Recipe], ingredients: Iterable[IngredientLine],
                   query: str = "", category: Optional[str] = None) -> List[Recipe]:
    q = (query or "").strip().lower()
    names_by_recipe: Dict[str, List[str]] = {}
    for line in ingredients:
        names_by_recipe.setdefault(line.recipe_id, []).append(line.name.lower())

    result = []
    for r in recipes:
        if q and q not in r.name.lower() and not any(q in n for n in names_by_recipe.get(r.id, [])):
            continue
        if category and category != ALL_CATEGORIES and (r.category or UNCATEGORIZED) != category:
            continue
        result.append(r)
    return result


__all__ = ['ALL_CATEGORIES', 'UNCATEGORIZED', 'recipe_categories', 'filter_recipes']
