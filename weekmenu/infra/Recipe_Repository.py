"""Recipe store: recipes and their ingredient lines, persisted in one JSON document.

Layout of recipes.json:
    {"recipes": [{id, name, category}, ...], "ingredients": [{recipe_id, name, amount, unit}, ...]}

A recipe and its lines are written together, so a failed create leaves nothing behind.
"""
import logging
import math
from typing import Any, Iterable, List, Optional
from uuid import uuid4

from weekmenu.domain.Recipe import IngredientLine, Recipe
from weekmenu.domain.errors import StoreError, ValidationError
from weekmenu.events.Event_Bus import EventBus
from weekmenu.events.event_helpers import publish_recipes_changed
from weekmenu.infra.json_store import JsonFileStore
from weekmenu.infra.paths import RECIPES_FILE
from weekmenu.utilities.constants import DEFAULT_AMOUNT, DEFAULT_UNIT, KEY_SEPARATOR, UNITS

logger = logging.getLogger(__name__)

_UNSET = object()


def _line_value(item: Any, field: str, default=None):
    if isinstance(item, dict):
        return item.get(field, default)
    return getattr(item, field, default)


class RecipeRepository:
    def __init__(self, path=None, bus: Optional[EventBus] = None):
        self._store = JsonFileStore(path or RECIPES_FILE)
        self._bus = bus

    def _load(self):
        data = self._store.read({})
        if not isinstance(data, dict):
            raise StoreError(f"Unexpected recipes document in {self._store.path.name}")
        data.setdefault("recipes", [])
        data.setdefault("ingredients", [])
        return data

    # --- reads ---------------------------------------------------------------
    def list_recipes(self) -> List[Recipe]:
        """All recipes ordered by name."""
        recipes = [Recipe.from_dict(r) for r in self._load()["recipes"]]
        recipes.sort(key=lambda r: r.name.lower())
        return recipes

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        for r in self._load()["recipes"]:
            if r.get("id") == recipe_id:
                return Recipe.from_dict(r)
        return None

    def list_ingredients(self, recipe_ids: Iterable[str]) -> List[IngredientLine]:
        """Ingredient lines of the given recipes. Zero rows is a valid answer."""
        wanted = set(recipe_ids)
        if not wanted:
            return []
        return [IngredientLine.from_dict(row) for row in self._load()["ingredients"]
                if row.get("recipe_id") in wanted]

    def list_all_ingredients(self) -> List[IngredientLine]:
        return [IngredientLine.from_dict(row) for row in self._load()["ingredients"]]

    # --- writes --------------------------------------------------------------
    @staticmethod
    def _validated_lines(recipe_id: str, ingredients: Iterable[Any]) -> List[IngredientLine]:
        lines = []
        for item in ingredients or []:
            name = (_line_value(item, "name", "") or "").strip()
            if not name:
                continue  # blank form rows are dropped, not rejected
            if KEY_SEPARATOR in name:
                raise ValidationError(f"Ingredient name cannot contain '{KEY_SEPARATOR}': {name}")
            amount = _line_value(item, "amount", DEFAULT_AMOUNT)
            unit = _line_value(item, "unit", DEFAULT_UNIT) or DEFAULT_UNIT
            try:
                amount = float(amount)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid amount for {name}: {amount!r}")
            if not math.isfinite(amount):
                raise ValidationError(f"Amount for {name} must be a finite number")
            if amount < 0:
                raise ValidationError(f"Amount for {name} cannot be negative")
            if unit not in UNITS:
                raise ValidationError(f"Unknown unit '{unit}' for {name}")
            if amount.is_integer():
                amount = int(amount)
            lines.append(IngredientLine(recipe_id, name, amount, unit))
        if not lines:
            raise ValidationError("Please add at least one ingredient")
        return lines

    def create_recipe(self, name: str, ingredients: Iterable[Any], category: Optional[str] = None) -> Recipe:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Recipe name is required")
        recipe = Recipe(str(uuid4()), name, (category or "").strip() or None)
        lines = self._validated_lines(recipe.id, ingredients)
        with self._store.lock:
            data = self._load()
            data["recipes"].append(recipe.to_dict())
            data["ingredients"].extend(line.to_dict() for line in lines)
            self._store.write(data)
        logger.info("Recipe created id=%s name=%s ingredients=%d", recipe.id, recipe.name, len(lines))
        publish_recipes_changed("created", recipe.id, self._bus)
        return recipe

    def update_recipe(self, recipe_id: str, name: str, category=_UNSET) -> None:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Recipe name is required")
        with self._store.lock:
            data = self._load()
            for row in data["recipes"]:
                if row.get("id") == recipe_id:
                    row["name"] = name
                    if category is not _UNSET:
                        row["category"] = (category or "").strip() or None
                    break
            else:
                raise ValidationError(f"Unknown recipe id '{recipe_id}'")
            self._store.write(data)
        publish_recipes_changed("updated", recipe_id, self._bus)

    def delete_recipe(self, recipe_id: str) -> None:
        """Removes the recipe and its ingredient lines. Plan entries pointing at it are left alone."""
        with self._store.lock:
            data = self._load()
            before = len(data["recipes"])
            data["recipes"] = [r for r in data["recipes"] if r.get("id") != recipe_id]
            if len(data["recipes"]) == before:
                raise ValidationError(f"Unknown recipe id '{recipe_id}'")
            data["ingredients"] = [i for i in data["ingredients"] if i.get("recipe_id") != recipe_id]
            self._store.write(data)
        logger.info("Recipe deleted id=%s", recipe_id)
        publish_recipes_changed("deleted", recipe_id, self._bus)


__all__ = ['RecipeRepository']
