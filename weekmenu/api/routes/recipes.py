from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from weekmenu.api.deps import get_recipe_repo, http_errors
from weekmenu.infra.Recipe_Repository import RecipeRepository
from weekmenu.logic.recipes.library import filter_recipes, recipe_categories
from weekmenu.utilities.constants import UNITS
from weekmenu.utilities.validators import RecipeInput, RecipeUpdateInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
def list_recipes(q: str = Query(default=""),
                 category: Optional[str] = Query(default=None),
                 repo: RecipeRepository = Depends(get_recipe_repo)):
    """Recipes with their ingredient lines, optionally filtered by search text and category."""
    with http_errors():
        recipes = repo.list_recipes()
        ingredients = repo.list_all_ingredients()
    matches = filter_recipes(recipes, ingredients, q, category)
    lines_by_recipe = {}
    for line in ingredients:
        lines_by_recipe.setdefault(line.recipe_id, []).append(line.to_dict())
    return {
        'recipes': [{**r.to_dict(), 'ingredients': lines_by_recipe.get(r.id, [])} for r in matches],
        'count': len(matches),
        'total': len(recipes),
        'categories': recipe_categories(recipes),
        'units': list(UNITS),
    }


@router.post("")
def add_recipe(payload: RecipeInput, repo: RecipeRepository = Depends(get_recipe_repo)):
    with http_errors():
        recipe = repo.create_recipe(payload.name, [i.model_dump() for i in payload.ingredients],
                                    category=payload.category)
        lines = repo.list_ingredients([recipe.id])
    return {"status": "success", "recipe": {**recipe.to_dict(), 'ingredients': [l.to_dict() for l in lines]}}


@router.put("/{recipe_id}")
def edit_recipe(recipe_id: str, payload: RecipeUpdateInput, repo: RecipeRepository = Depends(get_recipe_repo)):
    with http_errors():
        if repo.get_recipe(recipe_id) is None:
            raise HTTPException(status_code=404, detail="Recipe not found")
        # A rename that omits category leaves the stored one alone
        kwargs = {'category': payload.category} if 'category' in payload.model_fields_set else {}
        repo.update_recipe(recipe_id, payload.name, **kwargs)
        recipe = repo.get_recipe(recipe_id)
    return {"status": "success", "recipe": recipe.to_dict()}


@router.delete("/{recipe_id}")
def delete_recipe(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repo)):
    with http_errors():
        if repo.get_recipe(recipe_id) is None:
            raise HTTPException(status_code=404, detail="Recipe not found")
        repo.delete_recipe(recipe_id)
    return {"status": "deleted", "id": recipe_id}
