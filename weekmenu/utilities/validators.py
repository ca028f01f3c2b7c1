"""
Input validation schemas using Pydantic for recipe, plan and checklist requests.
"""
from datetime import date as _date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from weekmenu.utilities.constants import DEFAULT_AMOUNT, DEFAULT_UNIT, KEY_SEPARATOR, MEAL_TYPES, UNITS


class IngredientLineInput(BaseModel):
    """Schema for one ingredient line of a recipe."""
    name: str = Field(..., max_length=100)
    amount: float = Field(DEFAULT_AMOUNT, ge=0, allow_inf_nan=False)
    unit: str = Field(DEFAULT_UNIT)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Strip whitespace; the key separator is reserved."""
        v = v.strip()
        if KEY_SEPARATOR in v:
            raise ValueError(f"Ingredient name cannot contain '{KEY_SEPARATOR}'")
        return v

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        """Unit must come from the fixed vocabulary."""
        v = v.strip()
        if v not in UNITS:
            raise ValueError(f"Unknown unit '{v}'. Allowed: {', '.join(UNITS)}")
        return v


class RecipeInput(BaseModel):
    """Schema for recipe creation."""
    name: str = Field(..., max_length=200)
    category: Optional[str] = Field(None, max_length=50)
    ingredients: List[IngredientLineInput]

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Recipe name is required')
        return v.strip()

    @field_validator('category')
    @classmethod
    def blank_category_is_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v):
        """Drop blank rows; at least one named ingredient must remain."""
        named = [line for line in v if line.name]
        if not named:
            raise ValueError('Please add at least one ingredient')
        return named


class RecipeUpdateInput(BaseModel):
    """Schema for renaming / recategorizing a recipe."""
    name: str = Field(..., max_length=200)
    category: Optional[str] = Field(None, max_length=50)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Recipe name is required')
        return v.strip()


class SlotAssignInput(BaseModel):
    """Schema for assigning (or clearing) a grid slot."""
    date: _date
    meal_type: str
    recipe_id: Optional[str] = None

    @field_validator('meal_type')
    @classmethod
    def validate_meal_type(cls, v):
        v = v.strip().lower()
        if v not in MEAL_TYPES:
            raise ValueError(f"Invalid meal type '{v}'")
        return v


class AddToTodayInput(BaseModel):
    """Schema for the recipe library 'add to today' shortcut."""
    recipe_id: str = Field(..., min_length=1)
    meal_type: str = 'dinner'

    @field_validator('meal_type')
    @classmethod
    def validate_meal_type(cls, v):
        v = v.strip().lower()
        if v not in MEAL_TYPES:
            raise ValueError(f"Invalid meal type '{v}'")
        return v


class ChecklistToggleInput(BaseModel):
    """Schema for toggling one grocery item."""
    start: _date
    key: str = Field(..., min_length=1)


class ChecklistClearInput(BaseModel):
    start: _date
