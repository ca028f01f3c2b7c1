from typing import Final

ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"

MEAL_TYPES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snack")

# Unit vocabulary offered for ingredient lines. Order is the display order.
UNITS: Final[tuple[str, ...]] = (
    "unit", "cup", "tbsp", "tsp", "oz", "lb", "g", "kg", "ml", "L",
    "piece", "slice", "clove", "bunch", "can", "package",
)
DEFAULT_UNIT: Final[str] = "unit"
DEFAULT_AMOUNT: Final[int] = 1

# Slot values that mean "no recipe"
UNASSIGNED_VALUES: Final[tuple] = (None, "", "none", "-")

CHECKLIST_KEY_PREFIX: Final[str] = "grocery-checked-"

# Joins name and unit in grocery aggregation keys; never allowed in ingredient names
KEY_SEPARATOR: Final[str] = "|"
