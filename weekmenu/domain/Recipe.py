"""Recipe domain entities: Recipe (id, name, optional category) and its IngredientLine rows."""
from typing import Optional


class IngredientLine:
    def __init__(self, recipe_id: str = "", name: str = "", amount: float = 0, unit: str = ""):
        self.recipe_id = recipe_id
        self.name = name
        self.amount = amount
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.name} - {self.amount} {self.unit}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, IngredientLine):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an IngredientLine from a stored row. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return IngredientLine(
            recipe_id=d.get("recipe_id", ""),
            name=d.get("name", "") or "",
            amount=d.get("amount", 0) or 0,
            unit=d.get("unit", "") or "",
        )

    def to_dict(self):
        return {
            "recipe_id": self.recipe_id,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
        }


class Recipe:
    def __init__(self, id: str = "", name: str = "", category: Optional[str] = None):
        self.id = id
        self.name = name
        self.category = category

    def __str__(self) -> str:
        return f"{self.name} ({self.category or 'Uncategorized'})"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Recipe):
            return NotImplemented
        return (self.id, self.name, self.category) == (other.id, other.name, other.category)

    def __hash__(self):
        return hash(self.id)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Recipe(id=d.get("id", ""), name=d.get("name", ""), category=d.get("category") or None)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "category": self.category}
