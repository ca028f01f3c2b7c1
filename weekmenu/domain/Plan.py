"""Plan domain entity: one (date, meal type) -> recipe assignment of the weekly grid."""
from datetime import date, datetime

from weekmenu.utilities.constants import ISO_DATE_FORMAT


class PlanEntry:
    def __init__(self, id: str, plan_date: date, meal_type: str, recipe_id: str):
        self.id = id
        self.plan_date = plan_date
        self.meal_type = meal_type
        self.recipe_id = recipe_id

    @property
    def slot(self):
        """Natural unique key of the entry."""
        return (self.plan_date, self.meal_type)

    def __str__(self) -> str:
        return f"{self.plan_date.isoformat()} {self.meal_type}: {self.recipe_id}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        plan_date = d.get("plan_date")
        if isinstance(plan_date, str):
            plan_date = datetime.strptime(plan_date, ISO_DATE_FORMAT).date()
        return PlanEntry(d.get("id", ""), plan_date, d.get("meal_type", ""), d.get("recipe_id", ""))

    def to_dict(self):
        return {
            "id": self.id,
            "plan_date": self.plan_date.strftime(ISO_DATE_FORMAT),
            "meal_type": self.meal_type,
            "recipe_id": self.recipe_id,
        }
