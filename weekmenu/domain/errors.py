"""Error taxonomy shared by the stores, the grid model and the grocery engine."""


class MenuError(Exception):
    """Base class for planner errors."""


class ValidationError(MenuError):
    """Bad input (empty name, no ingredients, unknown recipe reference). Nothing was written."""


class StoreError(MenuError):
    """A store read or write failed. The message is the originating one."""


class ConflictError(MenuError):
    """Unique-key violation: a plan entry already exists for (date, meal type)."""

    def __init__(self, plan_date, meal_type):
        super().__init__(f"Plan entry already exists for {plan_date} {meal_type}")
        self.plan_date = plan_date
        self.meal_type = meal_type


__all__ = ['MenuError', 'ValidationError', 'StoreError', 'ConflictError']
