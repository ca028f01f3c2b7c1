"""AggregatedItem: one merged line of the weekly grocery list (derived, never persisted)."""


class AggregatedItem:
    def __init__(self, key: str, name: str, amount: float, unit: str):
        self.key = key
        self.name = name
        self.amount = amount
        self.unit = unit

    def add(self, amount: float):
        '''Adds the amount of another line sharing this key.'''
        self.amount += amount

    def __str__(self) -> str:
        return f"{self.name} - {self.amount} {self.unit}"

    __repr__ = __str__

    def to_dict(self):
        return {"key": self.key, "name": self.name, "amount": self.amount, "unit": self.unit}
