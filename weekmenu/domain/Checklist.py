"""Checklist state: which grocery items of one week have been marked purchased."""
from typing import Iterable, Optional, Set


class ChecklistState:
    def __init__(self, week_key: str, checked_keys: Optional[Iterable[str]] = None):
        self.week_key = week_key
        self.checked_keys: Set[str] = set(checked_keys or [])

    def toggle(self, item_key: str) -> bool:
        '''Flips the item and returns its new checked state.'''
        if item_key in self.checked_keys:
            self.checked_keys.discard(item_key)
            return False
        self.checked_keys.add(item_key)
        return True

    def clear(self):
        self.checked_keys.clear()

    def is_checked(self, item_key: str) -> bool:
        return item_key in self.checked_keys

    def checked_count(self, item_keys: Iterable[str]) -> int:
        '''Counts checked items among the ones currently rendered; stale keys are ignored.'''
        return sum(1 for k in set(item_keys) if k in self.checked_keys)

    def __len__(self) -> int:
        return len(self.checked_keys)

    def __str__(self) -> str:
        return f"Checklist {self.week_key}: {len(self.checked_keys)} checked"

    __repr__ = __str__

    def to_list(self):
        return sorted(self.checked_keys)
