"""Aggregation keys for ingredient lines.

Two lines merge on the grocery list iff their keys are equal: case-insensitive on name
and unit, but spelling-sensitive ("tomato" and "tomatoes" stay separate items).
"""
from typing import Optional

from weekmenu.utilities.constants import KEY_SEPARATOR


def _field(value: Optional[str]) -> str:
    # Escape the separator so "a|b" + "c" and "a" + "b|c" stay distinct keys
    return (value or "").replace("\\", "\\\\").replace(KEY_SEPARATOR, "\\" + KEY_SEPARATOR)


def normalize(name: Optional[str], unit: Optional[str]) -> str:
    return f"{_field(name).strip().lower()}{KEY_SEPARATOR}{_field(unit).lower()}"


__all__ = ['normalize', 'KEY_SEPARATOR']
