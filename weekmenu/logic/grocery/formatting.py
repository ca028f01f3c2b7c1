"""Presentation helpers for the grocery list: amounts, copy text and the JSON payload."""
from typing import Any, Dict, Optional

from weekmenu.domain.Checklist import ChecklistState
from weekmenu.logic.grocery.list_builder import GroceryGroups, flatten
from weekmenu.utilities.constants import DEFAULT_UNIT


def format_number(amount: float) -> str:
    """Integral amounts without decimals, fractional ones with exactly two."""
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


def format_amount(amount: float, unit: str) -> str:
    return f"{format_number(amount)} {unit}"


def grocery_list_text(groups: GroceryGroups) -> str:
    """Plain text for the clipboard: a header per category and one bullet per item."""
    lines = []
    for category, items in groups:
        lines.append(f"\n{category}")
        for item in items:
            if item.unit == DEFAULT_UNIT:
                lines.append(f"  • {format_number(item.amount)} {item.name}")
            else:
                lines.append(f"  • {format_amount(item.amount, item.unit)} {item.name}")
    return "\n".join(lines).strip()


def grocery_list_payload(groups: GroceryGroups, checklist: Optional[ChecklistState] = None) -> Dict[str, Any]:
    """JSON shape served by the API: categories with items, display amounts and checked flags."""
    items = flatten(groups)
    categories = []
    for category, cat_items in groups:
        categories.append({
            'category': category,
            'items': [
                {
                    **item.to_dict(),
                    'display_amount': format_amount(item.amount, item.unit),
                    'checked': bool(checklist and checklist.is_checked(item.key)),
                }
                for item in cat_items
            ],
        })
    return {
        'categories': categories,
        'count': len(items),
        'checked_count': checklist.checked_count(i.key for i in items) if checklist else 0,
    }


__all__ = ['format_number', 'format_amount', 'grocery_list_text', 'grocery_list_payload']
