"""Shopping categories by keyword.

CATEGORY_RULES is scanned top to bottom and the first rule with a keyword contained in
the ingredient name wins, so rule order is a priority order: "chicken broth" lands in
Meat & Seafood even though "broth" is a pantry keyword. Anything unmatched is "Other",
which always sorts last.
"""
from typing import Dict, List, Sequence, Tuple

from weekmenu.domain.GroceryItem import AggregatedItem

CATEGORY_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("chicken", "beef", "pork", "lamb", "turkey", "bacon", "sausage", "ham", "mince", "ground beef",
      "steak", "salmon", "fish", "tuna", "shrimp", "prawn", "cod", "tilapia", "crab", "meat", "seafood"),
     "Meat & Seafood"),
    (("milk", "cheese", "yogurt", "cream", "butter", "egg", "eggs"),
     "Dairy & Eggs"),
    (("onion", "garlic", "tomato", "potato", "carrot", "broccoli", "spinach", "lettuce", "pepper",
      "celery", "cucumber", "mushroom", "ginger", "cabbage", "kale", "zucchini", "squash", "pea", "bean",
      "corn", "avocado", "leek", "radish", "asparagus", "eggplant", "vegetable"),
     "Vegetables"),
    (("apple", "banana", "orange", "lemon", "lime", "berry", "strawberry", "blueberry", "raspberry",
      "mango", "grape", "peach", "pear", "melon", "watermelon", "pineapple", "kiwi", "fruit", "coconut",
      "raisin", "cranberry"),
     "Fruits"),
    (("flour", "sugar", "rice", "pasta", "noodle", "bread", "oil", "vinegar", "sauce", "stock", "broth",
      "canned", "beans", "lentil", "oat", "cereal", "nut", "honey", "jam", "spice", "herb", "salt",
      "pepper", "mustard", "ketchup", "soy", "salsa", "soup", "cracker", "cookie", "chocolate", "cocoa",
      "baking", "yeast", "breadcrumb"),
     "Pantry & Dry Goods"),
    (("bagel", "tortilla", "wrap", "roll", "croissant"),
     "Bakery"),
)
OTHER_LABEL = "Other"

CATEGORY_ORDER: Tuple[str, ...] = tuple(label for _, label in CATEGORY_RULES) + (OTHER_LABEL,)


def categorize(name: str) -> str:
    lower = (name or "").lower()
    for keywords, label in CATEGORY_RULES:
        if any(kw in lower for kw in keywords):
            return label
    return OTHER_LABEL


def group_by_category(items: Sequence[AggregatedItem]) -> List[Tuple[str, List[AggregatedItem]]]:
    """Partition items in category order, dropping empty categories.

    Items keep their incoming order inside each category.
    """
    buckets: Dict[str, List[AggregatedItem]] = {}
    for item in items:
        buckets.setdefault(categorize(item.name), []).append(item)
    return [(label, buckets[label]) for label in CATEGORY_ORDER if label in buckets]


__all__ = ['CATEGORY_RULES', 'CATEGORY_ORDER', 'OTHER_LABEL', 'categorize', 'group_by_category']
