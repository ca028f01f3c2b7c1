import unittest
from weekmenu.domain.GroceryItem import AggregatedItem
from weekmenu.logic.grocery.categorizer import (
    CATEGORY_ORDER, CATEGORY_RULES, OTHER_LABEL, categorize, group_by_category,
)


def _item(name):
    return AggregatedItem(name.lower() + "|unit", name, 1, "unit")


class TestCategorizer(unittest.TestCase):

    def test_basic_labels(self):
        self.assertEqual(categorize("Milk"), "Dairy & Eggs")
        self.assertEqual(categorize("egg"), "Dairy & Eggs")
        self.assertEqual(categorize("Red Onion"), "Vegetables")
        self.assertEqual(categorize("banana"), "Fruits")
        self.assertEqual(categorize("Basmati Rice"), "Pantry & Dry Goods")
        self.assertEqual(categorize("flour tortilla"), "Pantry & Dry Goods")
        self.assertEqual(categorize("bagel"), "Bakery")

    def test_first_rule_wins(self):
        # both "chicken" (meat) and "broth" (pantry) match
        self.assertEqual(categorize("chicken broth"), "Meat & Seafood")
        self.assertEqual(categorize("Salmon Pasta"), "Meat & Seafood")
        # "pepper" is in Vegetables and Pantry; Vegetables comes first
        self.assertEqual(categorize("black pepper"), "Vegetables")

    def test_unmatched_is_other(self):
        self.assertEqual(categorize("dish soap"), OTHER_LABEL)
        self.assertEqual(categorize(""), OTHER_LABEL)
        self.assertEqual(categorize(None), OTHER_LABEL)

    def test_total_function_over_rule_keywords(self):
        labels = set(CATEGORY_ORDER)
        for keywords, label in CATEGORY_RULES:
            for kw in keywords:
                result = categorize(kw)
                self.assertIn(result, labels)
                # a keyword can only resolve to its own rule or an earlier one
                self.assertLessEqual(CATEGORY_ORDER.index(result), CATEGORY_ORDER.index(label))

    def test_group_order_and_other_last(self):
        items = [_item("apple"), _item("Batteries"), _item("beef"), _item("milk")]
        groups = group_by_category(items)
        self.assertEqual([c for c, _ in groups], ["Meat & Seafood", "Dairy & Eggs", "Fruits", OTHER_LABEL])

    def test_group_drops_empty_and_keeps_item_order(self):
        items = [_item("Butter"), _item("cheddar cheese"), _item("milk")]
        groups = group_by_category(items)
        self.assertEqual(len(groups), 1)
        self.assertEqual([i.name for i in groups[0][1]], ["Butter", "cheddar cheese", "milk"])

    def test_group_empty(self):
        self.assertEqual(group_by_category([]), [])


if __name__ == '__main__':
    unittest.main()
