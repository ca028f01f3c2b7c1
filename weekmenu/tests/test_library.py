import unittest

from weekmenu.domain.Recipe import IngredientLine, Recipe
from weekmenu.logic.recipes.library import ALL_CATEGORIES, UNCATEGORIZED, filter_recipes, recipe_categories


class TestRecipeLibrary(unittest.TestCase):

    def setUp(self):
        self.recipes = [
            Recipe("r1", "Pancakes", "Breakfast"),
            Recipe("r2", "Tomato Soup", "Dinner"),
            Recipe("r3", "Trail mix", None),
        ]
        self.lines = [
            IngredientLine("r1", "Flour", 2, "cup"),
            IngredientLine("r2", "Tomato", 4, "unit"),
            IngredientLine("r3", "Peanuts", 1, "cup"),
        ]

    def test_categories(self):
        self.assertEqual(recipe_categories(self.recipes), [ALL_CATEGORIES, "Breakfast", "Dinner", UNCATEGORIZED])
        self.assertEqual(recipe_categories([]), [ALL_CATEGORIES])

    def test_search_by_recipe_or_ingredient_name(self):
        self.assertEqual([r.id for r in filter_recipes(self.recipes, self.lines, "soup")], ["r2"])
        self.assertEqual([r.id for r in filter_recipes(self.recipes, self.lines, "FLOUR")], ["r1"])
        self.assertEqual(len(filter_recipes(self.recipes, self.lines, "  ")), 3)

    def test_category_filter(self):
        self.assertEqual([r.id for r in filter_recipes(self.recipes, self.lines, category="Dinner")], ["r2"])
        self.assertEqual([r.id for r in filter_recipes(self.recipes, self.lines, category=UNCATEGORIZED)], ["r3"])
        self.assertEqual(len(filter_recipes(self.recipes, self.lines, category=ALL_CATEGORIES)), 3)

    def test_search_and_category_combine(self):
        self.assertEqual(filter_recipes(self.recipes, self.lines, "tomato", category="Breakfast"), [])


if __name__ == '__main__':
    unittest.main()
