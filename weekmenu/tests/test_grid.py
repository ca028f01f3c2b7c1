import tempfile
import unittest
from datetime import date
from pathlib import Path

from weekmenu.domain.errors import ConflictError, ValidationError
from weekmenu.events.Event_Bus import PLAN_CHANGED, RECIPES_CHANGED, EventBus
from weekmenu.infra.Plan_Repository import PlanRepository
from weekmenu.infra.Recipe_Repository import RecipeRepository
from weekmenu.logic.planner.grid import WeeklyGrid, add_to_today
from weekmenu.logic.planner.weeks import shift_week, week_days, week_key, week_range, week_start_for

MONDAY = date(2024, 3, 4)
WEDNESDAY = date(2024, 3, 6)


class AlwaysConflictingPlans:
    """Plan store where every insert loses the race and the winner then disappears."""

    def list_entries(self, start, end):
        return []

    def insert_entry(self, plan_date, meal_type, recipe_id):
        raise ConflictError(plan_date, meal_type)

    def get_entry(self, plan_date, meal_type):
        return None

    def update_entry(self, entry_id, recipe_id):
        return None


class TestWeeks(unittest.TestCase):

    def test_week_helpers(self):
        self.assertEqual(week_start_for(date(2024, 3, 10)), MONDAY)
        self.assertEqual(week_start_for(MONDAY), MONDAY)
        self.assertEqual(week_range(MONDAY), (MONDAY, date(2024, 3, 10)))
        self.assertEqual(len(week_days(MONDAY)), 7)
        self.assertEqual(week_key(WEDNESDAY), "2024-03-04")
        self.assertEqual(shift_week(MONDAY, -1), date(2024, 2, 26))


class TestWeeklyGrid(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.plan_path = root / "meal_plan.json"
        self.bus = EventBus()
        self.plan_events = []
        self.bus.subscribe(PLAN_CHANGED, lambda name, payload: self.plan_events.append(payload))
        self.recipes = RecipeRepository(root / "recipes.json", bus=self.bus)
        self.plans = PlanRepository(self.plan_path, bus=self.bus)
        self.omelette = self.recipes.create_recipe("Omelette", [{"name": "Egg", "amount": 3}])
        self.soup = self.recipes.create_recipe("Soup", [{"name": "Carrot", "amount": 2}])
        self.grid = WeeklyGrid(WEDNESDAY, self.plans, self.recipes, bus=self.bus)

    def tearDown(self):
        self.grid.close()
        self._tmp.cleanup()

    def test_week_normalized_to_monday(self):
        self.assertEqual(self.grid.week_start, MONDAY)
        self.assertEqual(self.grid.week_days()[0], MONDAY)

    def test_assign_and_read(self):
        entry = self.grid.assign_slot(WEDNESDAY, "dinner", self.soup.id)
        self.assertEqual(entry.recipe_id, self.soup.id)
        self.assertEqual(self.grid.get_slot(WEDNESDAY, "dinner"), self.soup.id)
        self.assertIsNone(self.grid.get_slot(WEDNESDAY, "lunch"))

    def test_assign_is_idempotent(self):
        self.grid.assign_slot(MONDAY, "lunch", self.soup.id)
        self.grid.assign_slot(MONDAY, "lunch", self.soup.id)
        self.assertEqual(len(self.plans.list_entries(*week_range(MONDAY))), 1)

    def test_reassign_replaces(self):
        self.grid.assign_slot(MONDAY, "lunch", self.soup.id)
        self.grid.assign_slot(MONDAY, "lunch", self.omelette.id)
        entries = self.plans.list_entries(*week_range(MONDAY))
        self.assertEqual([e.recipe_id for e in entries], [self.omelette.id])

    def test_unknown_recipe_rejected(self):
        self.grid.assign_slot(MONDAY, "dinner", self.soup.id)
        with self.assertRaises(ValidationError) as ctx:
            self.grid.assign_slot(MONDAY, "dinner", "does-not-exist")
        self.assertIn("not found in recipes", str(ctx.exception))
        self.assertEqual(self.grid.get_slot(MONDAY, "dinner"), self.soup.id)

    def test_bad_slot_rejected(self):
        with self.assertRaises(ValidationError):
            self.grid.assign_slot(MONDAY, "brunch", self.soup.id)
        with self.assertRaises(ValidationError):
            self.grid.assign_slot(date(2024, 3, 11), "dinner", self.soup.id)

    def test_unassign(self):
        self.grid.assign_slot(MONDAY, "snack", self.soup.id)
        self.assertIsNone(self.grid.assign_slot(MONDAY, "snack", "none"))
        self.assertIsNone(self.grid.get_slot(MONDAY, "snack"))
        self.assertEqual(self.plan_events[-1]['action'], "unassigned")

    def test_unassign_empty_slot_is_noop(self):
        self.grid.assign_slot(MONDAY, "snack", None)
        self.grid.assign_slot(MONDAY, "snack", "")
        self.assertEqual(self.plan_events, [])
        self.assertFalse(self.plan_path.exists())

    def test_conflict_from_other_writer_becomes_update(self):
        self.assertIsNone(self.grid.get_slot(MONDAY, "dinner"))
        # another process writes the same slot without notifying this grid
        PlanRepository(self.plan_path, bus=EventBus()).insert_entry(MONDAY, "dinner", self.omelette.id)

        with self.assertLogs('weekmenu.logic.planner.grid', level='INFO'):
            entry = self.grid.assign_slot(MONDAY, "dinner", self.soup.id)
        self.assertEqual(entry.recipe_id, self.soup.id)
        entries = self.plans.list_entries(*week_range(MONDAY))
        self.assertEqual([(e.meal_type, e.recipe_id) for e in entries], [("dinner", self.soup.id)])

    def test_entry_removed_by_other_writer_is_reinserted(self):
        entry = self.grid.assign_slot(MONDAY, "dinner", self.omelette.id)
        PlanRepository(self.plan_path, bus=EventBus()).delete_entry(entry.id)

        self.grid.assign_slot(MONDAY, "dinner", self.soup.id)
        self.assertEqual(self.plans.get_entry(MONDAY, "dinner").recipe_id, self.soup.id)

    def test_unresolved_conflict_is_raised(self):
        with WeeklyGrid(MONDAY, AlwaysConflictingPlans(), self.recipes, bus=EventBus()) as grid:
            with self.assertRaises(ConflictError):
                grid.assign_slot(MONDAY, "dinner", self.soup.id)

    def test_view_skips_deleted_recipe(self):
        self.grid.assign_slot(MONDAY, "breakfast", self.omelette.id)
        self.grid.assign_slot(MONDAY, "dinner", self.soup.id)
        self.recipes.delete_recipe(self.omelette.id)

        rows = self.grid.view()
        self.assertEqual(len(rows), 7)
        self.assertEqual(rows[0]['day'], "Monday")
        self.assertIsNone(rows[0]['meals']['breakfast'])
        self.assertEqual(rows[0]['meals']['dinner'], self.soup)
        self.assertEqual(set(rows[0]['meals']), {"breakfast", "lunch", "dinner", "snack"})

    def test_recipes_change_signal_refreshes_cache(self):
        self.assertEqual([r.name for r in self.grid.recipes], ["Omelette", "Soup"])
        pie = self.recipes.create_recipe("Apple pie", [{"name": "apple"}])
        self.assertEqual([r.name for r in self.grid.recipes], ["Apple pie", "Omelette", "Soup"])
        # the new recipe is assignable without a manual refresh
        self.grid.assign_slot(MONDAY, "snack", pie.id)

    def test_unsignalled_recipe_needs_refresh(self):
        self.grid.recipes
        other = RecipeRepository(self.recipes._store.path, bus=EventBus())
        quiet = other.create_recipe("Quiet", [{"name": "tofu"}])
        with self.assertRaises(ValidationError):
            self.grid.assign_slot(MONDAY, "lunch", quiet.id)
        self.grid.refresh_recipes()
        self.grid.assign_slot(MONDAY, "lunch", quiet.id)
        self.assertEqual(self.grid.get_slot(MONDAY, "lunch"), quiet.id)

    def test_assignments_ordered_by_day_then_meal(self):
        self.grid.assign_slot(date(2024, 3, 5), "breakfast", self.soup.id)
        self.grid.assign_slot(MONDAY, "snack", self.soup.id)
        self.grid.assign_slot(MONDAY, "breakfast", self.omelette.id)
        self.assertEqual([(e.plan_date.day, e.meal_type) for e in self.grid.assignments()],
                         [(4, "breakfast"), (4, "snack"), (5, "breakfast")])

    def test_close_unsubscribes(self):
        grid = WeeklyGrid(MONDAY, self.plans, self.recipes, bus=self.bus)
        with grid:
            self.assertIn(grid._on_recipes_changed, self.bus._subscribers[RECIPES_CHANGED])
        self.assertNotIn(grid._on_recipes_changed, self.bus._subscribers[RECIPES_CHANGED])
        self.assertNotIn(grid._on_plan_changed, self.bus._subscribers[PLAN_CHANGED])


class TestAddToToday(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.bus = EventBus()
        self.recipes = RecipeRepository(root / "recipes.json", bus=self.bus)
        self.plans = PlanRepository(root / "meal_plan.json", bus=self.bus)
        self.soup = self.recipes.create_recipe("Soup", [{"name": "Carrot"}])
        self.stew = self.recipes.create_recipe("Stew", [{"name": "Beef"}])

    def tearDown(self):
        self._tmp.cleanup()

    def test_adds_to_today_and_replaces(self):
        add_to_today(self.soup.id, "dinner", self.plans, self.recipes, today=WEDNESDAY, bus=self.bus)
        entry = add_to_today(self.stew.id, "dinner", self.plans, self.recipes, today=WEDNESDAY, bus=self.bus)
        self.assertEqual((entry.plan_date, entry.recipe_id), (WEDNESDAY, self.stew.id))
        self.assertEqual(len(self.plans.list_entries(WEDNESDAY, WEDNESDAY)), 1)

    def test_unknown_recipe(self):
        with self.assertRaises(ValidationError):
            add_to_today("nope", "lunch", self.plans, self.recipes, today=WEDNESDAY, bus=self.bus)


if __name__ == '__main__':
    unittest.main()
