import json
import tempfile
import unittest
from datetime import date
from pathlib import Path

from weekmenu.domain.errors import ConflictError, ValidationError
from weekmenu.events.Event_Bus import PLAN_CHANGED, EventBus
from weekmenu.infra.Plan_Repository import PlanRepository


class TestPlanRepository(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "meal_plan.json"
        self.bus = EventBus()
        self.events = []
        self.bus.subscribe(PLAN_CHANGED, lambda name, payload: self.events.append(payload))
        self.repo = PlanRepository(self.path, bus=self.bus)

    def tearDown(self):
        self._tmp.cleanup()

    def test_insert_and_get(self):
        entry = self.repo.insert_entry(date(2024, 3, 4), "dinner", "r1")
        self.assertEqual(self.repo.get_entry(date(2024, 3, 4), "dinner").id, entry.id)
        self.assertIsNone(self.repo.get_entry(date(2024, 3, 4), "lunch"))
        self.assertEqual(self.events, [{'action': 'assigned', 'date': "2024-03-04", 'meal_type': "dinner"}])

    def test_duplicate_slot_conflicts(self):
        self.repo.insert_entry(date(2024, 3, 4), "dinner", "r1")
        with self.assertRaises(ConflictError) as ctx:
            self.repo.insert_entry(date(2024, 3, 4), "dinner", "r2")
        self.assertEqual(ctx.exception.meal_type, "dinner")
        self.assertEqual(self.repo.get_entry(date(2024, 3, 4), "dinner").recipe_id, "r1")

    def test_invalid_meal_type(self):
        with self.assertRaises(ValidationError):
            self.repo.insert_entry(date(2024, 3, 4), "brunch", "r1")

    def test_list_entries_closed_range(self):
        for day in (3, 4, 10, 11):
            self.repo.insert_entry(date(2024, 3, day), "lunch", "r1")
        found = self.repo.list_entries(date(2024, 3, 4), date(2024, 3, 10))
        self.assertEqual([e.plan_date.day for e in found], [4, 10])

    def test_update_and_vanished_entry(self):
        entry = self.repo.insert_entry(date(2024, 3, 4), "dinner", "r1")
        updated = self.repo.update_entry(entry.id, "r2")
        self.assertEqual(updated.recipe_id, "r2")
        self.assertEqual(self.repo.get_entry(date(2024, 3, 4), "dinner").recipe_id, "r2")
        self.assertIsNone(self.repo.update_entry("missing", "r3"))

    def test_delete_is_idempotent(self):
        entry = self.repo.insert_entry(date(2024, 3, 4), "dinner", "r1")
        self.repo.delete_entry(entry.id)
        self.repo.delete_entry(entry.id)
        self.assertIsNone(self.repo.get_entry(date(2024, 3, 4), "dinner"))
        self.assertEqual(self.events[-1]['action'], "unassigned")
        self.assertEqual(len(self.events), 2)

    def test_persisted_with_iso_dates(self):
        self.repo.insert_entry(date(2024, 3, 5), "lunch", "r2")
        self.repo.insert_entry(date(2024, 3, 4), "snack", "r1")
        with open(self.path, encoding='utf-8') as f:
            rows = json.load(f)
        self.assertEqual([(r["plan_date"], r["meal_type"]) for r in rows],
                         [("2024-03-04", "snack"), ("2024-03-05", "lunch")])


if __name__ == '__main__':
    unittest.main()
