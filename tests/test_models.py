import unittest

from weekplanner.core.models import DAY_KEYS, PendingInput, PlannerSnapshot, Task


class TestPlannerSnapshot(unittest.TestCase):
    def test_empty_has_all_days(self) -> None:
        snap = PlannerSnapshot.empty()
        self.assertEqual(set(snap.tasks_by_day), set(DAY_KEYS))
        self.assertTrue(all(v == [] for v in snap.tasks_by_day.values()))
        self.assertEqual((snap.week_goal, snap.memo), ("", ""))

    def test_missing_days_are_filled_in(self) -> None:
        snap = PlannerSnapshot(tasks_by_day={"mon": [Task(1, "a")]})
        self.assertEqual(len(snap.tasks_by_day), 7)
        self.assertEqual(snap.tasks_by_day["sun"], [])

    def test_caller_dict_is_not_modified(self) -> None:
        source = {"mon": [Task(1, "a")]}
        snap = PlannerSnapshot(tasks_by_day=source)
        self.assertEqual(list(source), ["mon"])
        self.assertEqual(len(snap.tasks_by_day), 7)

    def test_copy_is_deep(self) -> None:
        snap = PlannerSnapshot(tasks_by_day={"mon": [Task(1, "a")]}, week_goal="g")
        clone = snap.copy()
        clone.tasks_by_day["mon"][0].completed = True
        clone.tasks_by_day["tue"].append(Task(2, "b"))
        self.assertFalse(snap.tasks_by_day["mon"][0].completed)
        self.assertEqual(snap.tasks_by_day["tue"], [])
        self.assertEqual(clone.week_goal, "g")

    def test_progress(self) -> None:
        snap = PlannerSnapshot(tasks_by_day={"wed": [Task(1, "a", True), Task(2, "b"), Task(3, "c", True)]})
        self.assertEqual(snap.progress("wed"), (2, 3))
        self.assertEqual(snap.progress("thu"), (0, 0))

    def test_task_to_dict(self) -> None:
        self.assertEqual(Task(5, "x").to_dict(), {"id": 5, "text": "x", "completed": False})

    def test_pending_input_clear(self) -> None:
        pending = PendingInput("mon", "draft")
        pending.clear()
        self.assertEqual(pending, PendingInput())


if __name__ == "__main__":
    unittest.main()
