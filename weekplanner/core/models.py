from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

DAY_KEYS: Tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


def empty_days() -> Dict[str, List["Task"]]:
    return {key: [] for key in DAY_KEYS}


@dataclass
class Task:
    id: int
    text: str
    completed: bool = False

    def to_dict(self) -> Dict:
        return {"id": self.id, "text": self.text, "completed": self.completed}


@dataclass(frozen=True)
class WeekDay:
    key: str
    label: str      # e.g. 5/27 (Mon)
    full_date: str  # YYYY-MM-DD


@dataclass
class PendingInput:
    """The one in-progress "new task" text box; only one day owns it at a time."""
    day: str = ""
    text: str = ""

    def clear(self):
        self.day = ""
        self.text = ""


@dataclass
class PlannerSnapshot:
    """Everything that gets persisted: tasks per day, weekly goal and memo."""
    tasks_by_day: Dict[str, List[Task]] = field(default_factory=empty_days)
    week_goal: str = ""
    memo: str = ""

    def __post_init__(self):
        # every day key must exist, even when the source left some out
        self.tasks_by_day = dict(self.tasks_by_day)
        for key in DAY_KEYS:
            self.tasks_by_day.setdefault(key, [])

    @classmethod
    def empty(cls) -> "PlannerSnapshot":
        return cls()

    def copy(self) -> "PlannerSnapshot":
        return PlannerSnapshot(
            tasks_by_day={
                key: [Task(t.id, t.text, t.completed) for t in self.tasks_by_day[key]]
                for key in DAY_KEYS
            },
            week_goal=self.week_goal,
            memo=self.memo,
        )

    def find_task(self, day: str, task_id: int):
        for task in self.tasks_by_day[day]:
            if task.id == task_id:
                return task
        return None

    def progress(self, day: str) -> Tuple[int, int]:
        """(completed, total) for one day column."""
        tasks = self.tasks_by_day[day]
        return sum(1 for t in tasks if t.completed), len(tasks)
