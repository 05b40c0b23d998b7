from __future__ import annotations
import enum
import logging
import time
from typing import Callable, List, Optional

from weekplanner.core.config import SAVE_DEBOUNCE_MS
from weekplanner.core.exceptions import NotReady, PlannerError
from weekplanner.core.models import DAY_KEYS, PendingInput, PlannerSnapshot, Task, WeekDay
from weekplanner.core.week import compute_current_week

logger = logging.getLogger(__name__)

RESET_PROMPT = "Clear every task, the weekly goal and the memo? (The sheet is overwritten too.)"


class Phase(enum.Enum):
    LOADING = "loading"
    READY = "ready"


def run_inline(job: Callable, done: Callable):
    """Runner that performs the network job on the calling thread."""
    try:
        result = job()
    except Exception as e:
        if not isinstance(e, PlannerError):
            logger.exception("Unexpected error in network job")
        done(None, e)
    else:
        done(result, None)


class PlannerController:
    """Owns the planner state and keeps the remote sheet in sync with it.

    ``scheduler`` provides tkinter's ``after(ms, func)`` / ``after_cancel(id)``
    pair; ``runner(job, done)`` executes a network call and reports back with
    ``done(result, error)``.
    """

    def __init__(
        self,
        client,
        scheduler,
        *,
        week: Optional[List[WeekDay]] = None,
        confirm: Callable[[str], bool] = lambda message: True,
        notify_error: Callable[[str, str], None] = lambda title, message: None,
        runner: Callable = run_inline,
        debounce_ms: int = SAVE_DEBOUNCE_MS,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.scheduler = scheduler
        self.week = week or compute_current_week()
        self.confirm = confirm
        self.notify_error = notify_error
        self.runner = runner
        self.debounce_ms = debounce_ms
        self._clock = clock

        self.phase = Phase.LOADING
        self.state = PlannerSnapshot.empty()
        self.pending = PendingInput()
        self.saves_in_flight = 0
        self._started = False
        self._timer = None
        self._last_task_id = 0
        self._observers: List[Callable[[], None]] = []

    # ---- observers ----
    def subscribe(self, callback: Callable[[], None]):
        self._observers.append(callback)

    def _changed(self):
        for callback in list(self._observers):
            callback()

    @property
    def is_ready(self) -> bool:
        return self.phase is Phase.READY

    @property
    def is_saving(self) -> bool:
        return self.saves_in_flight > 0

    @property
    def save_pending(self) -> bool:
        return self._timer is not None

    def snapshot(self) -> PlannerSnapshot:
        return self.state.copy()

    # ---- load ----
    def start(self):
        """Kick off the one startup load; edits stay disabled until it ends."""
        if self._started:
            raise PlannerError("Planner already started")
        self._started = True
        self.runner(self.client.load, self._load_done)

    def _load_done(self, snapshot: Optional[PlannerSnapshot], error: Optional[Exception]):
        if error is not None:
            logger.error("Loading planner failed: %s", error)
            self.notify_error("Load", f"Could not load the planner from the sheet. Check the endpoint URL.\n{error}")
        elif snapshot is not None:
            self.state = snapshot
            ids = [t.id for key in DAY_KEYS for t in snapshot.tasks_by_day[key]]
            self._last_task_id = max(ids, default=0)
        self.phase = Phase.READY
        self._changed()

    # ---- save ----
    def _mark_dirty(self):
        if self._timer is not None:
            self.scheduler.after_cancel(self._timer)
        self._timer = self.scheduler.after(self.debounce_ms, self._on_debounce_elapsed)
        self._changed()

    def _on_debounce_elapsed(self):
        self._timer = None
        self._save()

    def _cancel_timer(self):
        if self._timer is not None:
            self.scheduler.after_cancel(self._timer)
            self._timer = None

    def _save(self):
        snapshot = self.state.copy()
        self.saves_in_flight += 1
        self._changed()
        self.runner(lambda: self.client.save(snapshot), self._save_done)

    def _save_done(self, _result, error: Optional[Exception]):
        self.saves_in_flight -= 1
        if error is not None:
            logger.error("Saving planner failed: %s", error)
            self.notify_error("Save", f"Could not save the planner.\n{error}")
        self._changed()

    def flush(self) -> bool:
        """Save right away if a debounced save is still waiting."""
        if self._timer is None:
            return False
        self._cancel_timer()
        self._save()
        return True

    # ---- mutations ----
    def _require_ready(self):
        if self.phase is not Phase.READY:
            raise NotReady("Planner is still loading")

    def _day(self, day: str):
        if day not in DAY_KEYS:
            raise ValueError(f"Unknown day {day!r}")
        return self.state.tasks_by_day[day]

    def _next_task_id(self) -> int:
        task_id = int(self._clock() * 1000)
        if task_id <= self._last_task_id:
            task_id = self._last_task_id + 1
        self._last_task_id = task_id
        return task_id

    def set_pending_input(self, day: str, text: str):
        self._require_ready()
        self._day(day)
        self.pending.day = day
        self.pending.text = text

    def add_task(self, day: str, text: Optional[str] = None) -> Optional[Task]:
        self._require_ready()
        tasks = self._day(day)
        if self.pending.day and self.pending.day != day:
            return None
        if text is None:
            text = self.pending.text
        if not text.strip():
            return None
        task = Task(id=self._next_task_id(), text=text, completed=False)
        tasks.append(task)
        self.pending.clear()
        self._mark_dirty()
        return task

    def toggle_task(self, day: str, task_id: int) -> bool:
        self._require_ready()
        self._day(day)
        task = self.state.find_task(day, task_id)
        if task is None:
            return False
        task.completed = not task.completed
        self._mark_dirty()
        return True

    def delete_task(self, day: str, task_id: int) -> bool:
        self._require_ready()
        tasks = self._day(day)
        for i, task in enumerate(tasks):
            if task.id == task_id:
                del tasks[i]
                self._mark_dirty()
                return True
        return False

    def set_week_goal(self, text: str):
        self._require_ready()
        if text == self.state.week_goal:
            return
        self.state.week_goal = text
        self._mark_dirty()

    def set_memo(self, text: str):
        self._require_ready()
        if text == self.state.memo:
            return
        self.state.memo = text
        self._mark_dirty()

    def reset_all(self) -> bool:
        self._require_ready()
        if not self.confirm(RESET_PROMPT):
            return False
        logger.info("Resetting planner")
        self.state = PlannerSnapshot.empty()
        self.pending.clear()
        self._cancel_timer()
        self._save()
        return True
