"""JSON shapes exchanged with the planner sheet script.

Two incompatible contracts exist for the remote script:

``tasks``  {"tasks": {"mon": [...], ...}, "weekGoal": "...", "memo": "..."}
``days``   {"daysData": [{"date": "YYYY-MM-DD", "label": "...", "tasks": [...]}, ...],
            "weekGoal": "...", "memo": "..."}

Exactly one is used per deployment (see ``core.config.WIRE_FORMAT``).
Decoding is tolerant: absent or malformed fields keep their empty defaults.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from weekplanner.core.models import DAY_KEYS, PlannerSnapshot, Task, WeekDay

logger = logging.getLogger(__name__)


def decode_task(raw: Any) -> Optional[Task]:
    if not isinstance(raw, dict):
        return None
    try:
        task_id = int(raw["id"])
    except (KeyError, TypeError, ValueError, OverflowError):
        return None
    text = raw.get("text")
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        text = str(text)
    elif not isinstance(text, str):
        text = ""
    return Task(id=task_id, text=text, completed=raw.get("completed") is True)


def decode_task_list(raw: Any) -> List[Task]:
    if not isinstance(raw, list):
        return []
    tasks = []
    for item in raw:
        task = decode_task(item)
        if task is None:
            logger.warning("Skipping malformed task entry: %r", item)
            continue
        tasks.append(task)
    return tasks


def _apply_text_fields(snapshot: PlannerSnapshot, data: Dict[str, Any]):
    goal = data.get("weekGoal")
    if isinstance(goal, str):
        snapshot.week_goal = goal
    memo = data.get("memo")
    if isinstance(memo, str):
        snapshot.memo = memo


class TasksCodec:
    """Flat per-day map keyed by mon..sun."""
    name = "tasks"

    def load_params(self, week: List[WeekDay]) -> Dict[str, str]:
        return {}

    def encode(self, snapshot: PlannerSnapshot, week: List[WeekDay]) -> Dict[str, Any]:
        return {
            "tasks": {key: [t.to_dict() for t in snapshot.tasks_by_day[key]] for key in DAY_KEYS},
            "weekGoal": snapshot.week_goal,
            "memo": snapshot.memo,
        }

    def decode(self, data: Dict[str, Any], week: List[WeekDay]) -> PlannerSnapshot:
        snapshot = PlannerSnapshot.empty()
        tasks = data.get("tasks")
        if isinstance(tasks, dict):
            for key in DAY_KEYS:
                snapshot.tasks_by_day[key] = decode_task_list(tasks.get(key))
        _apply_text_fields(snapshot, data)
        return snapshot


class DaysCodec:
    """Date-scoped list; the load is filtered by the week's Monday."""
    name = "days"

    def load_params(self, week: List[WeekDay]) -> Dict[str, str]:
        return {"weekStartDate": week[0].full_date}

    def encode(self, snapshot: PlannerSnapshot, week: List[WeekDay]) -> Dict[str, Any]:
        return {
            "daysData": [
                {
                    "date": day.full_date,
                    "label": day.label,
                    "tasks": [t.to_dict() for t in snapshot.tasks_by_day[day.key]],
                }
                for day in week
            ],
            "weekGoal": snapshot.week_goal,
            "memo": snapshot.memo,
        }

    def decode(self, data: Dict[str, Any], week: List[WeekDay]) -> PlannerSnapshot:
        snapshot = PlannerSnapshot.empty()
        key_by_date = {day.full_date: day.key for day in week}
        days_data = data.get("daysData")
        if isinstance(days_data, list):
            for entry in days_data:
                if not isinstance(entry, dict):
                    continue
                date = entry.get("date")
                key = key_by_date.get(date) if isinstance(date, str) else None
                if key is None:
                    logger.debug("Discarding day outside current week: %r", date)
                    continue
                snapshot.tasks_by_day[key] = decode_task_list(entry.get("tasks"))
        _apply_text_fields(snapshot, data)
        return snapshot


CODECS = {codec.name: codec for codec in (TasksCodec(), DaysCodec())}


def get_codec(name: str):
    try:
        return CODECS[name]
    except KeyError:
        raise ValueError(f"Unknown wire format {name!r}; expected one of {sorted(CODECS)}") from None
