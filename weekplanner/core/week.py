import calendar
import datetime as dt
from typing import List, Optional, Union

from weekplanner.core.models import DAY_KEYS, WeekDay

DateLike = Union[dt.date, dt.datetime]


def week_start(now: Optional[DateLike] = None) -> dt.date:
    """Monday of the ISO week containing ``now``."""
    if now is None:
        now = dt.date.today()
    if isinstance(now, dt.datetime):
        now = now.date()
    return now - dt.timedelta(days=now.weekday())


def day_label(date: dt.date) -> str:
    return f"{date.month}/{date.day} ({calendar.day_abbr[date.weekday()]})"


def compute_current_week(now: Optional[DateLike] = None) -> List[WeekDay]:
    monday = week_start(now)
    days = []
    for offset, key in enumerate(DAY_KEYS):
        date = monday + dt.timedelta(days=offset)
        days.append(WeekDay(key=key, label=day_label(date), full_date=date.isoformat()))
    return days
