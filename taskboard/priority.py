# taskboard/priority.py - task priority scoring
import math
from datetime import datetime, tzinfo
from typing import Optional

from .models import Task
from .utils import days_between, days_until, ensure_aware, round_fixed, utc_now

HIGH_PRIORITY_THRESHOLD = 10
URGENT_DAYS = 7


def days_until_deadline(task: Task, now: Optional[datetime] = None,
                        tz: Optional[tzinfo] = None) -> Optional[float]:
    """Days until the task's deadline, None without one, NaN if it is malformed."""
    if not task.deadline:
        return None
    now = ensure_aware(now, tz) if now else utc_now()
    return days_until(task.deadline, now, tz)


def get_days_old(created: datetime, now: Optional[datetime] = None,
                 tz: Optional[tzinfo] = None) -> int:
    """Whole days elapsed since ``created``."""
    now = ensure_aware(now, tz) if now else utc_now()
    return math.floor(days_between(ensure_aware(created, tz), now))


def deadline_factor(days_left: Optional[float], length: int) -> float:
    if days_left is None:
        return 0.0

    # NaN fails every comparison below and scores nothing
    factor = 0.0
    if days_left < 0:
        factor = 5.0
    elif days_left < 7:
        factor = 4 * (1 - days_left / 7)
    elif days_left < 30:
        factor = 2 * (1 - days_left / 30)

    # longer tasks feel deadline pressure sooner
    return factor * (1 + length / 5)


def calculate_priority(task: Task, now: Optional[datetime] = None,
                       tz: Optional[tzinfo] = None) -> float:
    """Score a task; higher means do it sooner. Rounded to one decimal.

    ``now`` is the reference instant (defaults to the current UTC time) and
    ``tz`` the zone used for naive timestamps and date-time deadlines.
    """
    now = ensure_aware(now, tz) if now else utc_now()

    days_since_creation = days_between(ensure_aware(task.created_at, tz), now)
    age_factor = min(days_since_creation / 7 * 0.5, 2)
    quick_bonus = 1.5 if task.length <= 2 else 0
    easy_bonus = 1 if task.difficulty <= 2 else 0
    base_priority = task.importance * 2 - (task.length + task.difficulty) / 3

    urgency = deadline_factor(days_until_deadline(task, now, tz), task.length)

    return round_fixed(base_priority + age_factor + quick_bonus + easy_bonus + urgency, 1)


def is_high_priority(score: float) -> bool:
    return score > HIGH_PRIORITY_THRESHOLD


def is_due_soon(days_left: Optional[float]) -> bool:
    """Deadline under a week away, overdue included."""
    return days_left is not None and days_left < URGENT_DAYS
