# taskboard/calendar_grid.py - month grid and per-day lookup
import calendar
from datetime import date
from typing import Iterable, List

from .models import CalendarDay, Task

GRID_CELLS = 42  # 6 rows x 7 columns

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _normalize(year: int, month: int):
    """Fold a 0-based month that falls outside 0..11 into the adjacent years."""
    return year + month // 12, month % 12


def get_calendar_days(year: int, month: int) -> List[CalendarDay]:
    """Build the 42 cells of a Sunday-first month view. ``month`` is 0-based."""
    year, month = _normalize(year, month)

    first = date(year, month + 1, 1)
    start_pad = (first.weekday() + 1) % 7  # Python weeks start on Monday
    total_days = calendar.monthrange(year, month + 1)[1]

    prev_year, prev_month = _normalize(year, month - 1)
    prev_last_day = calendar.monthrange(prev_year, prev_month + 1)[1]

    days = [CalendarDay(day=prev_last_day - i, current_month=False)
            for i in range(start_pad - 1, -1, -1)]
    days.extend(CalendarDay(day=i, current_month=True) for i in range(1, total_days + 1))

    remaining = GRID_CELLS - len(days)
    days.extend(CalendarDay(day=i, current_month=False) for i in range(1, remaining + 1))
    return days


def date_key(year: int, month: int, day: int) -> str:
    """Zero-padded ``YYYY-MM-DD`` for a 0-based month."""
    return f"{year}-{month + 1:02d}-{day:02d}"


def get_tasks_for_date(tasks: Iterable[Task], year: int, month: int, day: int) -> List[Task]:
    """Tasks whose deadline is exactly that date.

    Deadlines carrying a time (``2024-03-15T09:00``) never match.
    """
    key = date_key(year, month, day)
    return [t for t in tasks if t.deadline and t.deadline == key]


def render_month(year: int, month: int, tasks: Iterable[Task] = ()) -> str:
    """Plain-text month view; days with a date-only deadline get a ``*``."""
    year, month = _normalize(year, month)
    tasks = list(tasks)

    lines = [f"{MONTH_NAMES[month]} {year}".center(7 * 5 - 1),
             " ".join(f"{name:>4}" for name in DAY_NAMES)]

    cells = get_calendar_days(year, month)
    for row in range(0, GRID_CELLS, 7):
        parts = []
        for cell in cells[row:row + 7]:
            if not cell.current_month:
                parts.append(f"{'(' + str(cell.day) + ')':>4}")
                continue
            mark = "*" if get_tasks_for_date(tasks, year, month, cell.day) else " "
            parts.append(f"{cell.day:>3}{mark}")
        lines.append(" ".join(parts))
    return "\n".join(lines)
