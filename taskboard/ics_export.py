# taskboard/ics_export.py - iCalendar export of tasks with deadlines
from datetime import datetime, timedelta, tzinfo
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pytz

from .models import Task
from .priority import calculate_priority
from .projects import ProjectRegistry
from .utils import ensure_aware, format_ics_timestamp, parse_deadline, setup_logger, utc_now

logger = setup_logger(__name__)

CRLF = "\r\n"
NO_DEADLINES_NOTICE = "No tasks with deadlines to export to calendar."

CALENDAR_HEADER = [
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    "PRODID:-//TaskManager//EN",
    "CALSCALE:GREGORIAN",
    "METHOD:PUBLISH",
    "X-WR-CALNAME:Task Manager",
]
CALENDAR_FOOTER = "END:VCALENDAR"
TIMED_EVENT_DURATION = timedelta(hours=1)


def format_ics_date(deadline: str) -> str:
    """``YYYY-MM-DD`` -> ``YYYYMMDD``."""
    return deadline.replace("-", "")


def format_ics_datetime(deadline: str, tz: Optional[tzinfo] = None) -> str:
    """Local ``YYYY-MM-DDTHH:MM`` -> UTC ``YYYYMMDDTHHMMSSZ``."""
    return format_ics_timestamp(_require_deadline(deadline, tz))


def _require_deadline(deadline: str, tz: Optional[tzinfo]) -> datetime:
    when = parse_deadline(deadline, tz)
    if when is None:
        raise ValueError(f"Invalid deadline: {deadline!r}")
    return when


def _event_bounds(task: Task, tz: Optional[tzinfo]) -> List[str]:
    if task.has_time:
        start = _require_deadline(task.deadline, tz)
        end = start + TIMED_EVENT_DURATION
        return [f"DTSTART:{format_ics_datetime(task.deadline, tz)}",
                f"DTEND:{format_ics_timestamp(end)}"]

    start = _require_deadline(task.deadline, tz)
    end = start + timedelta(days=1)
    return [f"DTSTART;VALUE=DATE:{format_ics_date(task.deadline)}",
            f"DTEND;VALUE=DATE:{end:%Y%m%d}"]


def build_event(task: Task, registry: ProjectRegistry, now: datetime,
                tz: Optional[tzinfo] = None) -> List[str]:
    """VEVENT lines for one task with a deadline."""
    project_name = registry.display_name(task.project)
    priority = calculate_priority(task, now, tz)

    lines = [
        "BEGIN:VEVENT",
        f"UID:task-{task.id}@taskmanager",
        f"DTSTAMP:{format_ics_timestamp(now)}",
    ]
    lines.extend(_event_bounds(task, tz))
    lines.extend([
        f"SUMMARY:[{project_name}] {task.name}",
        (f"DESCRIPTION:Importance: {task.importance}/5\\n"
         f"Length: {task.length}/5\\n"
         f"Difficulty: {task.difficulty}/5\\n"
         f"Priority Score: {priority:.1f}"),
        f"CATEGORIES:{project_name}",
        "STATUS:NEEDS-ACTION",
        "END:VEVENT",
    ])
    return lines


def build_ics(tasks: Iterable[Task], registry: ProjectRegistry,
              now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Optional[str]:
    """Calendar document for every task with a deadline, or None if there are none."""
    with_deadlines = [t for t in tasks if t.deadline]
    if not with_deadlines:
        return None

    now = ensure_aware(now, tz) if now else utc_now()
    lines = list(CALENDAR_HEADER)
    for task in with_deadlines:
        lines.extend(build_event(task, registry, now, tz))
    lines.append(CALENDAR_FOOTER)
    return CRLF.join(lines)


def export_filename(now: datetime) -> str:
    return f"tasks-{now.astimezone(pytz.utc):%Y-%m-%d}.ics"


def generate_ics(tasks: Iterable[Task], registry: ProjectRegistry, notifier,
                 output_dir: Union[str, Path] = ".", now: Optional[datetime] = None,
                 tz: Optional[tzinfo] = None) -> Optional[Path]:
    """Write ``tasks-YYYY-MM-DD.ics`` into ``output_dir`` and return its path.

    When no task has a deadline the user is alerted through ``notifier`` and
    nothing is written.
    """
    now = ensure_aware(now, tz) if now else utc_now()
    document = build_ics(tasks, registry, now, tz)
    if document is None:
        notifier.alert(NO_DEADLINES_NOTICE)
        return None

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(now)
    # newline="" keeps the CRLF terminators as written
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(document)

    logger.info(f"Exported {document.count('BEGIN:VEVENT')} events to {path}")
    return path
