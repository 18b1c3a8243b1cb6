# tests/test_ics_export.py - calendar export
from datetime import datetime

import pytest
import pytz

from taskboard.ics_export import (
    NO_DEADLINES_NOTICE,
    build_ics,
    export_filename,
    format_ics_date,
    format_ics_datetime,
    generate_ics,
)
from taskboard.priority import calculate_priority

TORONTO = pytz.timezone("America/Toronto")


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def alert(self, message):
        self.messages.append(message)
        return {"console": True}


def _lines(document):
    return document.split("\r\n")


def test_no_deadlines_builds_nothing(make_task, registry, now):
    """No deadlines means no document."""
    assert build_ics([make_task(), make_task()], registry, now) is None


def test_no_deadlines_alerts_and_writes_nothing(make_task, registry, now, tmp_path):
    """No deadlines raises a notice and writes no file."""
    notifier = RecordingNotifier()
    result = generate_ics([make_task()], registry, notifier, tmp_path, now)
    assert result is None
    assert notifier.messages == [NO_DEADLINES_NOTICE]
    assert list(tmp_path.iterdir()) == []


def test_calendar_envelope(make_task, registry, now):
    """The calendar header and footer are fixed."""
    lines = _lines(build_ics([make_task(deadline="2024-03-15")], registry, now))
    assert lines[:6] == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//TaskManager//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "X-WR-CALNAME:Task Manager",
    ]
    assert lines[-1] == "END:VCALENDAR"


def test_all_day_event(make_task, registry, now):
    """A date-only deadline becomes a full all-day VEVENT."""
    task = make_task(id="abc", name="Write notes", project="misc-atlas",
                     importance=4, length=2, difficulty=3, deadline="2024-03-15")
    lines = _lines(build_ics([task], registry, now))
    event = lines[6:-1]
    assert event == [
        "BEGIN:VEVENT",
        "UID:task-abc@taskmanager",
        "DTSTAMP:20240310T120000Z",
        "DTSTART;VALUE=DATE:20240315",
        "DTEND;VALUE=DATE:20240316",
        "SUMMARY:[Misc. ATLAS] Write notes",
        "DESCRIPTION:Importance: 4/5\\nLength: 2/5\\nDifficulty: 3/5\\n"
        f"Priority Score: {calculate_priority(task, now):.1f}",
        "CATEGORIES:Misc. ATLAS",
        "STATUS:NEEDS-ACTION",
        "END:VEVENT",
    ]


def test_all_day_event_crosses_month_end(make_task, registry, now):
    """The end date rolls into the next month."""
    document = build_ics([make_task(deadline="2024-02-29")], registry, now)
    assert "DTSTART;VALUE=DATE:20240229" in document
    assert "DTEND;VALUE=DATE:20240301" in document


def test_timed_event_is_one_hour_in_utc(make_task, registry, now):
    """A timed deadline becomes a one-hour UTC event."""
    task = make_task(deadline="2024-03-15T09:00")
    lines = _lines(build_ics([task], registry, now, TORONTO))
    assert "DTSTART:20240315T130000Z" in lines
    assert "DTEND:20240315T140000Z" in lines


def test_unknown_project_falls_back_to_other(make_task, registry, now):
    """A dangling project key is shown as Other."""
    document = build_ics([make_task(project="gone", name="Orphan", deadline="2024-03-15")], registry, now)
    assert "SUMMARY:[Other] Orphan" in _lines(document)
    assert "CATEGORIES:Other" in _lines(document)


def test_only_tasks_with_deadlines_are_exported(make_task, registry, now):
    """Tasks without deadlines are skipped."""
    tasks = [make_task(id=1, deadline="2024-03-15"), make_task(id=2), make_task(id=3, deadline="2024-04-01T10:30")]
    document = build_ics(tasks, registry, now)
    assert document.count("BEGIN:VEVENT") == 2
    assert "UID:task-1@taskmanager" in document
    assert "UID:task-2@taskmanager" not in document
    assert "UID:task-3@taskmanager" in document


def test_lines_end_with_crlf(make_task, registry, now):
    """Every line ends with CRLF."""
    document = build_ics([make_task(deadline="2024-03-15")], registry, now)
    assert "\n" not in document.replace("\r\n", "")


def test_generate_writes_dated_file(make_task, registry, now, tmp_path):
    """The file is named after the export date."""
    path = generate_ics([make_task(deadline="2024-03-15")], registry, RecordingNotifier(), tmp_path / "out", now)
    assert path == tmp_path / "out" / "tasks-2024-03-10.ics"
    raw = path.read_bytes()
    assert raw.startswith(b"BEGIN:VCALENDAR\r\nVERSION:2.0\r\n")
    assert raw.endswith(b"END:VCALENDAR")


def test_filename_uses_utc_date():
    """The file date is the UTC date."""
    local = TORONTO.localize(datetime(2024, 3, 10, 22, 0))
    assert export_filename(local) == "tasks-2024-03-11.ics"


def test_format_helpers():
    """Date and date-time helpers produce ICS basic format."""
    assert format_ics_date("2024-03-15") == "20240315"
    assert format_ics_datetime("2024-07-01T18:45", TORONTO) == "20240701T224500Z"


def test_malformed_deadline_raises(make_task, registry, now):
    """An unparseable deadline cannot be exported."""
    with pytest.raises(ValueError):
        build_ics([make_task(deadline="2024-13-40")], registry, now)
