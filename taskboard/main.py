# taskboard/main.py - command line entry point

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import TypeAdapter

from .calendar_grid import get_tasks_for_date, render_month
from .config import Config
from .ics_export import generate_ics
from .models import Task
from .notifier import Notifier
from .projects import ProjectRegistry
from .storage import JsonFileStore
from .summarizer import TaskSummarizer
from .utils import format_date, set_log_level, setup_logger, utc_now

logger = setup_logger("taskboard.main")

TASK_LIST = TypeAdapter(List[Task])


def load_tasks(path: str) -> List[Task]:
    """Read a JSON array of task records."""
    file = Path(path)
    if not file.exists():
        logger.warning(f"Task file {file} not found, using an empty list")
        return []
    with file.open("r", encoding="utf-8") as f:
        return TASK_LIST.validate_python(json.load(f))


def cmd_priority(args, cfg: Config, tasks: List[Task], registry: ProjectRegistry) -> int:
    summarizer = TaskSummarizer(config=cfg)
    for task, score in summarizer.rank_tasks(tasks):
        due = f"  due {format_date(task.deadline, cfg.tzinfo)}" if task.deadline else ""
        print(f"{score:>6.1f}  [{registry.display_name(task.project)}] {task.name}{due}")
    return 0


def cmd_workload(args, cfg: Config, tasks: List[Task], registry: ProjectRegistry) -> int:
    summary = TaskSummarizer(config=cfg).analyze_workload(tasks)
    print(summary.message)
    print(summary.advice)
    print(summary.workload)
    return 0


def cmd_calendar(args, cfg: Config, tasks: List[Task], registry: ProjectRegistry) -> int:
    today = utc_now().astimezone(cfg.tzinfo).date()
    year = args.year or today.year
    month = (args.month or today.month) - 1
    print(render_month(year, month, tasks))
    return 0


def cmd_day(args, cfg: Config, tasks: List[Task], registry: ProjectRegistry) -> int:
    day = date.fromisoformat(args.date)
    due = get_tasks_for_date(tasks, day.year, day.month - 1, day.day)
    if not due:
        print(f"Nothing due on {day.isoformat()}")
    for task in due:
        print(f"- [{registry.display_name(task.project)}] {task.name}")
    return 0


def cmd_export(args, cfg: Config, tasks: List[Task], registry: ProjectRegistry) -> int:
    notifier = Notifier(cfg, dry_run=args.dry_run)
    path = generate_ics(tasks, registry, notifier, args.output_dir or cfg.export_dir, tz=cfg.tzinfo)
    if path is None:
        return 1
    print(path)
    return 0


def cmd_projects(args, cfg: Config, tasks: List[Task], registry: ProjectRegistry) -> int:
    if args.action == "add":
        registry.add(args.key, args.name, args.color)
    elif args.action == "update":
        registry.update(args.key, name=args.name, color=args.color)
    elif args.action == "remove":
        registry.remove(args.key)

    for key, project in registry.items():
        print(f"{key:<16} {project.color}  {project.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description="Task priority, workload and calendar helpers")
    parser.add_argument("--tasks", default=None, help="JSON file with the task list (default: $TASKS_PATH)")
    parser.add_argument("--dry-run", action="store_true", help="Skip remote notifications")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("priority", help="List tasks by priority").set_defaults(func=cmd_priority)
    sub.add_parser("workload", help="Summarize the current workload").set_defaults(func=cmd_workload)

    p = sub.add_parser("calendar", help="Print a month grid")
    p.add_argument("--year", type=int)
    p.add_argument("--month", type=int, choices=range(1, 13), metavar="1-12")
    p.set_defaults(func=cmd_calendar)

    p = sub.add_parser("day", help="Tasks due on a date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.set_defaults(func=cmd_day)

    p = sub.add_parser("export", help="Write an .ics file of tasks with deadlines")
    p.add_argument("--output-dir")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("projects", help="List or edit projects")
    actions = p.add_subparsers(dest="action")
    actions.add_parser("list")
    a = actions.add_parser("add")
    a.add_argument("key")
    a.add_argument("name")
    a.add_argument("--color")
    u = actions.add_parser("update")
    u.add_argument("key")
    u.add_argument("--name")
    u.add_argument("--color")
    r = actions.add_parser("remove")
    r.add_argument("key")
    p.set_defaults(func=cmd_projects)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    cfg = Config.from_env()

    level = logging.DEBUG if args.verbose else cfg.log_level
    set_log_level(level)

    logger.debug(f"Config: timezone={cfg.timezone} storage={cfg.storage_path}")

    try:
        registry = ProjectRegistry(JsonFileStore(cfg.storage_path))
        registry.load()
        tasks = load_tasks(args.tasks or cfg.tasks_path)
        logger.debug(f"Loaded {len(tasks)} tasks and {len(registry)} projects")
        return args.func(args, cfg, tasks, registry)
    except Exception as e:
        logger.error(f"Command '{args.command}' failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
