# taskboard/summarizer.py - workload analysis

import math
from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

import pytz

from .models import Task, WorkloadSummary
from .priority import calculate_priority, days_until_deadline, is_due_soon, is_high_priority
from .utils import ensure_aware, round_half_up, setup_logger, utc_now

logger = setup_logger(__name__)

LENGTH_WEIGHT = 0.8
PRIORITY_BONUS = 1.5
DEADLINE_BONUS = 1.3
OVERLOAD_THRESHOLD = 25
BUSY_THRESHOLD = 15
IMPORTANT_THRESHOLD = 10
IMPORTANT_MIN_COUNT = 3
DEADLINE_WATCH_MIN_COUNT = 2

# (message, advice) per outcome, checked in this order
MESSAGES = {
    "empty": ("All clear! 🌟", "Enjoy your free time, you've earned it!"),
    "overload": ("Your plate is quite full! 🌊",
                 "Consider delegating or rescheduling some tasks. Your well-being comes first."),
    "busy": ("Getting busy! 🌱", "Be careful about taking on new commitments right now."),
    "important": ("Some important tasks need attention 📋",
                  "Focus on high-priority items first, but take breaks between them."),
    "deadlines": ("Keep an eye on those deadlines ⏰", "Plan your week carefully around these key dates."),
    "balanced": ("Workload looks balanced! 💫", "You're maintaining a good pace. Keep it up!"),
}

WORKLOAD_TEMPLATE = "Your workload score is {score} It's okay to take breaks"


class TaskSummarizer:
    def __init__(self, config=None):
        self.config = config
        self.tz = config.tzinfo if config is not None else pytz.utc

    # --------------------------------------------------------------------------
    # Per-task scoring, computed once per analysis
    # --------------------------------------------------------------------------
    def _score_task(self, task: Task, now: datetime) -> Dict:
        priority = calculate_priority(task, now, self.tz)
        days_left = days_until_deadline(task, now, self.tz)
        high = is_high_priority(priority)
        due_soon = is_due_soon(days_left)
        load = (task.length * LENGTH_WEIGHT
                * (PRIORITY_BONUS if high else 1)
                * (DEADLINE_BONUS if due_soon else 1))
        return {"priority": priority, "high": high, "due_soon": due_soon, "load": load}

    def rank_tasks(self, tasks: Iterable[Task], now: Optional[datetime] = None) -> List[Tuple[Task, float]]:
        """Tasks paired with their priority, highest first."""
        now = ensure_aware(now, self.tz) if now else utc_now()
        scored = [(t, calculate_priority(t, now, self.tz)) for t in tasks]
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    def analyze_workload(self, tasks: Iterable[Task], now: Optional[datetime] = None) -> WorkloadSummary:
        """Summarize how heavy the current task list is."""
        tasks = list(tasks)
        now = ensure_aware(now, self.tz) if now else utc_now()

        scored = [self._score_task(t, now) for t in tasks]
        high_priority_count = sum(1 for s in scored if s["high"])
        upcoming_deadline_count = sum(1 for s in scored if s["due_soon"])
        total_workload = sum(s["load"] for s in scored)

        outcome = self._pick_outcome(len(tasks), total_workload, high_priority_count, upcoming_deadline_count)
        message, advice = MESSAGES[outcome]
        rounded = round_half_up(total_workload)

        logger.debug(
            f"workload={total_workload:.2f} high={high_priority_count} "
            f"upcoming={upcoming_deadline_count} -> {outcome}"
        )

        return WorkloadSummary(
            message=message,
            advice=advice,
            workload=WORKLOAD_TEMPLATE.format(score=_format_number(rounded)),
            score=total_workload,
            high_priority_count=high_priority_count,
            upcoming_deadline_count=upcoming_deadline_count,
        )

    @staticmethod
    def _pick_outcome(total_tasks: int, total_workload: float,
                      high_priority_count: int, upcoming_deadline_count: int) -> str:
        if total_tasks == 0:
            return "empty"
        if total_workload > OVERLOAD_THRESHOLD:
            return "overload"
        if total_workload > BUSY_THRESHOLD:
            return "busy"
        if high_priority_count >= IMPORTANT_MIN_COUNT and total_workload > IMPORTANT_THRESHOLD:
            return "important"
        if upcoming_deadline_count >= DEADLINE_WATCH_MIN_COUNT:
            return "deadlines"
        return "balanced"


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return str(int(value))


def analyze_workload(tasks: Iterable[Task], now: Optional[datetime] = None,
                     tz: Optional[tzinfo] = None) -> WorkloadSummary:
    summarizer = TaskSummarizer()
    if tz is not None:
        summarizer.tz = tz
    return summarizer.analyze_workload(tasks, now)
