# taskboard/utils.py - shared helpers
import logging
import math
import time
from decimal import ROUND_HALF_UP, Decimal
from functools import wraps
from datetime import date, datetime, tzinfo
from typing import Optional, Union

import pytz

SECONDS_PER_DAY = 60 * 60 * 24


def setup_logger(name: str = "taskboard", level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Return a logger with a single stream handler attached."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def set_log_level(level: Union[int, str], prefix: str = "taskboard") -> None:
    """Apply ``level`` to every logger created under ``prefix``."""
    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logging.getLogger(name).setLevel(level)


def retry_on_failure(max_retries: int = 3, delay: float = 1.0):
    """Retry the wrapped call with exponential backoff, re-raising the last error."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if attempt == max_retries - 1:
                        raise
                    logging.warning(f"Attempt {attempt + 1} failed: {e}, retrying...")
                    time.sleep(delay * (2 ** attempt))
            return None

        return wrapper

    return decorator


# ----------------------------------------------------------------------
# Date helpers
# ----------------------------------------------------------------------
def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def ensure_aware(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Attach ``tz`` (default UTC) to a naive datetime; aware values pass through."""
    if value.tzinfo is not None:
        return value
    tz = tz or pytz.utc
    if hasattr(tz, "localize"):
        return tz.localize(value)
    return value.replace(tzinfo=tz)


def parse_deadline(deadline: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse a ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM`` deadline.

    Date-only values mean midnight UTC, date-time values are wall-clock
    time in ``tz``. Returns None when the string cannot be parsed.
    """
    try:
        if "T" in deadline:
            return ensure_aware(datetime.fromisoformat(deadline.replace("Z", "+00:00")), tz)
        d = date.fromisoformat(deadline)
    except (TypeError, ValueError):
        return None
    return datetime(d.year, d.month, d.day, tzinfo=pytz.utc)


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from ``start`` to ``end``."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def days_until(deadline: str, now: datetime, tz: Optional[tzinfo] = None) -> float:
    """Days from ``now`` until ``deadline``; NaN when the deadline is malformed."""
    when = parse_deadline(deadline, tz)
    if when is None:
        return math.nan
    return days_between(now, when)


def round_half_up(value: float) -> float:
    if math.isnan(value):
        return value
    return math.floor(value + 0.5)


def round_fixed(value: float, digits: int = 1) -> float:
    """Round like ``Number.toFixed``: exact binary value, ties away from zero."""
    if math.isnan(value) or math.isinf(value):
        return value
    step = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


def format_ics_timestamp(value: datetime) -> str:
    """``YYYYMMDDTHHMMSSZ`` in UTC."""
    return value.astimezone(pytz.utc).strftime("%Y%m%dT%H%M%SZ")


def format_date(value: Union[str, datetime], tz: Optional[tzinfo] = None) -> str:
    """Short display form such as ``Mar 15, 9:05 AM``."""
    tz = tz or pytz.utc
    if isinstance(value, str):
        parsed = parse_deadline(value, tz)
        if parsed is None:
            return "Invalid Date"
        value = parsed
    local = ensure_aware(value, tz).astimezone(tz)
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day}, {hour}:{local:%M} {local:%p}"
