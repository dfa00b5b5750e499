# src/deskmate/tasks/timeparse.py

"""
Time-of-day helpers for reminders.

Two layers:
- strict HH:MM handling used by the store and the scheduler
  (is_valid_hhmm, parse_hhmm, target_time_today, seconds_until);
- parse_time_format(), the lenient converter used at the command boundary
  ("3pm", "2:30 pm", "today at 17:59", "in 20 minutes", "15" -> "HH:MM").
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

_HHMM_RE = re.compile(r"^(\d{2}):(\d{2})$")

_IN_MINUTES_RE = re.compile(r"in\s+(\d+)\s+minutes?")
_IN_HOURS_RE = re.compile(r"in\s+(\d+)\s+hours?")
_CLOCK_TOKEN_RE = re.compile(r"(?:today\s+at\s+|at\s+)?(\d{1,2}(?::\d{2})?(?:\s*(?:am|pm))?)")

_CLOCK_PATTERNS = (
    re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)$"),
    re.compile(r"^(\d{1,2}):(\d{2})$"),
    re.compile(r"^(\d{1,2})$"),
)


def is_valid_hhmm(value: object) -> bool:
    if not isinstance(value, str):
        return False
    m = _HHMM_RE.match(value)
    if not m:
        return False
    return int(m.group(1)) <= 23 and int(m.group(2)) <= 59


def parse_hhmm(value: str) -> tuple[int, int]:
    """Strict "HH:MM" -> (hour, minute). Raises ValueError on anything else."""
    if not is_valid_hhmm(value):
        raise ValueError(f"invalid HH:MM time: {value!r}")
    hh, mm = value.split(":")
    return int(hh), int(mm)


def format_hhmm(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def target_time_today(hhmm: str, now: datetime) -> datetime:
    hour, minute = parse_hhmm(hhmm)
    return now.replace(hour=hour, minute=minute, second=0, microsecond=0)


def seconds_until(hhmm: str, now: datetime) -> float | None:
    """
    Delay until today's HH:MM, or None when that moment is not strictly
    in the future (equal counts as passed).
    """
    target = target_time_today(hhmm, now)
    if target <= now:
        return None
    return (target - now).total_seconds()


def parse_time_format(text: str | None, now: datetime | None = None) -> str | None:
    """
    Convert loose user/LLM time input into zero-padded "HH:MM".

    Returns None when nothing usable is found or the result is out of range.
    Relative input ("in 20 minutes") wraps past midnight to the next day's
    clock time; the caller still schedules it for today.
    """
    if not text:
        return None

    t = text.lower().strip()
    clean = t

    if "in " in t and ("minute" in t or "hour" in t):
        base = now or datetime.now()
        m_min = _IN_MINUTES_RE.search(t)
        m_hr = _IN_HOURS_RE.search(t)
        if m_min:
            future = base + timedelta(minutes=int(m_min.group(1)))
            clean = format_hhmm(future.hour, future.minute)
        elif m_hr:
            future = base + timedelta(hours=int(m_hr.group(1)))
            clean = format_hhmm(future.hour, future.minute)
    else:
        m = _CLOCK_TOKEN_RE.search(t)
        if m and m.group(1):
            clean = m.group(1).strip()

    for pattern in _CLOCK_PATTERNS:
        m = pattern.match(clean)
        if not m:
            continue

        hour = int(m.group(1))
        minute = int(m.group(2) or 0) if pattern.groups >= 2 else 0
        suffix = m.group(3) if pattern.groups >= 3 else None

        if suffix == "pm" and hour != 12:
            hour += 12
        elif suffix == "am" and hour == 12:
            hour = 0

        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return format_hhmm(hour, minute)

    return None
