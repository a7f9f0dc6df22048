"""
Treatment-cycle scheduling rules.

A cycle is three sessions at the same time of day. The first session is
taken as requested; each follow-up lands 14 days after the previous one,
pushed forward to the next allowed weekday when needed.
"""
from datetime import date, datetime, timedelta
from typing import List
import re

# datetime.weekday(): Monday == 0
TUESDAY, WEDNESDAY, FRIDAY = 1, 2, 4
ALLOWED_WEEKDAYS = (TUESDAY, WEDNESDAY, FRIDAY)
ALLOWED_DAY_NAMES = "Tuesday, Wednesday, or Friday"

SESSIONS_PER_CYCLE = 3
SESSION_INTERVAL_DAYS = 14

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_SLOT_TIME_RE = re.compile(r"^([01]\d|2[0-3]):00$")


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string, raising ValueError when malformed."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_slot(date_str: str, time_str: str) -> datetime:
    """Combine a date and a time string into one datetime."""
    return datetime.strptime(f"{date_str} {time_str}", f"{DATE_FORMAT} {TIME_FORMAT}")


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def is_valid_slot_time(value: str) -> bool:
    """Whole-hour slots only (``HH:00``)."""
    return bool(_SLOT_TIME_RE.match(value))


def is_allowed_day(value: date) -> bool:
    return value.weekday() in ALLOWED_WEEKDAYS


def next_allowed_day(value: date) -> date:
    while not is_allowed_day(value):
        value += timedelta(days=1)
    return value


def plan_cycle(first_date: date) -> List[date]:
    """Return the dates of every session in a cycle starting at ``first_date``."""
    dates = [first_date]
    while len(dates) < SESSIONS_PER_CYCLE:
        dates.append(next_allowed_day(dates[-1] + timedelta(days=SESSION_INTERVAL_DAYS)))
    return dates
