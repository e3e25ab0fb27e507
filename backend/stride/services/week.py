"""
Week arithmetic used by the scheduler.

Weeks start on Sunday. Day differences round partial days up, so the
result depends on the time component of datetime arguments:

    days_between(date(2024, 1, 1), date(2024, 1, 4))            -> 3
    days_between(datetime(2024, 1, 1, 12), date(2024, 1, 4))   -> 3  (2.5 rounded up)
    days_between(date(2024, 1, 4), datetime(2024, 1, 4, 0, 0, 1)) -> 1
"""

import math
from datetime import date, datetime, time, timedelta, timezone

DAYS_PER_WEEK = 7
SECONDS_PER_DAY = 24 * 60 * 60


def as_datetime(value: date | datetime) -> datetime:
    """Promote a date to midnight; normalise aware datetimes to naive UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def as_date(value: date | datetime) -> date:
    """Calendar date of a date or datetime (UTC for aware datetimes)."""
    if isinstance(value, datetime):
        return as_datetime(value).date()
    return value


def week_start(value: date | datetime) -> date:
    """Return the Sunday on or before the given day."""
    day = as_date(value)
    # date.weekday() is 0 for Monday; shift so Sunday is 0
    days_since_sunday = (day.weekday() + 1) % DAYS_PER_WEEK
    return day - timedelta(days=days_since_sunday)


def next_week_start(week_start_date: date) -> date:
    """Start of the week following week_start_date."""
    return week_start_date + timedelta(days=DAYS_PER_WEEK)


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole days from start to end, rounding any partial day up."""
    delta = as_datetime(end) - as_datetime(start)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def epoch_millis(value: date | datetime) -> int:
    """Milliseconds since the Unix epoch, treating naive values as UTC."""
    moment = as_datetime(value).replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)
