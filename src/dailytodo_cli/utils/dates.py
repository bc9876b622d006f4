"""Calendar arithmetic used by repeat rules and the today-set refresh.

Every helper accepts ``date`` or ``datetime`` and returns the same type,
keeping time of day and tzinfo untouched. Weekdays are numbered from Sunday
(0) to Saturday (6), matching :class:`dailytodo_cli.models.Weekday`.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import TypeVar

from dateutil import parser as date_parser
from dateutil.parser import ParserError
from dateutil.relativedelta import relativedelta

D = TypeVar("D", bound=date)


def weekday_of(value: date) -> int:
    """Return the weekday number of *value* (0=Sunday .. 6=Saturday)."""
    return (value.weekday() + 1) % 7


def add_months(value: D, months: int) -> D:
    """Shift *value* by whole calendar months.

    The day is clamped to the target month's length (Jan 31 + 1 month is
    Feb 28 or 29).
    """
    return value + relativedelta(months=months)


def is_same_month(a: date, b: date) -> bool:
    """Return True if both dates fall in the same month of the same year."""
    return (a.year, a.month) == (b.year, b.month)


def days_in_month(value: date) -> int:
    """Return the number of days in *value*'s month."""
    return calendar.monthrange(value.year, value.month)[1]


def last_day_of_month(value: D) -> D:
    """Return *value* moved to the last day of its month."""
    return value.replace(day=days_in_month(value))


def next_date_with_weekday(value: D, target_weekday: int) -> D:
    """Return the first date strictly after *value* falling on *target_weekday*.

    The result is always 1 to 7 days later; asking for *value*'s own weekday
    yields the same weekday next week.

    Raises:
        ValueError: If target_weekday is outside 0..6
    """
    if not 0 <= target_weekday <= 6:
        raise ValueError(f"weekday must be in 0..6, got {target_weekday}")
    delta = (target_weekday - weekday_of(value) - 1) % 7 + 1
    return value + timedelta(days=delta)


def set_day_of_month(value: D, day: int) -> D:
    """Replace the day of month of *value*.

    A *day* beyond the month's length overflows into the following month
    (April 31 becomes May 1), so callers check the result with
    :func:`is_same_month` and clamp with :func:`last_day_of_month`.

    Raises:
        ValueError: If day is less than 1
    """
    if day < 1:
        raise ValueError(f"day must be >= 1, got {day}")
    return value.replace(day=1) + timedelta(days=day - 1)


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to local time; naive values are taken as local."""
    if value.tzinfo is None:
        return value
    return value.astimezone()


def start_of_day(value: datetime) -> datetime:
    """Return midnight of *value*'s day."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_today() -> datetime:
    """Return local midnight of the current day."""
    return start_of_day(datetime.now())


def is_same_day(a: datetime, b: datetime) -> bool:
    """Return True if both timestamps fall on the same local calendar day."""
    return to_local(a).date() == to_local(b).date()


_RELATIVE_DAYS = {"today": 0, "tomorrow": 1, "yesterday": -1}


def parse_due_date(text: str, now: datetime | None = None) -> datetime:
    """Parse a user-supplied due date.

    Accepts "today", "tomorrow", "yesterday" or anything dateutil understands
    ("2024-03-15", "15 Mar 2024 09:00"). Dates without a time land on midnight.

    Raises:
        ValueError: If the text is not a date
    """
    now = now or datetime.now()
    key = text.strip().lower()
    if key in _RELATIVE_DAYS:
        return start_of_day(now) + timedelta(days=_RELATIVE_DAYS[key])
    try:
        return date_parser.parse(text, default=start_of_day(now))
    except (ParserError, OverflowError) as e:
        raise ValueError(f"Invalid due date: {text}") from e
