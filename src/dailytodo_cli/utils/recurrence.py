"""Recurrence utility functions for the DailyTodo CLI.

Two repeat kinds exist: weekly (a set of weekdays) and monthly (a day of the
month). :func:`resolve_next_occurrence` computes the single next due date for
a rule; the preset helpers map the user-facing repeat choices
(everyday / weekdays / weekly / monthly / none) to rules and back.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Final

from pydantic import TypeAdapter, ValidationError

from dailytodo_cli.models import (
    InvalidRuleError,
    MonthlyRepeat,
    RepeatRule,
    Weekday,
    WeeklyRepeat,
)
from dailytodo_cli.utils.dates import (
    add_months,
    is_same_month,
    last_day_of_month,
    next_date_with_weekday,
    set_day_of_month,
    weekday_of,
)


class NoOccurrence:
    """Resolution outcome for a rule that yields no next date.

    This is a normal result (an inert rule), not an error. It is falsy so
    callers can write ``if not next_due: ...``.
    """

    _instance: NoOccurrence | None = None

    def __new__(cls) -> NoOccurrence:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_OCCURRENCE"


NO_OCCURRENCE: Final = NoOccurrence()

EVERY_DAY: Final[tuple[Weekday, ...]] = tuple(Weekday)
WEEKDAYS: Final[tuple[Weekday, ...]] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)

# User-facing repeat choices
REPEAT_PRESETS: Final[tuple[str, ...]] = (
    "everyday",
    "weekdays",
    "weekly",
    "monthly",
    "none",
)

_WEEKDAY_NAMES: dict[str, Weekday] = {}
for _day in Weekday:
    _WEEKDAY_NAMES[_day.name.lower()] = _day
    _WEEKDAY_NAMES[_day.short_name] = _day

_RULE_ADAPTER: TypeAdapter[RepeatRule] = TypeAdapter(RepeatRule)


def resolve_next_occurrence(
    rule: WeeklyRepeat | MonthlyRepeat, base_due_date: datetime
) -> datetime | NoOccurrence:
    """Compute the next due date of a recurring task.

    Args:
        rule: Repeat rule of the task
        base_due_date: Due date of the occurrence being completed

    Returns:
        The next due date (time of day preserved), or NO_OCCURRENCE when the
        rule is inert

    Raises:
        InvalidRuleError: If rule is not a known repeat rule
    """
    match rule:
        case WeeklyRepeat(weekdays=weekdays):
            return _resolve_weekly(weekdays, base_due_date)
        case MonthlyRepeat(days=days):
            return _resolve_monthly(days, base_due_date)
        case _:
            raise InvalidRuleError(f"Unsupported repeat rule: {rule!r}")


def _resolve_weekly(
    weekdays: list[Weekday], base_due_date: datetime
) -> datetime | NoOccurrence:
    if not weekdays:
        return NO_OCCURRENCE

    base_weekday = weekday_of(base_due_date)
    later = [int(day) for day in weekdays if day > base_weekday]
    if later:
        target = min(later)
    else:
        # Wrap around to next week. A rule holding only the base weekday
        # itself has no candidate here.
        earlier = [int(day) for day in weekdays if day < base_weekday]
        if not earlier:
            return NO_OCCURRENCE
        target = min(earlier)

    return next_date_with_weekday(base_due_date, target)


def _resolve_monthly(days: list[int], base_due_date: datetime) -> datetime | NoOccurrence:
    if not days:
        return NO_OCCURRENCE

    next_month = add_months(base_due_date, 1)
    due = set_day_of_month(next_month, days[0])
    if not is_same_month(due, next_month):
        due = last_day_of_month(next_month)
    return due


def parse_repeat_rule(data: Any) -> WeeklyRepeat | MonthlyRepeat:
    """Validate raw rule data (e.g. decoded JSON) into a repeat rule.

    Raises:
        InvalidRuleError: If the kind tag is unknown or values are malformed
    """
    try:
        return _RULE_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise InvalidRuleError(f"Invalid repeat rule: {e}") from e


def parse_weekdays(text: str) -> list[Weekday]:
    """Parse a comma-separated list of weekday names ("mon,fri" or "monday, friday").

    Raises:
        InvalidRuleError: If a name is not a weekday
    """
    days: list[Weekday] = []
    for raw in text.split(","):
        name = raw.strip().lower()
        if not name:
            continue
        if name not in _WEEKDAY_NAMES:
            raise InvalidRuleError(f"Unknown weekday: {raw.strip()}")
        days.append(_WEEKDAY_NAMES[name])
    return days


def build_repeat_rule(
    preset: str,
    *,
    weekdays: list[Weekday] | None = None,
    day: int | None = None,
    base: datetime | None = None,
) -> WeeklyRepeat | MonthlyRepeat | None:
    """Convert a repeat preset into a rule.

    Args:
        preset: One of REPEAT_PRESETS
        weekdays: Weekdays for "weekly" (required)
        day: Day of month for "monthly" (defaults to the base date's day)
        base: Reference date for the "monthly" default

    Returns:
        The rule, or None for "none"

    Raises:
        InvalidRuleError: If the preset is unknown or lacks what it needs
    """
    name = preset.strip().lower()
    if name == "none":
        return None
    if name == "everyday":
        return WeeklyRepeat(weekdays=list(EVERY_DAY))
    if name == "weekdays":
        return WeeklyRepeat(weekdays=list(WEEKDAYS))
    if name == "weekly":
        # The base weekday on its own never recurs: the next one is strictly later
        if not weekdays:
            raise InvalidRuleError("weekly repeat needs weekdays (e.g. --weekdays mon,thu)")
        return WeeklyRepeat(weekdays=weekdays)
    if name == "monthly":
        if day is None:
            if base is None:
                raise InvalidRuleError("monthly repeat needs a day or a due date")
            day = base.day
        try:
            return MonthlyRepeat(days=[day])
        except ValidationError as e:
            raise InvalidRuleError(f"Invalid day of month: {day}") from e
    raise InvalidRuleError(
        f"Unknown repeat preset: {preset} (expected one of {', '.join(REPEAT_PRESETS)})"
    )


def is_repeat_everyday(rule: WeeklyRepeat | MonthlyRepeat | None) -> bool:
    return isinstance(rule, WeeklyRepeat) and len(rule.weekdays) == len(EVERY_DAY)


def is_repeat_weekdays(rule: WeeklyRepeat | MonthlyRepeat | None) -> bool:
    return isinstance(rule, WeeklyRepeat) and tuple(rule.weekdays) == WEEKDAYS


def describe_repeat(rule: WeeklyRepeat | MonthlyRepeat | None) -> str:
    """Convert a rule back to a human-readable description.

    Returns:
        "everyday", "weekdays", "weekly: mon, fri", "monthly: day 10",
        or "" when there is no rule
    """
    if rule is None:
        return ""
    if is_repeat_everyday(rule):
        return "everyday"
    if is_repeat_weekdays(rule):
        return "weekdays"
    if isinstance(rule, WeeklyRepeat):
        names = ", ".join(day.short_name for day in rule.weekdays)
        return f"weekly: {names}" if names else "weekly: (no days)"
    if rule.days:
        return f"monthly: day {rule.days[0]}"
    return "monthly: (no day)"
