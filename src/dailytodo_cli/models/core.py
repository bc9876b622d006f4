"""Core domain models: tasks, steps and repeat rules."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator


class Weekday(IntEnum):
    """Day of the week, numbered from Sunday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def short_name(self) -> str:
        return self.name[:3].lower()


class WeeklyRepeat(BaseModel):
    """Repeat on a set of weekdays.

    Attributes:
        type: Discriminator, always "weekly"
        weekdays: Weekdays the task recurs on (sorted, no duplicates)
    """

    type: Literal["weekly"] = "weekly"
    weekdays: list[Weekday] = Field(default_factory=list)

    @field_validator("weekdays")
    @classmethod
    def normalize_weekdays(cls, v: list[Weekday]) -> list[Weekday]:
        return sorted(set(v))


class MonthlyRepeat(BaseModel):
    """Repeat on a day of the month.

    Only the first entry of ``days`` drives resolution; the rest are kept so
    the stored rule round-trips unchanged.

    Attributes:
        type: Discriminator, always "monthly"
        days: Days of the month (1-31)
    """

    type: Literal["monthly"] = "monthly"
    days: list[Annotated[int, Field(ge=1, le=31)]] = Field(default_factory=list)


RepeatRule = Annotated[WeeklyRepeat | MonthlyRepeat, Field(discriminator="type")]


class Step(BaseModel):
    """A sub-step of a task.

    Attributes:
        id: Unique identifier for the step
        task_id: Owning task
        title: Step text
        is_completed: Completion status
        position: Ordering within the task
    """

    id: str
    task_id: str
    title: str
    is_completed: bool = False
    position: int = 0


class StepCreate(BaseModel):
    """Model for creating a new step."""

    title: str
    is_completed: bool = False


class StepUpdate(BaseModel):
    """Model for updating a step. Only provided fields are changed."""

    title: str | None = None
    is_completed: bool | None = None


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Main task text
        memo: Free-form note
        due_date: Optional due date
        is_today: Whether the task is in today's list
        is_completed: Completion status
        repeat: Optional repeat rule
        repeat_created: Whether the next occurrence was already spawned
        steps: Ordered sub-steps
        created_at: Creation timestamp
        updated_at: Last update timestamp
        completed_at: Completion timestamp
    """

    id: str
    title: str
    memo: str = ""
    due_date: datetime | None = None
    is_today: bool = False
    is_completed: bool = False
    repeat: RepeatRule | None = None
    repeat_created: bool = False
    steps: list[Step] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Main task text (defaults to "Untitled" when blank)
        memo: Free-form note
        due_date: Optional due date
        is_today: Put the task in today's list
        is_completed: Initial completion status
        repeat: Optional repeat rule
    """

    title: str = "Untitled"
    memo: str = ""
    due_date: datetime | None = None
    is_today: bool = False
    is_completed: bool = False
    repeat: RepeatRule | None = None

    @field_validator("title")
    @classmethod
    def default_blank_title(cls, v: str) -> str:
        return v.strip() or "Untitled"


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    Only fields that were explicitly set are written, so passing
    ``due_date=None`` or ``repeat=None`` clears the stored value.
    """

    title: str | None = None
    memo: str | None = None
    due_date: datetime | None = None
    is_today: bool | None = None
    is_completed: bool | None = None
    completed_at: datetime | None = None
    repeat: RepeatRule | None = None
    repeat_created: bool | None = None


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        id_prefix: Filter by ID prefix (for short id resolution)
        is_today: Filter by today flag
        has_due_date: Only tasks with (True) or without (False) a due date
        is_completed: Filter by completion status
        search: Text search over title and memo
        limit: Maximum number of results
    """

    id_prefix: str | None = None
    is_today: bool | None = None
    has_due_date: bool | None = None
    is_completed: bool | None = None
    search: str | None = None
    limit: int | None = None


class TodaySyncResult(BaseModel):
    """Outcome of one today-set reconciliation run."""

    cleared_count: int = 0
    set_count: int = 0
    skipped: bool = False


class CompletionResult(BaseModel):
    """Outcome of a completion toggle: the updated task and any spawned occurrence."""

    task: Task
    spawned: Task | None = None
