"""DailyTodo domain models.

This package contains Pydantic models that represent the core domain entities
of the application, plus the exceptions raised across layers.
"""

from .config_models import AppConfig, OutputConfig, SchedulerConfig
from .core import (
    CompletionResult,
    MonthlyRepeat,
    RepeatRule,
    Step,
    StepCreate,
    StepUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    TodaySyncResult,
    Weekday,
    WeeklyRepeat,
)
from .exceptions import (
    DailyTodoError,
    InvalidRuleError,
    NotFoundError,
    StoreUnavailableError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "CompletionResult",
    # Step models
    "Step",
    "StepCreate",
    "StepUpdate",
    # Repeat rules
    "RepeatRule",
    "WeeklyRepeat",
    "MonthlyRepeat",
    "Weekday",
    # Sync
    "TodaySyncResult",
    # Config models
    "AppConfig",
    "OutputConfig",
    "SchedulerConfig",
    # Errors
    "DailyTodoError",
    "InvalidRuleError",
    "NotFoundError",
    "StoreUnavailableError",
]
