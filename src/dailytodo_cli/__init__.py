"""DailyTodo CLI - personal task tracker with steps and recurring tasks."""

__version__ = "0.3.0"
