"""Output formatters for different formats."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import yaml
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from dailytodo_cli.models import Task
from dailytodo_cli.utils.recurrence import describe_repeat

console = Console()

MIN_ID_PREFIX = 4

VIEW_TITLES = {
    "all": "📋 Tasks",
    "today": "☀️  Today",
    "planned": "📅 Planned",
}

# Status Icons
STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}

REPEAT_ICON = "🔄"
TODAY_ICON = "☀️"


def calculate_unique_prefixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique prefix length for each task ID.

    Starts from MIN_ID_PREFIX and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required prefix length
    """
    result = {}

    for task_id in task_ids:
        for length in range(MIN_ID_PREFIX, len(task_id) + 1):
            prefix = task_id[:length]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.startswith(prefix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)

    return result


def to_serializable(data: Any) -> Any:
    """Convert models (or lists of them) to JSON-compatible structures."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [to_serializable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_serializable(value) for key, value in data.items()}
    return data


def format_output(data: Any, output_format: str = "pretty", view: str = "all") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(to_serializable(data), indent=2, default=str))
    elif output_format == "yaml":
        print(
            yaml.safe_dump(
                to_serializable(data),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        )
    else:
        format_pretty(data, view=view)


def format_pretty(data: Any, view: str = "all") -> None:
    """Format data in pretty format with colors and icons."""
    if isinstance(data, list):
        format_tasks_pretty(data, view=view)
    elif isinstance(data, Task):
        format_task_detail(data)
    elif isinstance(data, BaseModel):
        format_single_item(data.model_dump())
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        if isinstance(value, bool):
            formatted_value = "✓" if value else "✗"
        elif isinstance(value, list):
            formatted_value = ", ".join(str(v) for v in value)
        elif value is None:
            formatted_value = "-"
        else:
            formatted_value = str(value)
        table.add_row(formatted_key, formatted_value)

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================


def format_tasks_pretty(tasks: list[Task], view: str = "all") -> None:
    """Format a task list, open tasks first, completed ones dimmed below."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    active_tasks = [t for t in tasks if not t.is_completed]
    completed_tasks = [t for t in tasks if t.is_completed]

    header = Text()
    header.append(f"{VIEW_TITLES.get(view, VIEW_TITLES['all'])} ", style="bold cyan")
    header.append(f"({len(active_tasks)} active", style="dim")
    if completed_tasks:
        header.append(f", {len(completed_tasks)} completed", style="dim green")
    header.append(")", style="dim")
    console.print(header)
    console.print()

    prefix_map = calculate_unique_prefixes([task.id for task in tasks])

    for task in active_tasks:
        format_task_item(task, indent="  ", prefix_map=prefix_map)

    if completed_tasks:
        console.print()
        console.print("✅ COMPLETED", style="bold green")
        for task in completed_tasks:
            format_task_item(task, indent="  ", prefix_map=prefix_map)


def format_task_item(
    task: Task,
    indent: str = "",
    prefix_map: dict[str, int] | None = None,
) -> None:
    """Format a single task line followed by its metadata line."""
    status_icon = STATUS_ICONS["completed" if task.is_completed else "open"]

    line = Text(f"{indent}{status_icon} ")
    line.append(task.title, style="dim" if task.is_completed else "")
    if task.is_today:
        line.append(f"  {TODAY_ICON}")
    console.print(line)

    meta: list[tuple[str, str]] = []

    if task.due_date:
        due_str = format_due_date(task.due_date)
        if is_overdue(task.due_date) and not task.is_completed:
            meta.append((due_str, "bold red"))
        else:
            meta.append((due_str, "cyan"))
    elif task.is_completed and task.completed_at:
        meta.append((f"Completed {format_relative_time(task.completed_at)}", "dim green"))

    if task.repeat is not None:
        meta.append((f"{REPEAT_ICON} {describe_repeat(task.repeat)}", "magenta"))

    if task.steps:
        done = sum(1 for step in task.steps if step.is_completed)
        meta.append((f"{done}/{len(task.steps)} steps", "yellow"))

    prefix_length = (prefix_map or {}).get(task.id, 8)
    meta.append((f"#{task.id[:prefix_length]}", "dim"))

    meta_line = Text()
    meta_line.append(f"{indent}   └─ ", style="dim")
    for i, (text, style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=style)
    console.print(meta_line)


def format_task_detail(task: Task) -> None:
    """Format one task with all of its fields and steps."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("ID", task.id)
    table.add_row("Title", task.title)
    if task.memo:
        table.add_row("Memo", task.memo)
    table.add_row("Due", format_due_date(task.due_date) if task.due_date else "-")
    table.add_row("Today", "✓" if task.is_today else "✗")
    table.add_row("Completed", "✓" if task.is_completed else "✗")
    table.add_row("Repeat", describe_repeat(task.repeat) or "-")
    if task.repeat is not None:
        table.add_row("Next spawned", "✓" if task.repeat_created else "✗")
    table.add_row("Created", format_relative_time(task.created_at))
    table.add_row("Updated", format_relative_time(task.updated_at))
    console.print(table)

    if task.steps:
        console.print()
        console.print("Steps", style="bold")
        for number, step in enumerate(task.steps, start=1):
            icon = STATUS_ICONS["completed" if step.is_completed else "open"]
            line = Text(f"  {number}. {icon} ")
            line.append(step.title, style="dim" if step.is_completed else "")
            console.print(line)


# ============================================================================
# Helper Functions
# ============================================================================


def is_overdue(due_date: datetime | None) -> bool:
    """Check if a due date is in the past."""
    if due_date is None:
        return False
    if due_date.tzinfo is not None:
        return due_date < datetime.now(due_date.tzinfo)
    return due_date < datetime.now()


def format_due_date(date: datetime) -> str:
    """Format due date in compact format: DD/MM DayOfWeek, with HH:MM when set."""
    now = datetime.now()

    day_str = date.strftime("%d/%m")
    if date.year != now.year:
        day_str = date.strftime("%d/%m/%Y")
    day_of_week = date.strftime("%a")

    if (date.hour, date.minute) == (0, 0):
        return f"{day_str} {day_of_week}"
    return f"{date.strftime('%H:%M')} {day_str} {day_of_week}"


def format_relative_time(date: datetime | None) -> str:
    """Format timestamp as relative time."""
    if date is None:
        return ""

    now = datetime.now(date.tzinfo) if date.tzinfo is not None else datetime.now()
    seconds = (now - date).total_seconds()

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        minutes = int(seconds / 60)
        return f"{minutes}m ago" if minutes > 1 else "1m ago"
    if seconds < 86400:
        hours = int(seconds / 3600)
        return f"{hours}h ago" if hours > 1 else "1h ago"
    days = int(seconds / 86400)
    return f"{days}d ago" if days > 1 else "1d ago"
