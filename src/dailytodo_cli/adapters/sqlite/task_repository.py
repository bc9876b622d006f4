"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from dailytodo_cli.adapters.sqlite.connection import DatabaseConnection, get_connection
from dailytodo_cli.adapters.sqlite.utils import (
    decode_int_list,
    encode_int_list,
    format_datetime,
    generate_uuid,
    now_iso,
    parse_datetime,
    row_to_dict,
)
from dailytodo_cli.models import (
    MonthlyRepeat,
    NotFoundError,
    Step,
    StepCreate,
    StepUpdate,
    StoreUnavailableError,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    WeeklyRepeat,
)
from dailytodo_cli.repositories import TaskRepository
from dailytodo_cli.utils.recurrence import parse_repeat_rule

logger = logging.getLogger(__name__)

_MARKER_ID = 1


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, db_path: str | None = None):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = get_connection(self.db_path)
            except (sqlite3.Error, OSError, RuntimeError) as e:
                raise StoreUnavailableError(f"Cannot open task vault: {e}") from e
        return self._connection

    # ---- low-level helpers ----

    def _execute(self, sql: str, params: tuple | list | None = None) -> sqlite3.Cursor:
        try:
            return DatabaseConnection.execute_with_retry(self.connection, sql, params)
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Task store query failed: {e}") from e

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Commit on success, roll back on any error."""
        try:
            yield
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise StoreUnavailableError(f"Task store write failed: {e}") from e
        except Exception:
            self.connection.rollback()
            raise

    @staticmethod
    def _repeat_columns(repeat: WeeklyRepeat | MonthlyRepeat | None) -> dict[str, Any]:
        if isinstance(repeat, WeeklyRepeat):
            return {
                "repeat_type": "weekly",
                "repeat_weekdays": encode_int_list(repeat.weekdays),
                "repeat_days": None,
            }
        if isinstance(repeat, MonthlyRepeat):
            return {
                "repeat_type": "monthly",
                "repeat_weekdays": None,
                "repeat_days": encode_int_list(repeat.days),
            }
        return {"repeat_type": None, "repeat_weekdays": None, "repeat_days": None}

    @staticmethod
    def _repeat_from_row(row: dict[str, Any]) -> WeeklyRepeat | MonthlyRepeat | None:
        repeat_type = row.get("repeat_type")
        if repeat_type is None:
            return None
        if repeat_type == "weekly":
            return parse_repeat_rule(
                {"type": "weekly", "weekdays": decode_int_list(row.get("repeat_weekdays"))}
            )
        return parse_repeat_rule(
            {"type": repeat_type, "days": decode_int_list(row.get("repeat_days"))}
        )

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        data = row_to_dict(row)
        return Task(
            id=data["id"],
            title=data["title"],
            memo=data.get("memo") or "",
            due_date=parse_datetime(data.get("due_date")),
            is_today=bool(data.get("is_today")),
            is_completed=bool(data.get("is_completed")),
            repeat=self._repeat_from_row(data),
            repeat_created=bool(data.get("repeat_created")),
            steps=self._get_task_steps(data["id"]),
            created_at=parse_datetime(data["created_at"]),
            updated_at=parse_datetime(data["updated_at"]),
            completed_at=parse_datetime(data.get("completed_at")),
        )

    @staticmethod
    def _row_to_step(row: sqlite3.Row) -> Step:
        data = row_to_dict(row)
        data["is_completed"] = bool(data["is_completed"])
        return Step(**data)

    def _get_task_steps(self, task_id: str) -> list[Step]:
        cursor = self._execute(
            "SELECT * FROM steps WHERE task_id = ? ORDER BY position ASC", (task_id,)
        )
        return [self._row_to_step(row) for row in cursor.fetchall()]

    def _task_exists(self, task_id: str) -> bool:
        cursor = self._execute("SELECT 1 FROM tasks WHERE id = ?", (task_id,))
        return cursor.fetchone() is not None

    # ---- tasks ----

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List all tasks with filtering."""
        query = "SELECT t.* FROM tasks t WHERE 1=1"
        params: list[Any] = []

        if filters.id_prefix:
            query += " AND t.id LIKE ? ESCAPE '\\'"
            params.append(f"{_escape_like(filters.id_prefix)}%")

        if filters.is_today is not None:
            query += " AND t.is_today = ?"
            params.append(int(filters.is_today))

        if filters.has_due_date is True:
            query += " AND t.due_date IS NOT NULL"
        elif filters.has_due_date is False:
            query += " AND t.due_date IS NULL"

        if filters.is_completed is not None:
            query += " AND t.is_completed = ?"
            params.append(int(filters.is_completed))

        if filters.search:
            query += " AND (t.title LIKE ? OR t.memo LIKE ?)"
            search_term = f"%{filters.search}%"
            params.extend([search_term, search_term])

        # Latest due date first, undated tasks last
        query += " ORDER BY t.due_date IS NULL, t.due_date DESC, t.created_at DESC"

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)

        rows = self._execute(query, params).fetchall()
        return [self._row_to_task(row) for row in rows]

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        row = self._execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if not row:
            raise NotFoundError("task", task_id)
        return self._row_to_task(row)

    async def add(
        self, task_data: TaskCreate, steps: Sequence[StepCreate] = ()
    ) -> Task:
        """Create a new task, and its steps, in one transaction."""
        task_id = generate_uuid()
        now = now_iso()
        repeat = self._repeat_columns(task_data.repeat)

        with self._transaction():
            self._execute(
                """INSERT INTO tasks (
                    id, title, memo, due_date, is_today, is_completed,
                    repeat_type, repeat_weekdays, repeat_days, repeat_created,
                    created_at, updated_at, completed_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task_id,
                    task_data.title,
                    task_data.memo,
                    format_datetime(task_data.due_date),
                    task_data.is_today,
                    task_data.is_completed,
                    repeat["repeat_type"],
                    repeat["repeat_weekdays"],
                    repeat["repeat_days"],
                    False,
                    now,
                    now,
                    now if task_data.is_completed else None,
                ),
            )
            for step_data in steps:
                self._insert_step(task_id, step_data)

        logger.debug(
            "task added id=%s repeat=%s steps=%d",
            task_id,
            repeat["repeat_type"],
            len(steps),
        )
        return await self.get(task_id)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task."""
        update_dict = updates.model_dump(exclude_unset=True, exclude={"repeat"})

        if "repeat" in updates.model_fields_set:
            update_dict.update(self._repeat_columns(updates.repeat))

        for key in ("due_date", "completed_at"):
            if key in update_dict:
                update_dict[key] = format_datetime(update_dict[key])

        if not update_dict:
            return await self.get(task_id)

        set_parts = [f"{key} = ?" for key in update_dict]
        params: list[Any] = list(update_dict.values())

        set_parts.append("updated_at = ?")
        params.append(now_iso())
        params.append(task_id)

        query = f"UPDATE tasks SET {', '.join(set_parts)} WHERE id = ?"

        with self._transaction():
            cursor = self._execute(query, params)
            if cursor.rowcount == 0:
                raise NotFoundError("task", task_id)

        return await self.get(task_id)

    async def delete(self, task_id: str) -> bool:
        """Delete a task and its steps."""
        with self._transaction():
            self._execute("DELETE FROM steps WHERE task_id = ?", (task_id,))
            cursor = self._execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("task", task_id)
        return True

    async def claim_repeat_spawn(self, task_id: str) -> bool:
        """Compare-and-swap ``repeat_created`` from 0 to 1."""
        with self._transaction():
            cursor = self._execute(
                """UPDATE tasks
                   SET repeat_created = 1, updated_at = ?
                   WHERE id = ? AND repeat_created = 0""",
                (now_iso(), task_id),
            )
            claimed = cursor.rowcount == 1

        if not claimed and not self._task_exists(task_id):
            raise NotFoundError("task", task_id)
        return claimed

    # ---- steps ----

    def _insert_step(self, task_id: str, step_data: StepCreate) -> str:
        step_id = generate_uuid()
        self._execute(
            """INSERT INTO steps (id, task_id, title, is_completed, position)
               VALUES (?, ?, ?, ?, (
                   SELECT COALESCE(MAX(position) + 1, 0) FROM steps WHERE task_id = ?
               ))""",
            (step_id, task_id, step_data.title, step_data.is_completed, task_id),
        )
        return step_id

    async def add_step(self, task_id: str, step_data: StepCreate) -> Step:
        """Append a step to the end of a task's step list."""
        with self._transaction():
            if not self._task_exists(task_id):
                raise NotFoundError("task", task_id)
            step_id = self._insert_step(task_id, step_data)

        return self._get_step(step_id)

    def _get_step(self, step_id: str) -> Step:
        row = self._execute("SELECT * FROM steps WHERE id = ?", (step_id,)).fetchone()
        if not row:
            raise NotFoundError("step", step_id)
        return self._row_to_step(row)

    async def update_step(self, step_id: str, updates: StepUpdate) -> Step:
        """Update a step."""
        update_dict = updates.model_dump(exclude_none=True)
        if not update_dict:
            return self._get_step(step_id)

        set_clause = ", ".join(f"{key} = ?" for key in update_dict)
        params = [*update_dict.values(), step_id]

        with self._transaction():
            cursor = self._execute(f"UPDATE steps SET {set_clause} WHERE id = ?", params)
            if cursor.rowcount == 0:
                raise NotFoundError("step", step_id)

        return self._get_step(step_id)

    async def delete_step(self, step_id: str) -> bool:
        """Delete a step."""
        with self._transaction():
            cursor = self._execute("DELETE FROM steps WHERE id = ?", (step_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("step", step_id)
        return True

    # ---- last-refresh marker ----

    async def get_last_refresh_marker(self) -> datetime | None:
        row = self._execute(
            "SELECT value FROM last_refreshed WHERE id = ?", (_MARKER_ID,)
        ).fetchone()
        return parse_datetime(row[0]) if row else None

    async def upsert_last_refresh_marker(self, value: datetime) -> None:
        with self._transaction():
            self._execute(
                """INSERT INTO last_refreshed (id, value) VALUES (?, ?)
                   ON CONFLICT(id) DO UPDATE SET value = excluded.value""",
                (_MARKER_ID, format_datetime(value)),
            )
