"""Database schema definitions for the local SQLite vault."""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

# Tasks table - main task entity
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    memo TEXT NOT NULL DEFAULT '',
    due_date DATETIME,
    is_today BOOLEAN NOT NULL DEFAULT 0,
    is_completed BOOLEAN NOT NULL DEFAULT 0,

    -- Recurring tasks
    repeat_type TEXT,
    repeat_weekdays TEXT,
    repeat_days TEXT,
    repeat_created BOOLEAN NOT NULL DEFAULT 0,

    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    completed_at DATETIME,
    CHECK (repeat_type IS NULL OR repeat_type IN ('weekly', 'monthly'))
)
"""

# Steps table - ordered sub-steps of a task
CREATE_STEPS_TABLE = """
CREATE TABLE IF NOT EXISTS steps (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    title TEXT NOT NULL,
    is_completed BOOLEAN NOT NULL DEFAULT 0,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

# Last successful today-set refresh (single row, id = 1)
CREATE_LAST_REFRESHED_TABLE = """
CREATE TABLE IF NOT EXISTS last_refreshed (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    value DATETIME NOT NULL
)
"""

ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_STEPS_TABLE,
    CREATE_LAST_REFRESHED_TABLE,
]

ALL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_is_today ON tasks(is_today)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)",
    "CREATE INDEX IF NOT EXISTS idx_steps_task_id ON steps(task_id, position)",
]
