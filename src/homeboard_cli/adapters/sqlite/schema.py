"""Database schema definitions for the local SQLite task board."""

from __future__ import annotations

# Tasks table - one row per generated occurrence
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    priority TEXT NOT NULL DEFAULT 'medium'
        CHECK (priority IN ('low', 'medium', 'high', 'urgent')),
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'in_progress', 'completed')),
    due_date DATE,
    due_time TEXT,
    is_all_day BOOLEAN NOT NULL DEFAULT 1,
    assignee TEXT,
    created_by TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    completed_by TEXT,
    completed_at DATETIME
)
"""

# Skipped occurrences (one skip per task per date)
CREATE_TASK_SKIPPED_INSTANCES_TABLE = """
CREATE TABLE IF NOT EXISTS task_skipped_instances (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    skipped_date DATE NOT NULL,
    skipped_by TEXT,
    skipped_at DATETIME NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    UNIQUE (task_id, skipped_date)
)
"""

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_assignee ON tasks(assignee)",
    # Batch key lookups (title + creator, then created_at date)
    "CREATE INDEX IF NOT EXISTS idx_tasks_batch ON tasks(title, created_by, created_at)",
]

CREATE_SKIPPED_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_task_skipped_task_id ON task_skipped_instances(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_task_skipped_date ON task_skipped_instances(skipped_date)",
]

# Reusable task presets; repeat_days holds Sunday=0 weekday numbers, e.g. "1,5"
CREATE_TASK_TEMPLATES_TABLE = """
CREATE TABLE IF NOT EXISTS task_templates (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE,
    title TEXT NOT NULL,
    description TEXT,
    priority TEXT NOT NULL DEFAULT 'medium'
        CHECK (priority IN ('low', 'medium', 'high', 'urgent')),
    default_time TEXT,
    repeat_interval TEXT
        CHECK (repeat_interval IS NULL OR repeat_interval IN ('weekly', 'biweekly', 'monthly')),
    repeat_days TEXT NOT NULL DEFAULT '',
    assignee TEXT,
    created_by TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""
