"""Initial schema - tasks, categories, comments, activity and preferences

Revision ID: 001
Revises: None
Create Date: 2026-09-28

"""
from typing import Sequence, Union

from alembic import op
from sqlalchemy import text

revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS tasks (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            category_id TEXT,
            priority TEXT NOT NULL DEFAULT 'medium',
            status TEXT NOT NULL DEFAULT 'todo',
            due_date INTEGER,
            completed_at INTEGER,
            tags TEXT,
            "order" INTEGER NOT NULL DEFAULT 0,
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        )
    """))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_tasks_user ON tasks (user_id, created_at)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_tasks_user_status ON tasks (user_id, status)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_tasks_user_category ON tasks (user_id, category_id)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_tasks_user_priority ON tasks (user_id, priority)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_tasks_user_due_date ON tasks (user_id, due_date)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_tasks_category ON tasks (category_id)"))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS categories (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            name TEXT NOT NULL,
            color TEXT NOT NULL,
            icon TEXT,
            "order" INTEGER NOT NULL DEFAULT 0,
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        )
    """))
    conn.execute(text('CREATE INDEX IF NOT EXISTS ix_categories_user_order ON categories (user_id, "order")'))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS task_comments (
            id TEXT PRIMARY KEY,
            task_id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            content TEXT NOT NULL,
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        )
    """))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_task_comments_task ON task_comments (task_id, created_at)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_task_comments_user ON task_comments (user_id)"))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS task_activity (
            id TEXT PRIMARY KEY,
            task_id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            action TEXT NOT NULL,
            changes TEXT,
            metadata TEXT,
            created_at INTEGER NOT NULL
        )
    """))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_task_activity_task ON task_activity (task_id, created_at)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS ix_task_activity_user ON task_activity (user_id, created_at)"))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS user_preferences (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL UNIQUE,
            default_view TEXT NOT NULL DEFAULT 'list',
            default_filter TEXT,
            default_sort TEXT,
            theme TEXT NOT NULL DEFAULT 'system',
            compact_mode INTEGER NOT NULL DEFAULT 0,
            email_notifications INTEGER NOT NULL DEFAULT 1,
            due_date_reminders INTEGER NOT NULL DEFAULT 1,
            reminder_hours_before INTEGER NOT NULL DEFAULT 24,
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        )
    """))


def downgrade() -> None:
    conn = op.get_bind()
    conn.execute(text("DROP TABLE IF EXISTS user_preferences"))
    conn.execute(text("DROP TABLE IF EXISTS task_activity"))
    conn.execute(text("DROP TABLE IF EXISTS task_comments"))
    conn.execute(text("DROP TABLE IF EXISTS categories"))
    conn.execute(text("DROP TABLE IF EXISTS tasks"))
