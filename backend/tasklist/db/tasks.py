"""
Task store.

The only module that reads or writes the ``tasks`` table. Listings are
newest first unless noted; ``order`` is the user's manual sort key.
"""

import json
import sqlite3
import uuid
from typing import Any, Iterable, Optional

from ..models import Task

# Columns an update may touch; "order" is an SQL keyword and stays quoted
UPDATABLE_FIELDS = (
    "title",
    "description",
    "category_id",
    "priority",
    "status",
    "due_date",
    "completed_at",
    "tags",
    "order",
)

NEWEST_FIRST = "ORDER BY created_at DESC, rowid DESC"


def _row_to_task(row: sqlite3.Row) -> Task:
    """Convert a database row to a Task model."""
    tags = json.loads(row["tags"]) if row["tags"] else None
    return Task(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        description=row["description"],
        category_id=row["category_id"],
        priority=row["priority"],
        status=row["status"],
        due_date=row["due_date"],
        completed_at=row["completed_at"],
        tags=tags,
        order=row["order"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TaskStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def _all(self, sql: str, params: Iterable[Any] = ()) -> list[Task]:
        return [_row_to_task(row) for row in self._conn.execute(sql, tuple(params)).fetchall()]

    # ---- create ----

    def create(
        self,
        user_id: str,
        title: str,
        priority: str,
        status: str,
        order: int,
        now: int,
        description: Optional[str] = None,
        category_id: Optional[str] = None,
        due_date: Optional[int] = None,
        tags: Optional[list[str]] = None,
    ) -> str:
        task_id = str(uuid.uuid4())
        self._conn.execute(
            """INSERT INTO tasks
               (id, user_id, title, description, category_id, priority, status,
                due_date, completed_at, tags, "order", created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, NULL, ?, ?, ?, ?)""",
            (
                task_id, user_id, title, description, category_id, priority, status,
                due_date, json.dumps(tags) if tags is not None else None, order, now, now,
            ),
        )
        return task_id

    # ---- read ----

    def get_by_id(self, task_id: str) -> Optional[Task]:
        row = self._conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return _row_to_task(row) if row else None

    def list_by_user(self, user_id: str) -> list[Task]:
        return self._all(f"SELECT * FROM tasks WHERE user_id = ? {NEWEST_FIRST}", (user_id,))

    def list_by_user_and_status(self, user_id: str, status: str) -> list[Task]:
        return self._all(
            f"SELECT * FROM tasks WHERE user_id = ? AND status = ? {NEWEST_FIRST}",
            (user_id, status),
        )

    def list_by_user_and_category(self, user_id: str, category_id: str) -> list[Task]:
        return self._all(
            f"SELECT * FROM tasks WHERE user_id = ? AND category_id = ? {NEWEST_FIRST}",
            (user_id, category_id),
        )

    def list_by_user_and_priority(self, user_id: str, priority: str) -> list[Task]:
        return self._all(
            f"SELECT * FROM tasks WHERE user_id = ? AND priority = ? {NEWEST_FIRST}",
            (user_id, priority),
        )

    def list_with_due_dates(self, user_id: str) -> list[Task]:
        """Tasks that have a due date, soonest first."""
        return self._all(
            "SELECT * FROM tasks WHERE user_id = ? AND due_date IS NOT NULL "
            "ORDER BY due_date ASC, rowid ASC",
            (user_id,),
        )

    def list_overdue(self, user_id: str, now: int) -> list[Task]:
        """Past due and still open (not completed or archived)."""
        return self._all(
            "SELECT * FROM tasks WHERE user_id = ? AND due_date IS NOT NULL AND due_date < ? "
            "AND status NOT IN ('completed', 'archived') ORDER BY due_date ASC, rowid ASC",
            (user_id, now),
        )

    def search(self, user_id: str, query: str, status: Optional[str] = None, limit: int = 100) -> list[Task]:
        """Case-insensitive title match: every whitespace-separated term must appear."""
        terms = query.split()
        if not terms:
            return []
        clauses = ["user_id = ?"]
        params: list[Any] = [user_id]
        if status:
            clauses.append("status = ?")
            params.append(status)
        for term in terms:
            clauses.append("title LIKE ? ESCAPE '\\'")
            params.append(f"%{_escape_like(term)}%")
        params.append(limit)
        return self._all(
            f"SELECT * FROM tasks WHERE {' AND '.join(clauses)} {NEWEST_FIRST} LIMIT ?",
            params,
        )

    def list_by_category(self, category_id: str) -> list[Task]:
        return self._all(f"SELECT * FROM tasks WHERE category_id = ? {NEWEST_FIRST}", (category_id,))

    def max_order(self, user_id: str) -> Optional[int]:
        row = self._conn.execute('SELECT MAX("order") AS m FROM tasks WHERE user_id = ?', (user_id,)).fetchone()
        return row["m"]

    # ---- update ----

    def update(self, task_id: str, fields: dict[str, Any], now: int) -> None:
        """Apply a partial update. Unknown keys are a programming error."""
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update task fields: {sorted(unknown)}")

        changes = dict(fields)
        if "tags" in changes and changes["tags"] is not None:
            changes["tags"] = json.dumps(changes["tags"])
        changes["updated_at"] = now

        set_clause = ", ".join(f'"{field}" = ?' for field in changes)
        values = list(changes.values()) + [task_id]
        self._conn.execute(f"UPDATE tasks SET {set_clause} WHERE id = ?", values)

    def complete(self, task_id: str, now: int) -> None:
        self.update(task_id, {"status": "completed", "completed_at": now}, now)

    def reopen(self, task_id: str, now: int) -> None:
        self.update(task_id, {"status": "todo", "completed_at": None}, now)

    def archive(self, task_id: str, now: int) -> None:
        self.update(task_id, {"status": "archived", "completed_at": None}, now)

    def update_orders(self, updates: Iterable[tuple[str, int]], now: int) -> None:
        """Bulk order update for drag-and-drop reordering."""
        self._conn.executemany(
            'UPDATE tasks SET "order" = ?, updated_at = ? WHERE id = ?',
            [(order, now, task_id) for task_id, order in updates],
        )

    # ---- delete ----

    def delete(self, task_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        return cursor.rowcount > 0
