"""
Task activity store.

Append-only audit log of task changes; the only module touching
``task_activity``. Records leave only when their task is deleted.
"""

import json
import sqlite3
import uuid
from typing import Optional

from pydantic import BaseModel

from ..models import (
    CommentedMetadata,
    DeletedMetadata,
    StatusChange,
    TaskActivity,
    TaskChanges,
    activity_adapter,
)


def _row_to_activity(row: sqlite3.Row) -> TaskActivity:
    data = {
        "id": row["id"],
        "task_id": row["task_id"],
        "user_id": row["user_id"],
        "action": row["action"],
        "created_at": row["created_at"],
    }
    if row["changes"]:
        data["changes"] = json.loads(row["changes"])
    if row["metadata"]:
        data["metadata"] = json.loads(row["metadata"])
    return activity_adapter.validate_python(data)


def _dump(payload: Optional[BaseModel]) -> Optional[str]:
    if payload is None:
        return None
    return payload.model_dump_json(exclude_none=True)


class ActivityStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(
        self,
        task_id: str,
        user_id: str,
        action: str,
        now: int,
        changes: Optional[BaseModel] = None,
        metadata: Optional[BaseModel] = None,
    ) -> str:
        activity_id = str(uuid.uuid4())
        self._conn.execute(
            "INSERT INTO task_activity (id, task_id, user_id, action, changes, metadata, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (activity_id, task_id, user_id, action, _dump(changes), _dump(metadata), now),
        )
        return activity_id

    def log_created(self, task_id: str, user_id: str, now: int) -> str:
        return self.create(task_id, user_id, "created", now)

    def log_updated(self, task_id: str, user_id: str, changes: TaskChanges, now: int) -> str:
        return self.create(task_id, user_id, "updated", now, changes=changes)

    def log_status_changed(self, task_id: str, user_id: str, old_status: str, new_status: str, now: int) -> str:
        change = StatusChange(old_status=old_status, new_status=new_status)
        return self.create(task_id, user_id, "status_changed", now, changes=change)

    def log_completed(self, task_id: str, user_id: str, now: int) -> str:
        return self.create(task_id, user_id, "completed", now)

    def log_deleted(self, task_id: str, user_id: str, title: str, now: int) -> str:
        return self.create(task_id, user_id, "deleted", now, metadata=DeletedMetadata(title=title))

    def log_commented(self, task_id: str, user_id: str, comment_id: str, now: int) -> str:
        return self.create(task_id, user_id, "commented", now, metadata=CommentedMetadata(comment_id=comment_id))

    def list_by_task(self, task_id: str) -> list[TaskActivity]:
        """History of one task, newest first."""
        rows = self._conn.execute(
            "SELECT * FROM task_activity WHERE task_id = ? ORDER BY created_at DESC, rowid DESC",
            (task_id,),
        ).fetchall()
        return [_row_to_activity(row) for row in rows]

    def list_recent_by_user(self, user_id: str, limit: int = 20) -> list[TaskActivity]:
        # LIMIT -1 means no limit in SQLite
        rows = self._conn.execute(
            "SELECT * FROM task_activity WHERE user_id = ? ORDER BY created_at DESC, rowid DESC LIMIT ?",
            (user_id, limit),
        ).fetchall()
        return [_row_to_activity(row) for row in rows]

    def count_by_user_since(self, user_id: str, since: int) -> int:
        return self._conn.execute(
            "SELECT COUNT(*) FROM task_activity WHERE user_id = ? AND created_at >= ?",
            (user_id, since),
        ).fetchone()[0]

    def count_by_user(self, user_id: str) -> int:
        return self._conn.execute(
            "SELECT COUNT(*) FROM task_activity WHERE user_id = ?", (user_id,)
        ).fetchone()[0]

    def delete_by_task(self, task_id: str) -> int:
        cursor = self._conn.execute("DELETE FROM task_activity WHERE task_id = ?", (task_id,))
        return cursor.rowcount
