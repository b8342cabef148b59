"""Task comment store: the only module touching ``task_comments``."""

import sqlite3
import uuid
from typing import Optional

from ..models import TaskComment


def _row_to_comment(row: sqlite3.Row) -> TaskComment:
    return TaskComment(
        id=row["id"],
        task_id=row["task_id"],
        user_id=row["user_id"],
        content=row["content"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class CommentStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, task_id: str, user_id: str, content: str, now: int) -> str:
        comment_id = str(uuid.uuid4())
        self._conn.execute(
            "INSERT INTO task_comments (id, task_id, user_id, content, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (comment_id, task_id, user_id, content, now, now),
        )
        return comment_id

    def get_by_id(self, comment_id: str) -> Optional[TaskComment]:
        row = self._conn.execute("SELECT * FROM task_comments WHERE id = ?", (comment_id,)).fetchone()
        return _row_to_comment(row) if row else None

    def list_by_task(self, task_id: str) -> list[TaskComment]:
        """Comments on a task, newest first."""
        rows = self._conn.execute(
            "SELECT * FROM task_comments WHERE task_id = ? ORDER BY created_at DESC, rowid DESC",
            (task_id,),
        ).fetchall()
        return [_row_to_comment(row) for row in rows]

    def count_by_user(self, user_id: str) -> int:
        return self._conn.execute(
            "SELECT COUNT(*) FROM task_comments WHERE user_id = ?", (user_id,)
        ).fetchone()[0]

    def update(self, comment_id: str, content: str, now: int) -> None:
        self._conn.execute(
            "UPDATE task_comments SET content = ?, updated_at = ? WHERE id = ?",
            (content, now, comment_id),
        )

    def delete(self, comment_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM task_comments WHERE id = ?", (comment_id,))
        return cursor.rowcount > 0

    def delete_by_task(self, task_id: str) -> int:
        cursor = self._conn.execute("DELETE FROM task_comments WHERE task_id = ?", (task_id,))
        return cursor.rowcount
