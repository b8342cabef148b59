"""Chat thread store: the only module touching ``threads``."""

import sqlite3
import uuid
from typing import Any, Optional

from ..models import Thread


def _row_to_thread(row: sqlite3.Row) -> Thread:
    return Thread(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        status=row["status"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ThreadStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, user_id: str, now: int, title: Optional[str] = None) -> str:
        thread_id = str(uuid.uuid4())
        self._conn.execute(
            "INSERT INTO threads (id, user_id, title, status, created_at, updated_at) "
            "VALUES (?, ?, ?, 'active', ?, ?)",
            (thread_id, user_id, title, now, now),
        )
        return thread_id

    def get_by_id(self, thread_id: str) -> Optional[Thread]:
        row = self._conn.execute("SELECT * FROM threads WHERE id = ?", (thread_id,)).fetchone()
        return _row_to_thread(row) if row else None

    def list_by_user(self, user_id: str, status: Optional[str] = None) -> list[Thread]:
        """Threads with the most recent conversation first."""
        if status:
            rows = self._conn.execute(
                "SELECT * FROM threads WHERE user_id = ? AND status = ? ORDER BY updated_at DESC, rowid DESC",
                (user_id, status),
            ).fetchall()
        else:
            rows = self._conn.execute(
                "SELECT * FROM threads WHERE user_id = ? ORDER BY updated_at DESC, rowid DESC",
                (user_id,),
            ).fetchall()
        return [_row_to_thread(row) for row in rows]

    def update(self, thread_id: str, fields: dict[str, Any], now: int) -> None:
        unknown = set(fields) - {"title", "status"}
        if unknown:
            raise ValueError(f"Cannot update thread fields: {sorted(unknown)}")
        changes = {**fields, "updated_at": now}
        set_clause = ", ".join(f"{field} = ?" for field in changes)
        self._conn.execute(
            f"UPDATE threads SET {set_clause} WHERE id = ?",
            list(changes.values()) + [thread_id],
        )

    def touch(self, thread_id: str, now: int) -> None:
        self._conn.execute("UPDATE threads SET updated_at = ? WHERE id = ?", (now, thread_id))

    def delete(self, thread_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM threads WHERE id = ?", (thread_id,))
        return cursor.rowcount > 0
