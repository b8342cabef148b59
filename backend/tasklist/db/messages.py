"""Chat message store: the only module touching ``messages``."""

import sqlite3
import uuid
from typing import Optional

from ..models import Message


def _row_to_message(row: sqlite3.Row) -> Message:
    return Message(
        id=row["id"],
        thread_id=row["thread_id"],
        user_id=row["user_id"],
        role=row["role"],
        content=row["content"],
        created_at=row["created_at"],
    )


class MessageStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, thread_id: str, user_id: str, role: str, content: str, now: int) -> str:
        message_id = str(uuid.uuid4())
        self._conn.execute(
            "INSERT INTO messages (id, thread_id, user_id, role, content, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (message_id, thread_id, user_id, role, content, now),
        )
        return message_id

    def get_by_id(self, message_id: str) -> Optional[Message]:
        row = self._conn.execute("SELECT * FROM messages WHERE id = ?", (message_id,)).fetchone()
        return _row_to_message(row) if row else None

    def list_by_thread(self, thread_id: str) -> list[Message]:
        """Conversation order (oldest first)."""
        rows = self._conn.execute(
            "SELECT * FROM messages WHERE thread_id = ? ORDER BY created_at ASC, rowid ASC",
            (thread_id,),
        ).fetchall()
        return [_row_to_message(row) for row in rows]

    def list_recent_by_thread(self, thread_id: str, limit: int = 50) -> list[Message]:
        """Last ``limit`` messages, still oldest first."""
        rows = self._conn.execute(
            "SELECT * FROM messages WHERE thread_id = ? ORDER BY created_at DESC, rowid DESC LIMIT ?",
            (thread_id, limit),
        ).fetchall()
        return [_row_to_message(row) for row in reversed(rows)]

    def count_by_thread(self, thread_id: str) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM messages WHERE thread_id = ?", (thread_id,)).fetchone()[0]

    def delete_by_thread(self, thread_id: str) -> int:
        cursor = self._conn.execute("DELETE FROM messages WHERE thread_id = ?", (thread_id,))
        return cursor.rowcount
