"""User preference store: one row per user in ``user_preferences``."""

import sqlite3
import uuid
from typing import Any, Optional

from ..helpers.constants import DEFAULT_REMINDER_HOURS, DEFAULT_THEME, DEFAULT_VIEW
from ..models import UserPreferences

BOOL_FIELDS = ("compact_mode", "email_notifications", "due_date_reminders")

DEFAULTS: dict[str, Any] = {
    "default_view": DEFAULT_VIEW,
    "default_filter": None,
    "default_sort": None,
    "theme": DEFAULT_THEME,
    "compact_mode": False,
    "email_notifications": True,
    "due_date_reminders": True,
    "reminder_hours_before": DEFAULT_REMINDER_HOURS,
}


def _row_to_preferences(row: sqlite3.Row) -> UserPreferences:
    return UserPreferences(
        id=row["id"],
        user_id=row["user_id"],
        default_view=row["default_view"],
        default_filter=row["default_filter"],
        default_sort=row["default_sort"],
        theme=row["theme"],
        compact_mode=bool(row["compact_mode"]),
        email_notifications=bool(row["email_notifications"]),
        due_date_reminders=bool(row["due_date_reminders"]),
        reminder_hours_before=row["reminder_hours_before"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _to_db(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: int(v) if k in BOOL_FIELDS and v is not None else v for k, v in fields.items()}


class PreferenceStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def get_by_user(self, user_id: str) -> Optional[UserPreferences]:
        row = self._conn.execute("SELECT * FROM user_preferences WHERE user_id = ?", (user_id,)).fetchone()
        return _row_to_preferences(row) if row else None

    def create(self, user_id: str, fields: dict[str, Any], now: int) -> str:
        """Insert a row; anything not in ``fields`` gets its default."""
        values = _to_db({**DEFAULTS, **fields})
        pref_id = str(uuid.uuid4())
        columns = ["id", "user_id", *values.keys(), "created_at", "updated_at"]
        params = [pref_id, user_id, *values.values(), now, now]
        self._conn.execute(
            f"INSERT INTO user_preferences ({', '.join(columns)}) VALUES ({', '.join('?' for _ in columns)})",
            params,
        )
        return pref_id

    def update(self, pref_id: str, fields: dict[str, Any], now: int) -> None:
        unknown = set(fields) - set(DEFAULTS)
        if unknown:
            raise ValueError(f"Cannot update preference fields: {sorted(unknown)}")
        changes = _to_db(fields)
        changes["updated_at"] = now
        set_clause = ", ".join(f"{field} = ?" for field in changes)
        self._conn.execute(
            f"UPDATE user_preferences SET {set_clause} WHERE id = ?",
            list(changes.values()) + [pref_id],
        )

    def upsert(self, user_id: str, fields: dict[str, Any], now: int) -> str:
        existing = self.get_by_user(user_id)
        if existing:
            self.update(existing.id, fields, now)
            return existing.id
        return self.create(user_id, fields, now)

    def count_by_user(self, user_id: str) -> int:
        return self._conn.execute(
            "SELECT COUNT(*) FROM user_preferences WHERE user_id = ?", (user_id,)
        ).fetchone()[0]
