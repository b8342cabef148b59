"""Category store: the only module touching the ``categories`` table."""

import sqlite3
import uuid
from typing import Any, Iterable, Optional

from ..models import Category

UPDATABLE_FIELDS = ("name", "color", "icon", "order")


def _row_to_category(row: sqlite3.Row) -> Category:
    return Category(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        color=row["color"],
        icon=row["icon"],
        order=row["order"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class CategoryStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, user_id: str, name: str, color: str, order: int, now: int, icon: Optional[str] = None) -> str:
        category_id = str(uuid.uuid4())
        self._conn.execute(
            """INSERT INTO categories (id, user_id, name, color, icon, "order", created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (category_id, user_id, name, color, icon, order, now, now),
        )
        return category_id

    def get_by_id(self, category_id: str) -> Optional[Category]:
        row = self._conn.execute("SELECT * FROM categories WHERE id = ?", (category_id,)).fetchone()
        return _row_to_category(row) if row else None

    def list_by_user(self, user_id: str) -> list[Category]:
        """All categories of a user in their custom order."""
        rows = self._conn.execute(
            'SELECT * FROM categories WHERE user_id = ? ORDER BY "order" ASC, rowid ASC',
            (user_id,),
        ).fetchall()
        return [_row_to_category(row) for row in rows]

    def next_order(self, user_id: str) -> int:
        row = self._conn.execute(
            'SELECT MAX("order") AS m FROM categories WHERE user_id = ?', (user_id,)
        ).fetchone()
        return 0 if row["m"] is None else row["m"] + 1

    def count_by_user(self, user_id: str) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM categories WHERE user_id = ?", (user_id,)).fetchone()[0]

    def update(self, category_id: str, fields: dict[str, Any], now: int) -> None:
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update category fields: {sorted(unknown)}")
        changes = dict(fields)
        changes["updated_at"] = now
        set_clause = ", ".join(f'"{field}" = ?' for field in changes)
        self._conn.execute(
            f"UPDATE categories SET {set_clause} WHERE id = ?",
            list(changes.values()) + [category_id],
        )

    def update_orders(self, updates: Iterable[tuple[str, int]], now: int) -> None:
        self._conn.executemany(
            'UPDATE categories SET "order" = ?, updated_at = ? WHERE id = ?',
            [(order, now, category_id) for category_id, order in updates],
        )

    def delete(self, category_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        return cursor.rowcount > 0
