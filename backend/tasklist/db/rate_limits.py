"""Persisted rate-limiter state, one row per (limit name, key)."""

import sqlite3
from typing import Optional


class RateLimitStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def get(self, name: str, key: str) -> Optional[tuple[float, int]]:
        """Return (value, ts) or None if the bucket was never used."""
        row = self._conn.execute(
            "SELECT value, ts FROM rate_limits WHERE name = ? AND key = ?", (name, key)
        ).fetchone()
        return (row["value"], row["ts"]) if row else None

    def put(self, name: str, key: str, value: float, ts: int) -> None:
        self._conn.execute(
            "INSERT INTO rate_limits (name, key, value, ts) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(name, key) DO UPDATE SET value = excluded.value, ts = excluded.ts",
            (name, key, value, ts),
        )
