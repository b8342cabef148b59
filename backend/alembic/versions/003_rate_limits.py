"""Add rate_limits table for per-user operation buckets

Revision ID: 003
Revises: 002
Create Date: 2026-10-06

"""
from typing import Sequence, Union

from alembic import op
from sqlalchemy import text

revision: str = '003'
down_revision: Union[str, None] = '002'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS rate_limits (
            name TEXT NOT NULL,
            key TEXT NOT NULL,
            value REAL NOT NULL,
            ts INTEGER NOT NULL,
            PRIMARY KEY (name, key)
        )
    """))


def downgrade() -> None:
    conn = op.get_bind()
    conn.execute(text("DROP TABLE IF EXISTS rate_limits"))
