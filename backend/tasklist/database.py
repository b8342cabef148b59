import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from alembic import command
from alembic.config import Config

from .config import get_settings

logger = logging.getLogger(__name__)

DATABASE_PATH = get_settings().database_path

ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


@contextmanager
def get_db(path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """Context manager for database connections (autocommit; see transaction())."""
    conn = sqlite3.connect(
        path or DATABASE_PATH,
        isolation_level=None,
        check_same_thread=False,
        timeout=30.0,
    )
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """
    One handler invocation = one transaction.
    Commits when the block exits normally, rolls back on any exception.
    """
    with get_db(path) as conn:
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")


def alembic_config(path: Optional[str] = None) -> Config:
    # Built in code rather than from alembic.ini so fileConfig() never
    # replaces the application's logging setup
    cfg = Config()
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    cfg.set_main_option("sqlalchemy.url", f"sqlite:///{path or DATABASE_PATH}")
    return cfg


def init_db(path: Optional[str] = None) -> None:
    """Initialize database by running Alembic migrations."""
    target = path or DATABASE_PATH
    logger.info("Migrating database %s", target)
    command.upgrade(alembic_config(target), "head")
