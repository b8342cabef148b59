"""
Shared pytest fixtures for backend tests.
Each test gets its own SQLite file, migrated with Alembic.
"""
import pytest

from tasklist import database
from tasklist.auth import create_access_token
from tasklist.context import open_context
from tasklist.endpoints import tasks
from tasklist.helpers.constants import MINUTE_MS
from tasklist.models import TaskCreate
from tasklist.rate_limiter import RATE_LIMITS, RateLimit

# Generous buckets so tests that create many records are not throttled
UNLIMITED = {name: RateLimit(rate=10_000, period=MINUTE_MS, capacity=10_000) for name in RATE_LIMITS}

START_MS = 1_767_225_600_000  # 2026-01-01T00:00:00Z


class FakeClock:
    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeAssistant:
    """Stands in for the Anthropic client; records the history it was sent."""

    def __init__(self, reply: str = "Got it.", error: Exception = None):
        self.reply_text = reply
        self.error = error
        self.calls = []

    async def reply(self, history):
        self.calls.append(list(history))
        if self.error:
            raise self.error
        return self.reply_text


@pytest.fixture
def test_db(monkeypatch, tmp_path):
    """
    Create an isolated, fully migrated test database for each test.
    Uses a temp file (not :memory:) because every transaction opens its own connection.
    """
    db_path = str(tmp_path / "test.db")
    monkeypatch.setattr(database, "DATABASE_PATH", db_path)
    database.init_db(db_path)
    yield db_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_ctx(test_db, clock):
    """
    Open a Context for a user: ``with make_ctx("user-a") as ctx: ...``.
    Each block is one committed transaction; do not nest them.
    """
    def _make(user_id="user-a", limits=UNLIMITED):
        return open_context(user_id, path=test_db, clock=clock, limits=limits)
    return _make


@pytest.fixture
def add_task(make_ctx):
    """Create a task for a user and return its id."""
    def _add(user_id="user-a", title="Task", **kwargs):
        with make_ctx(user_id) as ctx:
            return tasks.create_task(ctx, TaskCreate(title=title, **kwargs))
    return _add


@pytest.fixture
def fake_assistant():
    return FakeAssistant()


@pytest.fixture
def app_client(test_db, fake_assistant):
    """
    Test client for the FastAPI app with the assistant replaced by a fake.
    The lifespan migrates the (already migrated) test database again, which is a no-op.
    """
    from fastapi.testclient import TestClient

    from tasklist.assistant import get_assistant
    from tasklist.main import app

    app.dependency_overrides[get_assistant] = lambda: fake_assistant
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id="user-a"):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _headers
