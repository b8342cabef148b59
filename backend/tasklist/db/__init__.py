"""
Data access layer.

Each store owns exactly one table; nothing above this package issues SQL
against entity tables. Handlers receive the stores bundled in a
``Repositories`` bound to the request's transaction.
"""

import sqlite3

from .activity import ActivityStore
from .categories import CategoryStore
from .comments import CommentStore
from .messages import MessageStore
from .preferences import PreferenceStore
from .rate_limits import RateLimitStore
from .tasks import TaskStore
from .threads import ThreadStore

__all__ = [
    "ActivityStore",
    "CategoryStore",
    "CommentStore",
    "MessageStore",
    "PreferenceStore",
    "RateLimitStore",
    "Repositories",
    "TaskStore",
    "ThreadStore",
]


class Repositories:
    def __init__(self, conn: sqlite3.Connection):
        self.tasks = TaskStore(conn)
        self.categories = CategoryStore(conn)
        self.comments = CommentStore(conn)
        self.activity = ActivityStore(conn)
        self.preferences = PreferenceStore(conn)
        self.threads = ThreadStore(conn)
        self.messages = MessageStore(conn)
        self.rate_limits = RateLimitStore(conn)
