"""Errors raised by the business layer.

Every error maps to one HTTP status; main.py renders them as
``{"detail": message}``. Nothing here is retried by the server.
"""

import math
from typing import Optional


class TasklistError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(TasklistError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotAuthorized(TasklistError):
    status_code = 403


class NotFound(TasklistError):
    status_code = 404


class InvalidInput(TasklistError):
    status_code = 400


class RateLimited(TasklistError):
    status_code = 429

    def __init__(self, retry_after_ms: int, message: Optional[str] = None):
        super().__init__(message or f"Rate limit exceeded. Retry after {retry_after_ms}ms")
        self.retry_after_ms = retry_after_ms

    @property
    def retry_after_seconds(self) -> int:
        return max(1, math.ceil(self.retry_after_ms / 1000))


class AssistantUnavailable(TasklistError):
    status_code = 503
