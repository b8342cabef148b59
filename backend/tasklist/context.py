"""
Per-request context passed explicitly to every handler.

Holds the caller identity, the stores bound to the request's transaction,
the rate limiter and the clock. Handlers get everything through it; there
is no module-level "current user" or "current transaction".
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from .database import transaction
from .db import Repositories
from .errors import RateLimited, Unauthenticated
from .helpers.clock import now_ms
from .rate_limiter import RateLimit, RateLimiter


@dataclass
class Context:
    user_id: Optional[str]
    repos: Repositories
    limiter: RateLimiter
    clock: Callable[[], int] = field(default=now_ms)

    def now(self) -> int:
        return self.clock()

    def require_user(self) -> str:
        """Step 1 of every handler: resolve the caller or fail."""
        if not self.user_id:
            raise Unauthenticated()
        return self.user_id

    def rate_limit(self, name: str, user_id: str) -> None:
        """Step 2 for limited mutations: consume a token or fail with retry-after."""
        status = self.limiter.limit(name, user_id)
        if not status.ok:
            raise RateLimited(status.retry_after)


@contextmanager
def open_context(
    user_id: Optional[str],
    path: Optional[str] = None,
    clock: Callable[[], int] = now_ms,
    limits: Optional[dict[str, RateLimit]] = None,
) -> Iterator[Context]:
    """A Context whose stores share one transaction (commit on success)."""
    with transaction(path) as conn:
        repos = Repositories(conn)
        yield Context(
            user_id=user_id,
            repos=repos,
            limiter=RateLimiter(repos.rate_limits, limits=limits, clock=clock),
            clock=clock,
        )
