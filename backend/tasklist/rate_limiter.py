"""
Per-user rate limiting for mutations.

Token bucket: ``rate`` tokens per ``period`` refill continuously up to
``capacity`` (the allowed burst); each admitted call takes one token.

Bucket state is stored through ``RateLimitStore`` on the same connection
as the handler, so a rejected or rolled-back call consumes nothing.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from .db.rate_limits import RateLimitStore
from .helpers.clock import now_ms
from .helpers.constants import MINUTE_MS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimit:
    rate: int
    period: int  # ms
    capacity: Optional[int] = None

    @property
    def max_tokens(self) -> int:
        return self.capacity if self.capacity is not None else self.rate


RATE_LIMITS: dict[str, RateLimit] = {
    # Tasks
    "createTask": RateLimit(rate=30, period=MINUTE_MS, capacity=5),
    "updateTask": RateLimit(rate=50, period=MINUTE_MS, capacity=10),
    "deleteTask": RateLimit(rate=20, period=MINUTE_MS, capacity=5),
    # Categories
    "createCategory": RateLimit(rate=20, period=MINUTE_MS, capacity=3),
    "updateCategory": RateLimit(rate=30, period=MINUTE_MS, capacity=5),
    "deleteCategory": RateLimit(rate=10, period=MINUTE_MS, capacity=2),
    # Comments
    "createComment": RateLimit(rate=50, period=MINUTE_MS, capacity=10),
    "deleteComment": RateLimit(rate=30, period=MINUTE_MS, capacity=5),
    # Assistant calls are the expensive ones
    "sendMessage": RateLimit(rate=10, period=MINUTE_MS, capacity=2),
    "createThread": RateLimit(rate=5, period=MINUTE_MS, capacity=1),
}


class LimitResult(NamedTuple):
    ok: bool
    retry_after: Optional[int] = None  # ms, set when ok is False


def take_token(config: RateLimit, state: Optional[tuple[float, int]], now: int) -> tuple[LimitResult, float]:
    """
    Refill the bucket up to ``now`` and take one token.

    ``state`` is the stored (tokens, ts) or None for a fresh, full bucket.
    Returns the result and the token count left after the call.
    """
    tokens, ts = state if state else (float(config.max_tokens), now)
    elapsed = max(0, now - ts)
    tokens = min(float(config.max_tokens), tokens + elapsed * config.rate / config.period)
    tokens -= 1
    if tokens < 0:
        # time until the deficit refills; rounded up so waiting it out always succeeds
        retry_after = math.ceil(-tokens * config.period / config.rate)
        return LimitResult(False, max(1, retry_after)), tokens
    return LimitResult(True), tokens


class RateLimiter:
    def __init__(
        self,
        store: RateLimitStore,
        limits: Optional[dict[str, RateLimit]] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self._store = store
        self._limits = RATE_LIMITS if limits is None else limits
        self._clock = clock

    def limit(self, name: str, key: str) -> LimitResult:
        """Consume one token of the (name, key) bucket if available."""
        config = self._limits.get(name)
        if config is None:
            raise KeyError(f"Unknown rate limit: {name}")

        now = self._clock()
        result, tokens = take_token(config, self._store.get(name, key), now)
        if result.ok:
            self._store.put(name, key, tokens, now)
        else:
            logger.info("Rate limit hit name=%s key=%s retry_after=%sms", name, key, result.retry_after)
        return result
