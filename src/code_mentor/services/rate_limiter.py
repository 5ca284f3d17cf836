"""Per-client sliding-window admission control.

Each client keeps a deque of the timestamps of its admitted requests. On every
check, timestamps older than the window are dropped; the request is admitted
while fewer than ``max_requests`` remain. Denied requests are not recorded,
so a client hammering the endpoint is let back in as soon as its oldest
admission ages out. Windows of clients that go quiet are reclaimed by
``purge_idle``.
"""

import logging
import threading
import time
from collections import deque
from collections.abc import Callable

from code_mentor.config import settings
from code_mentor.entities import RateLimitDecision

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """In-memory, per-process, per-client sliding window rate limiter.

    Example:
        ```python
        limiter = SlidingWindowRateLimiter.create(max_requests=10, window_seconds=10)
        decision = limiter.admit("203.0.113.7")
        if not decision.allowed:
            ...  # answer 429, retry after decision.retry_after seconds
        ```
    """

    def __init__(
        self,
        max_requests: int | None = None,
        window_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_requests: Admissions per window per client. Defaults to settings.
            window_seconds: Trailing window length. Defaults to settings.
            clock: Monotonic time source, replaceable in tests.
        """
        self._max_requests = settings.rate_limit_max if max_requests is None else max_requests
        self._window = settings.rate_limit_window if window_seconds is None else window_seconds
        if self._max_requests < 1:
            raise ValueError(f"max_requests must be at least 1, got {self._max_requests}")
        if self._window <= 0:
            raise ValueError(f"window_seconds must be positive, got {self._window}")
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        max_requests: int | None = None,
        window_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "SlidingWindowRateLimiter":
        """Factory method to create SlidingWindowRateLimiter with defaults.

        Args:
            max_requests: Ceiling per window. If None, uses settings.
            window_seconds: Window in seconds. If None, uses settings.
            clock: Time source. Defaults to time.monotonic.

        Returns:
            Configured SlidingWindowRateLimiter
        """
        return cls(max_requests=max_requests, window_seconds=window_seconds, clock=clock)

    def admit(self, client_id: str) -> RateLimitDecision:
        """Check and record one request from a client.

        Args:
            client_id: The client's network address

        Returns:
            RateLimitDecision describing whether the request may proceed
        """
        now = self._clock()
        window_start = now - self._window

        with self._lock:
            hits = self._hits.get(client_id)
            if hits is None:
                hits = deque()
                self._hits[client_id] = hits

            while hits and hits[0] <= window_start:
                hits.popleft()

            allowed = len(hits) < self._max_requests
            if allowed:
                hits.append(now)

            remaining = self._max_requests - len(hits)
            reset_after = hits[0] + self._window - now

        if not allowed:
            logger.warning("Rate limit exceeded for %s (retry in %.1fs)", client_id, reset_after)

        return RateLimitDecision(
            allowed=allowed,
            limit=self._max_requests,
            remaining=remaining,
            reset_after=reset_after,
        )

    def purge_idle(self) -> int:
        """Forget clients with no admissions inside the window.

        Returns:
            Number of client windows dropped
        """
        window_start = self._clock() - self._window
        with self._lock:
            idle = [client for client, hits in self._hits.items() if not hits or hits[-1] <= window_start]
            for client in idle:
                del self._hits[client]
        return len(idle)

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._hits)
