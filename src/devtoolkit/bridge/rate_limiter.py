"""
Per-category request budget for host commands.
"""

import time
import threading
import logging
from typing import Dict, Tuple, Optional, Callable

from .exceptions import RateLimitExceeded
from ..config.settings import get_section

logger = logging.getLogger(__name__)

# Rate limit categories
DOMAIN = "domain"
HTTP = "http"


class RateLimiter:
    """
    Fixed-window rate limiter keyed by command category.

    Args:
        max_requests: Requests allowed per window
        window_seconds: Window length in seconds
        clock: Monotonic time source, replaceable in tests
    """

    def __init__(self, max_requests: int = 60, window_seconds: int = 60,
                 clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def check(self, category: str) -> None:
        """Record a request for the category or raise RateLimitExceeded."""
        with self._lock:
            now = self._clock()
            started, count = self._buckets.get(category, (now, 0))

            if now - started > self.window_seconds:
                self._buckets[category] = (now, 1)
                return

            if count >= self.max_requests:
                remaining = self.window_seconds - int(now - started)
                logger.warning("Rate limit hit for category '%s'", category)
                raise RateLimitExceeded(
                    f"Rate limit exceeded for '{category}'. {self.max_requests} requests allowed "
                    f"per {self.window_seconds} seconds. Try again in {remaining} seconds."
                )

            self._buckets[category] = (started, count + 1)

    def get_usage(self, category: str) -> Optional[Tuple[int, int]]:
        """Return (used, allowed) for a category, None if never seen."""
        with self._lock:
            if category not in self._buckets:
                return None
            started, count = self._buckets[category]
            if self._clock() - started > self.window_seconds:
                return 0, self.max_requests
            return count, self.max_requests

    def cleanup(self) -> None:
        """Drop buckets whose window has expired."""
        with self._lock:
            now = self._clock()
            self._buckets = {
                category: bucket for category, bucket in self._buckets.items()
                if now - bucket[0] <= self.window_seconds
            }

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()


_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Shared limiter configured from the 'bridge.rate_limit' section."""
    global _rate_limiter
    if _rate_limiter is None:
        limits = get_section('bridge').get('rate_limit', {})
        _rate_limiter = RateLimiter(
            max_requests=int(limits.get('max_requests', 60)),
            window_seconds=int(limits.get('window_seconds', 60)),
        )
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Forget the shared limiter so the next call rereads the config."""
    global _rate_limiter
    _rate_limiter = None
