"""
In-memory fixed window rate limiting.
"""

import time
import logging
import threading
from typing import Optional, Dict, Callable, Tuple
from dataclasses import dataclass

from fastapi import Request

from app.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class RateLimit:
    """Rate limit configuration."""
    requests: int  # Number of requests allowed
    window: int    # Time window in seconds


@dataclass
class RateLimitStatus:
    """Current rate limit status."""
    limit: int
    remaining: int
    reset_time: int
    retry_after: Optional[int] = None

    @property
    def exceeded(self) -> bool:
        return self.retry_after is not None

    def to_headers(self) -> Dict[str, str]:
        """Convert to HTTP headers."""
        headers = {
            'X-RateLimit-Limit': str(self.limit),
            'X-RateLimit-Remaining': str(self.remaining),
            'X-RateLimit-Reset': str(self.reset_time)
        }
        if self.retry_after is not None:
            headers['Retry-After'] = str(self.retry_after)
        return headers


class InMemoryRateLimiter:
    """
    Fixed window counters kept in process memory.
    Counts are per worker process and reset on restart.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._windows: Dict[str, Tuple[int, int]] = {}  # key -> (reset_time, count)
        self._lock = threading.Lock()

    def is_allowed(self, key: str, rate_limit: RateLimit) -> RateLimitStatus:
        """Count a request against `key` and report whether it may proceed."""
        current_time = int(self._clock())
        window_start = current_time - (current_time % rate_limit.window)

        with self._lock:
            reset_time, count = self._windows.get(key, (0, 0))
            if reset_time <= current_time:
                reset_time, count = window_start + rate_limit.window, 0

            if count >= rate_limit.requests:
                return RateLimitStatus(
                    limit=rate_limit.requests,
                    remaining=0,
                    reset_time=reset_time,
                    retry_after=max(reset_time - current_time, 1)
                )

            count += 1
            self._windows[key] = (reset_time, count)

        return RateLimitStatus(
            limit=rate_limit.requests,
            remaining=rate_limit.requests - count,
            reset_time=reset_time
        )

    def check_rate_limit(
        self,
        request: Request,
        rate_limit: RateLimit,
        key_func: Optional[Callable[[Request], str]] = None
    ) -> RateLimitStatus:
        """Check if request is within rate limit."""
        key = key_func(request) if key_func else ip_key(request)
        return self.is_allowed(key, rate_limit)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


def ip_key(request: Request) -> str:
    """Generate rate limit key based on client IP."""
    client_ip = request.client.host if request.client else 'unknown'
    return f"rate_limit:ip:{client_ip}:{request.url.path}"


def user_key(request: Request) -> str:
    """Generate rate limit key based on authenticated user."""
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"rate_limit:user:{user_id}:{request.url.path}"

    # Fallback to IP-based key
    return ip_key(request)


def build_rate_limits(settings: Settings) -> Dict[str, RateLimit]:
    """Named limits; `default` follows the configured request budget."""
    return {
        'default': RateLimit(requests=settings.rate_limit_requests, window=settings.rate_limit_period),
        'create': RateLimit(requests=20, window=60),
        'clock': RateLimit(requests=10, window=60),
    }
