"""
Rate limiting package for FastAPI applications.
"""

from .limiter import (
    RateLimit, RateLimitStatus, InMemoryRateLimiter,
    build_rate_limits, user_key, ip_key
)
from .dependencies import (
    create_rate_limit_dependency, create_rate_limit, clock_rate_limit
)

__all__ = [
    # Core classes
    'RateLimit',
    'RateLimitStatus',
    'InMemoryRateLimiter',
    'build_rate_limits',

    # Key functions
    'user_key',
    'ip_key',

    # Dependencies
    'create_rate_limit_dependency',
    'create_rate_limit',
    'clock_rate_limit',
]
