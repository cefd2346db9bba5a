"""
Rate limiting FastAPI dependencies.
The limiter lives on app.state; when it is absent limiting is disabled.
"""

from typing import Optional, Callable

from fastapi import Request, HTTPException, status, Depends

from app.infrastructure.auth.dependencies import get_current_user_id
from .limiter import RateLimit, RateLimitStatus, user_key


def create_rate_limit_dependency(
    limit_name: str = 'default',
    rate_limit: Optional[RateLimit] = None,
    key_func: Callable[[Request], str] = user_key,
    error_message: str = "Rate limit exceeded"
):
    """
    Create a FastAPI dependency for rate limiting an authenticated endpoint.

    Usage:
        create_limit = create_rate_limit_dependency('create')

        @router.post("/gigs", dependencies=[Depends(create_limit)])
        async def create_gig(...):
            ...
    """
    async def rate_limit_dependency(
        request: Request,
        user_id: str = Depends(get_current_user_id)
    ) -> Optional[RateLimitStatus]:
        limiter = getattr(request.app.state, 'rate_limiter', None)
        if limiter is None:
            return None

        limits = request.app.state.rate_limits
        limit_config = rate_limit or limits.get(limit_name, limits['default'])

        request.state.user_id = user_id
        status_result = limiter.check_rate_limit(request, limit_config, key_func)

        if status_result.exceeded:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=error_message,
                headers=status_result.to_headers()
            )

        return status_result

    return rate_limit_dependency


create_rate_limit = create_rate_limit_dependency(
    'create',
    error_message="Too many create operations. Please slow down."
)

clock_rate_limit = create_rate_limit_dependency(
    'clock',
    error_message="Too many clock requests. Please wait before trying again."
)
