"""
Request guard middleware: body size limit and security response headers.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestSizeMiddleware(BaseHTTPMiddleware):
    """Middleware to limit request size."""

    def __init__(self, app, max_size: int = 1024 * 1024):  # 1MB default
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next) -> Response:
        """Check request size and reject if too large."""
        content_length = request.headers.get('content-length')

        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                return self._reject(status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header")
            if size > self.max_size:
                logger.warning(f"Rejected {size} byte request to {request.url.path}")
                return self._reject(
                    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    f"Request size {size} exceeds maximum allowed size {self.max_size}"
                )

        return await call_next(request)

    @staticmethod
    def _reject(status_code: int, message: str) -> JSONResponse:
        error = "Payload Too Large" if status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE else "Bad Request"
        return JSONResponse(
            status_code=status_code,
            content={"error": error, "message": message, "status_code": status_code}
        )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds browser hardening headers to every API response.
    HSTS is only sent when the API is served over HTTPS in production.
    """

    BASE_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Cache-Control": "no-store",
    }

    def __init__(self, app, enable_hsts: bool = False):
        super().__init__(app)
        self.headers = dict(self.BASE_HEADERS)
        if enable_hsts:
            self.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response
