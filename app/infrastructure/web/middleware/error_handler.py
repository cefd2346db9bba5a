"""
Global error handling for the FastAPI application.
Maps domain exceptions to HTTP responses and formats everything else
consistently.
"""

import logging

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.application.dto.base_dto import ErrorResponseDTO, FieldErrorDTO, ValidationErrorResponseDTO
from app.domain.models.base import (
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    DuplicateEntityError,
    EntityNotFoundError,
    AuthorizationError,
    ConflictError,
)

logger = logging.getLogger(__name__)

# Most specific first; DomainException itself falls through to 400
DOMAIN_STATUS_CODES = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (AuthorizationError, status.HTTP_403_FORBIDDEN, "Forbidden"),
    (ConflictError, status.HTTP_409_CONFLICT, "Conflict"),
    (DuplicateEntityError, status.HTTP_400_BAD_REQUEST, "Bad Request"),
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation Error"),
    (BusinessRuleViolation, status.HTTP_400_BAD_REQUEST, "Bad Request"),
)

HTTP_ERROR_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    429: "Too Many Requests",
}


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return self.handle_exception(request, exc)

    def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        # Log the full exception with traceback
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response = ErrorResponseDTO(
            error="Internal Server Error",
            message="An unexpected error occurred",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            debug={"exception_type": type(exc).__name__} if self.debug else None,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response.to_content()
        )


def domain_error_response(exc: DomainException) -> JSONResponse:
    """Translate a domain exception into its HTTP response."""
    status_code, title = status.HTTP_400_BAD_REQUEST, "Bad Request"
    for exc_type, code, name in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            status_code, title = code, name
            break

    content = ErrorResponseDTO(
        error=title,
        message=exc.message,
        code=exc.code,
        status_code=status_code,
        field=getattr(exc, "field", None) if isinstance(exc, ValidationError) else None,
    )
    return JSONResponse(status_code=status_code, content=content.to_content())


async def handle_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
    if isinstance(exc, (AuthorizationError, EntityNotFoundError)):
        logger.info(f"{request.method} {request.url.path}: {exc.code}: {exc.message}")
    return domain_error_response(exc)


async def handle_request_validation(request: Request, exc: Exception) -> JSONResponse:
    """One entry per failing field, reported as 400."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append(FieldErrorDTO(
            field=".".join(location) or "body",
            message=error.get("msg", "Invalid value"),
        ))

    message = errors[0].message if len(errors) == 1 else f"{len(errors)} fields are invalid"
    content = ValidationErrorResponseDTO(
        error="Validation Error",
        message=message,
        status_code=status.HTTP_400_BAD_REQUEST,
        errors=errors,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content.to_content())


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"The path {request.url.path} was not found"
    content = ErrorResponseDTO(
        error=HTTP_ERROR_TITLES.get(exc.status_code, "Error"),
        message=message,
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=content.to_content(),
        headers=getattr(exc, "headers", None)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, handle_domain_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(PydanticValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
