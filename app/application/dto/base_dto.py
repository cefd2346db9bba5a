"""
Shared DTO bases for the marketplace API.
Request models reject unknown fields; enum members are exposed as their values.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, date
from pydantic import BaseModel, Field, ConfigDict, validator


class BaseDTO(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Body or query parameters sent by a client."""


class ResponseDTO(BaseDTO):
    """Record returned to a client; identity and timestamps are optional."""

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateRequestDTO(RequestDTO):
    pass


class UpdateRequestDTO(RequestDTO):
    """Partial update; only the fields the client sent are applied."""

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class DateRangeRequestDTO(RequestDTO):
    """Inclusive calendar-day window used by shift listings."""

    date_from: Optional[date] = Field(default=None, description="First day, inclusive")
    date_to: Optional[date] = Field(default=None, description="Last day, inclusive")

    @validator('date_to')
    def check_window(cls, v, values):
        start = values.get('date_from')
        if v and start and v < start:
            raise ValueError('date_to cannot be earlier than date_from')
        return v


class HealthCheckResponseDTO(BaseDTO):
    status: str = Field(description="healthy, degraded or not_configured")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    version: Optional[str] = None
    environment: Optional[str] = None
    dependencies: Optional[Dict[str, str]] = Field(default=None, description="Status per backing service")


class ErrorResponseDTO(BaseDTO):
    """Body of every non-2xx response produced by the error handler."""

    error: str = Field(description="HTTP reason phrase, e.g. Not Found")
    message: str = Field(description="Human readable explanation")
    status_code: int
    code: Optional[str] = Field(default=None, description="Domain error code, e.g. ENTITY_NOT_FOUND")
    field: Optional[str] = Field(default=None, description="Offending field, for validation errors")
    debug: Optional[Dict[str, Any]] = None

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class FieldErrorDTO(BaseDTO):
    field: str
    message: str


class ValidationErrorResponseDTO(ErrorResponseDTO):
    errors: List[FieldErrorDTO] = Field(description="One entry per failing field")
