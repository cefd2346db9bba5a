"""
Health check router for monitoring.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.application.dto.base_dto import HealthCheckResponseDTO
from app.infrastructure.db.database import Database, get_database
from app.infrastructure.email import EmailService
from app.infrastructure.web.dependencies import get_email_service, SettingsDep

router = APIRouter()


@router.get("", response_model=HealthCheckResponseDTO)
async def health_check(
    settings: SettingsDep,
    database: Annotated[Database, Depends(get_database)]
):
    """Service status with a database round trip."""
    database_status = "healthy" if database.health_check() else "unhealthy"

    return HealthCheckResponseDTO(
        status="healthy" if database_status == "healthy" else "degraded",
        version=settings.api_version,
        environment=settings.environment,
        dependencies={"database": database_status},
    )


@router.get("/email", response_model=HealthCheckResponseDTO)
async def email_health(
    settings: SettingsDep,
    email_service: Annotated[EmailService, Depends(get_email_service)]
):
    """Whether an email transport is configured; unconfigured emails are only logged."""
    transport = email_service.transport
    return HealthCheckResponseDTO(
        status="healthy" if transport else "not_configured",
        version=settings.api_version,
        environment=settings.environment,
        dependencies={"email": transport or "log-only"},
    )
