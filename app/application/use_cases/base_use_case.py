"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar, Generic, List
from datetime import datetime

from app.domain.events.base import DomainEvent, EventDispatcher
from app.domain.models.base import AuthorizationError
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.access_policy import AccessPolicy

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Domain exceptions propagate to the caller; the web layer maps them to
    HTTP responses.
    """

    def __init__(self, unit_of_work: UnitOfWork):
        self.uow = unit_of_work
        self.current_user_id: Optional[str] = None
        self.current_user_email: Optional[str] = None
        self.current_user_roles: List[str] = []
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    def set_current_user(
        self,
        user_id: str,
        roles: Optional[List[str]] = None,
        email: Optional[str] = None
    ) -> "BaseUseCase[T, R]":
        """Set the current user context."""
        self.current_user_id = user_id
        self.current_user_roles = list(roles or [])
        self.current_user_email = email
        return self

    async def execute(self, request: T) -> R:
        """
        Execute the use case with validation and timing.
        """
        self.execution_start = datetime.utcnow()
        try:
            await self._validate_request(request)
            return await self._execute_business_logic(request)
        finally:
            self.execution_end = datetime.utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()
            logger.debug(f"{self.__class__.__name__} finished in {execution_time:.3f}s")

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if hasattr(request, 'validate') and not hasattr(request, 'model_validate'):
            request.validate()

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass

    @property
    def access(self) -> AccessPolicy:
        return AccessPolicy(self.uow.companies, self.uow.company_links, self.uow.businesses)

    def _require_user(self) -> str:
        if not self.current_user_id:
            raise AuthorizationError("User authentication required")
        return self.current_user_id

    def _require_role(self, required_role: str) -> None:
        """Check if user has required role."""
        if required_role not in self.current_user_roles:
            raise AuthorizationError(f"Role '{required_role}' required")


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """

    async def _execute_business_logic(self, request: T) -> R:
        return await self._execute_query(request)

    @abstractmethod
    async def _execute_query(self, request: T) -> R:
        pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    Runs the command in one unit of work, commits, then publishes the
    collected domain events. Event publishing never fails the command.
    """

    def __init__(self, unit_of_work: UnitOfWork, event_dispatcher: Optional[EventDispatcher] = None):
        super().__init__(unit_of_work)
        self.event_dispatcher = event_dispatcher
        self.events: List[DomainEvent] = []

    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute command with transaction handling.
        """
        try:
            result = await self._execute_command_logic(request)
            self.uow.commit()
        except Exception:
            self.uow.rollback()
            self.events.clear()
            raise

        await self._publish_events()
        return result

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass

    def _record_event(self, event: DomainEvent) -> None:
        self.events.append(event)

    async def _publish_events(self) -> None:
        """Publish collected domain events."""
        events, self.events = self.events, []
        if not events or self.event_dispatcher is None:
            return
        try:
            await self.event_dispatcher.dispatch_all(events)
        except Exception as e:
            logger.error(
                f"Failed to publish events after {self.__class__.__name__}: {str(e)}",
                exc_info=True
            )


def unwrap(value: Any) -> Any:
    """Enum members to their values, for DTOs built with use_enum_values."""
    return getattr(value, "value", value)


def apply_changes(entity: Any, changes: dict) -> None:
    """Copy explicitly provided fields onto an entity and revalidate it."""
    for field_name, value in changes.items():
        setattr(entity, field_name, value)
    entity.mark_as_updated()
    entity.validate()
