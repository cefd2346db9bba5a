"""
FastAPI dependencies wiring use cases to the request.
Each request gets its own unit of work; command use cases also receive the
application's event dispatcher.
"""

from typing import Annotated, Callable, Optional, Type, TypeVar

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import Settings
from app.application.use_cases.base_use_case import BaseUseCase, CommandUseCase
from app.domain.events.base import EventDispatcher
from app.infrastructure.auth import CurrentUser
from app.infrastructure.db.database import get_db
from app.infrastructure.email import EmailService
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork

UseCaseT = TypeVar("UseCaseT", bound=BaseUseCase)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_event_dispatcher(request: Request) -> Optional[EventDispatcher]:
    return getattr(request.app.state, "event_dispatcher", None)


def get_uow(session: Annotated[Session, Depends(get_db)]) -> SQLAlchemyUnitOfWork:
    """Dependency to get a unit of work bound to the request session."""
    return SQLAlchemyUnitOfWork(session)


UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_uow)]
DispatcherDep = Annotated[Optional[EventDispatcher], Depends(get_event_dispatcher)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def _build(use_case_cls: Type[UseCaseT], uow: SQLAlchemyUnitOfWork, dispatcher: Optional[EventDispatcher]) -> UseCaseT:
    if issubclass(use_case_cls, CommandUseCase):
        return use_case_cls(uow, dispatcher)
    return use_case_cls(uow)


def provide(use_case_cls: Type[UseCaseT]) -> Callable[..., UseCaseT]:
    """
    Dependency factory for a use case acting on behalf of the caller.

    Usage:
        @router.post("/gigs/create")
        async def create_gig(use_case: Annotated[CreateGigUseCase, Depends(provide(CreateGigUseCase))]):
            ...
    """
    def dependency(uow: UnitOfWorkDep, dispatcher: DispatcherDep, user: CurrentUser) -> UseCaseT:
        use_case = _build(use_case_cls, uow, dispatcher)
        use_case.set_current_user(user.id, user.roles, user.email)
        return use_case

    return dependency


def provide_public(use_case_cls: Type[UseCaseT]) -> Callable[..., UseCaseT]:
    """Dependency factory for a use case that needs no authenticated caller."""
    def dependency(uow: UnitOfWorkDep, dispatcher: DispatcherDep) -> UseCaseT:
        return _build(use_case_cls, uow, dispatcher)

    return dependency
