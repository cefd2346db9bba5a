"""
Shared save logic for the SQLAlchemy repositories.
"""

import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.models.base import BaseEntity, DomainException, new_id

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseEntity)


class SQLAlchemyRepository:
    """
    Base class holding the session, mapper and model of one repository.
    Unique-constraint violations raised on flush are translated into the
    domain error returned by `on_conflict`.
    """

    model = None
    mapper = None

    def __init__(self, session: Session):
        self.session = session

    def _save(self, entity: EntityT, on_conflict: Callable[[], DomainException]) -> EntityT:
        assigned_id = entity.is_new
        if assigned_id:
            entity.id = new_id()

        model = None if assigned_id else self.session.get(self.model, entity.id)
        if model is None:
            # Create new row
            model = self.mapper.domain_to_model(entity)
            self.session.add(model)
        else:
            # Update model with new data
            updated_model = self.mapper.domain_to_model(entity)
            for attr, value in updated_model.__dict__.items():
                if not attr.startswith('_') and attr != 'id':
                    setattr(model, attr, value)

        try:
            self.session.flush()
        except IntegrityError as exc:
            logger.info(f"Integrity error saving {type(entity).__name__}: {exc.orig}")
            self.session.rollback()
            if assigned_id:
                entity.id = None
            raise on_conflict() from exc
        return entity

    def _to_domain_list(self, models) -> list:
        return [self.mapper.model_to_domain(model) for model in models]
