"""
Shared fixtures: an in-memory SQLite database and a unit of work over it.
"""

import pytest

from app.infrastructure.db.database import Database
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def uow(database):
    session = database.session()
    yield SQLAlchemyUnitOfWork(session)
    session.close()
