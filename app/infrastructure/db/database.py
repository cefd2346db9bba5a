"""
Database configuration and session management.
"""

import logging
from contextlib import contextmanager
from typing import Generator, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool, StaticPool

from app.config import Settings

logger = logging.getLogger(__name__)

# Create declarative base
Base = declarative_base()


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one application.
    Created in the application lifespan and disposed on shutdown.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = self._create_engine(database_url, echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.database_echo)

    @staticmethod
    def _create_engine(database_url: str, echo: bool) -> Engine:
        if database_url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # In-memory databases live as long as their single connection
            if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
                kwargs["poolclass"] = StaticPool
            return create_engine(database_url, echo=echo, **kwargs)
        return create_engine(database_url, poolclass=NullPool, echo=echo)

    def session(self) -> Session:
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        """Create all tables in the database"""
        # Import models so they register on Base.metadata
        from app.infrastructure.db import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        """Drop all tables - use with caution!"""
        from app.infrastructure.db import models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def health_check(self) -> bool:
        """Round trip to the database; False when it cannot be reached."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency returning the application's Database."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    """
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
