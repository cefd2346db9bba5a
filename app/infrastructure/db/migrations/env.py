"""
Alembic environment.
Runs migrations against the database configured in the application settings.
"""

from logging.config import fileConfig

from alembic import context

from app.config import get_settings
from app.infrastructure.db.database import Base, Database
from app.infrastructure.db import models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a live connection."""
    context.configure(
        url=get_settings().database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    database = Database.from_settings(get_settings())

    with database.engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )

        with context.begin_transaction():
            context.run_migrations()

    database.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
