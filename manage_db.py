#!/usr/bin/env python3
"""
Database management script for the Chef Pantry API.
Handles table creation and Alembic migrations.
"""

import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from alembic.config import Config
from alembic import command

from app.config import get_settings
from app.infrastructure.db.database import Database

ALEMBIC_INI = "app/infrastructure/db/migrations/alembic.ini"


def alembic_config() -> Config:
    alembic_cfg = Config(ALEMBIC_INI)
    alembic_cfg.set_main_option("sqlalchemy.url", get_settings().database_url)
    return alembic_cfg


def create_tables():
    """Create all tables directly from the models."""
    database = Database.from_settings(get_settings())
    print(f"Creating tables on {database.engine.url.render_as_string(hide_password=True)}...")
    database.create_all()
    database.dispose()


def drop_tables():
    """Drop all tables - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() != 'yes':
        print("Drop cancelled.")
        return
    database = Database.from_settings(get_settings())
    database.drop_all()
    database.dispose()
    print("All tables dropped.")


def create_migration(message: str = "Auto-generated migration"):
    """Create a new migration."""
    print(f"Creating migration: {message}")
    command.revision(alembic_config(), message=message, autogenerate=True)


def run_migrations():
    """Run pending migrations."""
    print("Running migrations...")
    command.upgrade(alembic_config(), "head")


def rollback_migration():
    """Rollback last migration."""
    print("Rolling back migration...")
    command.downgrade(alembic_config(), "-1")


def show_current_revision():
    command.current(alembic_config())


def show_history():
    command.history(alembic_config())


COMMANDS = {
    "create-tables": (create_tables, "Create all tables from the models"),
    "drop-tables": (drop_tables, "Drop all tables (WARNING: drops all data)"),
    "migrate": (run_migrations, "Run pending migrations"),
    "rollback": (rollback_migration, "Rollback last migration"),
    "current": (show_current_revision, "Show current revision"),
    "history": (show_history, "Show migration history"),
}


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print(f"  {'create [msg]':<15}- Create new migration")
        for name, (_, help_text) in COMMANDS.items():
            print(f"  {name:<15}- {help_text}")
        return

    command_name = sys.argv[1]

    if command_name == "create":
        message = " ".join(sys.argv[2:]) if len(sys.argv) > 2 else "Auto-generated migration"
        create_migration(message)
    elif command_name in COMMANDS:
        COMMANDS[command_name][0]()
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
