"""
Database infrastructure for the Chef Pantry API.
"""

from .database import Base, Database, get_db, get_database

__all__ = [
    "Base",
    "Database",
    "get_db",
    "get_database",
]
