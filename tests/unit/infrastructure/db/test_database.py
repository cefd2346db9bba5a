"""
Unit tests for the Database engine wrapper.
"""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.infrastructure.db.database import Database


class TestHealthCheck:
    """Test cases for the database round trip."""

    def test_reachable_database(self, database):
        assert database.health_check() is True

    def test_unreachable_database(self):
        database = Database("sqlite://")
        failure = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with patch.object(database.engine, "connect", side_effect=failure):
            assert database.health_check() is False

        database.dispose()
