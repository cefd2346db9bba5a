"""
Column value conversions shared by the mappers.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """PostgreSQL returns aware datetimes, SQLite naive ones; the domain uses naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_list(value: Any) -> List[Any]:
    return list(value) if value else []
