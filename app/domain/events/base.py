"""
Domain events and their in-process dispatcher.
Use cases collect events while they work and publish them once the unit of
work has committed; handlers turn them into notifications and emails.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Deque, Dict, List, Optional, Tuple
import uuid


logger = logging.getLogger(__name__)

ENVELOPE_FIELDS = frozenset({"event_id", "occurred_at", "event_type", "version"})


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(kw_only=True)
class DomainEvent:
    """
    Base class for marketplace events.

    The payload is every dataclass field outside the envelope, minus the
    names listed in `redacted_fields` (tokens and other credentials).
    """

    redacted_fields: ClassVar[Tuple[str, ...]] = ()

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=datetime.utcnow)
    event_type: str = field(init=False, default="")
    version: int = field(default=1)

    def __post_init__(self):
        self.event_type = self.__class__.__name__

    def payload(self) -> Dict[str, Any]:
        return {
            f.name: _serialize(getattr(self, f.name))
            for f in fields(self)
            if f.name not in ENVELOPE_FIELDS and f.name not in self.redacted_fields
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": self.payload(),
        }


class EventHandler(ABC):
    """Handles the event classes listed in `event_types`."""

    event_types: Tuple[type, ...] = ()

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, self.event_types)


class EventDispatcher:
    """
    Dispatches domain events to registered handlers.

    Handlers are isolated from each other and from the publisher: a failing
    handler is logged and does not stop the others or reach the caller.
    """

    def __init__(self, max_log_size: int = 500):
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []
        self._event_log: Deque[Dict[str, Any]] = deque(maxlen=max_log_size)

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        """Register a handler for events whose class name is `event_type`."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.info(f"Registered handler {handler.__class__.__name__} for {event_type}")

    def register_global_handler(self, handler: EventHandler) -> None:
        """Register a handler offered every event; `can_handle` filters."""
        self._global_handlers.append(handler)
        logger.info(f"Registered global handler {handler.__class__.__name__}")

    async def dispatch(self, event: DomainEvent) -> None:
        self._event_log.append(event.to_dict())
        logger.info(f"Dispatching event: {event.event_type} (ID: {event.event_id})")

        handlers = self._handlers.get(event.event_type, []) + [
            h for h in self._global_handlers if h.can_handle(event)
        ]
        if not handlers:
            logger.warning(f"No handlers registered for event: {event.event_type}")
            return

        await asyncio.gather(*(self._safe_handle(handler, event) for handler in handlers))
        logger.debug(f"Dispatched {event.event_type} to {len(handlers)} handler(s)")

    async def dispatch_all(self, events: List[DomainEvent]) -> None:
        """Dispatch events in the order they were raised."""
        for event in events:
            await self.dispatch(event)

    async def _safe_handle(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            await handler.handle(event)
        except Exception as e:
            logger.error(
                f"Handler {handler.__class__.__name__} failed to process "
                f"{event.event_type}: {str(e)}",
                exc_info=True
            )

    def get_event_log(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Recently dispatched events, newest first."""
        events = list(reversed(self._event_log))
        return events[:limit] if limit else events

    def get_registered_handlers(self) -> Dict[str, List[str]]:
        """Handler class names keyed by event type, plus `global` when any exist."""
        result = {
            event_type: [h.__class__.__name__ for h in handlers]
            for event_type, handlers in self._handlers.items()
        }
        if self._global_handlers:
            result["global"] = [h.__class__.__name__ for h in self._global_handlers]
        return result
