"""
Base entity, domain errors and value objects shared by every marketplace model.
"""

from datetime import datetime
from typing import Optional, Any
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import uuid


def new_id() -> str:
    """Generate an opaque identifier for a new entity."""
    return str(uuid.uuid4())


@dataclass(kw_only=True, eq=False)
class BaseEntity:
    """
    Base class for persisted marketplace records.
    Identity is the `id`; it stays None until the first save assigns one.
    """

    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        # Rows loaded without an update stamp carry their creation time
        if self.updated_at is None or self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        self.updated_at = datetime.utcnow()

    @property
    def is_new(self) -> bool:
        """True until the entity has been saved."""
        return self.id is None

    def validate(self) -> None:
        """
        Check the entity's invariants.
        Subclasses raise ValidationError when their state is invalid.
        """


class DomainException(Exception):
    """Base exception for domain errors; `code` is the machine readable kind."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Input that breaks an entity invariant, optionally naming the field."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """A marketplace rule forbids the operation in the current state."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    def __init__(self, entity_type: str, entity_id: Any = None, message: Optional[str] = None):
        if message is None:
            message = f"{entity_type} not found"
            if entity_id is not None:
                message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """A uniqueness rule was hit, e.g. a second application to the same gig."""

    def __init__(self, entity_type: str, field: str, value: Any, message: Optional[str] = None):
        message = message or f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class ConflictError(DomainException):
    """The request conflicts with the current state, e.g. a second open shift."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class AuthorizationError(DomainException):
    """The caller may not act on the resource."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message, "FORBIDDEN")


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable value compared by its fields; validated on creation."""

    def __post_init__(self):
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        pass


@dataclass(frozen=True)
class Email(ValueObject):
    value: str

    def validate(self) -> None:
        if not self.value:
            raise ValidationError("Email cannot be empty", "email")
        local, _, domain = self.value.partition("@")
        if not local or "." not in domain:
            raise ValidationError(f"Invalid email format: {self.value}", "email")
        if len(self.value) > 255:
            raise ValidationError("Email too long (max 255 characters)", "email")

    def __str__(self) -> str:
        return self.value

    def matches(self, other: Optional[str]) -> bool:
        """Case-insensitive comparison against a raw address."""
        return bool(other) and self.value.strip().lower() == other.strip().lower()


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """Span between a clock-in and an optional clock-out."""

    start: datetime
    end: Optional[datetime] = None

    def validate(self) -> None:
        if self.end and self.end < self.start:
            raise ValidationError("End time cannot be before start time", "end")

    @property
    def is_open(self) -> bool:
        return self.end is None

    @property
    def duration_minutes(self) -> Optional[int]:
        """Whole minutes between start and end, None while open."""
        if self.end is None:
            return None
        return int((self.end - self.start).total_seconds()) // 60

    def close(self, end_time: Optional[datetime] = None) -> "TimeRange":
        if not self.is_open:
            raise BusinessRuleViolation("Time range is already closed")
        return TimeRange(self.start, end_time or datetime.utcnow())
