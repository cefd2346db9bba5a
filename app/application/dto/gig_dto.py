"""
Gig and application DTOs for the application layer.
"""

from typing import Optional, List
from datetime import date, time, datetime
from decimal import Decimal
from pydantic import Field, validator

from .base_dto import CreateRequestDTO, UpdateRequestDTO, RequestDTO, ResponseDTO, BaseDTO
from app.domain.models.gig import Gig, GigApplication, ApplicationStatus
from app.infrastructure.validation.validators import clean_text

GIG_TEXT_FIELDS = (
    'title', 'location', 'role', 'venue_type', 'dress_code', 'service_expectations',
    'kitchen_details', 'equipment_provided', 'benefits'
)


class GigFieldsDTO(RequestDTO):
    """Optional gig fields shared by create and update."""

    start_time: Optional[time] = None
    end_time: Optional[time] = None
    dress_code: Optional[str] = Field(default=None, max_length=500)
    service_expectations: Optional[str] = Field(default=None, max_length=2000)
    kitchen_details: Optional[str] = Field(default=None, max_length=2000)
    equipment_provided: Optional[List[str]] = Field(default=None, max_length=50)
    benefits: Optional[List[str]] = Field(default=None, max_length=50)
    tips_available: Optional[bool] = None

    @validator(*GIG_TEXT_FIELDS, pre=True, check_fields=False)
    def sanitize_text(cls, v):
        return clean_text(v)


class CreateGigRequestDTO(GigFieldsDTO, CreateRequestDTO):
    """DTO for posting a gig."""

    title: str = Field(min_length=1, max_length=255, description="Gig title")
    start_date: date = Field(description="First day of the gig")
    end_date: date = Field(description="Last day of the gig")
    location: str = Field(min_length=1, max_length=255)
    pay_rate: Decimal = Field(ge=0, max_digits=10, decimal_places=2, description="Hourly pay rate")
    role: str = Field(min_length=1, max_length=100, description="Kitchen role, e.g. sous chef")
    venue_type: str = Field(default="", max_length=100)

    @validator('end_date')
    def validate_end_date(cls, v, values):
        if values.get('start_date') and v < values['start_date']:
            raise ValueError('end_date cannot be before start_date')
        return v


class UpdateGigRequestDTO(GigFieldsDTO, UpdateRequestDTO):
    """DTO for editing a gig. Only the sent fields change."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    pay_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    role: Optional[str] = Field(default=None, min_length=1, max_length=100)
    venue_type: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class GigResponseDTO(ResponseDTO):
    """DTO for gig responses."""

    created_by: str
    title: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: str = ""
    pay_rate: Decimal = Decimal("0")
    role: str = ""
    venue_type: str = ""
    dress_code: Optional[str] = None
    service_expectations: Optional[str] = None
    kitchen_details: Optional[str] = None
    equipment_provided: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    tips_available: bool = False
    is_active: bool = True
    is_booked: bool = False
    business_name: Optional[str] = None

    @classmethod
    def from_domain(cls, gig: Gig, business_name: Optional[str] = None) -> "GigResponseDTO":
        return cls(
            id=gig.id,
            created_by=gig.created_by,
            title=gig.title,
            start_date=gig.start_date,
            end_date=gig.end_date,
            start_time=gig.start_time,
            end_time=gig.end_time,
            location=gig.location,
            pay_rate=gig.pay_rate,
            role=gig.role,
            venue_type=gig.venue_type,
            dress_code=gig.dress_code,
            service_expectations=gig.service_expectations,
            kitchen_details=gig.kitchen_details,
            equipment_provided=gig.equipment_provided,
            benefits=gig.benefits,
            tips_available=gig.tips_available,
            is_active=gig.is_active,
            is_booked=gig.is_booked,
            business_name=business_name,
            created_at=gig.created_at,
            updated_at=gig.updated_at,
        )


class GigSummaryDTO(BaseDTO):
    """Short gig description embedded in application, booking and shift responses."""

    id: str
    title: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: str = ""
    pay_rate: Decimal = Decimal("0")
    role: str = ""
    created_by: str = ""

    @classmethod
    def from_domain(cls, gig: Gig) -> "GigSummaryDTO":
        return cls(
            id=gig.id,
            title=gig.title,
            start_date=gig.start_date,
            end_date=gig.end_date,
            start_time=gig.start_time,
            end_time=gig.end_time,
            location=gig.location,
            pay_rate=gig.pay_rate,
            role=gig.role,
            created_by=gig.created_by,
        )


class ApplyToGigRequestDTO(CreateRequestDTO):
    """DTO for a chef applying to a gig."""

    gig_id: str = Field(min_length=1)
    message: Optional[str] = Field(default=None, max_length=2000, description="Cover note")

    @validator('message', pre=True)
    def sanitize_message(cls, v):
        return clean_text(v)


class UpdateApplicationStatusRequestDTO(UpdateRequestDTO):
    """DTO for a business moving an application along."""

    status: ApplicationStatus

    @validator('status')
    def reject_confirmed(cls, v):
        if v == ApplicationStatus.CONFIRMED.value:
            raise ValueError("Only the chef can confirm an application")
        return v


class ApplicationResponseDTO(ResponseDTO):
    """DTO for application responses."""

    gig_id: str
    chef_id: str
    status: ApplicationStatus
    confirmed: bool = False
    message: Optional[str] = None
    applied_at: Optional[datetime] = None
    chef_name: Optional[str] = None
    gig: Optional[GigSummaryDTO] = None

    @classmethod
    def from_domain(
        cls,
        application: GigApplication,
        gig: Optional[Gig] = None,
        chef_name: Optional[str] = None
    ) -> "ApplicationResponseDTO":
        return cls(
            id=application.id,
            gig_id=application.gig_id,
            chef_id=application.chef_id,
            status=application.status,
            confirmed=application.confirmed,
            message=application.message,
            applied_at=application.applied_at,
            chef_name=chef_name,
            gig=GigSummaryDTO.from_domain(gig) if gig else None,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


class AcceptApplicationResponseDTO(BaseDTO):
    accepted_application: ApplicationResponseDTO
    rejected_count: int = 0


class ConfirmApplicationResponseDTO(BaseDTO):
    """Result of a chef confirming a gig."""

    application: ApplicationResponseDTO
    gig: GigSummaryDTO
    message: str = "Gig confirmed"
