"""
Profile DTOs for the application layer.
Data Transfer Objects for chef and business profiles.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import Field, validator

from .base_dto import CreateRequestDTO, UpdateRequestDTO, RequestDTO, ResponseDTO
from app.domain.models.profile import ChefProfile, BusinessProfile, PaymentMethod
from app.infrastructure.validation.validators import (
    DataValidator, BankDetailsValidator, clean_text, optional
)

CHEF_TEXT_FIELDS = ('full_name', 'bio', 'location', 'skills', 'languages', 'certifications')
CHEF_URL_FIELDS = ('profile_image_url', 'intro_video_url', 'instagram_url', 'linkedin_url', 'portfolio_url')
BUSINESS_TEXT_FIELDS = (
    'business_name', 'description', 'location', 'venue_type', 'cuisine_specialties',
    'business_size', 'availability_notes'
)
BUSINESS_URL_FIELDS = ('profile_image_url', 'website_url', 'instagram_url', 'linkedin_url')


class ChefProfileFieldsDTO(RequestDTO):
    """Chef profile fields shared by create and update."""

    bio: Optional[str] = Field(default=None, max_length=5000, description="Short biography")
    skills: Optional[List[str]] = Field(default=None, max_length=50, description="Skills, in display order")
    experience_years: Optional[int] = Field(default=None, ge=0, le=80)
    travel_radius_km: Optional[int] = Field(default=None, ge=0, le=1000)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)
    dish_photo_urls: Optional[List[str]] = Field(default=None, max_length=20)
    intro_video_url: Optional[str] = Field(default=None, max_length=500)
    instagram_url: Optional[str] = Field(default=None, max_length=500)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    portfolio_url: Optional[str] = Field(default=None, max_length=500)
    languages: Optional[List[str]] = Field(default=None, max_length=20)
    certifications: Optional[List[str]] = Field(default=None, max_length=50)
    is_available: Optional[bool] = None

    @validator(*CHEF_TEXT_FIELDS, pre=True, check_fields=False)
    def sanitize_text(cls, v):
        return clean_text(v)

    @validator(*CHEF_URL_FIELDS, pre=True)
    def validate_urls(cls, v):
        return optional(DataValidator.validate_url)(v)

    @validator('dish_photo_urls', pre=True)
    def validate_photo_urls(cls, v):
        if v is None:
            return v
        return [DataValidator.validate_url(url) for url in v]


class CreateChefProfileRequestDTO(ChefProfileFieldsDTO, CreateRequestDTO):
    """DTO for creating or replacing the caller's chef profile."""

    full_name: str = Field(min_length=1, max_length=255, description="Full name")
    location: str = Field(min_length=1, max_length=255, description="Home location")


class UpdateChefProfileRequestDTO(ChefProfileFieldsDTO, UpdateRequestDTO):
    """DTO for partially updating a chef profile."""

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)


class ChefProfileResponseDTO(ResponseDTO):
    """DTO for chef profile responses. Bank details are never returned."""

    full_name: str
    bio: str = ""
    skills: List[str] = Field(default_factory=list)
    experience_years: int = 0
    location: str = ""
    travel_radius_km: Optional[int] = None
    profile_image_url: Optional[str] = None
    dish_photo_urls: List[str] = Field(default_factory=list)
    intro_video_url: Optional[str] = None
    instagram_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    is_available: bool = True
    payment_method: Optional[PaymentMethod] = None
    has_bank_details: bool = False

    @classmethod
    def from_domain(cls, profile: ChefProfile) -> "ChefProfileResponseDTO":
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            bio=profile.bio,
            skills=profile.skills,
            experience_years=profile.experience_years,
            location=profile.location,
            travel_radius_km=profile.travel_radius_km,
            profile_image_url=profile.profile_image_url,
            dish_photo_urls=profile.dish_photo_urls,
            intro_video_url=profile.intro_video_url,
            instagram_url=profile.instagram_url,
            linkedin_url=profile.linkedin_url,
            portfolio_url=profile.portfolio_url,
            languages=profile.languages,
            certifications=profile.certifications,
            is_available=profile.is_available,
            payment_method=profile.payment_method,
            has_bank_details=profile.has_bank_details,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class BusinessProfileFieldsDTO(RequestDTO):
    """Business profile fields shared by create and update."""

    description: Optional[str] = Field(default=None, max_length=5000)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=30)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)
    gallery_image_urls: Optional[List[str]] = Field(default=None, max_length=20)
    website_url: Optional[str] = Field(default=None, max_length=500)
    instagram_url: Optional[str] = Field(default=None, max_length=500)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    venue_type: Optional[str] = Field(default=None, max_length=100)
    cuisine_specialties: Optional[List[str]] = Field(default=None, max_length=30)
    business_size: Optional[str] = Field(default=None, max_length=50)
    is_hiring: Optional[bool] = None
    availability_notes: Optional[str] = Field(default=None, max_length=2000)

    @validator(*BUSINESS_TEXT_FIELDS, pre=True, check_fields=False)
    def sanitize_text(cls, v):
        return clean_text(v)

    @validator(*BUSINESS_URL_FIELDS, pre=True)
    def validate_urls(cls, v):
        return optional(DataValidator.validate_url)(v)

    @validator('contact_email', pre=True)
    def validate_email(cls, v):
        return optional(DataValidator.validate_email)(v)

    @validator('contact_phone', pre=True)
    def validate_phone(cls, v):
        return optional(DataValidator.validate_phone)(v)


class CreateBusinessProfileRequestDTO(BusinessProfileFieldsDTO, CreateRequestDTO):
    """DTO for creating or replacing the caller's business profile."""

    business_name: str = Field(min_length=1, max_length=255, description="Trading name")
    location: str = Field(min_length=1, max_length=255, description="Venue location")


class UpdateBusinessProfileRequestDTO(BusinessProfileFieldsDTO, UpdateRequestDTO):
    business_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)


class BusinessProfileResponseDTO(ResponseDTO):
    """DTO for business profile responses."""

    business_name: str
    description: str = ""
    location: str = ""
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    profile_image_url: Optional[str] = None
    gallery_image_urls: List[str] = Field(default_factory=list)
    website_url: Optional[str] = None
    instagram_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    venue_type: Optional[str] = None
    cuisine_specialties: List[str] = Field(default_factory=list)
    business_size: Optional[str] = None
    is_hiring: bool = False
    availability_notes: Optional[str] = None

    @classmethod
    def from_domain(cls, profile: BusinessProfile) -> "BusinessProfileResponseDTO":
        return cls(
            id=profile.id,
            business_name=profile.business_name,
            description=profile.description,
            location=profile.location,
            contact_email=profile.contact_email,
            contact_phone=profile.contact_phone,
            profile_image_url=profile.profile_image_url,
            gallery_image_urls=profile.gallery_image_urls,
            website_url=profile.website_url,
            instagram_url=profile.instagram_url,
            linkedin_url=profile.linkedin_url,
            venue_type=profile.venue_type,
            cuisine_specialties=profile.cuisine_specialties,
            business_size=profile.business_size,
            is_hiring=profile.is_hiring,
            availability_notes=profile.availability_notes,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class UpdatePaymentMethodRequestDTO(UpdateRequestDTO):
    """DTO for choosing how a chef is paid."""

    payment_method: PaymentMethod = Field(description="stripe or bank")
    sort_code: Optional[str] = Field(default=None, description="UK sort code, 6 digits")
    account_number: Optional[str] = Field(default=None, description="UK account number, 8 digits")

    @validator('sort_code', pre=True)
    def validate_sort_code(cls, v):
        return optional(BankDetailsValidator.validate_sort_code)(v)

    @validator('account_number', pre=True)
    def validate_account_number(cls, v):
        return optional(BankDetailsValidator.validate_account_number)(v)

    @validator('account_number')
    def require_bank_details(cls, v, values):
        if values.get('payment_method') == PaymentMethod.BANK.value and (not v or not values.get('sort_code')):
            raise ValueError("Sort code and account number are required for bank payments")
        return v


class PaymentMethodResponseDTO(ResponseDTO):
    payment_method: Optional[PaymentMethod] = None
    has_bank_details: bool = False
    updated_at: Optional[datetime] = None
