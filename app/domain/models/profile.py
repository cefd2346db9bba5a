"""
Profile domain models.
Chef and business profiles are keyed by the id of the owning auth user.
A business profile also acts as the venue for gigs, shifts and staff.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from app.domain.models.base import BaseEntity, ValidationError


class PaymentMethod(str, Enum):
    """How a chef wants to be paid."""
    STRIPE = "stripe"
    BANK = "bank"


@dataclass(eq=False)
class ChefProfile(BaseEntity):
    """
    Chef profile entity.
    Created at signup, mutated by the owning user only, never hard-deleted.
    """

    full_name: str = ""
    bio: str = ""
    skills: List[str] = field(default_factory=list)
    experience_years: int = 0
    location: str = ""
    travel_radius_km: Optional[int] = None

    # Media
    profile_image_url: Optional[str] = None
    dish_photo_urls: List[str] = field(default_factory=list)
    intro_video_url: Optional[str] = None
    instagram_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    languages: List[str] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    is_available: bool = True

    # Payment details
    payment_method: Optional[PaymentMethod] = None
    bank_sort_code: Optional[str] = None
    bank_account_number: Optional[str] = None

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("Chef profile must belong to a user", "id")
        if not self.full_name or not self.full_name.strip():
            raise ValidationError("Full name is required", "full_name")
        if not self.location or not self.location.strip():
            raise ValidationError("Location is required", "location")
        if self.experience_years < 0:
            raise ValidationError("Experience years cannot be negative", "experience_years")

    @property
    def first_name(self) -> str:
        """First word of the full name, used in notification text."""
        parts = (self.full_name or "").split()
        return parts[0] if parts else "Chef"

    @property
    def has_bank_details(self) -> bool:
        return bool(self.bank_sort_code and self.bank_account_number)

    def set_payment_method(
        self,
        method: PaymentMethod,
        sort_code: Optional[str] = None,
        account_number: Optional[str] = None
    ) -> None:
        """Select how the chef is paid. Bank transfers need full account details."""
        if method == PaymentMethod.BANK:
            if not sort_code or not account_number:
                raise ValidationError(
                    "Sort code and account number are required for bank payments",
                    "bank_details"
                )
            self.bank_sort_code = sort_code
            self.bank_account_number = account_number
        self.payment_method = method
        self.mark_as_updated()


@dataclass(eq=False)
class BusinessProfile(BaseEntity):
    """
    Business profile entity.
    The profile id doubles as the venue id.
    """

    business_name: str = ""
    description: str = ""
    location: str = ""
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None

    profile_image_url: Optional[str] = None
    gallery_image_urls: List[str] = field(default_factory=list)
    website_url: Optional[str] = None
    instagram_url: Optional[str] = None
    linkedin_url: Optional[str] = None

    # Venue metadata
    venue_type: Optional[str] = None
    cuisine_specialties: List[str] = field(default_factory=list)
    business_size: Optional[str] = None
    is_hiring: bool = False
    availability_notes: Optional[str] = None

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("Business profile must belong to a user", "id")
        if not self.business_name or not self.business_name.strip():
            raise ValidationError("Business name is required", "business_name")
        if not self.location or not self.location.strip():
            raise ValidationError("Location is required", "location")
