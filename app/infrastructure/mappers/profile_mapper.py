"""
Profile mappers for converting between domain entities and database models.
"""

from app.domain.models.profile import ChefProfile, BusinessProfile, PaymentMethod
from app.infrastructure.db.models import ChefProfileModel, BusinessProfileModel
from .converters import naive_utc, as_list


class ChefProfileMapper:
    """Maps between ChefProfile domain entity and ChefProfileModel."""

    def domain_to_model(self, profile: ChefProfile) -> ChefProfileModel:
        return ChefProfileModel(
            id=profile.id,
            full_name=profile.full_name,
            bio=profile.bio,
            skills=list(profile.skills),
            experience_years=profile.experience_years,
            location=profile.location,
            travel_radius_km=profile.travel_radius_km,
            profile_image_url=profile.profile_image_url,
            dish_photo_urls=list(profile.dish_photo_urls),
            intro_video_url=profile.intro_video_url,
            instagram_url=profile.instagram_url,
            linkedin_url=profile.linkedin_url,
            portfolio_url=profile.portfolio_url,
            languages=list(profile.languages),
            certifications=list(profile.certifications),
            is_available=profile.is_available,
            payment_method=profile.payment_method,
            bank_sort_code=profile.bank_sort_code,
            bank_account_number=profile.bank_account_number,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    def model_to_domain(self, model: ChefProfileModel) -> ChefProfile:
        return ChefProfile(
            id=model.id,
            full_name=model.full_name,
            bio=model.bio or "",
            skills=as_list(model.skills),
            experience_years=model.experience_years or 0,
            location=model.location,
            travel_radius_km=model.travel_radius_km,
            profile_image_url=model.profile_image_url,
            dish_photo_urls=as_list(model.dish_photo_urls),
            intro_video_url=model.intro_video_url,
            instagram_url=model.instagram_url,
            linkedin_url=model.linkedin_url,
            portfolio_url=model.portfolio_url,
            languages=as_list(model.languages),
            certifications=as_list(model.certifications),
            is_available=bool(model.is_available),
            payment_method=PaymentMethod(model.payment_method) if model.payment_method else None,
            bank_sort_code=model.bank_sort_code,
            bank_account_number=model.bank_account_number,
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class BusinessProfileMapper:
    """Maps between BusinessProfile domain entity and BusinessProfileModel."""

    def domain_to_model(self, profile: BusinessProfile) -> BusinessProfileModel:
        return BusinessProfileModel(
            id=profile.id,
            business_name=profile.business_name,
            description=profile.description,
            location=profile.location,
            contact_email=profile.contact_email,
            contact_phone=profile.contact_phone,
            profile_image_url=profile.profile_image_url,
            gallery_image_urls=list(profile.gallery_image_urls),
            website_url=profile.website_url,
            instagram_url=profile.instagram_url,
            linkedin_url=profile.linkedin_url,
            venue_type=profile.venue_type,
            cuisine_specialties=list(profile.cuisine_specialties),
            business_size=profile.business_size,
            is_hiring=profile.is_hiring,
            availability_notes=profile.availability_notes,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    def model_to_domain(self, model: BusinessProfileModel) -> BusinessProfile:
        return BusinessProfile(
            id=model.id,
            business_name=model.business_name,
            description=model.description or "",
            location=model.location,
            contact_email=model.contact_email,
            contact_phone=model.contact_phone,
            profile_image_url=model.profile_image_url,
            gallery_image_urls=as_list(model.gallery_image_urls),
            website_url=model.website_url,
            instagram_url=model.instagram_url,
            linkedin_url=model.linkedin_url,
            venue_type=model.venue_type,
            cuisine_specialties=as_list(model.cuisine_specialties),
            business_size=model.business_size,
            is_hiring=bool(model.is_hiring),
            availability_notes=model.availability_notes,
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )
