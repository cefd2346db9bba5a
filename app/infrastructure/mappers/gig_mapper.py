"""
Gig and application mappers.
"""

from decimal import Decimal

from app.domain.models.gig import Gig, GigApplication, ApplicationStatus
from app.infrastructure.db.models import GigModel, GigApplicationModel
from .converters import naive_utc, as_list


class GigMapper:
    """Maps between Gig domain entity and GigModel database model."""

    def domain_to_model(self, gig: Gig) -> GigModel:
        return GigModel(
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
            equipment_provided=list(gig.equipment_provided),
            benefits=list(gig.benefits),
            tips_available=gig.tips_available,
            is_active=gig.is_active,
            is_booked=gig.is_booked,
            created_at=gig.created_at,
            updated_at=gig.updated_at,
        )

    def model_to_domain(self, model: GigModel) -> Gig:
        return Gig(
            id=model.id,
            created_by=model.created_by,
            title=model.title,
            start_date=model.start_date,
            end_date=model.end_date,
            start_time=model.start_time,
            end_time=model.end_time,
            location=model.location or "",
            pay_rate=Decimal(model.pay_rate) if model.pay_rate is not None else Decimal("0"),
            role=model.role or "",
            venue_type=model.venue_type or "",
            dress_code=model.dress_code,
            service_expectations=model.service_expectations,
            kitchen_details=model.kitchen_details,
            equipment_provided=as_list(model.equipment_provided),
            benefits=as_list(model.benefits),
            tips_available=bool(model.tips_available),
            is_active=bool(model.is_active),
            is_booked=bool(model.is_booked),
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class GigApplicationMapper:
    """Maps between GigApplication and GigApplicationModel."""

    def domain_to_model(self, application: GigApplication) -> GigApplicationModel:
        return GigApplicationModel(
            id=application.id,
            gig_id=application.gig_id,
            chef_id=application.chef_id,
            status=application.status,
            confirmed=application.confirmed,
            message=application.message,
            applied_at=application.created_at,
            updated_at=application.updated_at,
        )

    def model_to_domain(self, model: GigApplicationModel) -> GigApplication:
        return GigApplication(
            id=model.id,
            gig_id=model.gig_id,
            chef_id=model.chef_id,
            status=ApplicationStatus(model.status),
            confirmed=bool(model.confirmed),
            message=model.message,
            created_at=naive_utc(model.applied_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.applied_at),
        )
