"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Numeric, Date, Time, ForeignKey, JSON, Enum as SQLEnum,
    Index, UniqueConstraint, CheckConstraint, text
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.domain.models.profile import PaymentMethod
from app.domain.models.gig import ApplicationStatus
from app.domain.models.invoice import InvoiceStatus
from app.domain.models.review import ReviewerType
from app.domain.models.company import CompanyRole, InviteStatus
from app.domain.models.shift import ShiftStatus, ClockMethod

from .database import Base


def value_enum(enum_cls, name: str) -> SQLEnum:
    """Enum column stored by value, portable across PostgreSQL and SQLite."""
    return SQLEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )


class ChefProfileModel(Base):
    """Chef profile table - keyed by the Supabase auth user id"""
    __tablename__ = 'chef_profiles'

    id = Column(String(36), primary_key=True)
    full_name = Column(String(255), nullable=False)
    bio = Column(Text, default='')
    skills = Column(JSON)
    experience_years = Column(Integer, default=0)
    location = Column(String(255), nullable=False)
    travel_radius_km = Column(Integer)

    # Media
    profile_image_url = Column(String(500))
    dish_photo_urls = Column(JSON)
    intro_video_url = Column(String(500))
    instagram_url = Column(String(500))
    linkedin_url = Column(String(500))
    portfolio_url = Column(String(500))

    languages = Column(JSON)
    certifications = Column(JSON)
    is_available = Column(Boolean, default=True)

    # Payment details
    payment_method = Column(value_enum(PaymentMethod, 'payment_method'))
    bank_sort_code = Column(String(8))
    bank_account_number = Column(String(8))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        CheckConstraint('experience_years >= 0', name='check_experience_years_positive'),
    )


class BusinessProfileModel(Base):
    """Business profile table - doubles as the venue"""
    __tablename__ = 'business_profiles'

    id = Column(String(36), primary_key=True)
    business_name = Column(String(255), nullable=False)
    description = Column(Text, default='')
    location = Column(String(255), nullable=False)
    contact_email = Column(String(255))
    contact_phone = Column(String(50))

    profile_image_url = Column(String(500))
    gallery_image_urls = Column(JSON)
    website_url = Column(String(500))
    instagram_url = Column(String(500))
    linkedin_url = Column(String(500))

    venue_type = Column(String(100))
    cuisine_specialties = Column(JSON)
    business_size = Column(String(50))
    is_hiring = Column(Boolean, default=False)
    availability_notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    gigs = relationship("GigModel", back_populates="business")

    __table_args__ = (
        Index('idx_business_profiles_name', 'business_name'),
        Index('idx_business_profiles_location', 'location'),
    )


class GigModel(Base):
    """Gig table"""
    __tablename__ = 'gigs'

    id = Column(String(36), primary_key=True)
    created_by = Column(String(36), ForeignKey('business_profiles.id'), nullable=False)
    title = Column(String(255), nullable=False)
    start_date = Column(Date)
    end_date = Column(Date)
    start_time = Column(Time)
    end_time = Column(Time)
    location = Column(String(255))
    pay_rate = Column(Numeric(10, 2), nullable=False)
    role = Column(String(100))
    venue_type = Column(String(100))

    dress_code = Column(Text)
    service_expectations = Column(Text)
    kitchen_details = Column(Text)
    equipment_provided = Column(JSON)
    benefits = Column(JSON)
    tips_available = Column(Boolean, default=False)

    is_active = Column(Boolean, default=True)
    is_booked = Column(Boolean, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    business = relationship("BusinessProfileModel", back_populates="gigs")
    applications = relationship("GigApplicationModel", back_populates="gig")

    __table_args__ = (
        Index('idx_gigs_created_by', 'created_by'),
        Index('idx_gigs_active', 'is_active', 'created_at'),
        CheckConstraint('pay_rate >= 0', name='check_pay_rate_positive'),
    )


class GigApplicationModel(Base):
    """Gig application table"""
    __tablename__ = 'gig_applications'

    id = Column(String(36), primary_key=True)
    gig_id = Column(String(36), ForeignKey('gigs.id'), nullable=False)
    chef_id = Column(String(36), ForeignKey('chef_profiles.id'), nullable=False)
    status = Column(value_enum(ApplicationStatus, 'application_status'), default=ApplicationStatus.APPLIED, nullable=False)
    confirmed = Column(Boolean, default=False)
    message = Column(Text)

    applied_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    gig = relationship("GigModel", back_populates="applications")

    __table_args__ = (
        UniqueConstraint('gig_id', 'chef_id', name='unique_application_per_chef'),
        Index('idx_applications_chef_status', 'chef_id', 'status'),
    )


class GigInvoiceModel(Base):
    """Gig invoice table"""
    __tablename__ = 'gig_invoices'

    id = Column(String(36), primary_key=True)
    gig_id = Column(String(36), ForeignKey('gigs.id'), nullable=False)
    chef_id = Column(String(36), ForeignKey('chef_profiles.id'), nullable=False)
    business_id = Column(String(36), ForeignKey('business_profiles.id'), nullable=False)

    hours_worked = Column(Numeric(8, 2), nullable=False)
    rate_per_hour = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text)

    payment_method = Column(String(20), default='bank')
    sort_code = Column(String(8))
    account_number = Column(String(8))
    is_manual = Column(Boolean, default=False)

    status = Column(value_enum(InvoiceStatus, 'invoice_status'), default=InvoiceStatus.SUBMITTED, nullable=False)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())
    paid_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('gig_id', 'chef_id', name='unique_invoice_per_gig_chef'),
        Index('idx_invoices_business', 'business_id'),
        CheckConstraint('hours_worked > 0', name='check_hours_worked_positive'),
        CheckConstraint('total_amount >= 0', name='check_total_amount_positive'),
    )


class ReviewModel(Base):
    """Review table"""
    __tablename__ = 'reviews'

    id = Column(String(36), primary_key=True)
    gig_id = Column(String(36), ForeignKey('gigs.id'), nullable=False)
    reviewer_id = Column(String(36), nullable=False)
    recipient_id = Column(String(36), nullable=False)
    reviewer_type = Column(value_enum(ReviewerType, 'reviewer_type'), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    category_ratings = Column(JSON)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('gig_id', 'reviewer_id', name='unique_review_per_gig_reviewer'),
        Index('idx_reviews_recipient', 'recipient_id'),
        CheckConstraint('rating >= 1 AND rating <= 5', name='check_rating_range'),
    )


class NotificationModel(Base):
    """In-app notification table"""
    __tablename__ = 'notifications'

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False)
    type = Column(String(50), nullable=False)
    title = Column(String(255))
    body = Column(Text)
    entity_type = Column(String(50))
    entity_id = Column(String(36))
    link_url = Column(String(500))
    meta = Column(JSON)
    is_read = Column(Boolean, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index('idx_notifications_user_created', 'user_id', 'created_at'),
    )


class NotificationPreferencesModel(Base):
    """Per-user notification channel toggles"""
    __tablename__ = 'notification_preferences'

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False, unique=True)
    channels = Column(JSON)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class CompanyModel(Base):
    """Company table"""
    __tablename__ = 'companies'

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    owner_user_id = Column(String(36), nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    members = relationship("CompanyMemberModel", back_populates="company")


class CompanyMemberModel(Base):
    """Company membership table"""
    __tablename__ = 'company_members'

    id = Column(String(36), primary_key=True)
    company_id = Column(String(36), ForeignKey('companies.id'), nullable=False)
    user_id = Column(String(36), nullable=False)
    role = Column(value_enum(CompanyRole, 'company_role'), nullable=False, default=CompanyRole.VIEWER)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    company = relationship("CompanyModel", back_populates="members")

    __table_args__ = (
        UniqueConstraint('company_id', 'user_id', name='unique_company_member'),
        Index('idx_company_members_user', 'user_id'),
    )


class BusinessCompanyLinkModel(Base):
    """Access granted to a company over a venue"""
    __tablename__ = 'business_company_links'

    id = Column(String(36), primary_key=True)
    business_id = Column(String(36), ForeignKey('business_profiles.id'), nullable=False)
    company_id = Column(String(36), ForeignKey('companies.id'), nullable=False)
    role = Column(value_enum(CompanyRole, 'company_role'), nullable=False, default=CompanyRole.MANAGER)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('business_id', 'company_id', name='unique_business_company_link'),
        Index('idx_links_company', 'company_id'),
    )


class BusinessCompanyInviteModel(Base):
    """Invite from a venue to a company"""
    __tablename__ = 'business_company_invites'

    id = Column(String(36), primary_key=True)
    business_id = Column(String(36), ForeignKey('business_profiles.id'), nullable=False)
    invitee_email = Column(String(255), nullable=False)
    role = Column(value_enum(CompanyRole, 'company_role'), nullable=False, default=CompanyRole.MANAGER)
    token = Column(String(64), nullable=False, unique=True)
    status = Column(value_enum(InviteStatus, 'invite_status'), nullable=False, default=InviteStatus.PENDING)
    created_by = Column(String(36), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    accepted_at = Column(DateTime(timezone=True))
    accepted_company_id = Column(String(36), ForeignKey('companies.id'))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index('idx_invites_business', 'business_id'),
        Index('idx_invites_email', 'invitee_email'),
    )


class VenueStaffModel(Base):
    """Venue staff roster table"""
    __tablename__ = 'venue_staff'

    id = Column(String(36), primary_key=True)
    venue_id = Column(String(36), ForeignKey('business_profiles.id'), nullable=False)
    chef_id = Column(String(36), ForeignKey('chef_profiles.id'), nullable=False)
    role = Column(String(100))
    hourly_rate = Column(Numeric(10, 2))
    is_active = Column(Boolean, default=True)
    created_by = Column(String(36))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('venue_id', 'chef_id', name='unique_venue_staff'),
        Index('idx_venue_staff_chef', 'chef_id', 'is_active'),
    )


class WorkShiftModel(Base):
    """Work shift table"""
    __tablename__ = 'work_shifts'

    id = Column(String(36), primary_key=True)
    chef_id = Column(String(36), ForeignKey('chef_profiles.id'), nullable=False)
    venue_id = Column(String(36), ForeignKey('business_profiles.id'), nullable=False)
    gig_id = Column(String(36), ForeignKey('gigs.id'))

    clock_in_at = Column(DateTime(timezone=True), nullable=False)
    clock_out_at = Column(DateTime(timezone=True))
    clock_in_method = Column(value_enum(ClockMethod, 'clock_method'), nullable=False, default=ClockMethod.MANUAL)
    clock_out_method = Column(value_enum(ClockMethod, 'clock_method'))
    break_minutes = Column(Integer, nullable=False, default=0)
    status = Column(value_enum(ShiftStatus, 'shift_status'), nullable=False, default=ShiftStatus.OPEN)
    venue_note = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        # At most one open shift per chef
        Index(
            'uq_work_shifts_one_open_per_chef',
            'chef_id',
            unique=True,
            postgresql_where=text("status = 'open'"),
            sqlite_where=text("status = 'open'"),
        ),
        Index('idx_work_shifts_chef_clock_in', 'chef_id', 'clock_in_at'),
        Index('idx_work_shifts_venue_clock_in', 'venue_id', 'clock_in_at'),
        CheckConstraint('break_minutes >= 0', name='check_break_minutes_positive'),
        CheckConstraint(
            'clock_out_at IS NULL OR clock_out_at >= clock_in_at',
            name='check_clock_out_after_clock_in'
        ),
    )


class VenueCheckinTokenModel(Base):
    """Permanent QR check-in token per venue"""
    __tablename__ = 'venue_checkin_tokens'

    id = Column(String(36), primary_key=True)
    venue_id = Column(String(36), ForeignKey('business_profiles.id'), nullable=False, unique=True)
    token = Column(String(64), nullable=False, unique=True)
    created_by = Column(String(36))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
