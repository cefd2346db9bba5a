"""
Builders for persisted test data.
"""

from datetime import date, timedelta
from decimal import Decimal

from app.domain.models.gig import Gig, GigApplication, ApplicationStatus
from app.domain.models.profile import ChefProfile, BusinessProfile


def add_chef(uow, chef_id="chef-1", full_name="Jamie Oliver", **fields):
    chef = ChefProfile(id=chef_id, full_name=full_name, location="London", **fields)
    uow.chefs.save(chef)
    uow.commit()
    return chef


def add_business(uow, business_id="biz-1", business_name="The Anchor", **fields):
    business = BusinessProfile(id=business_id, business_name=business_name, location="Bristol", **fields)
    uow.businesses.save(business)
    uow.commit()
    return business


def add_gig(uow, created_by="biz-1", title="Saturday sous chef", days_ago=None, **fields):
    start = date.today() + timedelta(days=7)
    if days_ago is not None:
        start = date.today() - timedelta(days=days_ago)
    gig = Gig(
        created_by=created_by,
        title=title,
        start_date=start,
        end_date=start,
        location="Bristol",
        pay_rate=Decimal("15.00"),
        role="Sous chef",
        **fields
    )
    uow.gigs.save(gig)
    uow.commit()
    return gig


def add_application(uow, gig_id, chef_id="chef-1", status=ApplicationStatus.APPLIED):
    application = GigApplication(
        gig_id=gig_id,
        chef_id=chef_id,
        status=status,
        confirmed=status == ApplicationStatus.CONFIRMED,
    )
    uow.applications.save(application)
    uow.commit()
    return application
