"""
Application layer use cases.
Business logic for the chef marketplace.
"""

from .base_use_case import *
from .profile_use_cases import *
from .gig_use_cases import *
from .invoice_use_cases import *
from .review_use_cases import *
from .notification_use_cases import *
from .company_use_cases import *
from .shift_use_cases import *
