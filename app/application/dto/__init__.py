"""
Data Transfer Objects for the application layer.
"""

from .base_dto import (
    BaseDTO,
    RequestDTO,
    ResponseDTO,
    CreateRequestDTO,
    UpdateRequestDTO,
    DateRangeRequestDTO,
    HealthCheckResponseDTO,
    ErrorResponseDTO,
    ValidationErrorResponseDTO,
)
from .profile_dto import (
    CreateChefProfileRequestDTO,
    UpdateChefProfileRequestDTO,
    ChefProfileResponseDTO,
    CreateBusinessProfileRequestDTO,
    UpdateBusinessProfileRequestDTO,
    BusinessProfileResponseDTO,
    UpdatePaymentMethodRequestDTO,
    PaymentMethodResponseDTO,
)
from .gig_dto import (
    CreateGigRequestDTO,
    UpdateGigRequestDTO,
    GigResponseDTO,
    GigSummaryDTO,
    ApplyToGigRequestDTO,
    UpdateApplicationStatusRequestDTO,
    ApplicationResponseDTO,
    AcceptApplicationResponseDTO,
    ConfirmApplicationResponseDTO,
)
from .invoice_dto import (
    CreateInvoiceRequestDTO,
    InvoiceResponseDTO,
    InvoiceCheckResponseDTO,
    InvoiceListResponseDTO,
)
from .review_dto import (
    CreateReviewRequestDTO,
    ReviewResponseDTO,
    ReviewSummaryResponseDTO,
    RatingResponseDTO,
    ReviewCheckResponseDTO,
    PendingReviewDTO,
    PendingReviewsResponseDTO,
)
from .notification_dto import (
    NotificationResponseDTO,
    NotificationListResponseDTO,
    UpdateNotificationPreferencesRequestDTO,
    NotificationPreferencesResponseDTO,
)
from .company_dto import (
    CreateCompanyRequestDTO,
    UpdateCompanyRequestDTO,
    CompanyResponseDTO,
    CompanyMemberResponseDTO,
    InviteCompanyRequestDTO,
    AcceptInviteRequestDTO,
    CompanyInviteResponseDTO,
    VerifyInviteResponseDTO,
    BusinessLinkResponseDTO,
    AcceptInviteResponseDTO,
    AccessibleBusinessDTO,
    AccessibleBusinessesResponseDTO,
)
from .shift_dto import (
    ClockInRequestDTO,
    ClockOutRequestDTO,
    UpdateShiftStatusRequestDTO,
    MyShiftsRequestDTO,
    VenueShiftsRequestDTO,
    VenueSummaryDTO,
    ShiftResponseDTO,
    OpenShiftResponseDTO,
    AddStaffRequestDTO,
    UpdateStaffRequestDTO,
    StaffResponseDTO,
    StaffVenueDTO,
    AcceptedGigDTO,
    GenerateQrRequestDTO,
    ValidateQrRequestDTO,
    CheckinTokenResponseDTO,
    QrScanResultDTO,
)
