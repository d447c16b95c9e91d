from tickets.domain.models import (
    Allocation,
    AppliedDiscount,
    Attendee,
    Contact,
    Event,
    Member,
    Organization,
    Program,
    PurchaseDraft,
    PurchaseReceipt,
    Registration,
    Voucher,
    VoucherUsage,
)
from tickets.domain.value_objects import (
    BogoLogic,
    Money,
    OfferType,
    OrganizationId,
    PaymentMethod,
    ProgramId,
    RegistrationMode,
    ValidationStatus,
    VoucherId,
)

__all__ = [
    "Allocation",
    "AppliedDiscount",
    "Attendee",
    "Contact",
    "Event",
    "Member",
    "Organization",
    "Program",
    "PurchaseDraft",
    "PurchaseReceipt",
    "Registration",
    "Voucher",
    "VoucherUsage",
    "BogoLogic",
    "Money",
    "OfferType",
    "OrganizationId",
    "PaymentMethod",
    "ProgramId",
    "RegistrationMode",
    "ValidationStatus",
    "VoucherId",
]
