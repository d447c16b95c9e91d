from tickets.services.booking_service import BookingService, tickets_required
from tickets.services.colleague_service import ColleagueService
from tickets.services.program_service import ProgramService
from tickets.services.purchase_service import (
    PurchaseController,
    PurchaseState,
    Quote,
    quote_purchase,
)

__all__ = [
    "BookingService",
    "ColleagueService",
    "ProgramService",
    "PurchaseController",
    "PurchaseState",
    "Quote",
    "quote_purchase",
    "tickets_required",
]
