from tickets.handlers.views import (
    OrganizationVoucherListView,
    ProgramDetailView,
    ProgramListView,
    ProgramQuoteView,
    PurchaseDraftView,
)

__all__ = [
    "OrganizationVoucherListView",
    "ProgramDetailView",
    "ProgramListView",
    "ProgramQuoteView",
    "PurchaseDraftView",
]
