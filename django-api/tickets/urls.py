from django.urls import path

from tickets.handlers import (
    OrganizationVoucherListView,
    ProgramDetailView,
    ProgramListView,
    ProgramQuoteView,
    PurchaseDraftView,
)

urlpatterns = [
    path("programs", ProgramListView.as_view(), name="program-list"),
    path("programs/<str:program_id>", ProgramDetailView.as_view(), name="program-detail"),
    path("programs/<str:program_id>/quote", ProgramQuoteView.as_view(), name="program-quote"),
    path("programs/<str:program_id>/draft", PurchaseDraftView.as_view(), name="program-draft"),
    path(
        "organizations/<str:organization_id>/vouchers",
        OrganizationVoucherListView.as_view(),
        name="organization-vouchers",
    ),
]
