"""Wiring of stores, gateway and feature flags from Django settings."""

from collections.abc import Callable, Iterable, MutableMapping
from typing import Any

from django.conf import settings

from tickets.domain import Member, Organization, Voucher
from tickets.gateway import FunctionsGateway, HttpFunctionsGateway
from tickets.services import BookingService, ColleagueService, ProgramService, PurchaseController
from tickets.stores import SessionDraftStore
from tickets.stores.django_store import (
    DjangoOrganizationStore,
    DjangoProgramStore,
    DjangoVoucherStore,
)


def get_program_service() -> ProgramService:
    return ProgramService(
        programs=DjangoProgramStore(),
        vouchers=DjangoVoucherStore(),
        organizations=DjangoOrganizationStore(),
    )


def get_gateway() -> FunctionsGateway:
    return HttpFunctionsGateway(
        base_url=settings.PORTAL_FUNCTIONS_URL,
        api_key=settings.PORTAL_FUNCTIONS_API_KEY or None,
        timeout_seconds=settings.PORTAL_FUNCTIONS_TIMEOUT,
    )


def is_feature_excluded(feature: str) -> bool:
    return feature in settings.PORTAL_EXCLUDED_FEATURES


def get_purchase_controller(
    session: MutableMapping[str, Any],
    member: Member,
    organization: Organization,
    vouchers: Iterable[Voucher] = (),
    *,
    gateway: FunctionsGateway | None = None,
    refresh_balances: Callable[[], None] | None = None,
) -> PurchaseController:
    """Build a purchase form whose drafts live in the visitor's session."""
    return PurchaseController(
        gateway=gateway or get_gateway(),
        drafts=SessionDraftStore(session),
        member=member,
        organization=organization,
        vouchers=vouchers,
        is_feature_excluded=is_feature_excluded,
        refresh_balances=refresh_balances,
        currency=settings.PORTAL_CURRENCY,
    )


def get_booking_service(
    session: MutableMapping[str, Any],
    *,
    gateway: FunctionsGateway | None = None,
    refresh_balances: Callable[[], None] | None = None,
) -> BookingService:
    return BookingService(
        gateway or get_gateway(),
        SessionDraftStore(session),
        refresh_balances=refresh_balances,
    )


def get_colleague_service(gateway: FunctionsGateway | None = None) -> ColleagueService:
    return ColleagueService(gateway or get_gateway())
