"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from tickets.domain import (
    BogoLogic,
    Member,
    Money,
    OfferType,
    Organization,
    OrganizationId,
    Program,
    ProgramId,
    Voucher,
    VoucherId,
)
from tickets.gateway import FunctionsGateway
from tickets.stores import InMemoryDraftStore


class FakeGateway(FunctionsGateway):
    """Records invocations and answers from canned responses.

    A canned response may be a dict, an exception instance to raise, or a
    callable taking the payload.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.responses: dict[str, object] = {}

    def invoke(self, name, payload):
        self.calls.append((name, dict(payload)))
        response = self.responses.get(name, {"success": True})
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(payload)
        return response

    def calls_to(self, name: str) -> list[dict]:
        return [payload for called, payload in self.calls if called == name]


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def drafts() -> InMemoryDraftStore:
    return InMemoryDraftStore()


@pytest.fixture
def make_program():
    def factory(**overrides) -> Program:
        fields = {
            "id": ProgramId(uuid4()),
            "name": "Employability Programme",
            "program_tag": "EMP",
            "unit_price": Money(Decimal("10")),
            "offer_type": OfferType.NONE,
            "bogo_logic_type": BogoLogic.BUY_X_GET_Y_FREE,
        }
        fields.update(overrides)
        return Program(**fields)

    return factory


@pytest.fixture
def organization_id() -> OrganizationId:
    return OrganizationId(uuid4())


@pytest.fixture
def make_voucher(organization_id):
    def factory(value="10", expires_at=None, **overrides) -> Voucher:
        fields = {
            "id": VoucherId(uuid4()),
            "organization_id": organization_id,
            "code": f"V-{uuid4().hex[:6]}",
            "value": Money(Decimal(value)),
            "expires_at": expires_at or datetime(2030, 1, 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Voucher(**fields)

    return factory


@pytest.fixture
def organization(organization_id) -> Organization:
    return Organization(
        id=organization_id,
        name="Acme University",
        training_fund_balance=Money(Decimal("50")),
        program_ticket_balances={"EMP": 3},
    )


@pytest.fixture
def member(organization_id) -> Member:
    return Member(email="alex@acme.ac.uk", organization_id=organization_id, id="member-1")
