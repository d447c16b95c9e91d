"""Integration tests for the program purchase API.

Run with: pytest tests/test_program_api.py -v
"""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.utils import timezone
from rest_framework.test import APIClient

from tickets.cache_keys import PROGRAM_LIST_CACHE_KEY
from tickets.models import Organization, Program, Voucher


@pytest.fixture
def program_row(db):
    return Program.objects.create(
        name="Employability",
        program_tag="EMP",
        program_ticket_price=Decimal("10.00"),
        offer_type=Program.OfferType.BOGO,
        bogo_buy_quantity=3,
        bogo_get_free_quantity=1,
    )


@pytest.fixture
def organization_row(db):
    return Organization.objects.create(
        name="Acme University",
        training_fund_balance=Decimal("50.00"),
        program_ticket_balances={"EMP": 2},
    )


@pytest.fixture
def voucher_row(organization_row):
    return Voucher.objects.create(
        organization=organization_row,
        code="WELCOME",
        value=Decimal("25.00"),
        expires_at=timezone.now() + timedelta(days=30),
    )


@pytest.mark.django_db
class TestProgramList:
    """Tests for GET /api/programs"""

    def test_lists_active_programs(self, api_client: APIClient, program_row):
        """Given active and retired programs, only active ones are listed."""
        Program.objects.create(
            name="Retired", program_tag="OLD", program_ticket_price=Decimal("5.00"), is_active=False
        )

        response = api_client.get("/api/programs")

        assert response.status_code == 200
        results = response.json()["results"]
        assert [p["program_tag"] for p in results] == ["EMP"]
        assert results[0]["unit_price"] == "10.00"
        assert results[0]["offer_type"] == "bogo"
        assert results[0]["bogo_logic_type"] == "buy_x_get_y_free"

    def test_empty_catalog(self, api_client: APIClient):
        response = api_client.get("/api/programs")
        assert response.status_code == 200
        assert response.json() == {"results": []}

    def test_cached_response(self, api_client: APIClient):
        """Given cached data, returns from cache."""
        cache.set(PROGRAM_LIST_CACHE_KEY, [{"name": "Cached"}])
        response = api_client.get("/api/programs")
        assert response.json() == {"results": [{"name": "Cached"}]}


@pytest.mark.django_db
class TestProgramDetail:
    """Tests for GET /api/programs/{id}"""

    def test_returns_details(self, api_client: APIClient, program_row):
        response = api_client.get(f"/api/programs/{program_row.pk}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(program_row.pk)
        assert body["bogo_buy_quantity"] == 3
        assert body["bulk_discount_percentage"] is None

    def test_not_found(self, api_client: APIClient):
        response = api_client.get(f"/api/programs/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "PROGRAM_NOT_FOUND"

    def test_invalid_id_format(self, api_client: APIClient):
        response = api_client.get("/api/programs/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PROGRAM_ID"


@pytest.mark.django_db
class TestProgramQuote:
    """Tests for POST /api/programs/{id}/quote"""

    def test_quote_without_organization(self, api_client: APIClient, program_row):
        """Three tickets at 10 with buy 3 get 1 free cost 30 for 4 tickets."""
        response = api_client.post(f"/api/programs/{program_row.pk}/quote", {"quantity": 3}, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["totalCost"] == "30.00"
        assert body["freeTickets"] == 1
        assert body["totalTickets"] == 4
        assert body["maxTrainingFund"] == "0.00"
        assert body["allocation"]["remainingBalance"] == "30.00"
        assert body["allocation"]["isFullyPaid"] is True

    def test_quote_allocates_vouchers_and_training_fund(
        self, api_client: APIClient, program_row, organization_row, voucher_row
    ):
        response = api_client.post(
            f"/api/programs/{program_row.pk}/quote",
            {
                "quantity": 4,
                "selectedVoucherIds": [str(voucher_row.pk)],
                "trainingFund": "100",
                "organizationId": str(organization_row.pk),
            },
            format="json",
        )

        assert response.status_code == 200
        allocation = response.json()["allocation"]
        assert allocation["voucherAmount"] == "25.00"
        assert allocation["trainingFundAmount"] == "15.00"
        assert allocation["remainingBalance"] == "0.00"

    def test_excluded_vouchers_are_ignored(
        self, api_client: APIClient, settings, program_row, organization_row, voucher_row
    ):
        settings.PORTAL_EXCLUDED_FEATURES = frozenset({"payment_training_vouchers"})

        response = api_client.post(
            f"/api/programs/{program_row.pk}/quote",
            {
                "quantity": 4,
                "selectedVoucherIds": [str(voucher_row.pk)],
                "organizationId": str(organization_row.pk),
            },
            format="json",
        )

        assert response.json()["allocation"]["voucherAmount"] == "0.00"
        assert response.json()["allocation"]["remainingBalance"] == "40.00"

    def test_quantity_must_be_positive(self, api_client: APIClient, program_row):
        response = api_client.post(f"/api/programs/{program_row.pk}/quote", {"quantity": 0}, format="json")
        assert response.status_code == 400

    def test_unknown_program(self, api_client: APIClient):
        response = api_client.post(f"/api/programs/{uuid4()}/quote", {"quantity": 1}, format="json")
        assert response.status_code == 404

    def test_unknown_organization(self, api_client: APIClient, program_row):
        response = api_client.post(
            f"/api/programs/{program_row.pk}/quote",
            {"quantity": 1, "organizationId": str(uuid4())},
            format="json",
        )
        assert response.status_code == 404
        assert response.json()["code"] == "ORGANIZATION_NOT_FOUND"


@pytest.mark.django_db
class TestPurchaseDraft:
    """Tests for GET/DELETE /api/programs/{id}/draft"""

    def test_quote_saves_draft_to_session(self, api_client: APIClient, program_row):
        api_client.post(
            f"/api/programs/{program_row.pk}/quote",
            {"quantity": 2, "paymentMethod": "card", "po": "PO-7"},
            format="json",
        )

        response = api_client.get(f"/api/programs/{program_row.pk}/draft")

        assert response.status_code == 200
        assert response.json() == {
            "selectedVouchers": [],
            "trainingFund": "0.00",
            "paymentMethod": "card",
            "po": "PO-7",
            "qty": 2,
        }

    def test_missing_draft_returns_defaults(self, api_client: APIClient, program_row):
        response = api_client.get(f"/api/programs/{program_row.pk}/draft")
        assert response.json()["qty"] == 1
        assert response.json()["paymentMethod"] == "account"

    def test_delete_clears_draft(self, api_client: APIClient, program_row):
        api_client.post(f"/api/programs/{program_row.pk}/quote", {"quantity": 5}, format="json")

        response = api_client.delete(f"/api/programs/{program_row.pk}/draft")

        assert response.status_code == 204
        assert api_client.get(f"/api/programs/{program_row.pk}/draft").json()["qty"] == 1


@pytest.mark.django_db
class TestOrganizationVouchers:
    """Tests for GET /api/organizations/{id}/vouchers"""

    def test_lists_active_vouchers(self, api_client: APIClient, organization_row, voucher_row):
        Voucher.objects.create(
            organization=organization_row,
            code="SPENT",
            value=Decimal("5.00"),
            expires_at=timezone.now() + timedelta(days=1),
            status="redeemed",
        )

        response = api_client.get(f"/api/organizations/{organization_row.pk}/vouchers")

        assert response.status_code == 200
        assert [v["code"] for v in response.json()["results"]] == ["WELCOME"]

    def test_excluded_feature_lists_nothing(self, api_client: APIClient, settings, organization_row, voucher_row):
        settings.PORTAL_EXCLUDED_FEATURES = frozenset({"payment_training_vouchers"})
        response = api_client.get(f"/api/organizations/{organization_row.pk}/vouchers")
        assert response.json() == {"results": []}

    def test_invalid_organization_id(self, api_client: APIClient):
        response = api_client.get("/api/organizations/acme/vouchers")
        assert response.status_code == 400


@pytest.mark.django_db
class TestProgramModel:
    def test_bulk_percentage_above_100_is_rejected(self):
        """Admin validation refuses a bulk discount over 100%."""
        program = Program(
            name="Bulk",
            program_tag="BULK",
            program_ticket_price=Decimal("10.00"),
            offer_type=Program.OfferType.BULK_DISCOUNT,
            bulk_discount_threshold=2,
            bulk_discount_percentage=Decimal("150.00"),
        )
        with pytest.raises(ValidationError) as exc_info:
            program.full_clean()
        assert "bulk_discount_percentage" in exc_info.value.message_dict
