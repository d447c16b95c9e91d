"""Tests for the HTTP functions gateway."""

import json
from decimal import Decimal

import pytest
import requests

from tickets.dependencies import get_gateway
from tickets.gateway import FunctionCallError, HttpFunctionsGateway, PurchaseRequest


def make_response(status_code: int, body) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = body if isinstance(body, bytes) else json.dumps(body).encode()
    return response


class FakeSession:
    def __init__(self, result):
        self.result = result
        self.posts = []

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def gateway_with(result, **kwargs) -> tuple[HttpFunctionsGateway, FakeSession]:
    session = FakeSession(result)
    return HttpFunctionsGateway(base_url="https://functions.test/", session=session, **kwargs), session


class TestInvoke:
    def test_posts_json_to_function_url(self):
        gateway, session = gateway_with(make_response(200, {"success": True}), api_key="k-1", timeout_seconds=5)

        assert gateway.invoke("applyDiscountCode", {"code": "SPRING"}) == {"success": True}

        url, kwargs = session.posts[0]
        assert url == "https://functions.test/applyDiscountCode"
        assert kwargs["json"] == {"code": "SPRING"}
        assert kwargs["timeout"] == 5
        assert kwargs["headers"] == {"Authorization": "Bearer k-1"}

    def test_no_auth_header_without_key(self):
        gateway, session = gateway_with(make_response(200, {"success": True}))
        gateway.invoke("syncOrganizationContacts", {})
        assert session.posts[0][1]["headers"] == {}

    def test_business_failure_is_returned_as_data(self):
        gateway, _ = gateway_with(make_response(200, {"success": False, "error": "Expired"}))
        assert gateway.invoke("applyDiscountCode", {}) == {"success": False, "error": "Expired"}

    def test_timeout_raises(self):
        gateway, _ = gateway_with(requests.Timeout("slow"))
        with pytest.raises(FunctionCallError) as exc_info:
            gateway.invoke("createBooking", {})
        assert exc_info.value.function_name == "createBooking"
        assert exc_info.value.error is None

    def test_connection_error_raises(self):
        gateway, _ = gateway_with(requests.ConnectionError("refused"))
        with pytest.raises(FunctionCallError):
            gateway.invoke("createBooking", {})

    def test_http_error_carries_server_message(self):
        gateway, _ = gateway_with(make_response(500, {"error": "Stripe unavailable"}))
        with pytest.raises(FunctionCallError) as exc_info:
            gateway.invoke("createStripePaymentIntent", {})
        assert exc_info.value.status_code == 500
        assert exc_info.value.error == "Stripe unavailable"

    def test_non_json_body_raises(self):
        gateway, _ = gateway_with(make_response(200, b"<html>gateway</html>"))
        with pytest.raises(FunctionCallError):
            gateway.invoke("createBooking", {})


class TestTypedCalls:
    def test_purchase_payload(self):
        gateway, session = gateway_with(make_response(200, {"success": True}))
        request = PurchaseRequest(
            member_email="alex@acme.ac.uk",
            program_name="Employability",
            quantity=2,
            purchase_order_number=None,
            selected_voucher_ids=("v1",),
            training_fund_amount=Decimal("5.50"),
            account_amount=Decimal("0"),
            payment_method="card",
            stripe_payment_intent_id="pi_1",
        )

        gateway.process_program_ticket_purchase(request)

        url, kwargs = session.posts[0]
        assert url.endswith("/processProgramTicketPurchase")
        assert kwargs["json"]["trainingFundAmount"] == 5.5
        assert kwargs["json"]["selectedVoucherIds"] == ["v1"]
        assert kwargs["json"]["stripePaymentIntentId"] == "pi_1"

    def test_amounts_are_rounded_to_pennies(self):
        """Fractional pennies from percentage discounts never reach the payment functions."""
        request = PurchaseRequest(
            member_email="alex@acme.ac.uk",
            program_name="Employability",
            quantity=3,
            purchase_order_number="PO-1",
            selected_voucher_ids=(),
            training_fund_amount=Decimal("8.335"),
            account_amount=Decimal("100") / Decimal("3"),
            payment_method="account",
        )

        payload = request.to_payload()

        assert payload["trainingFundAmount"] == 8.34
        assert payload["accountAmount"] == 33.33

    def test_intent_amount_is_rounded(self):
        gateway, session = gateway_with(make_response(200, {"success": True}))

        gateway.create_stripe_payment_intent(
            amount=Decimal("19.999"), currency="gbp", member_email="alex@acme.ac.uk", metadata={}
        )

        assert session.posts[0][1]["json"]["amount"] == 20.0

    def test_intent_id_omitted_when_absent(self):
        request = PurchaseRequest(
            member_email="alex@acme.ac.uk",
            program_name="Employability",
            quantity=1,
            purchase_order_number="PO-1",
            selected_voucher_ids=(),
            training_fund_amount=Decimal("0"),
            account_amount=Decimal("10"),
            payment_method="account",
        )
        assert "stripePaymentIntentId" not in request.to_payload()


class TestWiring:
    def test_gateway_built_from_settings(self, settings):
        settings.PORTAL_FUNCTIONS_URL = "https://functions.example"
        settings.PORTAL_FUNCTIONS_API_KEY = ""
        settings.PORTAL_FUNCTIONS_TIMEOUT = 12.0

        gateway = get_gateway()

        assert isinstance(gateway, HttpFunctionsGateway)
        assert gateway.base_url == "https://functions.example"
        assert gateway.api_key is None
        assert gateway.timeout_seconds == 12.0
