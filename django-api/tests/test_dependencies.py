"""Tests for service wiring from settings."""

from decimal import Decimal

from tickets.dependencies import (
    get_booking_service,
    get_colleague_service,
    get_purchase_controller,
)
from tickets.domain import PaymentMethod, Registration, RegistrationMode
from tickets.gateway import HttpFunctionsGateway
from tickets.stores import event_registration_key, program_purchase_key


class TestPurchaseControllerFactory:
    def test_card_intent_uses_configured_currency(self, settings, gateway, member, organization, make_program):
        """The payment intent is created in PORTAL_CURRENCY."""
        settings.PORTAL_CURRENCY = "eur"
        gateway.responses["createStripePaymentIntent"] = {
            "success": True,
            "clientSecret": "pi_2_secret",
            "paymentIntentId": "pi_2",
        }
        controller = get_purchase_controller({}, member, organization, gateway=gateway)
        controller.select_program(make_program())
        controller.set_payment_method(PaymentMethod.CARD)

        controller.submit()

        assert gateway.calls_to("createStripePaymentIntent")[0]["currency"] == "eur"

    def test_drafts_are_kept_in_the_session(self, gateway, member, organization, make_program):
        session = {}
        program = make_program()
        controller = get_purchase_controller(session, member, organization, gateway=gateway)
        controller.select_program(program)

        controller.set_quantity(4)

        assert session[program_purchase_key(program.id)]["qty"] == 4

    def test_excluded_features_come_from_settings(self, settings, gateway, member, organization, make_program):
        settings.PORTAL_EXCLUDED_FEATURES = frozenset({"payment_training_fund"})
        controller = get_purchase_controller({}, member, organization, gateway=gateway)
        controller.select_program(make_program())

        controller.set_training_fund("5")

        assert controller.form.training_fund == Decimal("0")

    def test_defaults_to_http_gateway(self, settings, member, organization):
        settings.PORTAL_FUNCTIONS_URL = "https://functions.example"
        controller = get_purchase_controller({}, member, organization)
        assert isinstance(controller._gateway, HttpFunctionsGateway)


class TestOtherFactories:
    def test_booking_service_saves_to_session(self, gateway):
        session = {}
        service = get_booking_service(session, gateway=gateway)

        service.save_registration("evt-1", Registration(mode=RegistrationMode.SELF))

        assert session[event_registration_key("evt-1")]["registrationMode"] == "self"

    def test_colleague_service_uses_http_gateway(self, settings):
        settings.PORTAL_FUNCTIONS_URL = "https://functions.example"
        service = get_colleague_service()
        assert isinstance(service._gateway, HttpFunctionsGateway)
