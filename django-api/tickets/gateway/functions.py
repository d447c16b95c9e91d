"""Client for the hosted serverless functions.

Only the request/response contract is known here. Each function receives a
JSON object and answers with a JSON object; business failures come back as
``{"success": false, "error": ...}`` and are returned to the caller as data.
Transport failures and HTTP errors raise FunctionCallError.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping

import requests

logger = logging.getLogger(__name__)


class FunctionCallError(Exception):
    """Raised when a function could not be invoked or answered with an HTTP error."""

    def __init__(self, function_name: str, detail: str, *, error: str | None = None, status_code: int | None = None) -> None:
        super().__init__(f"{function_name}: {detail}")
        self.function_name = function_name
        self.error = error
        self.status_code = status_code


CENT = Decimal("0.01")


def _json_amount(value: Decimal | int | float) -> float:
    """Money goes over the wire as a JSON number rounded to whole pennies."""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PurchaseRequest:
    """Body of a processProgramTicketPurchase call."""

    member_email: str
    program_name: str
    quantity: int
    purchase_order_number: str | None
    selected_voucher_ids: tuple[str, ...]
    training_fund_amount: Decimal
    account_amount: Decimal
    payment_method: str
    stripe_payment_intent_id: str | None = None
    applied_discount_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "memberEmail": self.member_email,
            "programName": self.program_name,
            "quantity": self.quantity,
            "purchaseOrderNumber": self.purchase_order_number,
            "selectedVoucherIds": list(self.selected_voucher_ids),
            "trainingFundAmount": _json_amount(self.training_fund_amount),
            "accountAmount": _json_amount(self.account_amount),
            "paymentMethod": self.payment_method,
            "appliedDiscountId": self.applied_discount_id,
        }
        if self.stripe_payment_intent_id:
            payload["stripePaymentIntentId"] = self.stripe_payment_intent_id
        return payload


class FunctionsGateway(ABC):
    """Typed access to the portal's server-side functions."""

    @abstractmethod
    def invoke(self, name: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Invoke a function by name and return its JSON body."""
        ...

    def apply_discount_code(self, *, code: str, total_cost: Decimal, program_tag: str, member_email: str) -> dict[str, Any]:
        return self.invoke(
            "applyDiscountCode",
            {
                "code": code,
                "totalCost": _json_amount(total_cost),
                "programTag": program_tag,
                "memberEmail": member_email,
            },
        )

    def create_stripe_payment_intent(
        self,
        *,
        amount: Decimal,
        currency: str,
        member_email: str,
        metadata: Mapping[str, Any],
    ) -> dict[str, Any]:
        return self.invoke(
            "createStripePaymentIntent",
            {
                "amount": _json_amount(amount),
                "currency": currency,
                "memberEmail": member_email,
                "metadata": dict(metadata),
            },
        )

    def process_program_ticket_purchase(self, request: PurchaseRequest) -> dict[str, Any]:
        return self.invoke("processProgramTicketPurchase", request.to_payload())

    def create_booking(
        self,
        *,
        event_id: str,
        member_email: str,
        attendees: list[dict[str, Any]],
        registration_mode: str,
        number_of_links: int,
        tickets_required: int,
        program_tag: str | None,
    ) -> dict[str, Any]:
        return self.invoke(
            "createBooking",
            {
                "eventId": event_id,
                "memberEmail": member_email,
                "attendees": attendees,
                "registrationMode": registration_mode,
                "numberOfLinks": number_of_links,
                "ticketsRequired": tickets_required,
                "programTag": program_tag,
            },
        )

    def validate_colleague(self, *, email: str, member_email: str, organization_id: str) -> dict[str, Any]:
        return self.invoke(
            "validateColleague",
            {"email": email, "memberEmail": member_email, "organizationId": organization_id},
        )

    def cancel_ticket_via_flow(self, *, order_id: str, cancel_reason: str, member_id: str) -> dict[str, Any]:
        return self.invoke(
            "cancelTicketViaFlow",
            {"orderId": order_id, "cancelReason": cancel_reason, "memberId": member_id},
        )

    def sync_organization_contacts(self, *, organization_id: str) -> dict[str, Any]:
        return self.invoke("syncOrganizationContacts", {"organizationId": organization_id})


@dataclass
class HttpFunctionsGateway(FunctionsGateway):
    """Invokes functions with a JSON POST to ``<base_url>/<function name>``."""

    base_url: str
    api_key: str | None = None
    timeout_seconds: float = 30.0
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        self._session = self.session or requests.Session()

    def invoke(self, name: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        url = self.base_url.rstrip("/") + "/" + name
        headers: dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        logger.debug("Invoking function %s", name)
        try:
            response = self._session.post(url, json=dict(payload), timeout=self.timeout_seconds, headers=headers)
        except requests.Timeout as exc:
            raise FunctionCallError(name, "timeout") from exc
        except requests.RequestException as exc:
            raise FunctionCallError(name, str(exc)[:256]) from exc

        body = _json_body(response)
        if response.status_code >= 400:
            error = body.get("error") if body is not None else None
            logger.warning("Function %s answered HTTP %s", name, response.status_code)
            raise FunctionCallError(
                name,
                f"http_{response.status_code}",
                error=error if isinstance(error, str) else None,
                status_code=response.status_code,
            )
        if body is None:
            raise FunctionCallError(name, "invalid JSON body", status_code=response.status_code)
        return body


def _json_body(response: requests.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None
