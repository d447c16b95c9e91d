"""Program ticket purchase flow.

The controller holds the purchase form for one member session:

    PROGRAM_LIST -> PROGRAM_SELECTED -> ALLOCATING -> SUBMITTING
        SUBMITTING -> AWAITING_CARD -> SUBMITTING   (card payments)
        SUBMITTING -> PROGRAM_LIST                  (success)
        SUBMITTING -> ALLOCATING                    (failure, nothing cleared)

Every field change recomputes cost and allocation and writes the form to the
draft store, so a reload can resume where the member left off.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from enum import Enum

from tickets.domain import (
    Allocation,
    AppliedDiscount,
    Member,
    Organization,
    PaymentMethod,
    Program,
    ProgramId,
    PurchaseDraft,
    PurchaseReceipt,
    Voucher,
)
from tickets.domain.allocation import allocate, clamp_training_fund, max_training_fund, voucher_total
from tickets.domain.errors import (
    DiscountCodeRequiredError,
    DiscountRejectedError,
    InvalidQuantityError,
    NoPendingCardPaymentError,
    NoProgramSelectedError,
    PaymentInitError,
    PurchaseFailedError,
    PurchaseOrderRequiredError,
    UnallocatedBalanceError,
)
from tickets.domain.pricing import strategy_for
from tickets.gateway import FunctionCallError, FunctionsGateway, PurchaseRequest
from tickets.stores import DraftStore, program_purchase_key

logger = logging.getLogger(__name__)

VOUCHERS_FEATURE = "payment_training_vouchers"
TRAINING_FUND_FEATURE = "payment_training_fund"


class PurchaseState(Enum):
    PROGRAM_LIST = "program_list"
    PROGRAM_SELECTED = "program_selected"
    ALLOCATING = "allocating"
    SUBMITTING = "submitting"
    AWAITING_CARD = "awaiting_card"


@dataclass(frozen=True)
class Quote:
    """Everything the purchase form displays for the current input."""

    cost_before_discount: Decimal
    total_cost: Decimal
    free_tickets: int
    total_tickets: int
    max_training_fund: Decimal
    allocation: Allocation


def quote_purchase(
    program: Program,
    quantity: int,
    *,
    selected_voucher_ids: Iterable[str] = (),
    vouchers: Iterable[Voucher] = (),
    training_fund: Decimal = Decimal("0"),
    fund_balance: Decimal = Decimal("0"),
    vouchers_enabled: bool = True,
    training_fund_enabled: bool = True,
    applied_discount: AppliedDiscount | None = None,
) -> Quote:
    strategy = strategy_for(program)
    quantity = max(quantity, 0)
    vouchers = list(vouchers)
    selected_voucher_ids = list(selected_voucher_ids)

    cost_before_discount = strategy.cost(quantity)
    total_cost = cost_before_discount
    if applied_discount is not None:
        total_cost = applied_discount.total_cost_after_discount

    allocation = allocate(
        total_cost,
        selected_voucher_ids,
        vouchers,
        training_fund,
        fund_balance,
        vouchers_enabled=vouchers_enabled,
        training_fund_enabled=training_fund_enabled,
    )
    return Quote(
        cost_before_discount=cost_before_discount,
        total_cost=total_cost,
        free_tickets=strategy.free_count(quantity),
        total_tickets=strategy.total_tickets(quantity),
        max_training_fund=max_training_fund(
            allocation.total_cost,
            allocation.voucher_amount,
            fund_balance,
            training_fund_enabled=training_fund_enabled,
        ),
        allocation=allocation,
    )


def _discount_amount(value: object) -> Decimal:
    """Parse an amount from a discount response; raises ValueError if unusable."""
    if value is None or isinstance(value, bool):
        raise ValueError("missing amount")
    amount = Decimal(str(value))
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"invalid amount {value!r}")
    return amount


@dataclass(frozen=True)
class DiscountRequest:
    """A discount validation call, tagged with the form state it was issued for."""

    code: str
    program_id: ProgramId
    quantity: int
    total_cost: Decimal


@dataclass(frozen=True)
class CardPayment:
    """A payment intent waiting for the member to confirm their card."""

    client_secret: str
    payment_intent_id: str
    amount: Decimal


@dataclass(frozen=True)
class SubmitOutcome:
    receipt: PurchaseReceipt | None = None
    card_payment: CardPayment | None = None

    @property
    def awaiting_card(self) -> bool:
        return self.card_payment is not None


class PurchaseController:
    """Stateful purchase form for a single member."""

    def __init__(
        self,
        *,
        gateway: FunctionsGateway,
        drafts: DraftStore,
        member: Member,
        organization: Organization,
        vouchers: Iterable[Voucher] = (),
        is_feature_excluded: Callable[[str], bool] | None = None,
        refresh_balances: Callable[[], None] | None = None,
        currency: str = "gbp",
    ) -> None:
        self._gateway = gateway
        self._drafts = drafts
        self._is_feature_excluded = is_feature_excluded or (lambda feature: False)
        self._refresh_balances = refresh_balances
        self.member = member
        self.organization = organization
        self.currency = currency
        self.vouchers: list[Voucher] = [] if not self.vouchers_enabled else list(vouchers)

        self.state = PurchaseState.PROGRAM_LIST
        self.program: Program | None = None
        self.form = PurchaseDraft()
        self.applied_discount: AppliedDiscount | None = None
        self.card_payment: CardPayment | None = None
        self.last_receipt: PurchaseReceipt | None = None

    @property
    def vouchers_enabled(self) -> bool:
        return not self._is_feature_excluded(VOUCHERS_FEATURE)

    @property
    def training_fund_enabled(self) -> bool:
        return not self._is_feature_excluded(TRAINING_FUND_FEATURE)

    # -- Navigation -----------------------------------------------------------

    def select_program(self, program: Program) -> None:
        """Open the purchase form for a program, resuming any saved draft."""
        self.program = program
        self.applied_discount = None
        self.card_payment = None
        self.state = PurchaseState.PROGRAM_SELECTED

        saved = self._drafts.get(program_purchase_key(program.id))
        if saved is None:
            self.form = PurchaseDraft()
        else:
            draft = PurchaseDraft.from_dict(saved)
            known = {str(v.id) for v in self.vouchers}
            self.form = replace(
                draft,
                selected_vouchers=tuple(v for v in draft.selected_vouchers if v in known),
            )
        self._save()

    def back_to_programs(self) -> None:
        self.program = None
        self.form = PurchaseDraft()
        self.applied_discount = None
        self.card_payment = None
        self.state = PurchaseState.PROGRAM_LIST

    def refresh_vouchers(self, vouchers: Iterable[Voucher]) -> None:
        """Replace the voucher list and drop selections that no longer exist."""
        self.vouchers = [] if not self.vouchers_enabled else list(vouchers)
        if self.program is None:
            return
        known = {str(v.id) for v in self.vouchers}
        kept = tuple(v for v in self.form.selected_vouchers if v in known)
        if kept != self.form.selected_vouchers:
            logger.info("Dropping %d stale voucher selections", len(self.form.selected_vouchers) - len(kept))
            self._update(selected_vouchers=kept)

    # -- Field changes --------------------------------------------------------

    def set_quantity(self, quantity: int) -> None:
        quantity = int(quantity)
        if quantity != self.form.qty:
            self.applied_discount = None
        self._update(qty=quantity)

    def toggle_voucher(self, voucher_id: str, selected: bool) -> None:
        current = [v for v in self.form.selected_vouchers if v != str(voucher_id)]
        if selected:
            current.append(str(voucher_id))
        self._update(selected_vouchers=tuple(current))

    def set_selected_vouchers(self, voucher_ids: Iterable[str]) -> None:
        self._update(selected_vouchers=tuple(str(v) for v in voucher_ids))

    def set_training_fund(self, value: object) -> None:
        """Set the training fund contribution, clamped to what may be used."""
        quote = self.quote()
        self._update(training_fund=clamp_training_fund(value, quote.max_training_fund))

    def set_payment_method(self, method: PaymentMethod | str) -> None:
        if not isinstance(method, PaymentMethod):
            method = PaymentMethod.parse(method)
        self._update(payment_method=method)

    def set_purchase_order_number(self, po: str) -> None:
        self._update(po=po)

    # -- Derived values -------------------------------------------------------

    def quote(self) -> Quote:
        program = self._require_program()
        return quote_purchase(
            program,
            self.form.qty,
            selected_voucher_ids=self.form.selected_vouchers,
            vouchers=self.vouchers,
            training_fund=self.form.training_fund,
            fund_balance=self.organization.training_fund_balance.amount,
            vouchers_enabled=self.vouchers_enabled,
            training_fund_enabled=self.training_fund_enabled,
            applied_discount=self.applied_discount,
        )

    def selected_voucher_value(self) -> Decimal:
        return voucher_total(self.form.selected_vouchers, self.vouchers)

    # -- Discounts ------------------------------------------------------------

    def request_discount(self, code: str) -> DiscountRequest:
        code = (code or "").strip()
        if not code:
            raise DiscountCodeRequiredError()
        if self.program is None:
            raise NoProgramSelectedError()
        return DiscountRequest(
            code=code.upper(),
            program_id=self.program.id,
            quantity=self.form.qty,
            total_cost=self.quote().cost_before_discount,
        )

    def resolve_discount(self, request: DiscountRequest) -> AppliedDiscount | None:
        """Validate a discount code and apply it if the form has not moved on.

        Returns None when the response arrived for a program or quantity that
        is no longer current; such responses are dropped.
        """
        program = self._require_program()
        try:
            response = self._gateway.apply_discount_code(
                code=request.code,
                total_cost=request.total_cost,
                program_tag=program.program_tag,
                member_email=self.member.email,
            )
        except FunctionCallError as exc:
            logger.exception("Error applying discount code")
            if self._is_current(request):
                self.applied_discount = None
            raise DiscountRejectedError(exc.error) from exc

        if not response.get("success"):
            if self._is_current(request):
                self.applied_discount = None
            raise DiscountRejectedError(response.get("error"))

        if not self._is_current(request):
            logger.info("Dropping discount response for superseded quantity %s", request.quantity)
            return None

        try:
            discount = AppliedDiscount(
                discount_id=str(response.get("discountId") or ""),
                code=str(response.get("code") or request.code),
                type=str(response.get("type") or ""),
                value=_discount_amount(response.get("value") or 0),
                discount_amount=_discount_amount(response.get("discountAmount") or 0),
                total_cost_after_discount=_discount_amount(response.get("totalCostAfterDiscount")),
                message=str(response.get("message") or ""),
                program_id=request.program_id,
                quantity=request.quantity,
            )
        except (InvalidOperation, ValueError) as exc:
            logger.warning("Malformed discount response for code %s: %r", request.code, response)
            self.applied_discount = None
            raise DiscountRejectedError() from exc

        self.applied_discount = discount
        return self.applied_discount

    def apply_discount(self, code: str) -> AppliedDiscount | None:
        return self.resolve_discount(self.request_discount(code))

    def remove_discount(self) -> None:
        self.applied_discount = None

    # -- Submission -----------------------------------------------------------

    def submit(self) -> SubmitOutcome:
        """Validate the form and either finalize the purchase or start a card payment."""
        program = self._require_program()
        if self.form.qty < 1:
            raise InvalidQuantityError()

        quote = self.quote()
        allocation = quote.allocation
        if not allocation.is_fully_paid:
            raise UnallocatedBalanceError()

        method = self.form.payment_method
        remaining = allocation.remaining_balance
        if remaining > 0 and method is PaymentMethod.ACCOUNT and not self.form.po.strip():
            raise PurchaseOrderRequiredError()

        if method is PaymentMethod.CARD and remaining > 0:
            return SubmitOutcome(card_payment=self._start_card_payment(program, remaining))

        request = PurchaseRequest(
            member_email=self.member.email,
            program_name=program.name,
            quantity=self.form.qty,
            purchase_order_number=self.form.po.strip() if method is PaymentMethod.ACCOUNT else None,
            selected_voucher_ids=self._voucher_ids_for_submission(),
            training_fund_amount=allocation.training_fund_amount,
            account_amount=remaining if method is PaymentMethod.ACCOUNT else Decimal("0"),
            payment_method=method.value,
            applied_discount_id=self._discount_id(),
        )
        return SubmitOutcome(receipt=self._finalize(request, quote))

    def confirm_card_payment(self) -> PurchaseReceipt:
        """Finalize the purchase once the card payment has been confirmed."""
        if self.state is not PurchaseState.AWAITING_CARD or self.card_payment is None:
            raise NoPendingCardPaymentError()
        program = self._require_program()
        quote = self.quote()
        request = PurchaseRequest(
            member_email=self.member.email,
            program_name=program.name,
            quantity=self.form.qty,
            purchase_order_number=None,
            selected_voucher_ids=self._voucher_ids_for_submission(),
            training_fund_amount=quote.allocation.training_fund_amount,
            account_amount=Decimal("0"),
            payment_method=PaymentMethod.CARD.value,
            stripe_payment_intent_id=self.card_payment.payment_intent_id,
            applied_discount_id=self._discount_id(),
        )
        return self._finalize(request, quote)

    def cancel_card_payment(self) -> None:
        self.card_payment = None
        if self.program is not None:
            self.state = PurchaseState.ALLOCATING

    # -- Internals ------------------------------------------------------------

    def _start_card_payment(self, program: Program, amount: Decimal) -> CardPayment:
        self.state = PurchaseState.SUBMITTING
        metadata = {
            "program_name": program.program_tag,
            "quantity": self.form.qty,
            "organization_id": str(self.organization.id),
            "discount_code": self.applied_discount.code if self.applied_discount else None,
        }
        try:
            response = self._gateway.create_stripe_payment_intent(
                amount=amount,
                currency=self.currency,
                member_email=self.member.email,
                metadata=metadata,
            )
        except FunctionCallError as exc:
            logger.exception("Error creating card payment intent")
            self.state = PurchaseState.ALLOCATING
            raise PaymentInitError() from exc

        if not response.get("success"):
            self.state = PurchaseState.ALLOCATING
            raise PaymentInitError(response.get("error") or "Unknown error")

        self.card_payment = CardPayment(
            client_secret=response["clientSecret"],
            payment_intent_id=response["paymentIntentId"],
            amount=amount,
        )
        self.state = PurchaseState.AWAITING_CARD
        return self.card_payment

    def _finalize(self, request: PurchaseRequest, quote: Quote) -> PurchaseReceipt:
        program = self._require_program()
        self.state = PurchaseState.SUBMITTING
        try:
            response = self._gateway.process_program_ticket_purchase(request)
        except FunctionCallError as exc:
            logger.exception("Error processing program ticket purchase")
            self.state = PurchaseState.ALLOCATING
            raise PurchaseFailedError(exc.error) from exc

        if response.get("success") is not True:
            logger.warning("Program ticket purchase rejected: %s", response.get("error"))
            self.state = PurchaseState.ALLOCATING
            raise PurchaseFailedError(response.get("error"))

        self._drafts.clear(program_purchase_key(program.id))
        if self._refresh_balances is not None:
            self._refresh_balances()

        receipt = PurchaseReceipt(
            program_name=program.name,
            quantity=quote.total_tickets,
            total_cost=quote.total_cost,
            payment_method=PaymentMethod(request.payment_method),
        )
        logger.info(
            "Purchased %d %s tickets for %s via %s",
            receipt.quantity,
            program.program_tag,
            self.member.email,
            request.payment_method,
        )
        self.last_receipt = receipt
        self.back_to_programs()
        return receipt

    def _voucher_ids_for_submission(self) -> tuple[str, ...]:
        return self.form.selected_vouchers if self.vouchers_enabled else ()

    def _discount_id(self) -> str | None:
        if self.applied_discount is None:
            return None
        return self.applied_discount.discount_id or None

    def _is_current(self, request: DiscountRequest) -> bool:
        return (
            self.program is not None
            and self.program.id == request.program_id
            and self.form.qty == request.quantity
        )

    def _require_program(self) -> Program:
        if self.program is None:
            raise NoProgramSelectedError()
        return self.program

    def _update(self, **changes) -> None:
        self._require_program()
        self.form = replace(self.form, **changes)
        # A pending payment intent was created for the old amount.
        self.card_payment = None
        self.state = PurchaseState.ALLOCATING
        self._save()

    def _save(self) -> None:
        if self.program is not None:
            self._drafts.set(program_purchase_key(self.program.id), self.form.to_dict())
