"""Domain models representing persisted and derived state.

These are pure domain objects with no API input rules.
Django ORM models are in tickets/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Self

from tickets.domain.value_objects import (
    BogoLogic,
    Money,
    OfferType,
    OrganizationId,
    PaymentMethod,
    ProgramId,
    RegistrationMode,
    ValidationStatus,
    VoucherId,
)

ACTIVE = "active"


@dataclass(frozen=True)
class Program:
    """Domain representation of a ticket Program."""

    id: ProgramId
    name: str
    program_tag: str
    unit_price: Money
    offer_type: OfferType = OfferType.NONE
    bogo_buy_quantity: int | None = None
    bogo_get_free_quantity: int | None = None
    bogo_logic_type: BogoLogic = BogoLogic.BUY_X_GET_Y_FREE
    bulk_discount_threshold: int | None = None
    bulk_discount_percentage: Decimal | None = None
    is_active: bool = True


@dataclass(frozen=True)
class Voucher:
    """Domain representation of a Voucher."""

    id: VoucherId
    organization_id: OrganizationId
    code: str
    value: Money
    expires_at: datetime
    status: str = ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE


@dataclass(frozen=True)
class Organization:
    """Domain representation of a member Organization."""

    id: OrganizationId
    name: str
    training_fund_balance: Money
    program_ticket_balances: dict[str, int] = field(default_factory=dict)
    contacts_synced_at: datetime | None = None

    def tickets_for(self, program_tag: str | None) -> int:
        if not program_tag:
            return 0
        return self.program_ticket_balances.get(program_tag, 0)


@dataclass(frozen=True)
class Member:
    """The signed-in member acting on behalf of an organization."""

    email: str
    organization_id: OrganizationId
    id: str | None = None
    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True)
class Allocation:
    """How a purchase total is split across payment channels."""

    total_cost: Decimal
    voucher_amount: Decimal
    training_fund_amount: Decimal
    remaining_balance: Decimal

    @property
    def total_allocated(self) -> Decimal:
        return self.voucher_amount + self.training_fund_amount + self.remaining_balance

    @property
    def is_fully_paid(self) -> bool:
        return abs(self.total_allocated - self.total_cost) < Decimal("0.01")


@dataclass(frozen=True)
class VoucherUsage:
    """Preview of how much of a selected voucher a purchase would consume."""

    voucher_id: VoucherId
    amount_used: Decimal
    is_fully_used: bool
    remaining_value: Decimal


@dataclass(frozen=True)
class PurchaseDraft:
    """Resumable purchase form state, stored per program."""

    selected_vouchers: tuple[str, ...] = ()
    training_fund: Decimal = Decimal("0")
    payment_method: PaymentMethod = PaymentMethod.ACCOUNT
    po: str = ""
    qty: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "selectedVouchers": list(self.selected_vouchers),
            "trainingFund": str(self.training_fund),
            "paymentMethod": self.payment_method.value,
            "po": self.po,
            "qty": self.qty,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        qty = data.get("qty") or 1
        return cls(
            selected_vouchers=tuple(data.get("selectedVouchers") or ()),
            training_fund=Money.parse(data.get("trainingFund") or 0).amount,
            payment_method=PaymentMethod.parse(data.get("paymentMethod")),
            po=data.get("po") or "",
            qty=int(qty),
        )


@dataclass(frozen=True)
class AppliedDiscount:
    """A discount code accepted by the server for a specific program and quantity."""

    discount_id: str
    code: str
    type: str
    value: Decimal
    discount_amount: Decimal
    total_cost_after_discount: Decimal
    message: str
    program_id: ProgramId
    quantity: int


@dataclass(frozen=True)
class PurchaseReceipt:
    """Summary shown after a successful purchase."""

    program_name: str
    quantity: int
    total_cost: Decimal
    payment_method: PaymentMethod


@dataclass(frozen=True)
class Attendee:
    """A person being registered for an event."""

    email: str
    first_name: str = ""
    last_name: str = ""
    is_self: bool = False
    is_valid: bool | None = None
    validation_status: str | None = None
    validation_message: str | None = None
    contact_id: str | None = None

    def needs_manual_name(self) -> bool:
        if self.is_self:
            return False
        return self.validation_status in (
            ValidationStatus.UNREGISTERED_DOMAIN_MATCH.value,
            ValidationStatus.EXTERNAL.value,
        )

    def with_validation(self, **changes: Any) -> Self:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "isSelf": self.is_self,
            "isValid": self.is_valid,
            "validationStatus": self.validation_status,
            "validationMessage": self.validation_message,
            "contactId": self.contact_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            email=data.get("email") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            is_self=bool(data.get("isSelf")),
            is_valid=data.get("isValid"),
            validation_status=data.get("validationStatus"),
            validation_message=data.get("validationMessage"),
            contact_id=data.get("contactId"),
        )


@dataclass(frozen=True)
class Contact:
    """An organization contact available for colleague search."""

    email: str
    first_name: str = ""
    last_name: str = ""
    contact_id: str | None = None


@dataclass(frozen=True)
class Event:
    """An event members book onto using program tickets."""

    id: str
    name: str
    program_tag: str | None = None


@dataclass(frozen=True)
class Registration:
    """Resumable event registration form state, stored per event."""

    mode: RegistrationMode
    attendees: tuple[Attendee, ...] = ()
    member_attending: bool = False

    def valid_attendees(self) -> list[Attendee]:
        return [a for a in self.attendees if a.is_valid]

    def to_dict(self) -> dict[str, Any]:
        return {
            "attendees": [a.to_dict() for a in self.attendees],
            "registrationMode": self.mode.value,
            "memberAttending": self.member_attending,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            mode=RegistrationMode(data.get("registrationMode") or RegistrationMode.COLLEAGUES.value),
            attendees=tuple(Attendee.from_dict(a) for a in data.get("attendees") or ()),
            member_attending=bool(data.get("memberAttending")),
        )
