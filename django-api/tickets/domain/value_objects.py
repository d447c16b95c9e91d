"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class ProgramId:
    """Unique identifier for a Program."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VoucherId:
    """Unique identifier for a Voucher."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OrganizationId:
    """Unique identifier for an Organization."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    @classmethod
    def parse(cls, value: object) -> Self:
        """Build Money from loosely typed input, treating garbage as zero."""
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return cls.zero()
        if not amount.is_finite() or amount < 0:
            return cls.zero()
        return cls(amount=amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


class OfferType(Enum):
    """Ticket offer configured on a program."""

    NONE = "none"
    BOGO = "bogo"
    BULK_DISCOUNT = "bulk_discount"

    @classmethod
    def parse(cls, value: str | None) -> "OfferType":
        try:
            return cls(value or cls.NONE.value)
        except ValueError:
            return cls.NONE


class BogoLogic(Enum):
    """How the purchaser's entered quantity relates to free tickets.

    BUY_X_GET_Y_FREE: the quantity is what they pay for; free tickets come on top.
    ENTER_TOTAL_PAY_LESS: the quantity is the total they want; free tickets are inside it.
    """

    BUY_X_GET_Y_FREE = "buy_x_get_y_free"
    ENTER_TOTAL_PAY_LESS = "enter_total_pay_less"

    @classmethod
    def parse(cls, value: str | None) -> "BogoLogic":
        try:
            return cls(value or cls.BUY_X_GET_Y_FREE.value)
        except ValueError:
            return cls.BUY_X_GET_Y_FREE


class PaymentMethod(Enum):
    """How the balance left after vouchers and training fund is settled."""

    ACCOUNT = "account"
    CARD = "card"

    @classmethod
    def parse(cls, value: str | None) -> "PaymentMethod":
        try:
            return cls(value or cls.ACCOUNT.value)
        except ValueError:
            return cls.ACCOUNT


class RegistrationMode(Enum):
    SELF = "self"
    COLLEAGUES = "colleagues"
    LINKS = "links"


class ValidationStatus(Enum):
    """Outcome reported by the colleague validation function."""

    REGISTERED = "registered"
    UNREGISTERED_DOMAIN_MATCH = "unregistered_domain_match"
    EXTERNAL = "external"
    WRONG_ORGANIZATION = "wrong_organization"
    ERROR = "error"
