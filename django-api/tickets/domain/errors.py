"""Domain error codes for the tickets module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    PROGRAM_NOT_FOUND = "PROGRAM_NOT_FOUND"
    INVALID_PROGRAM_ID = "INVALID_PROGRAM_ID"
    ORGANIZATION_NOT_FOUND = "ORGANIZATION_NOT_FOUND"
    INVALID_ORGANIZATION_ID = "INVALID_ORGANIZATION_ID"
    NO_PROGRAM_SELECTED = "NO_PROGRAM_SELECTED"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    UNALLOCATED_BALANCE = "UNALLOCATED_BALANCE"
    PURCHASE_ORDER_REQUIRED = "PURCHASE_ORDER_REQUIRED"
    DISCOUNT_CODE_REQUIRED = "DISCOUNT_CODE_REQUIRED"
    DISCOUNT_REJECTED = "DISCOUNT_REJECTED"
    PAYMENT_INIT_FAILED = "PAYMENT_INIT_FAILED"
    NO_PENDING_CARD_PAYMENT = "NO_PENDING_CARD_PAYMENT"
    PURCHASE_FAILED = "PURCHASE_FAILED"
    ATTENDEE_NAMES_REQUIRED = "ATTENDEE_NAMES_REQUIRED"
    INSUFFICIENT_TICKETS = "INSUFFICIENT_TICKETS"
    INVALID_ATTENDEES = "INVALID_ATTENDEES"
    NO_ATTENDEES = "NO_ATTENDEES"
    BOOKING_FAILED = "BOOKING_FAILED"
    CANCELLATION_FAILED = "CANCELLATION_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ProgramNotFoundError(DomainError):
    """Raised when a program is not found."""

    def __init__(self, program_id: str) -> None:
        super().__init__(
            code=ErrorCode.PROGRAM_NOT_FOUND,
            message="Program not found",
        )
        object.__setattr__(self, "program_id", program_id)


class InvalidProgramIdError(DomainError):
    """Raised when a program ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PROGRAM_ID,
            message="Invalid program ID format",
        )


class OrganizationNotFoundError(DomainError):
    """Raised when an organization is not found."""

    def __init__(self, organization_id: str) -> None:
        super().__init__(
            code=ErrorCode.ORGANIZATION_NOT_FOUND,
            message="Organization not found",
        )
        object.__setattr__(self, "organization_id", organization_id)


class InvalidOrganizationIdError(DomainError):
    """Raised when an organization ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ORGANIZATION_ID,
            message="Invalid organization ID format",
        )


class NoProgramSelectedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_PROGRAM_SELECTED,
            message="Please select a program first.",
        )


class InvalidQuantityError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUANTITY,
            message="Please enter a valid quantity (at least 1)",
        )


class UnallocatedBalanceError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.UNALLOCATED_BALANCE,
            message="Please allocate the full amount across payment methods",
        )


class PurchaseOrderRequiredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PURCHASE_ORDER_REQUIRED,
            message="Please enter a purchase order number for account charges",
        )


class DiscountCodeRequiredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DISCOUNT_CODE_REQUIRED,
            message="Please enter a discount code",
        )


class DiscountRejectedError(DomainError):
    """Raised when the server refuses a discount code."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.DISCOUNT_REJECTED,
            message=message or "Invalid discount code",
        )


class PaymentInitError(DomainError):
    """Raised when a card payment intent could not be created."""

    def __init__(self, message: str | None = None) -> None:
        text = "Failed to initialize payment"
        if message:
            text = f"{text}: {message}"
        super().__init__(
            code=ErrorCode.PAYMENT_INIT_FAILED,
            message=text,
        )


class NoPendingCardPaymentError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_PENDING_CARD_PAYMENT,
            message="There is no card payment awaiting confirmation",
        )


class PurchaseFailedError(DomainError):
    """Raised when the purchase-finalization function reports failure."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.PURCHASE_FAILED,
            message=message or "Failed to process purchase",
        )


class AttendeeNamesRequiredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ATTENDEE_NAMES_REQUIRED,
            message="Please provide first and last names for all attendees",
        )


class InsufficientTicketsError(DomainError):
    """Raised when the organization holds too few program tickets."""

    def __init__(self, shortfall: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_TICKETS,
            message="Insufficient program tickets. Please purchase more tickets first.",
        )
        object.__setattr__(self, "shortfall", shortfall)


class InvalidAttendeesError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ATTENDEES,
            message="Please remove or fix invalid attendee emails",
        )


class NoAttendeesError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_ATTENDEES,
            message="Please add at least one attendee or specify number of links",
        )


class BookingFailedError(DomainError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_FAILED,
            message=message or "Failed to create booking",
        )


class TicketCancellationError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CANCELLATION_FAILED,
            message="Failed to cancel ticket. Please try again or contact support.",
        )
