"""Ticket pricing for programs.

Each program resolves to exactly one pricing strategy. Given the quantity a
purchaser entered, the strategy reports the charge and the free and total
ticket counts.

Missing or malformed offer fields never raise; they fall back to standard
pricing (unit price times quantity).
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from tickets.domain.models import Program
from tickets.domain.value_objects import BogoLogic, OfferType

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class PricingStrategy(ABC):
    """Interface for program ticket pricing."""

    def __init__(self, unit_price: Decimal) -> None:
        self.unit_price = unit_price

    def base_price(self, quantity: int) -> Decimal:
        return self.unit_price * quantity

    @abstractmethod
    def cost(self, quantity: int) -> Decimal:
        """Return the amount charged for the entered quantity."""
        ...

    def free_count(self, quantity: int) -> int:
        """Return the number of free tickets earned."""
        return 0

    def total_tickets(self, quantity: int) -> int:
        """Return the number of tickets the purchaser receives."""
        return quantity


class StandardPricingStrategy(PricingStrategy):
    """No offer: every ticket is charged at the unit price."""

    def cost(self, quantity: int) -> Decimal:
        return self.base_price(quantity)


class BuyXGetYFreeStrategy(PricingStrategy):
    """Pay for every entered ticket; free tickets are granted on top."""

    def __init__(self, unit_price: Decimal, buy_quantity: int, free_quantity: int) -> None:
        super().__init__(unit_price)
        self.buy_quantity = buy_quantity
        self.free_quantity = free_quantity

    def cost(self, quantity: int) -> Decimal:
        return self.base_price(quantity)

    def free_count(self, quantity: int) -> int:
        if quantity < self.buy_quantity:
            return 0
        return (quantity // self.buy_quantity) * self.free_quantity

    def total_tickets(self, quantity: int) -> int:
        return quantity + self.free_count(quantity)


class EnterTotalPayLessStrategy(PricingStrategy):
    """The entered quantity is the total wanted; free tickets come out of it."""

    def __init__(self, unit_price: Decimal, buy_quantity: int, free_quantity: int) -> None:
        super().__init__(unit_price)
        self.buy_quantity = buy_quantity
        self.free_quantity = free_quantity

    @property
    def block_size(self) -> int:
        return self.buy_quantity + self.free_quantity

    def chargeable_tickets(self, quantity: int) -> int:
        if quantity < self.block_size:
            return quantity
        blocks, remainder = divmod(quantity, self.block_size)
        return blocks * self.buy_quantity + remainder

    def cost(self, quantity: int) -> Decimal:
        return self.unit_price * self.chargeable_tickets(quantity)

    def free_count(self, quantity: int) -> int:
        if quantity < self.block_size:
            return 0
        return (quantity // self.block_size) * self.free_quantity


class BulkDiscountStrategy(PricingStrategy):
    """Percentage off the whole order once the quantity threshold is met."""

    def __init__(self, unit_price: Decimal, threshold: int, percentage: Decimal) -> None:
        super().__init__(unit_price)
        self.threshold = threshold
        self.percentage = percentage

    def cost(self, quantity: int) -> Decimal:
        base = self.base_price(quantity)
        if quantity < self.threshold:
            return base
        return base - base * (self.percentage / HUNDRED)


def _positive(value: int | None) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _has_bogo_fields(program: Program) -> bool:
    return bool(_positive(program.bogo_buy_quantity) and _positive(program.bogo_get_free_quantity))


def _has_bulk_fields(program: Program) -> bool:
    return bool(program.bulk_discount_threshold and program.bulk_discount_percentage)


def effective_offer_type(program: Program) -> OfferType:
    """Resolve the offer actually in force, honouring legacy offer fields."""
    if program.offer_type is not OfferType.NONE:
        return program.offer_type
    if _has_bogo_fields(program):
        return OfferType.BOGO
    if _has_bulk_fields(program):
        return OfferType.BULK_DISCOUNT
    return OfferType.NONE


def strategy_for(program: Program) -> PricingStrategy:
    """Return the pricing strategy for a program."""
    unit_price = program.unit_price.amount
    offer = effective_offer_type(program)

    if offer is OfferType.BOGO and _has_bogo_fields(program):
        buy = _positive(program.bogo_buy_quantity)
        free = _positive(program.bogo_get_free_quantity)
        if program.bogo_logic_type is BogoLogic.ENTER_TOTAL_PAY_LESS:
            return EnterTotalPayLessStrategy(unit_price, buy, free)
        return BuyXGetYFreeStrategy(unit_price, buy, free)

    if offer is OfferType.BULK_DISCOUNT and _has_bulk_fields(program):
        percentage = Decimal(str(program.bulk_discount_percentage))
        # Anything outside (0, 100] would price below zero or above base.
        if ZERO < percentage <= HUNDRED:
            return BulkDiscountStrategy(unit_price, int(program.bulk_discount_threshold), percentage)

    return StandardPricingStrategy(unit_price)


def calculate_cost(program: Program, quantity: int) -> Decimal:
    return strategy_for(program).cost(quantity)


def calculate_free_tickets(program: Program, quantity: int) -> int:
    return strategy_for(program).free_count(quantity)


def calculate_total_tickets(program: Program, quantity: int) -> int:
    return strategy_for(program).total_tickets(quantity)
