"""Splitting a purchase total across vouchers, training fund and a remaining balance."""

from collections.abc import Iterable
from decimal import Decimal

from tickets.domain.models import Allocation, Voucher, VoucherUsage
from tickets.domain.value_objects import Money, OrganizationId

ZERO = Decimal("0")


def voucher_total(selected_voucher_ids: Iterable[str], vouchers: Iterable[Voucher]) -> Decimal:
    """Sum the value of the selected vouchers. Unknown ids count as zero."""
    by_id = {str(v.id): v for v in vouchers}
    total = ZERO
    for voucher_id in selected_voucher_ids:
        voucher = by_id.get(str(voucher_id))
        if voucher is not None:
            total += voucher.value.amount
    return total


def allocate(
    total_cost: Decimal,
    selected_voucher_ids: Iterable[str],
    vouchers: Iterable[Voucher],
    training_fund_requested: Decimal,
    fund_balance: Decimal,
    *,
    vouchers_enabled: bool = True,
    training_fund_enabled: bool = True,
) -> Allocation:
    """Derive the payment allocation for a purchase.

    Vouchers are applied first and capped at the total. The training fund can
    cover at most what is left, bounded by the organization's balance. The
    rest is the remaining balance to be charged to account or card. A disabled
    channel contributes nothing and its share moves to the remaining balance.
    """
    total_cost = max(total_cost, ZERO)

    voucher_amount = ZERO
    if vouchers_enabled:
        voucher_amount = min(voucher_total(selected_voucher_ids, vouchers), total_cost)

    fund_cap = max_training_fund(
        total_cost, voucher_amount, fund_balance, training_fund_enabled=training_fund_enabled
    )
    training_fund_amount = clamp_training_fund(training_fund_requested, fund_cap)

    remaining_balance = max(ZERO, total_cost - voucher_amount - training_fund_amount)

    return Allocation(
        total_cost=total_cost,
        voucher_amount=voucher_amount,
        training_fund_amount=training_fund_amount,
        remaining_balance=remaining_balance,
    )


def max_training_fund(
    total_cost: Decimal,
    voucher_amount: Decimal,
    fund_balance: Decimal,
    *,
    training_fund_enabled: bool = True,
) -> Decimal:
    if not training_fund_enabled:
        return ZERO
    return max(min(fund_balance, total_cost - voucher_amount), ZERO)


def clamp_training_fund(value: object, maximum: Decimal) -> Decimal:
    """Parse a requested training fund amount and clamp it to [0, maximum]."""
    requested = Money.parse(value).amount
    return max(ZERO, min(maximum, requested))


def active_vouchers_for(organization_id: OrganizationId, vouchers: Iterable[Voucher]) -> list[Voucher]:
    return [v for v in vouchers if v.organization_id == organization_id and v.is_active]


def order_vouchers(vouchers: Iterable[Voucher]) -> list[Voucher]:
    """Soonest expiry first; for equal expiry, smallest value first."""
    return sorted(vouchers, key=lambda v: (v.expires_at, v.value.amount))


def preview_voucher_usage(
    selected_voucher_ids: Iterable[str],
    vouchers: Iterable[Voucher],
    max_amount: Decimal,
) -> dict[str, VoucherUsage]:
    """Simulate redeeming the selected vouchers against max_amount.

    Vouchers are consumed in redemption order until the amount is covered.
    Selected vouchers that would not be touched are absent from the result.
    """
    usage: dict[str, VoucherUsage] = {}
    if not max_amount or max_amount <= 0:
        return usage

    selected = {str(voucher_id) for voucher_id in selected_voucher_ids}
    remaining = max_amount
    for voucher in order_vouchers(v for v in vouchers if str(v.id) in selected):
        if remaining <= 0:
            break
        value = voucher.value.amount
        used = min(value, remaining)
        usage[str(voucher.id)] = VoucherUsage(
            voucher_id=voucher.id,
            amount_used=used,
            is_fully_used=used >= value,
            remaining_value=value - used,
        )
        remaining -= used
    return usage
