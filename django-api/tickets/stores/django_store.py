"""Django ORM implementations of the ticket stores."""

from decimal import Decimal

from tickets import models as orm
from tickets.domain import (
    BogoLogic,
    Money,
    OfferType,
    Organization,
    OrganizationId,
    Program,
    ProgramId,
    Voucher,
    VoucherId,
)
from tickets.stores.interfaces import OrganizationStore, ProgramStore, VoucherStore


def program_to_domain(row: orm.Program) -> Program:
    percentage = row.bulk_discount_percentage
    return Program(
        id=ProgramId(row.id),
        name=row.name,
        program_tag=row.program_tag,
        unit_price=Money(Decimal(row.program_ticket_price)),
        offer_type=OfferType.parse(row.offer_type),
        bogo_buy_quantity=row.bogo_buy_quantity,
        bogo_get_free_quantity=row.bogo_get_free_quantity,
        bogo_logic_type=BogoLogic.parse(row.bogo_logic_type),
        bulk_discount_threshold=row.bulk_discount_threshold,
        bulk_discount_percentage=Decimal(percentage) if percentage is not None else None,
        is_active=row.is_active,
    )


def voucher_to_domain(row: orm.Voucher) -> Voucher:
    return Voucher(
        id=VoucherId(row.id),
        organization_id=OrganizationId(row.organization_id),
        code=row.code,
        value=Money(Decimal(row.value)),
        expires_at=row.expires_at,
        status=row.status,
    )


def organization_to_domain(row: orm.Organization) -> Organization:
    return Organization(
        id=OrganizationId(row.id),
        name=row.name,
        training_fund_balance=Money(Decimal(row.training_fund_balance)),
        program_ticket_balances=dict(row.program_ticket_balances or {}),
        contacts_synced_at=row.contacts_synced_at,
    )


class DjangoProgramStore(ProgramStore):
    """Database-backed program store using Django ORM."""

    def list_active_programs(self) -> list[Program]:
        return [program_to_domain(row) for row in orm.Program.objects.filter(is_active=True)]

    def get_program(self, program_id: ProgramId) -> Program | None:
        row = orm.Program.objects.filter(pk=program_id.value).first()
        return program_to_domain(row) if row is not None else None


class DjangoVoucherStore(VoucherStore):
    def list_active_vouchers(self, organization_id: OrganizationId) -> list[Voucher]:
        rows = orm.Voucher.objects.filter(
            organization_id=organization_id.value, status="active"
        )
        return [voucher_to_domain(row) for row in rows]


class DjangoOrganizationStore(OrganizationStore):
    def get_organization(self, organization_id: OrganizationId) -> Organization | None:
        row = orm.Organization.objects.filter(pk=organization_id.value).first()
        return organization_to_domain(row) if row is not None else None
