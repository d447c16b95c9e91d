"""Program catalog service.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from tickets.domain import Organization, OrganizationId, Program, ProgramId, Voucher
from tickets.domain.allocation import active_vouchers_for, order_vouchers
from tickets.domain.errors import (
    InvalidOrganizationIdError,
    InvalidProgramIdError,
    OrganizationNotFoundError,
    ProgramNotFoundError,
)
from tickets.stores import OrganizationStore, ProgramStore, VoucherStore


class ProgramService:
    """Service for program, organization and voucher lookups."""

    def __init__(
        self,
        programs: ProgramStore,
        vouchers: VoucherStore,
        organizations: OrganizationStore,
    ) -> None:
        self._programs = programs
        self._vouchers = vouchers
        self._organizations = organizations

    def list_programs(self) -> list[Program]:
        """Return all active programs."""
        return self._programs.list_active_programs()

    def get_program(self, program_id: str) -> Program:
        """Return a program by ID.

        Raises:
            InvalidProgramIdError: If the program_id is not a valid UUID.
            ProgramNotFoundError: If the program does not exist.
        """
        try:
            pid = ProgramId.from_string(program_id)
        except (TypeError, ValueError) as exc:
            raise InvalidProgramIdError() from exc
        program = self._programs.get_program(pid)
        if program is None:
            raise ProgramNotFoundError(program_id)
        return program

    def get_organization(self, organization_id: str) -> Organization:
        """Return an organization by ID.

        Raises:
            InvalidOrganizationIdError: If the organization_id is not a valid UUID.
            OrganizationNotFoundError: If the organization does not exist.
        """
        try:
            oid = OrganizationId.from_string(organization_id)
        except (TypeError, ValueError) as exc:
            raise InvalidOrganizationIdError() from exc
        organization = self._organizations.get_organization(oid)
        if organization is None:
            raise OrganizationNotFoundError(organization_id)
        return organization

    def list_vouchers(self, organization: Organization) -> list[Voucher]:
        """Return the organization's active vouchers in redemption order."""
        vouchers = self._vouchers.list_active_vouchers(organization.id)
        return order_vouchers(active_vouchers_for(organization.id, vouchers))
