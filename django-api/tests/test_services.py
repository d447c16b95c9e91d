"""Unit tests for ProgramService.

These test error handling and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from tickets.domain.errors import (
    InvalidOrganizationIdError,
    InvalidProgramIdError,
    OrganizationNotFoundError,
    ProgramNotFoundError,
)
from tickets.services import ProgramService
from tickets.stores import OrganizationStore, ProgramStore, VoucherStore


class FakeProgramStore(ProgramStore):
    def __init__(self, programs=()):
        self.programs = {p.id: p for p in programs}

    def list_active_programs(self):
        return sorted((p for p in self.programs.values() if p.is_active), key=lambda p: p.name)

    def get_program(self, program_id):
        return self.programs.get(program_id)


class FakeVoucherStore(VoucherStore):
    def __init__(self, vouchers=()):
        self.vouchers = list(vouchers)

    def list_active_vouchers(self, organization_id):
        return list(self.vouchers)


class FakeOrganizationStore(OrganizationStore):
    def __init__(self, organizations=()):
        self.organizations = {o.id: o for o in organizations}

    def get_organization(self, organization_id):
        return self.organizations.get(organization_id)


@pytest.fixture
def make_service():
    def factory(programs=(), vouchers=(), organizations=()):
        return ProgramService(
            programs=FakeProgramStore(programs),
            vouchers=FakeVoucherStore(vouchers),
            organizations=FakeOrganizationStore(organizations),
        )

    return factory


class TestProgramService:
    """Tests for ProgramService."""

    def test_get_program_invalid_id_raises_error(self, make_service):
        """get_program raises InvalidProgramIdError for malformed UUID."""
        with pytest.raises(InvalidProgramIdError):
            make_service().get_program("not-a-uuid")

    def test_get_program_not_found_raises_error(self, make_service):
        """get_program raises ProgramNotFoundError when store returns None."""
        missing = str(uuid4())
        with pytest.raises(ProgramNotFoundError) as exc_info:
            make_service().get_program(missing)
        assert exc_info.value.program_id == missing

    def test_get_program_returns_domain_model(self, make_service, make_program):
        program = make_program()
        assert make_service(programs=[program]).get_program(str(program.id)) == program

    def test_list_programs_excludes_inactive(self, make_service, make_program):
        """list_programs returns only active programs, ordered by name."""
        b = make_program(name="B Programme")
        a = make_program(name="A Programme")
        retired = make_program(name="Retired", is_active=False)

        assert make_service(programs=[b, retired, a]).list_programs() == [a, b]

    def test_get_organization_invalid_id_raises_error(self, make_service):
        with pytest.raises(InvalidOrganizationIdError):
            make_service().get_organization("acme")

    def test_get_organization_not_found_raises_error(self, make_service):
        with pytest.raises(OrganizationNotFoundError):
            make_service().get_organization(str(uuid4()))

    def test_list_vouchers_filters_and_orders(self, make_service, make_voucher, organization):
        """Only active vouchers are listed, soonest expiry first."""
        late = make_voucher("5", expires_at=datetime(2029, 1, 1, tzinfo=timezone.utc))
        early = make_voucher("5", expires_at=datetime(2027, 1, 1, tzinfo=timezone.utc))
        used = make_voucher("5", status="redeemed")

        service = make_service(vouchers=[late, used, early], organizations=[organization])

        assert service.list_vouchers(organization) == [early, late]
