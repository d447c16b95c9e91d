"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from typing import Any

from tickets.domain import Organization, OrganizationId, Program, ProgramId, Voucher


class ProgramStore(ABC):
    """Interface for program persistence operations."""

    @abstractmethod
    def list_active_programs(self) -> list[Program]:
        """Return active programs ordered by name."""
        ...

    @abstractmethod
    def get_program(self, program_id: ProgramId) -> Program | None:
        """Return a program by ID, or None if not found."""
        ...


class VoucherStore(ABC):
    """Interface for voucher lookups."""

    @abstractmethod
    def list_active_vouchers(self, organization_id: OrganizationId) -> list[Voucher]:
        """Return the organization's active vouchers."""
        ...


class OrganizationStore(ABC):
    """Interface for organization lookups."""

    @abstractmethod
    def get_organization(self, organization_id: OrganizationId) -> Organization | None:
        """Return an organization by ID, or None if not found."""
        ...


class DraftStore(ABC):
    """Key-value store for resumable form drafts."""

    @abstractmethod
    def get(self, key: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def set(self, key: str, value: dict[str, Any]) -> None:
        ...

    @abstractmethod
    def clear(self, key: str) -> None:
        ...


def program_purchase_key(program_id: ProgramId | str) -> str:
    return f"program_purchase_{program_id}"


def event_registration_key(event_id: str) -> str:
    return f"event_registration_{event_id}"
