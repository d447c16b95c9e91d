"""Checking attendee emails against the organization's contacts."""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from django.utils import timezone

from tickets.domain import Attendee, Contact, Member, Organization, ValidationStatus
from tickets.gateway import FunctionCallError, FunctionsGateway

logger = logging.getLogger(__name__)

CONTACT_SYNC_MAX_AGE = timedelta(minutes=15)


def contacts_need_sync(organization: Organization, now: datetime | None = None) -> bool:
    """True when contacts were never synced or were synced over 15 minutes ago."""
    if organization.contacts_synced_at is None:
        return True
    now = now or timezone.now()
    return now - organization.contacts_synced_at > CONTACT_SYNC_MAX_AGE


def search_contacts(contacts: Iterable[Contact], term: str) -> list[Contact]:
    if not term:
        return []
    needle = term.lower()
    return [
        c
        for c in contacts
        if needle in (c.first_name or "").lower()
        or needle in (c.last_name or "").lower()
        or needle in (c.email or "").lower()
    ]


def attendee_from_contact(contact: Contact) -> Attendee:
    return Attendee(
        email=contact.email,
        first_name=contact.first_name,
        last_name=contact.last_name,
        contact_id=contact.contact_id,
        is_valid=True,
        validation_status=ValidationStatus.REGISTERED.value,
    )


class ColleagueService:
    def __init__(self, gateway: FunctionsGateway) -> None:
        self._gateway = gateway

    def ensure_contacts_synced(self, organization: Organization, now: datetime | None = None) -> bool:
        """Sync the organization's contacts when stale. Returns True when contacts are usable."""
        if not contacts_need_sync(organization, now):
            return True
        try:
            response = self._gateway.sync_organization_contacts(organization_id=str(organization.id))
        except FunctionCallError:
            logger.exception("Contact sync failed for organization %s", organization.id)
            return False
        return bool(response.get("success"))

    def validate_attendee_email(self, attendee: Attendee, member: Member) -> Attendee:
        """Validate an attendee row's email after it was edited.

        The attendee stays bookable whatever the function says; only the
        status and message shown next to it change.
        """
        if attendee.is_self:
            return attendee
        email = attendee.email
        if not email or "@" not in email:
            return attendee.with_validation(is_valid=None, validation_status=None, validation_message=None)

        try:
            response = self._gateway.validate_colleague(
                email=email,
                member_email=member.email,
                organization_id=str(member.organization_id),
            )
        except FunctionCallError:
            logger.exception("Validation error for attendee %s", email)
            return attendee.with_validation(
                is_valid=True,
                validation_status=ValidationStatus.EXTERNAL.value,
                validation_message="Could not verify email. Please enter attendee details manually.",
            )

        if response.get("valid"):
            changes = {
                "is_valid": True,
                "validation_status": response.get("status"),
                "validation_message": response.get("message"),
            }
            if response.get("first_name"):
                changes["first_name"] = response["first_name"]
                changes["last_name"] = response.get("last_name") or ""
            return attendee.with_validation(**changes)

        return attendee.with_validation(
            is_valid=True,
            validation_status=response.get("status"),
            validation_message=response.get("error") or "Could not verify. Please enter attendee details.",
        )

    def validate_manual_colleague(self, email: str, member: Member, organization_id: str) -> Attendee | None:
        """Validate an email typed into the colleague picker. None if it is not an email."""
        if not email or "@" not in email:
            return None
        try:
            response = self._gateway.validate_colleague(
                email=email,
                member_email=member.email,
                organization_id=organization_id,
            )
        except FunctionCallError:
            logger.exception("Validation failed for colleague %s", email)
            return Attendee(
                email=email,
                is_valid=False,
                validation_status=ValidationStatus.ERROR.value,
                validation_message="Validation failed",
            )

        if response.get("valid"):
            return Attendee(
                email=email,
                first_name=response.get("first_name") or "",
                last_name=response.get("last_name") or "",
                contact_id=response.get("zoho_contact_id"),
                is_valid=True,
                validation_status=response.get("status"),
                validation_message=response.get("message"),
            )
        return Attendee(
            email=email,
            is_valid=False,
            validation_status=response.get("status"),
            validation_message=response.get("error"),
        )
