"""Event booking with program tickets, and ticket cancellation.

Services:
- Depend only on interfaces (gateway, draft store)
- Validate domain invariants before any network call
- Map function failures to domain errors
"""

import logging
from collections.abc import Callable, Iterable

from tickets.domain import Attendee, Event, Member, Organization, Registration, RegistrationMode
from tickets.domain.errors import (
    AttendeeNamesRequiredError,
    BookingFailedError,
    InsufficientTicketsError,
    InvalidAttendeesError,
    NoAttendeesError,
    TicketCancellationError,
)
from tickets.gateway import FunctionCallError, FunctionsGateway
from tickets.stores import DraftStore, event_registration_key

logger = logging.getLogger(__name__)

CANCEL_REASON = "Cancelled by member via portal"


def tickets_required(registration: Registration) -> int:
    """Program tickets a registration consumes. Links are issued without tickets."""
    if registration.mode is RegistrationMode.LINKS:
        return 0
    return len(registration.valid_attendees())


class BookingService:
    """Service for registering attendees onto events."""

    def __init__(
        self,
        gateway: FunctionsGateway,
        drafts: DraftStore,
        refresh_balances: Callable[[], None] | None = None,
    ) -> None:
        self._gateway = gateway
        self._drafts = drafts
        self._refresh_balances = refresh_balances

    def save_registration(self, event_id: str, registration: Registration) -> None:
        self._drafts.set(event_registration_key(event_id), registration.to_dict())

    def load_registration(
        self,
        event_id: str,
        available_modes: Iterable[RegistrationMode],
        member: Member,
    ) -> Registration | None:
        """Return the saved registration for an event, if still usable.

        A draft saved under a registration mode the member can no longer use
        is discarded. A links draft resumes as a self booking for the member,
        since links alone never consume tickets.
        """
        key = event_registration_key(event_id)
        saved = self._drafts.get(key)
        if saved is None:
            return None
        try:
            registration = Registration.from_dict(saved)
        except ValueError:
            logger.warning("Discarding unreadable registration draft for event %s", event_id)
            self._drafts.clear(key)
            return None
        if registration.mode not in set(available_modes):
            logger.info("Saved registration mode %s no longer available", registration.mode.value)
            self._drafts.clear(key)
            return None
        if registration.mode is RegistrationMode.LINKS:
            logger.info("Resuming links registration for event %s as self", event_id)
            return Registration(
                mode=RegistrationMode.SELF,
                attendees=(
                    Attendee(
                        email=member.email,
                        first_name=member.first_name,
                        last_name=member.last_name,
                        is_self=True,
                        is_valid=True,
                    ),
                ),
                member_attending=True,
            )
        return registration

    def confirm_booking(
        self,
        event: Event,
        member: Member,
        organization: Organization,
        registration: Registration,
    ) -> None:
        """Book the registration's attendees onto the event.

        Raises:
            AttendeeNamesRequiredError: An unregistered attendee is missing a name.
            InsufficientTicketsError: The organization lacks program tickets.
            InvalidAttendeesError: A colleague's email failed validation.
            NoAttendeesError: Nothing to book.
            BookingFailedError: The booking function reported a failure.
        """
        mode = registration.mode
        if mode in (RegistrationMode.COLLEAGUES, RegistrationMode.SELF):
            for attendee in registration.attendees:
                if attendee.needs_manual_name() and not (attendee.first_name and attendee.last_name):
                    raise AttendeeNamesRequiredError()

        required = tickets_required(registration)
        available = organization.tickets_for(event.program_tag)
        if available < required:
            raise InsufficientTicketsError(required - available)

        if mode is RegistrationMode.COLLEAGUES and any(not a.is_valid for a in registration.attendees):
            raise InvalidAttendeesError()

        if required == 0:
            raise NoAttendeesError()

        attendees = []
        if mode in (RegistrationMode.COLLEAGUES, RegistrationMode.SELF):
            attendees = [a.to_dict() for a in registration.valid_attendees()]

        try:
            response = self._gateway.create_booking(
                event_id=event.id,
                member_email=member.email,
                attendees=attendees,
                registration_mode=mode.value,
                number_of_links=0,
                tickets_required=required,
                program_tag=event.program_tag,
            )
        except FunctionCallError as exc:
            logger.exception("Error creating booking for event %s", event.id)
            raise BookingFailedError(exc.error) from exc

        if not response.get("success"):
            raise BookingFailedError(response.get("error"))

        self._drafts.clear(event_registration_key(event.id))
        if self._refresh_balances is not None:
            self._refresh_balances()
        logger.info("Booked %d attendees onto event %s", required, event.id)

    def cancel_ticket(self, order_id: str, member_id: str) -> None:
        """Cancel a booked ticket through the ticketing provider's flow."""
        try:
            response = self._gateway.cancel_ticket_via_flow(
                order_id=order_id,
                cancel_reason=CANCEL_REASON,
                member_id=member_id,
            )
        except FunctionCallError as exc:
            logger.exception("Cancellation error for order %s", order_id)
            raise TicketCancellationError() from exc

        if not response.get("success"):
            logger.error("Cancellation rejected for order %s: %s", order_id, response.get("error"))
            raise TicketCancellationError()
