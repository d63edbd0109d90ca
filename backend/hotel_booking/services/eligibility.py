"""
Hotel eligibility check.

A user may hold a room only with an enrollment, a ticket on that enrollment,
and a ticket that is PAID, in-person and hotel-inclusive. The check is a
pure read-then-judge step; it never writes.
"""

from dataclasses import dataclass
from typing import Optional

from hotel_booking.core.exceptions import INVALID_TICKET, NO_ENROLLMENT, NO_TICKET
from hotel_booking.models.ticket import TicketStatus
from hotel_booking.repositories.gateway import BookingGateway
from hotel_booking.repositories.records import EnrollmentRecord, TicketRecord


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    reason: Optional[str] = None
    enrollment: Optional[EnrollmentRecord] = None
    ticket: Optional[TicketRecord] = None

    @property
    def has_ticket(self) -> bool:
        """Enrollment and ticket both exist, whatever the ticket's state."""
        return self.enrollment is not None and self.ticket is not None


def ticket_grants_hotel(ticket: TicketRecord) -> bool:
    return (
        ticket.status == TicketStatus.PAID
        and not ticket.ticket_type.is_remote
        and ticket.ticket_type.includes_hotel
    )


async def check_eligibility(gateway: BookingGateway, user_id: int) -> Eligibility:
    enrollment = await gateway.find_enrollment_by_user(user_id)
    if enrollment is None:
        return Eligibility(eligible=False, reason=NO_ENROLLMENT)

    ticket = await gateway.find_ticket_by_enrollment(enrollment.id)
    if ticket is None:
        return Eligibility(eligible=False, reason=NO_TICKET, enrollment=enrollment)

    if not ticket_grants_hotel(ticket):
        return Eligibility(eligible=False, reason=INVALID_TICKET, enrollment=enrollment, ticket=ticket)

    return Eligibility(eligible=True, enrollment=enrollment, ticket=ticket)
