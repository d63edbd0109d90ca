"""
Plain snapshots handed out by the persistence gateway.

The booking engine only ever sees these, never live ORM objects, so nothing
it holds outlives the request that loaded it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from hotel_booking.models.ticket import TicketStatus


@dataclass(frozen=True)
class EnrollmentRecord:
    id: int
    user_id: int


@dataclass(frozen=True)
class TicketTypeRecord:
    id: int
    is_remote: bool
    includes_hotel: bool


@dataclass(frozen=True)
class TicketRecord:
    id: int
    enrollment_id: int
    status: TicketStatus
    ticket_type: TicketTypeRecord


@dataclass(frozen=True)
class RoomRecord:
    id: int
    hotel_id: int
    name: str
    capacity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class BookingRecord:
    id: int
    user_id: int
    room_id: int
