"""
Persistence gateway interface consumed by the booking engine.

Implementations:
- SqlAlchemyBookingGateway: production, one AsyncSession per request
- InMemoryBookingGateway: tests and local experiments

Besides the plain reads and writes, the gateway owns the two primitives that
keep rooms from being oversold: ``claim_room_slot`` must check vacancy and
take the slot as a single atomic step, and ``release_room_slot`` gives one
back. Any read the engine does before claiming is advisory only.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hotel_booking.repositories.records import (
    BookingRecord,
    EnrollmentRecord,
    RoomRecord,
    TicketRecord,
)


class BookingGateway(ABC):

    @abstractmethod
    async def find_enrollment_by_user(self, user_id: int) -> Optional[EnrollmentRecord]:
        pass

    @abstractmethod
    async def find_ticket_by_enrollment(self, enrollment_id: int) -> Optional[TicketRecord]:
        pass

    @abstractmethod
    async def find_room(self, room_id: int) -> Optional[RoomRecord]:
        pass

    @abstractmethod
    async def count_bookings_for_room(self, room_id: int) -> int:
        """Number of bookings currently pointing at the room, counted now."""
        pass

    @abstractmethod
    async def claim_room_slot(self, room_id: int) -> bool:
        """
        Take one slot on the room if it still has one.

        Returns:
            True if the slot was taken
            False if the room is full (or does not exist)
        """
        pass

    @abstractmethod
    async def release_room_slot(self, room_id: int) -> None:
        pass

    @abstractmethod
    async def create_booking(self, user_id: int, room_id: int) -> BookingRecord:
        pass

    @abstractmethod
    async def find_booking_by_user(self, user_id: int) -> Optional[BookingRecord]:
        pass

    @abstractmethod
    async def update_booking_room(self, booking_id: int, room_id: int, from_room_id: int) -> bool:
        """
        Point the booking at room_id, but only while it still points at
        from_room_id.

        Returns:
            True if the booking was moved
            False if it is gone or was moved by someone else first
        """
        pass
