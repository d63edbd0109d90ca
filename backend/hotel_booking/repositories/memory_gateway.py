"""
In-memory booking gateway for tests and local experiments.

Every gateway call suspends once (``asyncio.sleep``) before touching state,
the way a database round-trip would, so concurrent coroutines interleave at
the same points they would against a real store. State changes themselves
happen without any further suspension: ``claim_room_slot`` checks and
increments in one step, which is what makes it atomic on the event loop.
"""

import asyncio
import itertools
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Optional

from hotel_booking.models.ticket import TicketStatus
from hotel_booking.repositories.gateway import BookingGateway
from hotel_booking.repositories.records import (
    BookingRecord,
    EnrollmentRecord,
    RoomRecord,
    TicketRecord,
    TicketTypeRecord,
)


class InMemoryBookingGateway(BookingGateway):

    def __init__(self, latency: float = 0.0) -> None:
        self.latency = latency
        self._ids = itertools.count(1)
        self._enrollments: Dict[int, EnrollmentRecord] = {}  # by user id
        self._tickets: Dict[int, TicketRecord] = {}  # by enrollment id
        self._rooms: Dict[int, RoomRecord] = {}
        self._occupied: Dict[int, int] = {}  # by room id
        self._bookings: Dict[int, BookingRecord] = {}

    async def _round_trip(self) -> None:
        await asyncio.sleep(self.latency)

    # Seeding helpers (synchronous, outside the gateway contract)

    def add_enrollment(self, user_id: int) -> EnrollmentRecord:
        enrollment = EnrollmentRecord(id=next(self._ids), user_id=user_id)
        self._enrollments[user_id] = enrollment
        return enrollment

    def add_ticket(
        self,
        enrollment_id: int,
        status: TicketStatus = TicketStatus.PAID,
        is_remote: bool = False,
        includes_hotel: bool = True,
    ) -> TicketRecord:
        ticket = TicketRecord(
            id=next(self._ids),
            enrollment_id=enrollment_id,
            status=status,
            ticket_type=TicketTypeRecord(
                id=next(self._ids),
                is_remote=is_remote,
                includes_hotel=includes_hotel,
            ),
        )
        self._tickets[enrollment_id] = ticket
        return ticket

    def add_room(
        self,
        capacity: int,
        hotel_id: int = 1,
        name: str = "1020",
        room_id: Optional[int] = None,
    ) -> RoomRecord:
        now = datetime.now(timezone.utc)
        room = RoomRecord(
            id=room_id if room_id is not None else next(self._ids),
            hotel_id=hotel_id,
            name=name,
            capacity=capacity,
            created_at=now,
            updated_at=now,
        )
        self._rooms[room.id] = room
        self._occupied.setdefault(room.id, 0)
        return room

    def add_booking(self, user_id: int, room_id: int) -> BookingRecord:
        """Insert a booking directly, bypassing eligibility and vacancy rules."""
        booking = BookingRecord(id=next(self._ids), user_id=user_id, room_id=room_id)
        self._bookings[booking.id] = booking
        self._occupied[room_id] = self._occupied.get(room_id, 0) + 1
        return booking

    def occupancy(self, room_id: int) -> int:
        return sum(1 for booking in self._bookings.values() if booking.room_id == room_id)

    def slots_taken(self, room_id: int) -> int:
        return self._occupied.get(room_id, 0)

    def rooms(self) -> list[RoomRecord]:
        return list(self._rooms.values())

    def bookings(self) -> list[BookingRecord]:
        return list(self._bookings.values())

    # BookingGateway

    async def find_enrollment_by_user(self, user_id: int) -> Optional[EnrollmentRecord]:
        await self._round_trip()
        return self._enrollments.get(user_id)

    async def find_ticket_by_enrollment(self, enrollment_id: int) -> Optional[TicketRecord]:
        await self._round_trip()
        return self._tickets.get(enrollment_id)

    async def find_room(self, room_id: int) -> Optional[RoomRecord]:
        await self._round_trip()
        return self._rooms.get(room_id)

    async def count_bookings_for_room(self, room_id: int) -> int:
        await self._round_trip()
        return self.occupancy(room_id)

    async def claim_room_slot(self, room_id: int) -> bool:
        await self._round_trip()
        room = self._rooms.get(room_id)
        if room is None or self._occupied[room_id] >= room.capacity:
            return False
        self._occupied[room_id] += 1
        return True

    async def release_room_slot(self, room_id: int) -> None:
        await self._round_trip()
        if self._occupied.get(room_id, 0) > 0:
            self._occupied[room_id] -= 1

    async def create_booking(self, user_id: int, room_id: int) -> BookingRecord:
        await self._round_trip()
        booking = BookingRecord(id=next(self._ids), user_id=user_id, room_id=room_id)
        self._bookings[booking.id] = booking
        return booking

    async def find_booking_by_user(self, user_id: int) -> Optional[BookingRecord]:
        await self._round_trip()
        for booking in self._bookings.values():
            if booking.user_id == user_id:
                return booking
        return None

    async def update_booking_room(self, booking_id: int, room_id: int, from_room_id: int) -> bool:
        await self._round_trip()
        booking = self._bookings.get(booking_id)
        if booking is None or booking.room_id != from_room_id:
            return False
        self._bookings[booking_id] = replace(booking, room_id=room_id)
        return True
