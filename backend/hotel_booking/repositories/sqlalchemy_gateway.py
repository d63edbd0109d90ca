"""
SQLAlchemy implementation of the booking gateway.

CONCURRENCY STRATEGY: conditional counter update
================================================

Problem:
  Occupancy is a COUNT over bookings. Two requests for the last slot both
  count N < capacity, both insert, and the room ends up with capacity + 1
  guests.

Solution:
  rooms.occupied is kept in step with the bookings table and is only ever
  bumped with

    UPDATE rooms SET occupied = occupied + 1
    WHERE id = :room_id AND occupied < capacity

  The row lock taken by the UPDATE is held until the request transaction
  commits, so a competing request blocks, re-evaluates the WHERE clause
  against the committed row and gets rowcount == 0 once the room is full.
  The CHECK constraint on rooms is the final safety net.

  Moves are conditional the same way: the booking is re-pointed only while
  it still references the room the engine read, so two concurrent moves of
  one booking cannot both release its old slot.
"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.core.logging import get_logger
from hotel_booking.models.booking import Booking
from hotel_booking.models.enrollment import Enrollment
from hotel_booking.models.hotel import Room
from hotel_booking.models.ticket import Ticket
from hotel_booking.repositories.gateway import BookingGateway
from hotel_booking.repositories.records import (
    BookingRecord,
    EnrollmentRecord,
    RoomRecord,
    TicketRecord,
    TicketTypeRecord,
)

logger = get_logger(__name__)


def _room_record(room: Room) -> RoomRecord:
    return RoomRecord(
        id=room.id,
        hotel_id=room.hotel_id,
        name=room.name,
        capacity=room.capacity,
        created_at=room.created_at,
        updated_at=room.updated_at,
    )


def _booking_record(booking: Booking) -> BookingRecord:
    return BookingRecord(id=booking.id, user_id=booking.user_id, room_id=booking.room_id)


class SqlAlchemyBookingGateway(BookingGateway):
    """Gateway bound to one request-scoped session; it never commits itself."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_enrollment_by_user(self, user_id: int) -> Optional[EnrollmentRecord]:
        result = await self.db.execute(select(Enrollment).where(Enrollment.user_id == user_id))
        enrollment = result.scalar_one_or_none()
        if enrollment is None:
            return None
        return EnrollmentRecord(id=enrollment.id, user_id=enrollment.user_id)

    async def find_ticket_by_enrollment(self, enrollment_id: int) -> Optional[TicketRecord]:
        result = await self.db.execute(select(Ticket).where(Ticket.enrollment_id == enrollment_id))
        ticket = result.scalar_one_or_none()
        if ticket is None:
            return None
        ticket_type = ticket.ticket_type
        return TicketRecord(
            id=ticket.id,
            enrollment_id=ticket.enrollment_id,
            status=ticket.status,
            ticket_type=TicketTypeRecord(
                id=ticket_type.id,
                is_remote=ticket_type.is_remote,
                includes_hotel=ticket_type.includes_hotel,
            ),
        )

    async def find_room(self, room_id: int) -> Optional[RoomRecord]:
        result = await self.db.execute(select(Room).where(Room.id == room_id))
        room = result.scalar_one_or_none()
        return _room_record(room) if room else None

    async def count_bookings_for_room(self, room_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Booking.id)).where(Booking.room_id == room_id)
        )
        return result.scalar_one()

    async def claim_room_slot(self, room_id: int) -> bool:
        result = await self.db.execute(
            update(Room)
            .where(
                Room.id == room_id,
                Room.occupied < Room.capacity,
            )
            .values(occupied=Room.occupied + 1)
            .execution_options(synchronize_session=False)
        )
        claimed = result.rowcount == 1
        logger.debug("room_slot_claim", room_id=room_id, claimed=claimed)
        return claimed

    async def release_room_slot(self, room_id: int) -> None:
        await self.db.execute(
            update(Room)
            .where(Room.id == room_id, Room.occupied > 0)
            .values(occupied=Room.occupied - 1)
            .execution_options(synchronize_session=False)
        )
        logger.debug("room_slot_released", room_id=room_id)

    async def create_booking(self, user_id: int, room_id: int) -> BookingRecord:
        booking = Booking(user_id=user_id, room_id=room_id)
        self.db.add(booking)
        await self.db.flush()
        await self.db.refresh(booking)
        return _booking_record(booking)

    async def find_booking_by_user(self, user_id: int) -> Optional[BookingRecord]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        booking = result.scalar_one_or_none()
        return _booking_record(booking) if booking else None

    async def update_booking_room(self, booking_id: int, room_id: int, from_room_id: int) -> bool:
        # A concurrent move of the same booking blocks on the row lock, then
        # finds room_id changed and matches nothing.
        result = await self.db.execute(
            update(Booking)
            .where(
                Booking.id == booking_id,
                Booking.room_id == from_room_id,
            )
            .values(room_id=room_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1
