"""
Hotel booking engine.

Each operation re-runs the eligibility check from scratch and reads room
occupancy fresh; nothing is cached across requests.

CONCURRENCY STRATEGY: atomic slot claim
=======================================

Problem:
  Vacancy is judged by counting bookings, then the booking is written.
  Two users going for the last slot both count occupied < capacity and both
  insert. Result: an oversold room.

Solution:
  The vacancy read only produces the user-facing rejection. The write path
  goes through ``gateway.claim_room_slot``, a conditional increment that
  succeeds for exactly one of the racing requests. The loser gets the same
  "no vacancy" rejection it would have got had it arrived a moment later.

  All writes of one operation share the request transaction, so a rejection
  raised after a claim leaves nothing behind once the transaction rolls back.

One booking per user:
  create() refuses a second booking for a user who already holds one; moving
  rooms is what update() is for. The unique constraint on bookings.user_id
  backs this up for two simultaneous creates by the same user.
"""

from dataclasses import dataclass

from hotel_booking.core.exceptions import (
    BOOKING_CHANGED,
    BOOKING_EXISTS,
    NO_PREVIOUS_BOOKING,
    NO_VACANCY,
    CannotCreateBookingError,
    NotFoundError,
)
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import record_slot_conflict
from hotel_booking.repositories.gateway import BookingGateway
from hotel_booking.repositories.records import RoomRecord
from hotel_booking.services.capacity import RoomState, evaluate_capacity
from hotel_booking.services.eligibility import check_eligibility

logger = get_logger(__name__)


@dataclass(frozen=True)
class BookingResult:
    booking_id: int


@dataclass(frozen=True)
class BookingWithRoom:
    id: int
    room: RoomRecord


class BookingService:
    """Create, read and move a user's single hotel booking."""

    def __init__(self, gateway: BookingGateway):
        self.gateway = gateway

    async def _require_eligible(self, user_id: int) -> None:
        eligibility = await check_eligibility(self.gateway, user_id)
        if not eligibility.eligible:
            logger.warning("booking_ineligible", user_id=user_id, reason=eligibility.reason)
            raise CannotCreateBookingError(eligibility.reason)

    async def _require_vacant_room(self, room_id: int) -> RoomState:
        state = await evaluate_capacity(self.gateway, room_id)
        if state is None:
            raise NotFoundError(f"Room {room_id} not found")
        if not state.has_vacancy:
            logger.warning(
                "booking_failed_no_vacancy",
                room_id=room_id,
                capacity=state.capacity,
                occupied=state.occupied,
            )
            raise CannotCreateBookingError(NO_VACANCY)
        return state

    async def _claim_slot(self, user_id: int, room_id: int) -> None:
        if not await self.gateway.claim_room_slot(room_id):
            # Vacancy was seen a moment ago; a concurrent booking took it
            record_slot_conflict()
            logger.info("booking_slot_lost", user_id=user_id, room_id=room_id)
            raise CannotCreateBookingError(NO_VACANCY)

    async def create(self, user_id: int, room_id: int) -> BookingResult:
        await self._require_eligible(user_id)

        existing = await self.gateway.find_booking_by_user(user_id)
        if existing is not None:
            logger.warning("booking_already_exists", user_id=user_id, booking_id=existing.id)
            raise CannotCreateBookingError(BOOKING_EXISTS)

        await self._require_vacant_room(room_id)
        await self._claim_slot(user_id, room_id)
        booking = await self.gateway.create_booking(user_id, room_id)

        logger.info("booking_created", booking_id=booking.id, user_id=user_id, room_id=room_id)
        return BookingResult(booking_id=booking.id)

    async def get_booking(self, user_id: int) -> BookingWithRoom:
        """
        Return the user's booking with its room.
        Only enrollment and ticket existence are required here, not a
        hotel-eligible ticket; anything missing is a NotFoundError.
        """
        eligibility = await check_eligibility(self.gateway, user_id)
        if not eligibility.has_ticket:
            raise NotFoundError()

        booking = await self.gateway.find_booking_by_user(user_id)
        if booking is None:
            raise NotFoundError()

        room = await self.gateway.find_room(booking.room_id)
        if room is None:
            raise NotFoundError()
        return BookingWithRoom(id=booking.id, room=room)

    async def update(self, user_id: int, room_id: int) -> BookingResult:
        """
        Move the user's booking to another room, keeping its id.

        The move is conditional on the booking still being in the room read
        here. A concurrent move of the same booking makes it fail; the slot
        just claimed is handed back and the request is rejected.
        """
        await self._require_eligible(user_id)

        booking = await self.gateway.find_booking_by_user(user_id)
        if booking is None:
            logger.warning("booking_update_without_booking", user_id=user_id)
            raise CannotCreateBookingError(NO_PREVIOUS_BOOKING)

        await self._require_vacant_room(room_id)
        await self._claim_slot(user_id, room_id)

        moved = await self.gateway.update_booking_room(booking.id, room_id, from_room_id=booking.room_id)
        if not moved:
            await self.gateway.release_room_slot(room_id)
            logger.info("booking_move_lost", booking_id=booking.id, user_id=user_id, room_id=room_id)
            raise CannotCreateBookingError(BOOKING_CHANGED)
        await self.gateway.release_room_slot(booking.room_id)

        logger.info(
            "booking_updated",
            booking_id=booking.id,
            user_id=user_id,
            from_room_id=booking.room_id,
            to_room_id=room_id,
        )
        return BookingResult(booking_id=booking.id)
