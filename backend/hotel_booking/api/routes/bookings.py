"""
Booking endpoints: reserve, inspect and move the caller's hotel room.
"""

from fastapi import APIRouter, Depends, Path

from hotel_booking.api.deps import get_booking_service
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import booking_latency, record_booking_attempt
from hotel_booking.core.security import get_current_user_id
from hotel_booking.schemas.booking import (
    BookingIdResponse,
    BookingRequest,
    BookingWithRoomResponse,
    ErrorResponse,
    RoomResponse,
)
from hotel_booking.services.booking_service import BookingService

logger = get_logger(__name__)
router = APIRouter(prefix="/booking", tags=["Bookings"])

ERROR_RESPONSES = {
    401: {"description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Booking not allowed"},
    404: {"model": ErrorResponse, "description": "Enrollment, ticket, room or booking not found"},
}


@router.post("", response_model=BookingIdResponse, responses=ERROR_RESPONSES)
async def create_booking(
    booking_data: BookingRequest,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Book a room for the caller.

    Requires a paid, in-person, hotel-inclusive ticket (403 otherwise),
    an existing room (404) with a free slot (403 when full).
    """
    with booking_latency.labels(operation="create").time():
        result = await service.create(user_id, booking_data.room_id)
    record_booking_attempt("create", "success")
    return BookingIdResponse(booking_id=result.booking_id)


@router.get("", response_model=BookingWithRoomResponse, responses=ERROR_RESPONSES)
async def get_booking(
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Get the caller's booking together with the booked room."""
    with booking_latency.labels(operation="read").time():
        booking = await service.get_booking(user_id)
    record_booking_attempt("read", "success")
    room = booking.room
    return BookingWithRoomResponse(
        id=booking.id,
        room=RoomResponse(
            id=room.id,
            name=room.name,
            capacity=room.capacity,
            hotel_id=room.hotel_id,
            created_at=room.created_at,
            updated_at=room.updated_at,
        ),
    )


@router.put("/{booking_id}", response_model=BookingIdResponse, responses=ERROR_RESPONSES)
async def update_booking(
    booking_data: BookingRequest,
    booking_id: int = Path(..., gt=0),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Move the caller's booking to another room.

    The booking id in the path is only validated; the caller's own booking
    is always the one that moves.
    """
    with booking_latency.labels(operation="update").time():
        result = await service.update(user_id, booking_data.room_id)
    if result.booking_id != booking_id:
        logger.info("booking_id_mismatch", path_booking_id=booking_id, booking_id=result.booking_id)
    record_booking_attempt("update", "success")
    return BookingIdResponse(booking_id=result.booking_id)
