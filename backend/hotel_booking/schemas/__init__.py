from hotel_booking.schemas.booking import (
    BookingIdResponse,
    BookingRequest,
    BookingWithRoomResponse,
    ErrorResponse,
    RoomResponse,
)

__all__ = [
    "BookingRequest", "BookingIdResponse",
    "RoomResponse", "BookingWithRoomResponse",
    "ErrorResponse",
]
