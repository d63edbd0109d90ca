"""
Booking error taxonomy.

The booking engine raises these at the point a business rule rejects a
request. They are never retried and never caught inside the engine; the
transport layer maps each kind to an HTTP status (see api/errors.py).
"""

from typing import Optional

from fastapi import status

NO_ENROLLMENT = "No enrollment found for user"
NO_TICKET = "No ticket found for enrollment"
INVALID_TICKET = "Invalid ticket"
NO_VACANCY = "No vacancies for selected room"
NO_PREVIOUS_BOOKING = "No previous booking"
BOOKING_EXISTS = "User already has a booking"
BOOKING_CHANGED = "Booking was changed by another request"


class BookingError(Exception):
    """Base class for business-rule rejections."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Booking request rejected"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return type(self).__name__


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "No result for this search!"


class CannotCreateBookingError(BookingError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Cannot create booking"

    @property
    def reason(self) -> str:
        return self.message
