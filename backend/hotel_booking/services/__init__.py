from .booking_service import BookingResult, BookingService, BookingWithRoom
from .capacity import RoomState, evaluate_capacity
from .eligibility import Eligibility, check_eligibility

__all__ = [
    'BookingResult', 'BookingService', 'BookingWithRoom',
    'RoomState', 'evaluate_capacity',
    'Eligibility', 'check_eligibility',
]
