from hotel_booking.models.enrollment import Enrollment
from hotel_booking.models.ticket import Ticket, TicketStatus, TicketType
from hotel_booking.models.hotel import Hotel, Room
from hotel_booking.models.booking import Booking

__all__ = [
    "Enrollment",
    "Ticket", "TicketStatus", "TicketType",
    "Hotel", "Room",
    "Booking",
]
