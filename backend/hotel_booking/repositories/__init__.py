"""
Persistence gateway: the only way the booking engine reaches storage.
"""

from .gateway import BookingGateway
from .memory_gateway import InMemoryBookingGateway
from .sqlalchemy_gateway import SqlAlchemyBookingGateway

__all__ = ['BookingGateway', 'InMemoryBookingGateway', 'SqlAlchemyBookingGateway']
