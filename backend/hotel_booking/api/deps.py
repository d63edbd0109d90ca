"""
FastAPI dependencies wiring the booking engine to a request-scoped gateway.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.repositories import BookingGateway, SqlAlchemyBookingGateway
from hotel_booking.services.booking_service import BookingService


async def get_gateway(db: AsyncSession = Depends(get_db)) -> BookingGateway:
    return SqlAlchemyBookingGateway(db)


async def get_booking_service(gateway: BookingGateway = Depends(get_gateway)) -> BookingService:
    return BookingService(gateway)
