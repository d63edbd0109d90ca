"""
Pytest fixtures for the booking engine, the HTTP client and authentication.

Engine and API tests run against the in-memory gateway; the SQLAlchemy
gateway has its own SQLite-backed fixtures in test_sqlalchemy_gateway.py.
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from hotel_booking.api.deps import get_gateway
from hotel_booking.core.security import create_access_token
from hotel_booking.main import app
from hotel_booking.models.ticket import TicketStatus
from hotel_booking.repositories.memory_gateway import InMemoryBookingGateway
from hotel_booking.services.booking_service import BookingService


@pytest.fixture
def gateway() -> InMemoryBookingGateway:
    return InMemoryBookingGateway()


@pytest.fixture
def service(gateway: InMemoryBookingGateway) -> BookingService:
    return BookingService(gateway)


@pytest.fixture
def attendee(gateway: InMemoryBookingGateway) -> Callable[..., int]:
    """
    Factory enrolling a user with a ticket. Defaults to a paid, in-person,
    hotel-inclusive ticket; override any attribute to make it ineligible.
    """

    def _attendee(
        user_id: int,
        status: TicketStatus = TicketStatus.PAID,
        is_remote: bool = False,
        includes_hotel: bool = True,
        with_ticket: bool = True,
    ) -> int:
        enrollment = gateway.add_enrollment(user_id)
        if with_ticket:
            gateway.add_ticket(
                enrollment.id,
                status=status,
                is_remote=is_remote,
                includes_hotel=includes_hotel,
            )
        return user_id

    return _attendee


@pytest_asyncio.fixture
async def client(gateway: InMemoryBookingGateway) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests hit the in-memory gateway instead of the database."""

    async def override_get_gateway():
        return gateway

    app.dependency_overrides[get_gateway] = override_get_gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[int], dict]:
    """Authorization headers with a Bearer token for the given user id."""

    def _headers(user_id: int) -> dict:
        token = create_access_token(data={"sub": str(user_id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers
