"""
Tests for the booking endpoints: status code mapping, payload shapes and
authentication.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from hotel_booking.core.security import create_access_token
from hotel_booking.models.ticket import TicketStatus

BOOKING_URL = "/api/v1/booking"


# Authentication


@pytest.mark.asyncio
async def test_post_booking_without_token(client: AsyncClient):
    response = await client.post(BOOKING_URL, json={"roomId": 1})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_booking_with_invalid_token(client: AsyncClient):
    response = await client.get(BOOKING_URL, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient):
    token = create_access_token(data={"sub": "1"}, expires_delta=timedelta(minutes=-1))
    response = await client.get(BOOKING_URL, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_without_numeric_subject(client: AsyncClient):
    token = create_access_token(data={"sub": "someone"})
    response = await client.get(BOOKING_URL, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


# POST /booking


@pytest.mark.asyncio
async def test_post_booking(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room = gateway.add_room(capacity=1)

    response = await client.post(BOOKING_URL, json={"roomId": room.id}, headers=auth_headers(1))

    assert response.status_code == 200
    booking = await gateway.find_booking_by_user(1)
    assert response.json() == {"bookingId": booking.id}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"roomId": 0}, {"roomId": -3}, {"roomId": "abc"}])
async def test_post_booking_invalid_body(client: AsyncClient, attendee, auth_headers, body):
    attendee(1)

    response = await client.post(BOOKING_URL, json=body, headers=auth_headers(1))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_post_booking_without_enrollment(client: AsyncClient, gateway, auth_headers):
    room = gateway.add_room(capacity=1)

    response = await client.post(BOOKING_URL, json={"roomId": room.id}, headers=auth_headers(1))

    assert response.status_code == 403
    assert response.json()["error"] == "CannotCreateBookingError"


@pytest.mark.asyncio
async def test_post_booking_unpaid_ticket(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1, status=TicketStatus.RESERVED)
    room = gateway.add_room(capacity=1)

    response = await client.post(BOOKING_URL, json={"roomId": room.id}, headers=auth_headers(1))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_post_booking_remote_ticket(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1, is_remote=True)
    room = gateway.add_room(capacity=1)

    response = await client.post(BOOKING_URL, json={"roomId": room.id}, headers=auth_headers(1))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_post_booking_unknown_room(client: AsyncClient, attendee, auth_headers):
    attendee(1)

    response = await client.post(BOOKING_URL, json={"roomId": 1}, headers=auth_headers(1))

    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"


@pytest.mark.asyncio
async def test_post_booking_full_room(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room = gateway.add_room(capacity=2)
    gateway.add_booking(user_id=50, room_id=room.id)
    gateway.add_booking(user_id=51, room_id=room.id)

    response = await client.post(BOOKING_URL, json={"roomId": room.id}, headers=auth_headers(1))

    assert response.status_code == 403


# GET /booking


@pytest.mark.asyncio
async def test_get_booking(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room = gateway.add_room(capacity=2, hotel_id=7, name="Ocean 3")
    booking = gateway.add_booking(user_id=1, room_id=room.id)

    response = await client.get(BOOKING_URL, headers=auth_headers(1))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == booking.id
    assert body["Room"]["id"] == room.id
    assert body["Room"]["name"] == "Ocean 3"
    assert body["Room"]["capacity"] == 2
    assert body["Room"]["hotelId"] == 7
    assert "createdAt" in body["Room"]


@pytest.mark.asyncio
async def test_get_booking_without_enrollment(client: AsyncClient, auth_headers):
    response = await client.get(BOOKING_URL, headers=auth_headers(1))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_booking_without_ticket(client: AsyncClient, attendee, auth_headers):
    attendee(1, with_ticket=False)

    response = await client.get(BOOKING_URL, headers=auth_headers(1))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_booking_without_booking(client: AsyncClient, attendee, auth_headers):
    attendee(1)

    response = await client.get(BOOKING_URL, headers=auth_headers(1))

    assert response.status_code == 404


# PUT /booking/{bookingId}


@pytest.mark.asyncio
async def test_put_booking(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    old_room = gateway.add_room(capacity=1)
    new_room = gateway.add_room(capacity=1)
    booking = gateway.add_booking(user_id=1, room_id=old_room.id)

    response = await client.put(
        f"{BOOKING_URL}/{booking.id}", json={"roomId": new_room.id}, headers=auth_headers(1)
    )

    assert response.status_code == 200
    assert response.json() == {"bookingId": booking.id}
    moved = await gateway.find_booking_by_user(1)
    assert moved.room_id == new_room.id


@pytest.mark.asyncio
async def test_put_booking_moves_callers_booking_whatever_the_path_id(
    client: AsyncClient, gateway, attendee, auth_headers
):
    attendee(1)
    old_room = gateway.add_room(capacity=1)
    new_room = gateway.add_room(capacity=1)
    booking = gateway.add_booking(user_id=1, room_id=old_room.id)

    response = await client.put(
        f"{BOOKING_URL}/{booking.id + 100}", json={"roomId": new_room.id}, headers=auth_headers(1)
    )

    assert response.status_code == 200
    assert response.json() == {"bookingId": booking.id}


@pytest.mark.asyncio
async def test_put_booking_without_previous_booking(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room = gateway.add_room(capacity=1)

    response = await client.put(f"{BOOKING_URL}/1", json={"roomId": room.id}, headers=auth_headers(1))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_put_booking_unknown_room(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room = gateway.add_room(capacity=1)
    booking = gateway.add_booking(user_id=1, room_id=room.id)

    response = await client.put(
        f"{BOOKING_URL}/{booking.id}", json={"roomId": 999}, headers=auth_headers(1)
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_put_booking_full_room(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room_a = gateway.add_room(capacity=2)
    room_b = gateway.add_room(capacity=1)
    booking = gateway.add_booking(user_id=1, room_id=room_a.id)
    gateway.add_booking(user_id=2, room_id=room_b.id)

    response = await client.put(
        f"{BOOKING_URL}/{booking.id}", json={"roomId": room_b.id}, headers=auth_headers(1)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_put_booking_into_own_full_room(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room = gateway.add_room(capacity=1)
    booking = gateway.add_booking(user_id=1, room_id=room.id)

    response = await client.put(
        f"{BOOKING_URL}/{booking.id}", json={"roomId": room.id}, headers=auth_headers(1)
    )

    assert response.status_code == 403
    assert response.json() == {
        "error": "CannotCreateBookingError",
        "message": "No vacancies for selected room",
    }


@pytest.mark.asyncio
async def test_put_booking_invalid_path_id(client: AsyncClient, attendee, auth_headers):
    attendee(1)

    response = await client.put(f"{BOOKING_URL}/0", json={"roomId": 1}, headers=auth_headers(1))

    assert response.status_code == 400


# Health & metrics


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_metrics_exposes_booking_counters(client: AsyncClient, gateway, attendee, auth_headers):
    attendee(1)
    room = gateway.add_room(capacity=1)
    await client.post(BOOKING_URL, json={"roomId": room.id}, headers=auth_headers(1))

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "hotel_booking_attempts_total" in response.text


@pytest.mark.asyncio
async def test_openapi_documents_error_body(client: AsyncClient):
    response = await client.get("/openapi.json")
    assert response.status_code == 200

    schema = response.json()
    for method in ("post", "get"):
        documented = schema["paths"][BOOKING_URL][method]["responses"]
        assert documented["403"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorResponse"
        }
    assert set(schema["components"]["schemas"]["ErrorResponse"]["required"]) == {"error", "message"}
