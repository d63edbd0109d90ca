#!/usr/bin/env python3
"""
Room race demo - many attendees going for the same hotel room at once.
Runs the booking engine on the in-memory gateway, next to a naive
count-then-insert flow that shows the oversell the slot claim prevents.

Usage (from the repository root, with the package installed):
    python experiments/room_race_demo.py
"""

import asyncio
import time

from hotel_booking.core.exceptions import CannotCreateBookingError
from hotel_booking.repositories.memory_gateway import InMemoryBookingGateway
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.capacity import evaluate_capacity


def seed(gateway: InMemoryBookingGateway, users: int, capacity: int) -> int:
    for user_id in range(1, users + 1):
        enrollment = gateway.add_enrollment(user_id)
        gateway.add_ticket(enrollment.id)
    return gateway.add_room(capacity=capacity).id


async def naive_create(gateway: InMemoryBookingGateway, user_id: int, room_id: int) -> bool:
    """Check vacancy, then insert. No atomic claim in between."""
    state = await evaluate_capacity(gateway, room_id)
    if state is None or not state.has_vacancy:
        return False
    await gateway.create_booking(user_id, room_id)
    return True


async def engine_create(service: BookingService, user_id: int, room_id: int) -> bool:
    try:
        await service.create(user_id, room_id)
    except CannotCreateBookingError:
        return False
    return True


async def run_test(strategy: str, users: int, capacity: int):
    print(f"\n{'='*60}")
    print(f"Strategy: {strategy.upper()}")
    print(f"Users: {users} | Room capacity: {capacity}")
    print(f"{'='*60}\n")

    gateway = InMemoryBookingGateway(latency=0.002)
    room_id = seed(gateway, users, capacity)
    service = BookingService(gateway)

    if strategy == "engine":
        tasks = [engine_create(service, user_id, room_id) for user_id in range(1, users + 1)]
    else:
        tasks = [naive_create(gateway, user_id, room_id) for user_id in range(1, users + 1)]

    start_time = time.time()
    results = await asyncio.gather(*tasks)
    total_time = time.time() - start_time

    successful = sum(results)
    occupied = gateway.occupancy(room_id)

    print(f"Time:        {total_time:.3f}s")
    print(f"Successful:  {successful}")
    print(f"Rejected:    {users - successful}")
    print(f"Occupancy:   {occupied}/{capacity}")

    print(f"\n{'='*60}")
    if occupied <= capacity:
        print("✓ PASS: No overbooking")
    else:
        print(f"✗ FAIL: OVERBOOKING! {occupied} guests in a room for {capacity}")
    print(f"{'='*60}")


async def main():
    USERS = 50
    CAPACITY = 3

    print("\n" + "="*60)
    print("HOTEL ROOM RACE")
    print("="*60)

    await run_test("engine", USERS, CAPACITY)
    await run_test("naive", USERS, CAPACITY)

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)
    print("Engine: vacancy read + atomic slot claim, never oversells")
    print("Naive:  vacancy read + insert, every racer sees a free slot")
    print("="*60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
