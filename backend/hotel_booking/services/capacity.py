"""
Room capacity evaluation.

Occupancy is counted from the bookings at evaluation time and never cached.
The result is advisory: the room may fill up between this read and the
write, which is why the booking engine still claims the slot atomically
through the gateway afterwards.
"""

from dataclasses import dataclass
from typing import Optional

from hotel_booking.repositories.gateway import BookingGateway
from hotel_booking.repositories.records import RoomRecord


@dataclass(frozen=True)
class RoomState:
    room: RoomRecord
    occupied: int

    @property
    def capacity(self) -> int:
        return self.room.capacity

    @property
    def vacancies(self) -> int:
        return max(self.capacity - self.occupied, 0)

    @property
    def has_vacancy(self) -> bool:
        return self.occupied < self.capacity


async def evaluate_capacity(gateway: BookingGateway, room_id: int) -> Optional[RoomState]:
    """Return the room's current state, or None when the room does not exist."""
    room = await gateway.find_room(room_id)
    if room is None:
        return None
    occupied = await gateway.count_bookings_for_room(room_id)
    return RoomState(room=room, occupied=occupied)
