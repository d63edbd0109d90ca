"""
Hotel and Room models.

Key design decisions:
- `occupied` is a denormalized booking count. It is only changed through
  conditional UPDATEs (`occupied < capacity`) so two requests can never both
  take the last slot of a room.
- CHECK constraints keep `0 <= occupied <= capacity` as the final safety net.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Hotel(Base, TimestampMixin):
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    image = Column(String(1000), nullable=False, default="")

    rooms = relationship("Room", back_populates="hotel", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name={self.name})>"


class Room(Base, TimestampMixin):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)
    occupied = Column(Integer, nullable=False, default=0)

    hotel = relationship("Hotel", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room")

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_room_capacity_positive"),
        CheckConstraint("occupied >= 0", name="check_room_occupied_non_negative"),
        CheckConstraint("occupied <= capacity", name="check_room_occupied_lte_capacity"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, hotel={self.hotel_id}, occupied={self.occupied}/{self.capacity})>"
