"""
Booking model linking a user to a hotel room.

Key design decisions:
- Unique constraint on user_id: a user holds at most one booking
- Moving to another room updates room_id in place, the booking id never changes
"""

from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)

    room = relationship("Room", back_populates="bookings")

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_booking_user"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, room={self.room_id})>"
