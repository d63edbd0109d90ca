"""
Enrollment: a user's registration for the event.

Users and their profile data live in the registration platform; only the
user id is referenced here.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Enrollment(Base, TimestampMixin):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, default="")

    ticket = relationship("Ticket", back_populates="enrollment", uselist=False)

    def __repr__(self) -> str:
        return f"<Enrollment(id={self.id}, user={self.user_id})>"
