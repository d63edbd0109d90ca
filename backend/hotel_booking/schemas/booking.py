"""
Pydantic schemas for booking request/response validation.

Field names on the wire are camelCase (roomId, bookingId, Room) to match the
rest of the registration platform's API.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class BookingRequest(BaseModel):
    room_id: int = Field(..., gt=0, alias="roomId")

    model_config = ConfigDict(populate_by_name=True)


class BookingIdResponse(BaseModel):
    booking_id: int = Field(..., alias="bookingId")

    model_config = ConfigDict(populate_by_name=True)


class RoomResponse(BaseModel):
    id: int
    name: str
    capacity: int
    hotel_id: int = Field(..., alias="hotelId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class BookingWithRoomResponse(BaseModel):
    id: int
    room: RoomResponse = Field(..., alias="Room")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    message: str
