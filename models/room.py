# models/room.py

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from .enums import RoomStatus


class Room(BaseModel):
    id: str
    number: str
    floor: int
    dormitory: str
    capacity: int = Field(..., ge=0)
    occupied: int = Field(0, ge=0)
    status: RoomStatus = RoomStatus.available
    last_cleaned: Optional[str] = None
    avg_compatibility: Optional[int] = None

    # -------------------------------------------------
    # occupied ≤ capacity holds for every stored room
    # -------------------------------------------------
    @model_validator(mode="after")
    def check_occupancy(self):
        if self.occupied > self.capacity:
            raise ValueError(
                f"Room {self.id}: occupied ({self.occupied}) exceeds capacity ({self.capacity})"
            )
        return self

    @property
    def has_vacancy(self) -> bool:
        return self.occupied < self.capacity


class RoomReassign(BaseModel):
    resident_id: str
    target_room_id: str


class RoomStatusUpdate(BaseModel):
    status: RoomStatus
