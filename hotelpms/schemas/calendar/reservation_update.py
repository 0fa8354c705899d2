"""
Reservation update commands issued from the timeline.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator, model_validator

from hotelpms.schemas.calendar.calendar_room import coerce_calendar_date
from hotelpms.schemas.calendar.drag import DropOutcome
from hotelpms.schemas.common.base import BaseCreateSchema, BaseResponseSchema
from hotelpms.schemas.common.enums import ReservationStatus, RoomStatus

__all__ = [
    "MoveReservationRequest",
    "ChangeDatesRequest",
    "RoomMoveResult",
    "DateChangeResult",
    "DropResult",
]


class MoveReservationRequest(BaseCreateSchema):
    """Reassign a reservation-room link to another room."""

    reservation_room_id: str = Field(..., min_length=1)
    new_room_id: str = Field(..., min_length=1)
    old_room_id: Optional[str] = Field(None, description="Room being vacated, if any")


class ChangeDatesRequest(BaseCreateSchema):
    """Move a stay to new dates, rescaling the total by nights."""

    original_check_in: dt.date
    original_check_out: dt.date
    new_check_in: dt.date
    new_check_out: dt.date
    original_total_amount: Decimal = Field(..., ge=0)

    @field_validator(
        "original_check_in", "original_check_out", "new_check_in", "new_check_out",
        mode="before",
    )
    @classmethod
    def drop_time_of_day(cls, v):
        return coerce_calendar_date(v)

    @model_validator(mode="after")
    def validate_new_stay(self) -> "ChangeDatesRequest":
        if self.new_check_out <= self.new_check_in:
            raise ValueError("New check-out date must be after new check-in date")
        return self


class RoomMoveResult(BaseResponseSchema):
    """Outcome of a room move."""

    reservation_id: str
    reservation_room_id: str
    new_room_id: str
    old_room_id: Optional[str] = None
    reservation_status: ReservationStatus
    new_room_status: Optional[RoomStatus] = None
    old_room_status: Optional[RoomStatus] = None


class DateChangeResult(BaseResponseSchema):
    """Outcome of a date change."""

    reservation_id: str
    check_in_date: dt.date
    check_out_date: dt.date
    nights: int
    total_amount: Decimal


class DropResult(BaseResponseSchema):
    """A resolved timeline drop and what was persisted for it."""

    outcome: DropOutcome
    room_move: Optional[RoomMoveResult] = None
    date_change: Optional[DateChangeResult] = None
