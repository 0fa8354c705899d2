"""
Drag-and-drop schemas for the reservation timeline.

A finished gesture on a bar resolves to at most one intent: a date shift,
a room move, a click, or nothing.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import Field, computed_field, field_validator

from hotelpms.schemas.calendar.calendar_room import coerce_calendar_date
from hotelpms.schemas.common.base import BaseCreateSchema, BaseSchema
from hotelpms.schemas.common.enums import DropOutcomeKind

__all__ = [
    "PointerOffset",
    "DateChangeIntent",
    "RoomMoveIntent",
    "DropOutcome",
    "TimelineDropRequest",
]


class PointerOffset(BaseSchema):
    """Pointer displacement in px since the gesture started."""

    x: float = 0.0
    y: float = 0.0


class DateChangeIntent(BaseSchema):
    """Shift both stay dates by the same number of days."""

    reservation_id: str
    original_check_in: dt.date
    original_check_out: dt.date
    new_check_in: dt.date
    new_check_out: dt.date
    original_total_amount: Decimal

    @computed_field
    @property
    def days_moved(self) -> int:
        return (self.new_check_in - self.original_check_in).days


class RoomMoveIntent(BaseSchema):
    """Move one reservation-room link to another physical room."""

    reservation_id: str
    reservation_room_id: str
    new_room_id: str
    old_room_id: Optional[str] = Field(
        None, description="Origin room, or None when the origin was the unassigned row"
    )


class DropOutcome(BaseSchema):
    """Resolution of a completed gesture."""

    kind: DropOutcomeKind
    reservation_id: str
    date_change: Optional[DateChangeIntent] = None
    room_move: Optional[RoomMoveIntent] = None

    @classmethod
    def nothing(cls, reservation_id: str) -> "DropOutcome":
        return cls(kind=DropOutcomeKind.NONE, reservation_id=reservation_id)

    @classmethod
    def click(cls, reservation_id: str) -> "DropOutcome":
        return cls(kind=DropOutcomeKind.CLICK, reservation_id=reservation_id)


class TimelineDropRequest(BaseCreateSchema):
    """
    A drag released on the timeline, as reported by a client.

    The window (``start``, ``days``) must match what the client rendered so
    row indices and constraints are recomputed identically on the server.
    """

    reservation_id: str = Field(..., min_length=1)
    reservation_room_id: str = Field("", description="Link id of the dragged bar; picks between bars of one reservation on the same row")
    room_id: str = Field(..., min_length=1, description="Row the bar was dragged from")
    start: dt.date = Field(..., description="First visible day")
    days: int = Field(14, description="Visible window size")
    dx: float = Field(0.0, description="Horizontal displacement in px")
    dy: float = Field(0.0, description="Vertical displacement in px")

    @field_validator("start", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        return coerce_calendar_date(v)
