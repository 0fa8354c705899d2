"""
Calendar room and reservation schemas.

These are the inputs of the reservation timeline: a list of rooms, each
carrying the reservations that occupy it inside the requested window.
Rooms awaiting assignment are represented by a synthetic row whose
reference is the ``UnassignedRoom`` variant rather than a physical room.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Any, List, Literal, Optional, Union

from dateutil import parser as date_parser
from pydantic import Field, computed_field, field_validator, model_validator

from hotelpms.core.constants import UNKNOWN_GUEST_LABEL
from hotelpms.schemas.common.base import BaseSchema
from hotelpms.schemas.common.enums import ReservationStatus

__all__ = [
    "GuestSummary",
    "RoomTypeSummary",
    "CalendarReservation",
    "AssignedRoom",
    "UnassignedRoom",
    "RoomRef",
    "CalendarRoom",
    "CalendarStats",
    "CalendarData",
    "coerce_calendar_date",
]

UNASSIGNED_ID_PREFIX = "unassigned-"


def coerce_calendar_date(value: Any) -> Any:
    """
    Reduce ISO strings and datetimes to a calendar day.

    Time-of-day is dropped: ``"2024-05-03T22:00:00"`` becomes
    ``date(2024, 5, 3)``. Other values are passed through for pydantic.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and value.strip():
        return date_parser.isoparse(value.strip()).date()
    return value


class GuestSummary(BaseSchema):
    """Guest fields displayed on a reservation bar."""

    id: str = Field(..., description="Guest identifier")
    first_name: str = Field("", description="Guest first name")
    last_name: str = Field("", description="Guest last name")
    is_vip: bool = Field(False, description="VIP flag")

    @computed_field
    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name} {self.last_name}".strip()


class RoomTypeSummary(BaseSchema):
    """Room type descriptor shown under the room number."""

    id: str = Field(..., description="Room type identifier")
    name: str = Field(..., description="Room type name")
    code: str = Field("", description="Short room type code")


class CalendarReservation(BaseSchema):
    """
    A reservation as attached to one room of the timeline.

    One reservation may occupy several rooms; ``reservation_room_id``
    identifies the link between this reservation and the row it is drawn on.
    """

    id: str = Field(..., description="Reservation identifier")
    reservation_room_id: str = Field(
        "",
        description="Reservation-room link identifier (empty when the reservation has no link)",
    )
    confirmation_number: str = Field("", description="Confirmation number")
    check_in_date: dt.date = Field(..., description="Arrival day")
    check_out_date: dt.date = Field(..., description="Departure day (exclusive)")
    status: ReservationStatus = Field(..., description="Reservation status")
    total_amount: Decimal = Field(Decimal("0"), ge=0, description="Reservation total")
    guest: Optional[GuestSummary] = Field(None, description="Guest, if known")
    room_id: Optional[str] = Field(None, description="Assigned room id")
    room_number: Optional[str] = Field(None, description="Assigned room number")
    room_type_name: Optional[str] = Field(None, description="Booked room type name")

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def drop_time_of_day(cls, v: Any) -> Any:
        return coerce_calendar_date(v)

    @model_validator(mode="after")
    def validate_stay(self) -> "CalendarReservation":
        """Check-out must be strictly after check-in."""
        if self.check_out_date <= self.check_in_date:
            raise ValueError(
                f"Check-out date ({self.check_out_date}) must be after "
                f"check-in date ({self.check_in_date})"
            )
        return self

    @computed_field
    @property
    def guest_label(self) -> str:
        """Guest display name or a placeholder when guest data is missing."""
        if self.guest is None or not self.guest.full_name:
            return UNKNOWN_GUEST_LABEL
        return self.guest.full_name

    @property
    def is_vip(self) -> bool:
        return bool(self.guest and self.guest.is_vip)

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days


class AssignedRoom(BaseSchema):
    """Reference to a physical room."""

    kind: Literal["assigned"] = "assigned"
    id: str = Field(..., description="Room identifier")
    floor: Optional[str] = Field(None, description="Floor label")

    @property
    def room_id(self) -> str:
        return self.id

    @property
    def is_unassigned(self) -> bool:
        return False


class UnassignedRoom(BaseSchema):
    """Synthetic row holding one reservation that has no room yet."""

    kind: Literal["unassigned"] = "unassigned"
    reservation_id: str = Field(..., description="Reservation awaiting assignment")

    @property
    def room_id(self) -> str:
        return f"{UNASSIGNED_ID_PREFIX}{self.reservation_id}"

    @property
    def floor(self) -> None:
        return None

    @property
    def is_unassigned(self) -> bool:
        return True


RoomRef = Annotated[Union[AssignedRoom, UnassignedRoom], Field(discriminator="kind")]


class CalendarRoom(BaseSchema):
    """A timeline row: a room (or placeholder) with its reservations."""

    ref: RoomRef
    room_number: str = Field(..., description="Room number, or guest name for placeholder rows")
    room_type: Optional[RoomTypeSummary] = Field(None, description="Room type descriptor")
    reservations: List[CalendarReservation] = Field(default_factory=list)

    @computed_field
    @property
    def id(self) -> str:
        """Row key; placeholder rows use ``unassigned-<reservation id>``."""
        return self.ref.room_id

    @property
    def floor(self) -> Optional[str]:
        return self.ref.floor

    @property
    def is_unassigned(self) -> bool:
        return self.ref.is_unassigned

    @classmethod
    def assigned(
        cls,
        room_id: str,
        room_number: str,
        floor: Optional[str] = None,
        room_type: Optional[RoomTypeSummary] = None,
        reservations: Optional[List[CalendarReservation]] = None,
    ) -> "CalendarRoom":
        return cls(
            ref=AssignedRoom(id=room_id, floor=floor),
            room_number=room_number,
            room_type=room_type,
            reservations=list(reservations or []),
        )

    @classmethod
    def placeholder_for(cls, reservation: CalendarReservation) -> "CalendarRoom":
        """Build the unassigned row for a reservation with no room."""
        return cls(
            ref=UnassignedRoom(reservation_id=reservation.id),
            room_number=reservation.guest_label,
            room_type=RoomTypeSummary(
                id="unassigned",
                name=reservation.room_type_name or "No Type",
                code="UA",
            ),
            reservations=[reservation],
        )


class CalendarStats(BaseSchema):
    """Front desk counters for today."""

    arrivals: int = Field(0, ge=0, description="Confirmed reservations arriving today")
    departures: int = Field(0, ge=0, description="Checked-in reservations leaving today")
    in_house: int = Field(0, ge=0, description="Checked-in reservations")
    available: int = Field(0, description="Rooms minus in-house reservations")


class CalendarData(BaseSchema):
    """Everything the timeline needs for one window."""

    rooms: List[CalendarRoom] = Field(default_factory=list)
    date_range: List[dt.date] = Field(default_factory=list)
    stats: CalendarStats = Field(default_factory=CalendarStats)
