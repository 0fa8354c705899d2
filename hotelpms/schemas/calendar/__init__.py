"""
Reservation calendar schemas.
"""

from hotelpms.schemas.calendar.calendar_room import (
    AssignedRoom,
    CalendarData,
    CalendarReservation,
    CalendarRoom,
    CalendarStats,
    GuestSummary,
    RoomRef,
    RoomTypeSummary,
    UnassignedRoom,
)
from hotelpms.schemas.calendar.drag import (
    DateChangeIntent,
    DropOutcome,
    PointerOffset,
    RoomMoveIntent,
    TimelineDropRequest,
)
from hotelpms.schemas.calendar.reservation_update import (
    ChangeDatesRequest,
    DateChangeResult,
    DropResult,
    MoveReservationRequest,
    RoomMoveResult,
)
from hotelpms.schemas.calendar.timeline import (
    BarGeometry,
    BarTooltip,
    DateColumn,
    DragConstraints,
    FloorGroup,
    ReservationBar,
    RoomRow,
    TimelineGrid,
    TimelineView,
    VisibleSpan,
)

__all__ = [
    "AssignedRoom",
    "CalendarData",
    "CalendarReservation",
    "CalendarRoom",
    "CalendarStats",
    "GuestSummary",
    "RoomRef",
    "RoomTypeSummary",
    "UnassignedRoom",
    "DateChangeIntent",
    "DropOutcome",
    "PointerOffset",
    "RoomMoveIntent",
    "TimelineDropRequest",
    "ChangeDatesRequest",
    "DateChangeResult",
    "DropResult",
    "MoveReservationRequest",
    "RoomMoveResult",
    "BarGeometry",
    "BarTooltip",
    "DateColumn",
    "DragConstraints",
    "FloorGroup",
    "ReservationBar",
    "RoomRow",
    "TimelineGrid",
    "TimelineView",
    "VisibleSpan",
]
