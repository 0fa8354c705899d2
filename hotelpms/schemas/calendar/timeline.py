"""
Reservation timeline view schemas.

The timeline is a grid of room rows by day columns. Rows are grouped into
floor sections and each reservation visible in the window becomes a bar
with pixel geometry and the displacement bounds it may be dragged within.
"""

import datetime as dt
from typing import List, Optional

from pydantic import Field, computed_field

from hotelpms.schemas.calendar.calendar_room import CalendarStats
from hotelpms.schemas.common.base import BaseResponseSchema, BaseSchema
from hotelpms.schemas.common.enums import ReservationStatus

__all__ = [
    "DateColumn",
    "VisibleSpan",
    "BarGeometry",
    "DragConstraints",
    "BarTooltip",
    "ReservationBar",
    "RoomRow",
    "FloorGroup",
    "TimelineGrid",
    "TimelineView",
]


class DateColumn(BaseSchema):
    """Header cell for one visible day."""

    day: dt.date = Field(..., description="Calendar day")
    weekday: str = Field(..., description="Abbreviated weekday, e.g. Mon")
    day_of_month: int = Field(..., ge=1, le=31)
    is_today: bool = Field(False)


class VisibleSpan(BaseSchema):
    """Portion of a stay inside the window, in whole days from the window start."""

    offset_days: int = Field(..., ge=0)
    duration_days: int = Field(..., ge=1)

    @property
    def end_offset(self) -> int:
        return self.offset_days + self.duration_days


class BarGeometry(BaseSchema):
    """Horizontal pixel placement of a bar inside its row."""

    offset_days: int = Field(..., ge=0)
    duration_days: int = Field(..., ge=1)
    left: int = Field(..., description="Left edge in px, including the 2px inset")
    width: int = Field(..., description="Width in px, 2px gap on each side")


class DragConstraints(BaseSchema):
    """Allowed pointer displacement (px) relative to the bar's resting place."""

    top: int = Field(..., le=0)
    bottom: int = Field(..., ge=0)
    left: int = Field(..., le=0)
    right: int = Field(..., ge=0)

    def clamp(self, dx: float, dy: float) -> tuple:
        """Clamp a displacement to the bounds."""
        return (
            min(max(dx, self.left), self.right),
            min(max(dy, self.top), self.bottom),
        )


class BarTooltip(BaseSchema):
    """Hover details for a bar."""

    guest_label: str
    confirmation_number: str
    date_label: str = Field(..., description='e.g. "Mar 5 → Mar 8, 2024"')
    status_label: str
    drag_hint: Optional[str] = None


class ReservationBar(BaseSchema):
    """A reservation drawn on one room row."""

    key: str = Field(..., description="Stable key: <reservation id>-<reservation room id>")
    reservation_id: str
    reservation_room_id: str
    status: ReservationStatus
    guest_label: str
    is_vip: bool = False
    icon: Optional[str] = Field(None, description="crown, user-check or calendar-clock")
    status_classes: str = ""
    text_classes: str = ""
    geometry: BarGeometry
    constraints: DragConstraints
    drag_enabled: bool = False
    shows_checkout_marker: bool = Field(
        False, description="Checkout falls inside the window; draw the trailing stripe"
    )
    tooltip: BarTooltip


class RoomRow(BaseSchema):
    """One room (or unassigned placeholder) row."""

    room_id: str
    room_number: str
    room_type_name: str = Field("—", description="Room type name or an em dash")
    row_index: int = Field(..., ge=0, description="Global 0-based row index, top to bottom")
    is_unassigned: bool = False
    drag_enabled: bool = False
    bars: List[ReservationBar] = Field(default_factory=list)


class FloorGroup(BaseSchema):
    """Rows sharing a floor, or the leading unassigned section."""

    key: str = Field(..., description="Floor value, 'Other' or 'Unassigned'")
    label: str = Field(..., description="Section heading")
    is_unassigned: bool = False
    rows: List[RoomRow] = Field(default_factory=list)


class TimelineGrid(BaseResponseSchema):
    """The complete laid-out timeline."""

    cell_width: int
    row_height: int
    date_columns: List[DateColumn] = Field(default_factory=list)
    groups: List[FloorGroup] = Field(default_factory=list)
    total_rows: int = Field(0, ge=0)
    empty_message: Optional[str] = None

    @computed_field
    @property
    def is_empty(self) -> bool:
        return self.total_rows == 0

    @computed_field
    @property
    def grid_width(self) -> int:
        return len(self.date_columns) * self.cell_width

    def rows(self) -> List[RoomRow]:
        """All rows in display order."""
        return [row for group in self.groups for row in group.rows]


class TimelineView(BaseResponseSchema):
    """Timeline grid plus the front desk counters for its window."""

    start_date: dt.date
    num_days: int
    label: str
    grid: TimelineGrid
    stats: CalendarStats
