"""
Timeline grid builder.

Lays out rooms × days: groups rooms into floor sections (the unassigned
section pinned first), assigns each row its global index and places every
visible reservation as a bar with geometry and drag bounds.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from hotelpms.core.constants import (
    EMPTY_TIMELINE_MESSAGE,
    NO_FLOOR_GROUP,
    UNASSIGNED_GROUP,
)
from hotelpms.schemas.calendar.calendar_room import CalendarReservation, CalendarRoom
from hotelpms.schemas.calendar.timeline import (
    BarTooltip,
    DateColumn,
    FloorGroup,
    ReservationBar,
    RoomRow,
    TimelineGrid,
)
from hotelpms.schemas.common.enums import ReservationStatus
from hotelpms.services.calendar.timeline_math import (
    TimelineMetrics,
    bar_geometry,
    compute_visible_span,
    date_range_start,
    drag_constraints,
    shows_checkout_marker,
)

logger = logging.getLogger(__name__)

__all__ = [
    "STATUS_CLASSES",
    "STATUS_TEXT_CLASSES",
    "DRAG_HINT",
    "group_rooms",
    "index_rooms",
    "TimelineBuilder",
]

STATUS_CLASSES: Dict[ReservationStatus, str] = {
    ReservationStatus.CONFIRMED: "bg-blue-500/80 border-blue-600",
    ReservationStatus.CHECKED_IN: "bg-emerald-500/80 border-emerald-600",
    ReservationStatus.CHECKED_OUT: "bg-muted border-border",
    ReservationStatus.CANCELLED: "bg-destructive/50 border-destructive",
    ReservationStatus.NO_SHOW: "bg-orange-500/50 border-orange-600",
}

STATUS_TEXT_CLASSES: Dict[ReservationStatus, str] = {
    ReservationStatus.CONFIRMED: "text-white",
    ReservationStatus.CHECKED_IN: "text-white",
    ReservationStatus.CHECKED_OUT: "text-muted-foreground",
    ReservationStatus.CANCELLED: "text-destructive-foreground",
    ReservationStatus.NO_SHOW: "text-white",
}

DRAG_HINT = "Drag to move dates or change room"

# (is_unassigned, floor key)
GroupKey = Tuple[bool, str]


def group_rooms(rooms: Sequence[CalendarRoom]) -> List[Tuple[GroupKey, List[CalendarRoom]]]:
    """
    Group rooms into floor sections.

    Unassigned placeholder rows form the first section whatever floor they
    carry. Assigned rooms follow, grouped by floor in first-seen order;
    rooms without a floor share the ``Other`` section.
    """
    unassigned = [room for room in rooms if room.is_unassigned]
    groups: Dict[GroupKey, List[CalendarRoom]] = {}

    if unassigned:
        groups[(True, UNASSIGNED_GROUP)] = unassigned

    for room in rooms:
        if room.is_unassigned:
            continue
        key = (False, room.floor or NO_FLOOR_GROUP)
        groups.setdefault(key, []).append(room)

    return list(groups.items())


def index_rooms(rooms: Sequence[CalendarRoom]) -> List[Tuple[CalendarRoom, int]]:
    """Rooms in display order paired with their global row index."""
    ordered = [room for _, members in group_rooms(rooms) for room in members]
    return [(room, index) for index, room in enumerate(ordered)]


def _group_label(key: GroupKey) -> str:
    is_unassigned, floor = key
    if is_unassigned:
        return UNASSIGNED_GROUP
    if floor == NO_FLOOR_GROUP:
        return "No Floor"
    return f"Floor {floor}"


def _short_date(day: dt.date) -> str:
    return f"{day:%b} {day.day}"


def _status_icon(reservation: CalendarReservation) -> Optional[str]:
    if reservation.is_vip:
        return "crown"
    if reservation.status == ReservationStatus.CHECKED_IN:
        return "user-check"
    if reservation.status == ReservationStatus.CONFIRMED:
        return "calendar-clock"
    return None


class TimelineBuilder:
    """
    Build the timeline view model for a set of rooms and a visible window.

    The builder keeps no state between builds; ``today`` only drives the
    header highlight.
    """

    def __init__(self, metrics: Optional[TimelineMetrics] = None, today: Optional[dt.date] = None):
        self.metrics = metrics or TimelineMetrics()
        self.today = today

    def build(
        self,
        rooms: Sequence[CalendarRoom],
        date_range: Sequence[dt.date],
        move_enabled: bool = False,
    ) -> TimelineGrid:
        """
        Lay out the grid.

        Args:
            rooms: Rooms with nested reservations
            date_range: Consecutive visible days
            move_enabled: Whether a room-move handler is available; drag is
                never enabled on unassigned rows

        Returns:
            TimelineGrid; ``is_empty`` with a message when there are no rooms
        """
        today = self.today or dt.date.today()
        columns = [
            DateColumn(
                day=day,
                weekday=f"{day:%a}",
                day_of_month=day.day,
                is_today=day == today,
            )
            for day in date_range
        ]

        if not rooms:
            return TimelineGrid(
                cell_width=self.metrics.cell_width,
                row_height=self.metrics.row_height,
                date_columns=columns,
                groups=[],
                total_rows=0,
                empty_message=EMPTY_TIMELINE_MESSAGE,
            )

        grouped = group_rooms(rooms)
        total_rows = sum(len(members) for _, members in grouped)
        range_start = date_range_start(date_range)

        groups: List[FloorGroup] = []
        row_index = 0
        for key, members in grouped:
            rows: List[RoomRow] = []
            for room in members:
                drag_enabled = move_enabled and not room.is_unassigned
                rows.append(
                    RoomRow(
                        room_id=room.id,
                        room_number=room.room_number,
                        room_type_name=room.room_type.name if room.room_type and room.room_type.name else "—",
                        row_index=row_index,
                        is_unassigned=room.is_unassigned,
                        drag_enabled=drag_enabled,
                        bars=self._bars_for_room(
                            room, range_start, len(date_range), row_index, total_rows, drag_enabled
                        ),
                    )
                )
                row_index += 1
            groups.append(
                FloorGroup(
                    key=key[1],
                    label=_group_label(key),
                    is_unassigned=key[0],
                    rows=rows,
                )
            )

        logger.debug(
            "Built reservation timeline",
            extra={"rows": total_rows, "days": len(date_range), "groups": len(groups)},
        )

        return TimelineGrid(
            cell_width=self.metrics.cell_width,
            row_height=self.metrics.row_height,
            date_columns=columns,
            groups=groups,
            total_rows=total_rows,
        )

    def _bars_for_room(
        self,
        room: CalendarRoom,
        range_start: Optional[dt.date],
        num_days: int,
        row_index: int,
        total_rows: int,
        drag_enabled: bool,
    ) -> List[ReservationBar]:
        if range_start is None:
            return []

        bars = []
        for reservation in room.reservations:
            bar = self.build_bar(
                reservation, range_start, num_days, row_index, total_rows, drag_enabled
            )
            if bar is not None:
                bars.append(bar)
        return bars

    def build_bar(
        self,
        reservation: CalendarReservation,
        range_start: dt.date,
        num_days: int,
        row_index: int,
        total_rows: int,
        drag_enabled: bool,
    ) -> Optional[ReservationBar]:
        """Place one reservation; None when it has no visible portion."""
        span = compute_visible_span(
            reservation.check_in_date, reservation.check_out_date, range_start, num_days
        )
        if span is None:
            return None

        return ReservationBar(
            key=f"{reservation.id}-{reservation.reservation_room_id}",
            reservation_id=reservation.id,
            reservation_room_id=reservation.reservation_room_id,
            status=reservation.status,
            guest_label=reservation.guest_label,
            is_vip=reservation.is_vip,
            icon=_status_icon(reservation),
            status_classes=STATUS_CLASSES[reservation.status],
            text_classes=STATUS_TEXT_CLASSES[reservation.status],
            geometry=bar_geometry(span, self.metrics),
            constraints=drag_constraints(span, row_index, total_rows, num_days, self.metrics),
            drag_enabled=drag_enabled,
            shows_checkout_marker=shows_checkout_marker(
                reservation.check_out_date, range_start, num_days
            ),
            tooltip=BarTooltip(
                guest_label=reservation.guest_label,
                confirmation_number=reservation.confirmation_number,
                date_label=(
                    f"{_short_date(reservation.check_in_date)} → "
                    f"{_short_date(reservation.check_out_date)}, {reservation.check_out_date.year}"
                ),
                status_label=reservation.status.label,
                drag_hint=DRAG_HINT if drag_enabled else None,
            ),
        )
