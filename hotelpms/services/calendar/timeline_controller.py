"""
Reservation timeline controller.

Holds one build's worth of rooms and visible days, produces the grid view
model, and turns finished pointer gestures into at most one of: a date
change, a room move, or a details click. Callbacks are fired and their
return values ignored; persisting the change is the caller's concern.
"""

from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Tuple

from hotelpms.core.exceptions import ResourceNotFoundError
from hotelpms.schemas.calendar.calendar_room import CalendarReservation, CalendarRoom
from hotelpms.schemas.calendar.drag import (
    DateChangeIntent,
    DropOutcome,
    RoomMoveIntent,
)
from hotelpms.schemas.calendar.timeline import DragConstraints, TimelineGrid
from hotelpms.schemas.common.enums import DropOutcomeKind
from hotelpms.services.calendar.drag_gesture import DragSession, GestureResult
from hotelpms.services.calendar.timeline_builder import TimelineBuilder, index_rooms
from hotelpms.services.calendar.timeline_math import (
    TimelineMetrics,
    compute_visible_span,
    date_range_start,
    displacement_to_cells,
    drag_constraints,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ClickHandler",
    "MoveHandler",
    "DateChangeHandler",
    "CalendarTimeline",
]

ClickHandler = Callable[[CalendarReservation], object]
MoveHandler = Callable[[str, str, str, Optional[str]], object]
DateChangeHandler = Callable[[str, dt.date, dt.date, dt.date, dt.date, Decimal], object]


class CalendarTimeline:
    """
    Timeline over a fixed set of rooms and visible days.

    Row order (and therefore every row index) is the grouped display
    order, for both drag bounds and drop targets.
    """

    def __init__(
        self,
        rooms: Sequence[CalendarRoom],
        date_range: Sequence[dt.date],
        on_reservation_click: Optional[ClickHandler] = None,
        on_reservation_move: Optional[MoveHandler] = None,
        on_reservation_date_change: Optional[DateChangeHandler] = None,
        metrics: Optional[TimelineMetrics] = None,
        today: Optional[dt.date] = None,
    ):
        self.rooms = list(rooms)
        self.date_range = list(date_range)
        self.on_reservation_click = on_reservation_click
        self.on_reservation_move = on_reservation_move
        self.on_reservation_date_change = on_reservation_date_change
        self.metrics = metrics or TimelineMetrics()
        self.today = today

        self._indexed: List[Tuple[CalendarRoom, int]] = index_rooms(self.rooms)

    @property
    def num_days(self) -> int:
        return len(self.date_range)

    @property
    def range_start(self) -> Optional[dt.date]:
        return date_range_start(self.date_range)

    @property
    def total_rows(self) -> int:
        return len(self._indexed)

    @property
    def move_enabled(self) -> bool:
        return self.on_reservation_move is not None

    def grid(self) -> TimelineGrid:
        builder = TimelineBuilder(metrics=self.metrics, today=self.today)
        return builder.build(self.rooms, self.date_range, move_enabled=self.move_enabled)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def row_at(self, row_index: int) -> Optional[CalendarRoom]:
        if 0 <= row_index < self.total_rows:
            return self._indexed[row_index][0]
        return None

    def locate(
        self,
        reservation_id: str,
        room_id: str,
        reservation_room_id: Optional[str] = None,
    ) -> Tuple[CalendarRoom, CalendarReservation, int]:
        """
        Find the row and reservation a bar belongs to.

        ``reservation_room_id`` picks between bars of one reservation that
        share a row; without it the first bar on the row is used.
        """
        for room, index in self._indexed:
            if room.id != room_id:
                continue
            for reservation in room.reservations:
                if reservation.id != reservation_id:
                    continue
                if not reservation_room_id or reservation.reservation_room_id == reservation_room_id:
                    return room, reservation, index
            break
        raise ResourceNotFoundError(
            resource_type="Reservation",
            resource_id=reservation_id,
            message=f"Reservation {reservation_id} is not shown on row {room_id}",
        )

    def constraints_for(self, reservation: CalendarReservation, row_index: int) -> Optional[DragConstraints]:
        """Drag bounds for a bar, or None when it is outside the window."""
        if self.range_start is None:
            return None
        span = compute_visible_span(
            reservation.check_in_date, reservation.check_out_date, self.range_start, self.num_days
        )
        if span is None:
            return None
        return drag_constraints(span, row_index, self.total_rows, self.num_days, self.metrics)

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def begin_drag(
        self,
        reservation_id: str,
        room_id: str,
        reservation_room_id: Optional[str] = None,
    ) -> DragSession:
        """Start a pointer session on a bar."""
        room, reservation, index = self.locate(reservation_id, room_id, reservation_room_id)
        constraints = self.constraints_for(reservation, index)
        if constraints is None:
            raise ResourceNotFoundError(
                resource_type="Reservation",
                resource_id=reservation_id,
                message=f"Reservation {reservation_id} is outside the visible window",
            )
        return DragSession(
            reservation=reservation,
            origin_ref=room.ref,
            row_index=index,
            constraints=constraints,
            drag_enabled=self.move_enabled and not room.is_unassigned,
            threshold=self.metrics.drag_threshold,
        )

    def resolve_drop(
        self,
        reservation_id: str,
        room_id: str,
        dx: float,
        dy: float,
        reservation_room_id: Optional[str] = None,
    ) -> DropOutcome:
        """
        Work out what a release at displacement (dx, dy) means.

        The displacement is taken as given; a live DragSession has already
        clamped it. Horizontal movement wins: a diagonal drop only changes
        dates. A target row outside the grid or an unassigned row resolves
        to nothing.
        """
        room, reservation, index = self.locate(reservation_id, room_id, reservation_room_id)

        days_moved, rows_moved = displacement_to_cells(dx, dy, self.metrics)

        if days_moved != 0:
            shift = dt.timedelta(days=days_moved)
            return DropOutcome(
                kind=DropOutcomeKind.DATE_CHANGE,
                reservation_id=reservation.id,
                date_change=DateChangeIntent(
                    reservation_id=reservation.id,
                    original_check_in=reservation.check_in_date,
                    original_check_out=reservation.check_out_date,
                    new_check_in=reservation.check_in_date + shift,
                    new_check_out=reservation.check_out_date + shift,
                    original_total_amount=reservation.total_amount,
                ),
            )

        if rows_moved != 0:
            target = self.row_at(index + rows_moved)
            if target is None or target.is_unassigned:
                return DropOutcome.nothing(reservation.id)
            return DropOutcome(
                kind=DropOutcomeKind.ROOM_MOVE,
                reservation_id=reservation.id,
                room_move=RoomMoveIntent(
                    reservation_id=reservation.id,
                    reservation_room_id=reservation.reservation_room_id,
                    new_room_id=target.id,
                    old_room_id=None if room.is_unassigned else room.id,
                ),
            )

        return DropOutcome.nothing(reservation.id)

    def drop(
        self,
        reservation_id: str,
        room_id: str,
        dx: float,
        dy: float,
        reservation_room_id: Optional[str] = None,
    ) -> DropOutcome:
        """
        Apply a drag reported after the fact, e.g. by a remote client.

        Rows that could not have started a drag resolve to nothing.
        """
        room, reservation, _ = self.locate(reservation_id, room_id, reservation_room_id)
        if not self.move_enabled or room.is_unassigned:
            return DropOutcome.nothing(reservation.id)
        outcome = self.resolve_drop(reservation_id, room_id, dx, dy, reservation_room_id)
        self.dispatch(outcome)
        return outcome

    def handle_drag_end(self, session: DragSession, result: GestureResult) -> DropOutcome:
        """Dispatch a finished gesture to the matching callback."""
        reservation = session.reservation
        if not result.dragged:
            self.click(reservation)
            return DropOutcome.click(reservation.id)

        room_id = session.origin_ref.room_id
        outcome = self.resolve_drop(
            reservation.id,
            room_id,
            result.offset.x,
            result.offset.y,
            reservation_room_id=reservation.reservation_room_id,
        )
        self.dispatch(outcome)
        return outcome

    def click(self, reservation: CalendarReservation) -> None:
        if self.on_reservation_click is not None:
            self.on_reservation_click(reservation)

    def dispatch(self, outcome: DropOutcome) -> None:
        """Fire the callback for a resolved drop, if one is wired."""
        if outcome.kind == DropOutcomeKind.DATE_CHANGE and outcome.date_change:
            change = outcome.date_change
            logger.info(
                "Reservation dates dragged",
                extra={"reservation_id": change.reservation_id, "days_moved": change.days_moved},
            )
            if self.on_reservation_date_change is not None:
                self.on_reservation_date_change(
                    change.reservation_id,
                    change.original_check_in,
                    change.original_check_out,
                    change.new_check_in,
                    change.new_check_out,
                    change.original_total_amount,
                )
        elif outcome.kind == DropOutcomeKind.ROOM_MOVE and outcome.room_move:
            move = outcome.room_move
            logger.info(
                "Reservation dragged to another room",
                extra={"reservation_id": move.reservation_id, "new_room_id": move.new_room_id},
            )
            if self.on_reservation_move is not None:
                self.on_reservation_move(
                    move.reservation_id,
                    move.reservation_room_id,
                    move.new_room_id,
                    move.old_room_id,
                )
