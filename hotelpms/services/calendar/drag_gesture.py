"""
Pointer gesture state for a single reservation bar.

A session starts on pointer-down and ends on release or cancel. It only
turns into a drag once the pointer has travelled further than the drag
threshold; until then a release counts as a click.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hotelpms.schemas.calendar.calendar_room import CalendarReservation, RoomRef
from hotelpms.schemas.calendar.drag import PointerOffset
from hotelpms.schemas.calendar.timeline import DragConstraints

logger = logging.getLogger(__name__)

__all__ = ["DragState", "GestureResult", "DragSession"]


class DragState(str, Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class GestureResult:
    """How a released gesture ended and where the bar was let go."""

    dragged: bool
    offset: PointerOffset


class DragSession:
    """
    Live drag state for one bar.

    Displacement is clamped to ``constraints`` on every move, so the
    offset reported on release never leaves the grid.
    """

    def __init__(
        self,
        reservation: CalendarReservation,
        origin_ref: RoomRef,
        row_index: int,
        constraints: DragConstraints,
        drag_enabled: bool = True,
        threshold: float = 3.0,
    ):
        self.reservation = reservation
        self.origin_ref = origin_ref
        self.row_index = row_index
        self.constraints = constraints
        self.drag_enabled = drag_enabled
        self.threshold = threshold

        self.state = DragState.IDLE
        self.offset = PointerOffset()
        self._origin_x = 0.0
        self._origin_y = 0.0

    @property
    def is_dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    @property
    def is_active(self) -> bool:
        return self.state in (DragState.PRESSED, DragState.DRAGGING)

    def pointer_down(self, x: float, y: float) -> None:
        if self.state != DragState.IDLE:
            raise RuntimeError(f"pointer_down in state {self.state.value}")
        self._origin_x = x
        self._origin_y = y
        self.offset = PointerOffset()
        self.state = DragState.PRESSED

    def pointer_move(self, x: float, y: float) -> PointerOffset:
        """Track the pointer; returns the current (clamped) bar offset."""
        if not self.is_active:
            return self.offset

        dx = x - self._origin_x
        dy = y - self._origin_y

        if self.state == DragState.PRESSED:
            if not self.drag_enabled or math.hypot(dx, dy) <= self.threshold:
                return self.offset
            self.state = DragState.DRAGGING
            logger.debug(
                "Drag started",
                extra={"reservation_id": self.reservation.id, "row_index": self.row_index},
            )

        cx, cy = self.constraints.clamp(dx, dy)
        self.offset = PointerOffset(x=cx, y=cy)
        return self.offset

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None) -> GestureResult:
        """End the gesture. A release without crossing the threshold is a click."""
        if not self.is_active:
            raise RuntimeError(f"pointer_up in state {self.state.value}")
        if x is not None and y is not None:
            self.pointer_move(x, y)

        result = GestureResult(dragged=self.is_dragging, offset=self.offset)
        self.state = DragState.IDLE
        return result

    def cancel(self) -> None:
        """Abandon the gesture; nothing is reported."""
        if self.is_active:
            logger.debug("Drag cancelled", extra={"reservation_id": self.reservation.id})
        self.offset = PointerOffset()
        self.state = DragState.IDLE
