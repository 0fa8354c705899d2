# hotelpms/api/v1/calendar.py
"""
Reservation timeline endpoints.
"""

import datetime as dt
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hotelpms.api import deps
from hotelpms.config.settings import settings
from hotelpms.schemas.calendar.drag import TimelineDropRequest
from hotelpms.schemas.calendar.reservation_update import (
    DateChangeResult,
    DropResult,
    RoomMoveResult,
)
from hotelpms.schemas.calendar.timeline import TimelineView
from hotelpms.services.calendar.calendar_data_service import CalendarDataService
from hotelpms.services.calendar.navigation import CalendarWindow, validate_window_size
from hotelpms.services.calendar.timeline_controller import CalendarTimeline
from hotelpms.services.reservation.reservation_operations_service import (
    ReservationOperationsService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("/{property_id}/timeline", response_model=TimelineView)
def get_timeline(
    property_id: str,
    start: Optional[dt.date] = Query(None, description="First visible day; defaults to today"),
    days: int = Query(settings.CALENDAR_DEFAULT_DAYS, description="Window size: 7, 14, 21 or 30"),
    service: CalendarDataService = Depends(deps.get_calendar_data_service),
) -> TimelineView:
    """Timeline grid for a property: grouped rows, positioned bars and today's counters."""
    validate_window_size(days)
    window = CalendarWindow(start_date=start or dt.date.today(), num_days=days)
    return deps.unwrap_result(service.get_timeline(property_id, window))


@router.post("/{property_id}/drops", response_model=DropResult)
def apply_drop(
    property_id: str,
    payload: TimelineDropRequest,
    calendar: CalendarDataService = Depends(deps.get_calendar_data_service),
    operations: ReservationOperationsService = Depends(deps.get_reservation_operations_service),
) -> DropResult:
    """
    Resolve a released drag against the window the client rendered and
    persist the resulting room move or date change.
    """
    validate_window_size(payload.days)
    data = deps.unwrap_result(
        calendar.get_calendar_data(property_id, payload.start, payload.days)
    )

    moves: List[RoomMoveResult] = []
    date_changes: List[DateChangeResult] = []

    def on_move(reservation_id, reservation_room_id, new_room_id, old_room_id):
        moves.append(
            deps.unwrap_result(
                operations.move_to_room(reservation_id, reservation_room_id, new_room_id, old_room_id)
            )
        )

    def on_date_change(reservation_id, check_in, check_out, new_check_in, new_check_out, total):
        date_changes.append(
            deps.unwrap_result(
                operations.change_dates(
                    reservation_id, check_in, check_out, new_check_in, new_check_out, total
                )
            )
        )

    timeline = CalendarTimeline(
        data.rooms,
        data.date_range,
        on_reservation_move=on_move,
        on_reservation_date_change=on_date_change,
        metrics=calendar.metrics,
    )
    outcome = timeline.drop(
        payload.reservation_id,
        payload.room_id,
        payload.dx,
        payload.dy,
        reservation_room_id=payload.reservation_room_id or None,
    )

    logger.info(
        "Timeline drop resolved",
        extra={
            "property_id": property_id,
            "reservation_id": payload.reservation_id,
            "outcome": outcome.kind.value,
        },
    )

    return DropResult(
        outcome=outcome,
        room_move=moves[0] if moves else None,
        date_change=date_changes[0] if date_changes else None,
    )
