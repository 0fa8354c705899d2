# hotelpms/api/v1/reservations.py
"""
Reservation update endpoints used by the timeline.
"""

from fastapi import APIRouter, Depends

from hotelpms.api import deps
from hotelpms.schemas.calendar.reservation_update import (
    ChangeDatesRequest,
    DateChangeResult,
    MoveReservationRequest,
    RoomMoveResult,
)
from hotelpms.services.reservation.reservation_operations_service import (
    ReservationOperationsService,
)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("/{reservation_id}/move", response_model=RoomMoveResult)
def move_reservation(
    reservation_id: str,
    payload: MoveReservationRequest,
    service: ReservationOperationsService = Depends(deps.get_reservation_operations_service),
) -> RoomMoveResult:
    """Assign one of the reservation's room links to another room."""
    return deps.unwrap_result(
        service.move_to_room(
            reservation_id,
            payload.reservation_room_id,
            payload.new_room_id,
            payload.old_room_id,
        )
    )


@router.post("/{reservation_id}/dates", response_model=DateChangeResult)
def change_reservation_dates(
    reservation_id: str,
    payload: ChangeDatesRequest,
    service: ReservationOperationsService = Depends(deps.get_reservation_operations_service),
) -> DateChangeResult:
    """Move the stay to new dates; the total is rescaled by nights."""
    return deps.unwrap_result(
        service.change_dates(
            reservation_id,
            payload.original_check_in,
            payload.original_check_out,
            payload.new_check_in,
            payload.new_check_out,
            payload.original_total_amount,
        )
    )
