"""
Reservation operations triggered from the timeline.

Two operations back the timeline's drop callbacks:
- moving one reservation-room link to another physical room
- shifting a stay to new dates, rescaling the total by nights
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
import logging

from hotelpms.repositories.calendar.calendar_repository import CalendarDataAccess
from hotelpms.schemas.calendar.reservation_update import DateChangeResult, RoomMoveResult
from hotelpms.schemas.common.enums import ReservationStatus, RoomStatus
from hotelpms.services.base import BaseService, ErrorCode, ErrorSeverity, ServiceError, ServiceResult

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def prorate_total(
    original_total: Decimal,
    original_nights: int,
    new_nights: int,
) -> Decimal:
    """
    Scale a stay total to a new number of nights.

    ``total / original_nights * new_nights`` quantized to cents; zero when
    the original stay had no nights.
    """
    if original_nights <= 0:
        return Decimal("0.00")
    total = Decimal(original_total) / original_nights * new_nights
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


class ReservationOperationsService(BaseService[CalendarDataAccess]):
    """
    Persist room moves and date changes made on the timeline.
    """

    def __init__(self, repository: CalendarDataAccess):
        super().__init__(repository)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_stay(self, check_in: date, check_out: date) -> Optional[ServiceError]:
        if check_out <= check_in:
            return ServiceError(
                code=ErrorCode.VALIDATION_ERROR,
                message="New check-out date must be after new check-in date",
                severity=ErrorSeverity.WARNING,
                field="new_check_out",
                details={
                    "new_check_in": check_in.isoformat(),
                    "new_check_out": check_out.isoformat(),
                },
            )
        return None

    # -------------------------------------------------------------------------
    # Room move
    # -------------------------------------------------------------------------

    def move_to_room(
        self,
        reservation_id: str,
        reservation_room_id: str,
        new_room_id: str,
        old_room_id: Optional[str] = None,
    ) -> ServiceResult[RoomMoveResult]:
        """
        Assign a reservation-room link to ``new_room_id``.

        The vacated room (when given) is marked dirty. For a checked-in
        reservation the new room is marked occupied.
        """
        try:
            reservation = self.repository.get_reservation(reservation_id)
            if reservation is None:
                return ServiceResult.not_found("Reservation", reservation_id)

            link = self.repository.get_reservation_room(reservation_room_id)
            if link is None or link.reservation_id != reservation.id:
                return ServiceResult.not_found("ReservationRoom", reservation_room_id)

            new_room = self.repository.get_room(new_room_id)
            if new_room is None:
                return ServiceResult.not_found("Room", new_room_id)
            if new_room.property_id != reservation.property_id:
                return ServiceResult.validation_failure(
                    "Target room belongs to another property",
                    field="new_room_id",
                    details={"new_room_id": new_room_id, "property_id": reservation.property_id},
                )
            if not new_room.is_active:
                return ServiceResult.validation_failure(
                    "Target room is not active",
                    field="new_room_id",
                    details={"new_room_id": new_room_id},
                )

            old_room = None
            if old_room_id:
                old_room = self.repository.get_room(old_room_id)
                if old_room is None:
                    return ServiceResult.not_found("Room", old_room_id)

            with self.transaction():
                link.room_id = new_room.id
                if old_room is not None and old_room.id != new_room.id:
                    old_room.status = RoomStatus.DIRTY.value
                if reservation.status == ReservationStatus.CHECKED_IN.value:
                    new_room.status = RoomStatus.OCCUPIED.value

            self._logger.info(
                f"Reservation {reservation.confirmation_number} moved to room {new_room.room_number}",
                extra={
                    "reservation_id": reservation.id,
                    "reservation_room_id": link.id,
                    "new_room_id": new_room.id,
                    "old_room_id": old_room_id,
                },
            )

            return ServiceResult.success(
                RoomMoveResult(
                    reservation_id=reservation.id,
                    reservation_room_id=link.id,
                    new_room_id=new_room.id,
                    old_room_id=old_room.id if old_room is not None else None,
                    reservation_status=ReservationStatus(reservation.status),
                    new_room_status=RoomStatus(new_room.status),
                    old_room_status=RoomStatus(old_room.status) if old_room is not None else None,
                ),
                message="Room updated",
            )
        except Exception as e:
            return self._handle_exception(e, "move reservation to room", reservation_id)

    # -------------------------------------------------------------------------
    # Date change
    # -------------------------------------------------------------------------

    def change_dates(
        self,
        reservation_id: str,
        original_check_in: date,
        original_check_out: date,
        new_check_in: date,
        new_check_out: date,
        original_total_amount: Decimal,
    ) -> ServiceResult[DateChangeResult]:
        """
        Store new stay dates and a total rescaled by nights.

        No rate plan or tax recalculation is done.
        """
        validation_error = self._validate_stay(new_check_in, new_check_out)
        if validation_error:
            return ServiceResult.failure(validation_error)

        try:
            reservation = self.repository.get_reservation(reservation_id)
            if reservation is None:
                return ServiceResult.not_found("Reservation", reservation_id)

            original_nights = (original_check_out - original_check_in).days
            new_nights = (new_check_out - new_check_in).days
            new_total = prorate_total(original_total_amount, original_nights, new_nights)

            with self.transaction():
                reservation.check_in_date = new_check_in
                reservation.check_out_date = new_check_out
                reservation.total_amount = new_total

            self._logger.info(
                f"Reservation {reservation.confirmation_number} dates changed",
                extra={
                    "reservation_id": reservation.id,
                    "new_check_in": new_check_in.isoformat(),
                    "new_check_out": new_check_out.isoformat(),
                    "nights": new_nights,
                    "total_amount": str(new_total),
                },
            )

            return ServiceResult.success(
                DateChangeResult(
                    reservation_id=reservation.id,
                    check_in_date=new_check_in,
                    check_out_date=new_check_out,
                    nights=new_nights,
                    total_amount=new_total,
                ),
                message="Dates updated",
            )
        except Exception as e:
            return self._handle_exception(e, "change reservation dates", reservation_id)
