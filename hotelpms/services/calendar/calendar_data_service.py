"""
Calendar data for the reservation timeline.

Loads the active rooms of a property and the live reservations that overlap
the visible window, attaches each reservation to the rooms it occupies,
and gives reservations without a room their own placeholder row.
"""

from datetime import date, datetime
from typing import Dict, List, Optional
import logging

from hotelpms.core.constants import ALLOWED_WINDOW_SIZES, DEFAULT_WINDOW_SIZE
from hotelpms.models.reservation import Reservation, ReservationRoom
from hotelpms.models.room import Room
from hotelpms.repositories.calendar.calendar_repository import CalendarDataAccess
from hotelpms.schemas.calendar.calendar_room import (
    CalendarData,
    CalendarReservation,
    CalendarRoom,
    CalendarStats,
    GuestSummary,
    RoomTypeSummary,
)
from hotelpms.schemas.calendar.timeline import TimelineView
from hotelpms.schemas.common.enums import ReservationStatus
from hotelpms.services.base import BaseService, ErrorCode, ErrorSeverity, ServiceError, ServiceResult
from hotelpms.services.calendar.navigation import CalendarWindow
from hotelpms.services.calendar.timeline_builder import TimelineBuilder
from hotelpms.services.calendar.timeline_math import TimelineMetrics, build_date_range

logger = logging.getLogger(__name__)

# Reservations drawn on the timeline
TIMELINE_STATUSES = (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN)


def _room_type_summary(room_type) -> Optional[RoomTypeSummary]:
    if room_type is None:
        return None
    return RoomTypeSummary(id=room_type.id, name=room_type.name, code=room_type.code or "")


def _guest_summary(reservation: Reservation) -> Optional[GuestSummary]:
    guest = reservation.guest
    if guest is None:
        return None
    return GuestSummary(
        id=guest.id,
        first_name=guest.first_name or "",
        last_name=guest.last_name or "",
        is_vip=bool(guest.is_vip),
    )


def to_calendar_reservation(
    reservation: Reservation,
    link: Optional[ReservationRoom] = None,
) -> CalendarReservation:
    """Flatten a reservation (and optionally one of its room links) for the timeline."""
    return CalendarReservation(
        id=reservation.id,
        reservation_room_id=link.id if link is not None else "",
        confirmation_number=reservation.confirmation_number,
        check_in_date=reservation.check_in_date,
        check_out_date=reservation.check_out_date,
        status=ReservationStatus(reservation.status),
        total_amount=reservation.total_amount or 0,
        guest=_guest_summary(reservation),
        room_id=link.room_id if link is not None else None,
        room_number=link.room.room_number if link is not None and link.room is not None else None,
        room_type_name=(
            link.room_type.name if link is not None and link.room_type is not None else None
        ),
    )


class CalendarDataService(BaseService[CalendarDataAccess]):
    """
    Assemble rooms, reservations and front desk counters for a window.
    """

    def __init__(self, repository: CalendarDataAccess, metrics: Optional[TimelineMetrics] = None):
        super().__init__(repository)
        self.metrics = metrics or TimelineMetrics.from_settings()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_window(self, num_days: int) -> Optional[ServiceError]:
        if num_days not in ALLOWED_WINDOW_SIZES:
            return ServiceError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"num_days must be one of {sorted(ALLOWED_WINDOW_SIZES)}",
                severity=ErrorSeverity.WARNING,
                field="num_days",
                details={"num_days": num_days},
            )
        return None

    # -------------------------------------------------------------------------
    # Calendar data
    # -------------------------------------------------------------------------

    def get_calendar_data(
        self,
        property_id: str,
        start_date: date,
        num_days: int = DEFAULT_WINDOW_SIZE,
        today: Optional[date] = None,
    ) -> ServiceResult[CalendarData]:
        """
        Rooms with nested reservations for ``num_days`` days from ``start_date``.

        Args:
            property_id: Property whose rooms are shown
            start_date: First visible day
            num_days: Window size (7, 14, 21 or 30)
            today: Day the counters are computed for; defaults to the current day

        Returns:
            ServiceResult containing CalendarData or error
        """
        validation_error = self._validate_window(num_days)
        if validation_error:
            return ServiceResult.failure(validation_error)

        try:
            started = datetime.utcnow()
            date_range = build_date_range(start_date, num_days)
            last_day = date_range[-1]

            rooms = self.repository.list_active_rooms(property_id)
            reservations = self.repository.list_reservations_overlapping(
                property_id,
                start_date,
                last_day,
                [status.value for status in TIMELINE_STATUSES],
            )
            reservations = self._drawable(reservations)

            calendar_rooms = self._attach_reservations(rooms, reservations)
            stats = self._compute_stats(len(rooms), reservations, today or date.today())

            duration_ms = (datetime.utcnow() - started).total_seconds() * 1000
            self._logger.info(
                f"Calendar data loaded for property {property_id}",
                extra={
                    "property_id": property_id,
                    "start_date": start_date.isoformat(),
                    "num_days": num_days,
                    "rooms": len(rooms),
                    "reservations": len(reservations),
                    "duration_ms": duration_ms,
                },
            )

            return ServiceResult.success(
                CalendarData(rooms=calendar_rooms, date_range=date_range, stats=stats),
                metadata={"duration_ms": duration_ms},
            )
        except Exception as e:
            return self._handle_exception(e, "load calendar data", property_id)

    def get_timeline(
        self,
        property_id: str,
        window: CalendarWindow,
        move_enabled: bool = True,
        today: Optional[date] = None,
    ) -> ServiceResult[TimelineView]:
        """Calendar data laid out as a timeline grid."""
        result = self.get_calendar_data(property_id, window.start_date, window.num_days, today=today)
        if not result.is_success:
            return result

        data = result.data
        grid = TimelineBuilder(metrics=self.metrics, today=today).build(
            data.rooms, data.date_range, move_enabled=move_enabled
        )
        return ServiceResult.success(
            TimelineView(
                start_date=window.start_date,
                num_days=window.num_days,
                label=window.label,
                grid=grid,
                stats=data.stats,
            ),
            metadata=result.metadata,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _drawable(self, reservations: List[Reservation]) -> List[Reservation]:
        """Drop stays with no nights; they cannot be drawn as a bar."""
        drawable = []
        for reservation in reservations:
            if reservation.check_out_date <= reservation.check_in_date:
                self._logger.warning(
                    f"Skipping reservation {reservation.confirmation_number} with no nights",
                    extra={
                        "reservation_id": reservation.id,
                        "check_in_date": reservation.check_in_date.isoformat(),
                        "check_out_date": reservation.check_out_date.isoformat(),
                    },
                )
                continue
            drawable.append(reservation)
        return drawable

    def _attach_reservations(
        self,
        rooms: List[Room],
        reservations: List[Reservation],
    ) -> List[CalendarRoom]:
        by_room: Dict[str, List[CalendarReservation]] = {room.id: [] for room in rooms}
        placeholders: List[CalendarRoom] = []

        for reservation in reservations:
            links = list(reservation.reservation_rooms)
            assigned = [link for link in links if link.room_id]

            if not assigned:
                first_link = links[0] if links else None
                placeholders.insert(
                    0, CalendarRoom.placeholder_for(to_calendar_reservation(reservation, first_link))
                )
                continue

            for link in assigned:
                if link.room_id in by_room:
                    by_room[link.room_id].append(to_calendar_reservation(reservation, link))

        physical = [
            CalendarRoom.assigned(
                room_id=room.id,
                room_number=room.room_number,
                floor=room.floor,
                room_type=_room_type_summary(room.room_type),
                reservations=by_room[room.id],
            )
            for room in rooms
        ]
        return placeholders + physical

    def _compute_stats(
        self,
        room_count: int,
        reservations: List[Reservation],
        today: date,
    ) -> CalendarStats:
        arrivals = sum(
            1 for r in reservations
            if r.check_in_date == today and r.status == ReservationStatus.CONFIRMED.value
        )
        departures = sum(
            1 for r in reservations
            if r.check_out_date == today and r.status == ReservationStatus.CHECKED_IN.value
        )
        in_house = sum(1 for r in reservations if r.status == ReservationStatus.CHECKED_IN.value)

        return CalendarStats(
            arrivals=arrivals,
            departures=departures,
            in_house=in_house,
            available=room_count - in_house,
        )
