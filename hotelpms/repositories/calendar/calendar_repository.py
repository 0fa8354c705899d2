# hotelpms/repositories/calendar/calendar_repository.py
"""
Calendar data access.

``CalendarDataAccess`` is the interface the calendar and reservation
services depend on; ``SqlAlchemyCalendarRepository`` is the production
implementation over a SQLAlchemy session.
"""

from datetime import date
from typing import Iterable, List, Optional, Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from hotelpms.models.reservation import Reservation, ReservationRoom
from hotelpms.models.room import Room

__all__ = ["CalendarDataAccess", "SqlAlchemyCalendarRepository"]


@runtime_checkable
class CalendarDataAccess(Protocol):
    """Reads and writes the calendar services need."""

    def list_active_rooms(self, property_id: str) -> List[Room]:
        """Active rooms of a property ordered by room number, with room type."""
        ...

    def list_reservations_overlapping(
        self,
        property_id: str,
        first_day: date,
        last_day: date,
        statuses: Iterable[str],
    ) -> List[Reservation]:
        """Reservations with ``check_in <= last_day`` and ``check_out > first_day``."""
        ...

    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        ...

    def get_reservation_room(self, reservation_room_id: str) -> Optional[ReservationRoom]:
        ...

    def get_room(self, room_id: str) -> Optional[Room]:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


class SqlAlchemyCalendarRepository:
    """CalendarDataAccess over a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    # ==================== READS ====================

    def list_active_rooms(self, property_id: str) -> List[Room]:
        stmt = (
            select(Room)
            .options(joinedload(Room.room_type))
            .where(Room.property_id == property_id, Room.is_active.is_(True))
            .order_by(Room.room_number)
        )
        return list(self.session.execute(stmt).scalars().unique())

    def list_reservations_overlapping(
        self,
        property_id: str,
        first_day: date,
        last_day: date,
        statuses: Iterable[str],
    ) -> List[Reservation]:
        stmt = (
            select(Reservation)
            .options(
                joinedload(Reservation.guest),
                selectinload(Reservation.reservation_rooms).options(
                    joinedload(ReservationRoom.room_type),
                    joinedload(ReservationRoom.room),
                ),
            )
            .where(
                Reservation.property_id == property_id,
                Reservation.check_in_date <= last_day,
                Reservation.check_out_date > first_day,
                Reservation.status.in_(list(statuses)),
            )
            .order_by(Reservation.check_in_date, Reservation.confirmation_number)
        )
        return list(self.session.execute(stmt).scalars().unique())

    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        return self.session.get(Reservation, reservation_id)

    def get_reservation_room(self, reservation_room_id: str) -> Optional[ReservationRoom]:
        return self.session.get(ReservationRoom, reservation_room_id)

    def get_room(self, room_id: str) -> Optional[Room]:
        return self.session.get(Room, room_id)

    # ==================== UNIT OF WORK ====================

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
