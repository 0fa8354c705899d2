# hotelpms/models/reservation.py
"""
Reservation models.

A reservation belongs to one guest and books one or more rooms through
ReservationRoom links; a link may not have a physical room yet.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Boolean, Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelpms.models.base import BaseModel
from hotelpms.models.room import Room, RoomType
from hotelpms.schemas.common.enums import ReservationStatus

__all__ = ["Guest", "Reservation", "ReservationRoom"]


class Guest(BaseModel):
    __tablename__ = "guests"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    is_vip: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Reservation(BaseModel):
    """A stay booked at a property."""

    __tablename__ = "reservations"

    property_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    confirmation_number: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ReservationStatus.CONFIRMED.value,
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    guest_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("guests.id", ondelete="SET NULL"),
        nullable=True,
    )

    guest: Mapped[Optional[Guest]] = relationship()
    reservation_rooms: Mapped[List["ReservationRoom"]] = relationship(
        back_populates="reservation",
        cascade="all, delete-orphan",
        order_by="ReservationRoom.created_at",
    )

    __table_args__ = (
        Index("idx_reservation_property_dates", "property_id", "check_in_date", "check_out_date"),
    )


class ReservationRoom(BaseModel):
    """Link between a reservation and the room (type) it books."""

    __tablename__ = "reservation_rooms"

    reservation_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("reservations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_type_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("room_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    reservation: Mapped[Reservation] = relationship(back_populates="reservation_rooms")
    room_type: Mapped[Optional[RoomType]] = relationship()
    room: Mapped[Optional[Room]] = relationship()
