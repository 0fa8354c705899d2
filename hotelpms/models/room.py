# hotelpms/models/room.py
"""
Room models.

Physical rooms of a property and the room types they are sold as.
"""

from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelpms.models.base import BaseModel
from hotelpms.schemas.common.enums import RoomStatus

__all__ = ["RoomType", "Room"]


class RoomType(BaseModel):
    """Sellable room category, e.g. Deluxe King."""

    __tablename__ = "room_types"

    property_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(20), nullable=False, default="")

    rooms: Mapped[List["Room"]] = relationship(back_populates="room_type")


class Room(BaseModel):
    """A physical room of a property."""

    __tablename__ = "rooms"

    property_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    room_number: Mapped[str] = mapped_column(String(50), nullable=False)
    floor: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=RoomStatus.AVAILABLE.value,
        comment="Housekeeping / occupancy status",
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    room_type_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("room_types.id", ondelete="SET NULL"),
        nullable=True,
    )

    room_type: Mapped[Optional[RoomType]] = relationship(back_populates="rooms")

    __table_args__ = (
        UniqueConstraint("property_id", "room_number", name="uq_room_property_number"),
        Index("idx_room_property_active", "property_id", "is_active"),
    )
