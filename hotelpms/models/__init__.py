"""
SQLAlchemy models for the reservation timeline.
"""

from hotelpms.models.base import Base, BaseModel
from hotelpms.models.reservation import Guest, Reservation, ReservationRoom
from hotelpms.models.room import Room, RoomType

__all__ = [
    "Base",
    "BaseModel",
    "RoomType",
    "Room",
    "Guest",
    "Reservation",
    "ReservationRoom",
]
