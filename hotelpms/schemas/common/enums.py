"""
Enumeration types used across the application.

These enums represent the core domain concepts shown on the
reservation timeline (reservations, rooms).
"""

from enum import Enum

__all__ = [
    "ReservationStatus",
    "RoomStatus",
    "DropOutcomeKind",
]


class ReservationStatus(str, Enum):
    """Reservation lifecycle status."""

    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"

    @property
    def label(self) -> str:
        """Display label, e.g. ``checked in``."""
        return self.value.replace("_", " ", 1)


class RoomStatus(str, Enum):
    """Housekeeping / occupancy status of a physical room."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    DIRTY = "dirty"
    CLEAN = "clean"
    MAINTENANCE = "maintenance"
    OUT_OF_ORDER = "out_of_order"


class DropOutcomeKind(str, Enum):
    """What a completed pointer gesture on a reservation bar resolved to."""

    DATE_CHANGE = "date_change"
    ROOM_MOVE = "room_move"
    CLICK = "click"
    NONE = "none"
