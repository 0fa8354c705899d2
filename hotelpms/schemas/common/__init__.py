from hotelpms.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema
from hotelpms.schemas.common.enums import DropOutcomeKind, ReservationStatus, RoomStatus

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseResponseSchema",
    "DropOutcomeKind",
    "ReservationStatus",
    "RoomStatus",
]
