from hotelpms.services.reservation.reservation_operations_service import (
    ReservationOperationsService,
    prorate_total,
)

__all__ = ["ReservationOperationsService", "prorate_total"]
