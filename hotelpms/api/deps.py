# hotelpms/api/deps.py
"""
FastAPI dependencies.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from hotelpms.api import deps

    @router.get("/timeline")
    def timeline(service = Depends(deps.get_calendar_data_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from hotelpms.core.exceptions import (
    BusinessLogicError,
    OperationError,
    ResourceNotFoundError,
    ValidationError,
)
from hotelpms.db.session import get_db
from hotelpms.repositories.calendar.calendar_repository import (
    CalendarDataAccess,
    SqlAlchemyCalendarRepository,
)
from hotelpms.services.base.service_result import ErrorCode, ServiceResult
from hotelpms.services.calendar.calendar_data_service import CalendarDataService
from hotelpms.services.calendar.timeline_math import TimelineMetrics
from hotelpms.services.reservation.reservation_operations_service import (
    ReservationOperationsService,
)


# --- Data access & services ----------------------------------------------------

def get_calendar_repository(db: Session = Depends(get_db)) -> CalendarDataAccess:
    return SqlAlchemyCalendarRepository(db)


def get_timeline_metrics() -> TimelineMetrics:
    return TimelineMetrics.from_settings()


def get_calendar_data_service(
    repository: CalendarDataAccess = Depends(get_calendar_repository),
    metrics: TimelineMetrics = Depends(get_timeline_metrics),
) -> CalendarDataService:
    return CalendarDataService(repository, metrics=metrics)


def get_reservation_operations_service(
    repository: CalendarDataAccess = Depends(get_calendar_repository),
) -> ReservationOperationsService:
    return ReservationOperationsService(repository)


# --- Service results -----------------------------------------------------------

def unwrap_result(result: ServiceResult):
    """Return the data of a successful result or raise the matching HTTP error."""
    if result.is_success:
        return result.data

    error = result.error
    if error is None:
        raise OperationError()

    details = error.details or {}
    if error.code == ErrorCode.NOT_FOUND:
        raise ResourceNotFoundError(
            resource_type=details.get("resource_type", "Resource"),
            resource_id=details.get("resource_id"),
            message=error.message,
        )
    if error.code == ErrorCode.VALIDATION_ERROR:
        field = error.field or "request"
        raise ValidationError(error.message, field_errors={field: [error.message]})
    if error.code == ErrorCode.CONFLICT:
        raise BusinessLogicError(error.message, details=details)
    raise OperationError(error.message, details=details)


__all__ = [
    "get_db",
    "get_calendar_repository",
    "get_timeline_metrics",
    "get_calendar_data_service",
    "get_reservation_operations_service",
    "unwrap_result",
]
