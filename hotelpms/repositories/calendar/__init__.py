from hotelpms.repositories.calendar.calendar_repository import (
    CalendarDataAccess,
    SqlAlchemyCalendarRepository,
)

__all__ = ["CalendarDataAccess", "SqlAlchemyCalendarRepository"]
