"""
Calendar window navigation.

A window is a start day plus a size in days; paging moves it by its own
size.
"""

import datetime as dt
from dataclasses import dataclass, replace
from typing import List, Optional

from hotelpms.core.constants import ALLOWED_WINDOW_SIZES, DEFAULT_WINDOW_SIZE
from hotelpms.core.exceptions import ValidationError
from hotelpms.services.calendar.timeline_math import build_date_range

__all__ = ["CalendarWindow", "validate_window_size"]


def validate_window_size(num_days: int) -> int:
    """Return ``num_days`` if it is a selectable window size."""
    if num_days not in ALLOWED_WINDOW_SIZES:
        raise ValidationError(
            f"Window size must be one of {sorted(ALLOWED_WINDOW_SIZES)}",
            field_errors={"num_days": [f"{num_days} is not an allowed window size"]},
        )
    return num_days


@dataclass(frozen=True)
class CalendarWindow:
    """The visible slice of the calendar."""

    start_date: dt.date
    num_days: int = DEFAULT_WINDOW_SIZE

    def __post_init__(self):
        validate_window_size(self.num_days)

    @classmethod
    def starting_today(
        cls, num_days: int = DEFAULT_WINDOW_SIZE, today: Optional[dt.date] = None
    ) -> "CalendarWindow":
        return cls(start_date=today or dt.date.today(), num_days=num_days)

    @property
    def end_date(self) -> dt.date:
        """Last visible day (inclusive)."""
        return self.start_date + dt.timedelta(days=self.num_days - 1)

    @property
    def dates(self) -> List[dt.date]:
        return build_date_range(self.start_date, self.num_days)

    @property
    def label(self) -> str:
        """Header label such as ``Mar 4 - Mar 17, 2024``."""
        return (
            f"{self.start_date:%b} {self.start_date.day} - "
            f"{self.end_date:%b} {self.end_date.day}, {self.end_date.year}"
        )

    def previous(self) -> "CalendarWindow":
        return replace(self, start_date=self.start_date - dt.timedelta(days=self.num_days))

    def next(self) -> "CalendarWindow":
        return replace(self, start_date=self.start_date + dt.timedelta(days=self.num_days))

    def today(self, today: Optional[dt.date] = None) -> "CalendarWindow":
        """Same size, starting today."""
        return replace(self, start_date=today or dt.date.today())

    def with_num_days(self, num_days: int) -> "CalendarWindow":
        return replace(self, num_days=num_days)

    def contains(self, day: dt.date) -> bool:
        return self.start_date <= day <= self.end_date
