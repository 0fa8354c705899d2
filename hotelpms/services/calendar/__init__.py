"""
Reservation timeline: layout math, grid building, drag handling and the
calendar data provider.
"""

from hotelpms.services.calendar.calendar_data_service import CalendarDataService
from hotelpms.services.calendar.drag_gesture import DragSession, DragState, GestureResult
from hotelpms.services.calendar.navigation import CalendarWindow
from hotelpms.services.calendar.timeline_builder import TimelineBuilder
from hotelpms.services.calendar.timeline_controller import CalendarTimeline
from hotelpms.services.calendar.timeline_math import TimelineMetrics

__all__ = [
    "CalendarDataService",
    "CalendarTimeline",
    "CalendarWindow",
    "DragSession",
    "DragState",
    "GestureResult",
    "TimelineBuilder",
    "TimelineMetrics",
]
