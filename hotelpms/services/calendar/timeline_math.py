"""
Date-offset and pixel math for the reservation timeline.

All functions here are pure. Bar placement and drag constraints both
derive from ``compute_visible_span`` so the two can never disagree about
where a bar sits inside the window.

Dates are whole calendar days; the visible window is the half-open
interval ``[range_start, range_start + num_days)``.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from hotelpms.schemas.calendar.timeline import BarGeometry, DragConstraints, VisibleSpan

__all__ = [
    "TimelineMetrics",
    "js_round",
    "build_date_range",
    "window_end",
    "compute_visible_span",
    "bar_geometry",
    "horizontal_drag_bounds",
    "vertical_drag_bounds",
    "drag_constraints",
    "shows_checkout_marker",
    "displacement_to_cells",
    "date_range_start",
]


@dataclass(frozen=True)
class TimelineMetrics:
    """
    Layout constants shared by rendering and drag math.

    Attributes:
        cell_width: Pixels per day column
        row_height: Pixels per room row
        bar_inset: Gap kept on each side of a bar
        drag_threshold: Pointer travel (px) before a press becomes a drag
    """

    cell_width: int = 48
    row_height: int = 48
    bar_inset: int = 2
    drag_threshold: float = 3.0

    def __post_init__(self):
        if self.cell_width <= 0 or self.row_height <= 0:
            raise ValueError("cell_width and row_height must be positive")
        if self.drag_threshold < 0:
            raise ValueError("drag_threshold cannot be negative")

    @classmethod
    def from_settings(cls, config=None) -> "TimelineMetrics":
        """Build metrics from application settings."""
        if config is None:
            from hotelpms.config.settings import settings as config
        return cls(
            cell_width=config.CALENDAR_CELL_WIDTH,
            row_height=config.CALENDAR_ROW_HEIGHT,
            drag_threshold=config.CALENDAR_DRAG_THRESHOLD_PX,
        )


def js_round(value: float) -> int:
    """Round half toward +infinity (``Math.round`` semantics), not half-to-even."""
    return int(math.floor(value + 0.5))


def build_date_range(start: dt.date, num_days: int) -> List[dt.date]:
    """Consecutive calendar days starting at ``start``."""
    if num_days < 0:
        raise ValueError("num_days cannot be negative")
    return [start + dt.timedelta(days=i) for i in range(num_days)]


def window_end(range_start: dt.date, num_days: int) -> dt.date:
    """The day after the last visible day (exclusive end)."""
    return range_start + dt.timedelta(days=num_days)


def compute_visible_span(
    check_in: dt.date,
    check_out: dt.date,
    range_start: dt.date,
    num_days: int,
) -> Optional[VisibleSpan]:
    """
    Clamp a stay to the visible window.

    Args:
        check_in: Arrival day
        check_out: Departure day (exclusive)
        range_start: First visible day
        num_days: Number of visible days

    Returns:
        The visible offset/duration in days, or None when no part of the
        stay falls inside the window.
    """
    range_end = window_end(range_start, num_days)
    visible_start = max(check_in, range_start)
    visible_end = min(check_out, range_end)

    duration = (visible_end - visible_start).days
    if duration <= 0:
        return None

    return VisibleSpan(
        offset_days=(visible_start - range_start).days,
        duration_days=duration,
    )


def bar_geometry(span: VisibleSpan, metrics: TimelineMetrics) -> BarGeometry:
    """Pixel placement of a bar: inset from the cell edges on both sides."""
    return BarGeometry(
        offset_days=span.offset_days,
        duration_days=span.duration_days,
        left=span.offset_days * metrics.cell_width + metrics.bar_inset,
        width=span.duration_days * metrics.cell_width - 2 * metrics.bar_inset,
    )


def horizontal_drag_bounds(
    span: VisibleSpan,
    num_days: int,
    metrics: TimelineMetrics,
) -> Tuple[int, int]:
    """
    How far a bar may travel left and right without leaving the window.

    Returns:
        (left, right) displacement bounds in px; left <= 0 <= right.
    """
    left = -span.offset_days * metrics.cell_width
    right = max(0, num_days - span.end_offset) * metrics.cell_width
    return left, right


def vertical_drag_bounds(
    row_index: int,
    total_rows: int,
    metrics: TimelineMetrics,
) -> Tuple[int, int]:
    """
    How far a bar may travel up and down without leaving the row list.

    Returns:
        (top, bottom) displacement bounds in px; top <= 0 <= bottom.
    """
    if not 0 <= row_index < max(total_rows, 1):
        raise ValueError(f"row_index {row_index} outside 0..{total_rows - 1}")
    top = -row_index * metrics.row_height
    bottom = max(0, total_rows - row_index - 1) * metrics.row_height
    return top, bottom


def drag_constraints(
    span: VisibleSpan,
    row_index: int,
    total_rows: int,
    num_days: int,
    metrics: TimelineMetrics,
) -> DragConstraints:
    """Combined displacement bounds for a bar on ``row_index``."""
    left, right = horizontal_drag_bounds(span, num_days, metrics)
    top, bottom = vertical_drag_bounds(row_index, total_rows, metrics)
    return DragConstraints(top=top, bottom=bottom, left=left, right=right)


def shows_checkout_marker(
    check_out: dt.date,
    range_start: dt.date,
    num_days: int,
) -> bool:
    """True when the departure day boundary is drawn inside the window."""
    return range_start < check_out <= window_end(range_start, num_days)


def displacement_to_cells(
    dx: float,
    dy: float,
    metrics: TimelineMetrics,
) -> Tuple[int, int]:
    """
    Convert a pixel displacement to whole (days, rows) moved.
    """
    return js_round(dx / metrics.cell_width), js_round(dy / metrics.row_height)


def date_range_start(date_range: Sequence[dt.date]) -> Optional[dt.date]:
    """First visible day of a range, or None for an empty range."""
    return date_range[0] if date_range else None
