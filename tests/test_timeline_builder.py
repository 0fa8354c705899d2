import datetime as dt
from decimal import Decimal

import pytest

from hotelpms.schemas.calendar.calendar_room import (
    CalendarReservation,
    CalendarRoom,
    GuestSummary,
    RoomTypeSummary,
)
from hotelpms.services.calendar.timeline_builder import (
    DRAG_HINT,
    TimelineBuilder,
    group_rooms,
    index_rooms,
)
from hotelpms.services.calendar.timeline_math import build_date_range

MONDAY = dt.date(2024, 3, 4)
DAYS = build_date_range(MONDAY, 14)


def make_reservation(res_id, check_in, check_out, status="confirmed", guest=None, **kwargs):
    return CalendarReservation(
        id=res_id,
        reservation_room_id=f"rr-{res_id}",
        confirmation_number=f"CNF-{res_id}",
        check_in_date=check_in,
        check_out_date=check_out,
        status=status,
        total_amount=Decimal("100.00"),
        guest=guest,
        **kwargs,
    )


@pytest.fixture()
def rooms():
    deluxe = RoomTypeSummary(id="rt-1", name="Deluxe", code="DLX")
    vip = GuestSummary(id="g-1", first_name="Ada", last_name="Lovelace", is_vip=True)
    pending = make_reservation("pending", MONDAY, MONDAY + dt.timedelta(days=2))
    return [
        CalendarRoom.assigned("r-201", "201", floor="2", room_type=deluxe),
        CalendarRoom.assigned(
            "r-101", "101", floor="1", room_type=deluxe,
            reservations=[make_reservation("ada", dt.date(2024, 3, 6), dt.date(2024, 3, 8), guest=vip)],
        ),
        CalendarRoom.assigned("r-x", "X1", floor=None),
        CalendarRoom.assigned("r-202", "202", floor="2"),
        CalendarRoom.placeholder_for(pending),
    ]


def test_unassigned_group_first_then_floors_in_first_seen_order(rooms):
    grouped = group_rooms(rooms)

    assert [(key, [r.room_number for r in members]) for key, members in grouped] == [
        ((True, "Unassigned"), ["Unknown Guest"]),
        ((False, "2"), ["201", "202"]),
        ((False, "1"), ["101"]),
        ((False, "Other"), ["X1"]),
    ]


def test_global_indices_follow_display_order(rooms):
    indexed = index_rooms(rooms)

    assert [(room.id, index) for room, index in indexed] == [
        ("unassigned-pending", 0),
        ("r-201", 1),
        ("r-202", 2),
        ("r-101", 3),
        ("r-x", 4),
    ]


def test_build_labels_groups_and_rows(rooms):
    grid = TimelineBuilder(today=dt.date(2024, 3, 5)).build(rooms, DAYS, move_enabled=True)

    assert [group.label for group in grid.groups] == ["Unassigned", "Floor 2", "Floor 1", "No Floor"]
    assert grid.total_rows == 5
    assert not grid.is_empty
    assert grid.grid_width == 14 * 48
    assert [row.row_index for row in grid.rows()] == [0, 1, 2, 3, 4]

    unassigned_row = grid.groups[0].rows[0]
    assert unassigned_row.is_unassigned
    assert not unassigned_row.drag_enabled
    assert unassigned_row.room_type_name == "No Type"

    no_type_row = grid.groups[3].rows[0]
    assert no_type_row.room_type_name == "—"
    assert no_type_row.drag_enabled


def test_date_columns_flag_today():
    grid = TimelineBuilder(today=dt.date(2024, 3, 5)).build([], DAYS)

    assert len(grid.date_columns) == 14
    first = grid.date_columns[0]
    assert (first.day, first.weekday, first.day_of_month) == (MONDAY, "Mon", 4)
    assert [c.day for c in grid.date_columns if c.is_today] == [dt.date(2024, 3, 5)]


def test_empty_room_list_gives_empty_state():
    grid = TimelineBuilder().build([], DAYS)

    assert grid.is_empty
    assert grid.groups == []
    assert grid.empty_message == (
        "No rooms configured. Add rooms in the Rooms section to see them here."
    )


def test_bar_presentation_and_bounds(rooms):
    grid = TimelineBuilder().build(rooms, DAYS, move_enabled=True)
    row = next(r for r in grid.rows() if r.room_id == "r-101")
    (bar,) = row.bars

    assert bar.key == "ada-rr-ada"
    assert bar.guest_label == "Ada Lovelace"
    assert bar.is_vip
    assert bar.icon == "crown"
    assert (bar.geometry.left, bar.geometry.width) == (98, 92)
    assert (bar.constraints.top, bar.constraints.bottom) == (-3 * 48, 48)
    assert (bar.constraints.left, bar.constraints.right) == (-96, 480)
    assert bar.shows_checkout_marker
    assert bar.drag_enabled
    assert bar.tooltip.date_label == "Mar 6 → Mar 8, 2024"
    assert bar.tooltip.status_label == "confirmed"
    assert bar.tooltip.drag_hint == DRAG_HINT


def test_bars_without_move_handler_are_not_draggable(rooms):
    grid = TimelineBuilder().build(rooms, DAYS, move_enabled=False)

    assert not any(row.drag_enabled for row in grid.rows())
    bar = next(r for r in grid.rows() if r.room_id == "r-101").bars[0]
    assert not bar.drag_enabled
    assert bar.tooltip.drag_hint is None


def test_reservations_outside_window_are_skipped():
    room = CalendarRoom.assigned(
        "r-1", "1",
        reservations=[
            make_reservation("late", dt.date(2024, 3, 20), dt.date(2024, 3, 22)),
            make_reservation("in", dt.date(2024, 3, 10), dt.date(2024, 3, 11), status="checked_in"),
        ],
    )
    grid = TimelineBuilder().build([room], DAYS)

    (bar,) = grid.rows()[0].bars
    assert bar.reservation_id == "in"
    assert bar.icon == "user-check"
    assert bar.guest_label == "Unknown Guest"
    assert bar.tooltip.status_label == "checked in"
