import datetime as dt

import pytest

from hotelpms.schemas.calendar.calendar_room import AssignedRoom, CalendarReservation
from hotelpms.schemas.calendar.timeline import DragConstraints
from hotelpms.services.calendar.drag_gesture import DragSession, DragState


@pytest.fixture()
def reservation():
    return CalendarReservation(
        id="res-1",
        reservation_room_id="rr-1",
        check_in_date=dt.date(2024, 3, 6),
        check_out_date=dt.date(2024, 3, 8),
        status="confirmed",
    )


def make_session(reservation, drag_enabled=True):
    return DragSession(
        reservation=reservation,
        origin_ref=AssignedRoom(id="room-1", floor="1"),
        row_index=1,
        constraints=DragConstraints(top=-48, bottom=96, left=-96, right=480),
        drag_enabled=drag_enabled,
        threshold=3.0,
    )


def test_small_movement_is_a_click(reservation):
    session = make_session(reservation)
    session.pointer_down(100, 100)
    session.pointer_move(102, 102)

    assert session.state == DragState.PRESSED
    result = session.pointer_up()
    assert not result.dragged
    assert session.state == DragState.IDLE


def test_movement_at_threshold_does_not_start_drag(reservation):
    session = make_session(reservation)
    session.pointer_down(0, 0)
    session.pointer_move(3, 0)

    assert not session.is_dragging


def test_crossing_threshold_starts_drag(reservation):
    session = make_session(reservation)
    session.pointer_down(0, 0)
    offset = session.pointer_move(3, 3)

    assert session.is_dragging
    assert (offset.x, offset.y) == (3, 3)


def test_displacement_is_clamped_on_every_move(reservation):
    session = make_session(reservation)
    session.pointer_down(500, 500)
    session.pointer_move(0, 0)
    assert (session.offset.x, session.offset.y) == (-96, -48)

    session.pointer_move(2000, 2000)
    assert (session.offset.x, session.offset.y) == (480, 96)

    result = session.pointer_up(510, 520)
    assert result.dragged
    assert (result.offset.x, result.offset.y) == (10, 20)


def test_disabled_drag_never_leaves_pressed(reservation):
    session = make_session(reservation, drag_enabled=False)
    session.pointer_down(0, 0)
    session.pointer_move(200, 0)

    assert session.state == DragState.PRESSED
    assert not session.pointer_up().dragged


def test_cancel_returns_to_idle_without_result(reservation):
    session = make_session(reservation)
    session.pointer_down(0, 0)
    session.pointer_move(100, 0)
    session.cancel()

    assert session.state == DragState.IDLE
    assert (session.offset.x, session.offset.y) == (0, 0)
    with pytest.raises(RuntimeError):
        session.pointer_up()


def test_moves_without_press_are_ignored(reservation):
    session = make_session(reservation)
    offset = session.pointer_move(100, 100)

    assert session.state == DragState.IDLE
    assert (offset.x, offset.y) == (0, 0)


def test_pointer_down_twice_is_rejected(reservation):
    session = make_session(reservation)
    session.pointer_down(0, 0)
    with pytest.raises(RuntimeError):
        session.pointer_down(1, 1)
