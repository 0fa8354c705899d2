import datetime as dt
import logging
from decimal import Decimal

from hotelpms.models import Reservation, ReservationRoom
from hotelpms.services.base.service_result import ErrorCode
from hotelpms.services.calendar.calendar_data_service import CalendarDataService
from hotelpms.services.calendar.navigation import CalendarWindow
from hotelpms.services.calendar.timeline_math import TimelineMetrics

from .conftest import PROPERTY_ID, TODAY, WINDOW_START


def make_service(repository):
    return CalendarDataService(repository, metrics=TimelineMetrics())


def test_calendar_data_nests_reservations_in_rooms(repository, seeded):
    result = make_service(repository).get_calendar_data(PROPERTY_ID, WINDOW_START, 14, today=TODAY)

    assert result.is_success
    data = result.data
    assert len(data.date_range) == 14
    assert data.date_range[0] == WINDOW_START

    # placeholder first, then active rooms of this property by number
    assert [room.id for room in data.rooms] == [
        "unassigned-res-cara",
        "room-101",
        "room-102",
        "room-201",
        "room-301",
    ]

    by_id = {room.id: room for room in data.rooms}
    assert [r.id for r in by_id["room-101"].reservations] == ["res-ada"]
    assert [r.id for r in by_id["room-102"].reservations] == ["res-bob"]
    # cancelled reservations are not drawn
    assert by_id["room-201"].reservations == []

    ada = by_id["room-101"].reservations[0]
    assert ada.reservation_room_id == "rr-res-ada"
    assert ada.guest_label == "Ada Lovelace"
    assert ada.is_vip
    assert ada.total_amount == Decimal("200.00")
    assert ada.room_number == "101"
    assert by_id["room-101"].room_type.code == "DLX"


def test_reservation_without_room_gets_placeholder_row(repository, seeded):
    data = make_service(repository).get_calendar_data(PROPERTY_ID, WINDOW_START, 14).unwrap()
    placeholder = data.rooms[0]

    assert placeholder.is_unassigned
    assert placeholder.floor is None
    assert placeholder.room_number == "Cara Diaz"
    assert placeholder.room_type.name == "Standard Twin"
    assert placeholder.room_type.code == "UA"
    assert placeholder.reservations[0].reservation_room_id == "rr-res-cara"


def test_stats_for_today(repository, seeded):
    stats = make_service(repository).get_calendar_data(
        PROPERTY_ID, WINDOW_START, 14, today=TODAY
    ).data.stats

    assert stats.arrivals == 1
    assert stats.departures == 1
    assert stats.in_house == 1
    assert stats.available == 3


def test_window_size_is_validated(repository, seeded):
    result = make_service(repository).get_calendar_data(PROPERTY_ID, WINDOW_START, 10)

    assert not result.is_success
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == "num_days"


def test_later_window_shows_later_stay(repository, seeded):
    data = make_service(repository).get_calendar_data(
        PROPERTY_ID, dt.date(2024, 3, 18), 7
    ).unwrap()

    by_id = {room.id: room for room in data.rooms}
    assert [r.id for r in by_id["room-101"].reservations] == ["res-eve"]
    assert not any(room.is_unassigned for room in data.rooms)


def test_get_timeline_builds_grid(repository, seeded):
    view = make_service(repository).get_timeline(
        PROPERTY_ID, CalendarWindow(WINDOW_START, 14), today=TODAY
    ).unwrap()

    assert view.label == "Mar 4 - Mar 17, 2024"
    assert [group.label for group in view.grid.groups] == [
        "Unassigned", "Floor 1", "Floor 2", "No Floor",
    ]
    assert view.grid.total_rows == 5
    assert view.stats.arrivals == 1


def test_stay_without_nights_is_skipped_not_fatal(
    repository, seeded, db_session, caplog, monkeypatch
):
    # the app logging config stops "hotelpms" records reaching the root logger
    monkeypatch.setattr(logging.getLogger("hotelpms"), "propagate", True)
    db_session.add_all([
        Reservation(
            id="res-zero",
            property_id=PROPERTY_ID,
            confirmation_number="CNF-006",
            check_in_date=dt.date(2024, 3, 7),
            check_out_date=dt.date(2024, 3, 7),
            status="confirmed",
            reservation_rooms=[ReservationRoom(id="rr-res-zero", room_id="room-201")],
        ),
        Reservation(
            id="res-inverted",
            property_id=PROPERTY_ID,
            confirmation_number="CNF-007",
            check_in_date=dt.date(2024, 3, 9),
            check_out_date=dt.date(2024, 3, 8),
            status="checked_in",
            reservation_rooms=[ReservationRoom(id="rr-res-inverted", room_id="room-301")],
        ),
    ])
    db_session.commit()

    with caplog.at_level(logging.WARNING):
        result = make_service(repository).get_calendar_data(PROPERTY_ID, WINDOW_START, 14, today=TODAY)

    assert result.is_success
    by_id = {room.id: room for room in result.data.rooms}
    assert by_id["room-201"].reservations == []
    assert by_id["room-301"].reservations == []
    assert [r.id for r in by_id["room-101"].reservations] == ["res-ada"]
    # skipped stays do not count as in house
    assert result.data.stats.in_house == 1
    skipped = {record.reservation_id for record in caplog.records if hasattr(record, "reservation_id")}
    assert {"res-zero", "res-inverted"} <= skipped


class _BrokenRepository:
    def list_active_rooms(self, property_id):
        raise RuntimeError("database unavailable")


def test_unexpected_errors_become_failed_results():
    result = CalendarDataService(_BrokenRepository(), metrics=TimelineMetrics()).get_calendar_data(
        PROPERTY_ID, WINDOW_START, 14
    )

    assert not result.is_success
    assert result.error.code == ErrorCode.INTERNAL_ERROR
    assert result.error.details["error"] == "database unavailable"
