import datetime as dt
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from hotelpms.api.deps import unwrap_result
from hotelpms.core.exceptions import BusinessLogicError
from hotelpms.models import Reservation, ReservationRoom, Room
from hotelpms.repositories.calendar.calendar_repository import SqlAlchemyCalendarRepository
from hotelpms.services.base.service_result import ErrorCode
from hotelpms.services.reservation.reservation_operations_service import (
    ReservationOperationsService,
    prorate_total,
)


@pytest.fixture()
def service(repository):
    return ReservationOperationsService(repository)


def test_prorate_total():
    assert prorate_total(Decimal("300.00"), 3, 2) == Decimal("200.00")
    assert prorate_total(Decimal("100.00"), 3, 1) == Decimal("33.33")
    assert prorate_total(Decimal("100.00"), 0, 2) == Decimal("0.00")


def test_move_checked_in_reservation(service, db_session, seeded):
    result = service.move_to_room("res-bob", "rr-res-bob", "room-301", "room-102")

    assert result.is_success
    assert result.data.new_room_status == "occupied"
    assert result.data.old_room_status == "dirty"

    db_session.expire_all()
    assert db_session.get(ReservationRoom, "rr-res-bob").room_id == "room-301"
    assert db_session.get(Room, "room-102").status == "dirty"
    assert db_session.get(Room, "room-301").status == "occupied"


def test_move_confirmed_reservation_leaves_new_room_status(service, db_session, seeded):
    result = service.move_to_room("res-ada", "rr-res-ada", "room-201", "room-101")

    assert result.is_success
    assert result.data.new_room_status == "available"
    db_session.expire_all()
    assert db_session.get(Room, "room-101").status == "dirty"


def test_assign_from_unassigned_has_no_old_room(service, db_session, seeded):
    result = service.move_to_room("res-cara", "rr-res-cara", "room-201", None)

    assert result.is_success
    assert result.data.old_room_id is None
    db_session.expire_all()
    assert db_session.get(ReservationRoom, "rr-res-cara").room_id == "room-201"


@pytest.mark.parametrize(
    "args,resource",
    [
        (("res-missing", "rr-res-ada", "room-201", None), "Reservation"),
        (("res-ada", "rr-res-bob", "room-201", None), "ReservationRoom"),
        (("res-ada", "rr-res-ada", "room-missing", None), "Room"),
        (("res-ada", "rr-res-ada", "room-201", "room-missing"), "Room"),
    ],
)
def test_move_reports_missing_entities(service, seeded, args, resource):
    result = service.move_to_room(*args)

    assert result.error.code == ErrorCode.NOT_FOUND
    assert result.error.details["resource_type"] == resource


def test_move_to_room_of_other_property_is_rejected(service, db_session, seeded):
    result = service.move_to_room("res-ada", "rr-res-ada", "room-x01", "room-101")

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    db_session.expire_all()
    assert db_session.get(ReservationRoom, "rr-res-ada").room_id == "room-101"


def test_change_dates_keeps_total_for_same_length(service, db_session, seeded):
    result = service.change_dates(
        "res-ada",
        dt.date(2024, 3, 6), dt.date(2024, 3, 8),
        dt.date(2024, 3, 9), dt.date(2024, 3, 11),
        Decimal("200.00"),
    )

    assert result.is_success
    assert result.data.nights == 2
    assert result.data.total_amount == Decimal("200.00")

    db_session.expire_all()
    stored = db_session.get(Reservation, "res-ada")
    assert (stored.check_in_date, stored.check_out_date) == (dt.date(2024, 3, 9), dt.date(2024, 3, 11))


def test_change_dates_rescales_total_by_nights(service, seeded):
    result = service.change_dates(
        "res-bob",
        dt.date(2024, 3, 3), dt.date(2024, 3, 6),
        dt.date(2024, 3, 3), dt.date(2024, 3, 8),
        Decimal("300.00"),
    )

    assert result.data.total_amount == Decimal("500.00")


def test_change_dates_rejects_empty_stay(service, seeded):
    result = service.change_dates(
        "res-ada",
        dt.date(2024, 3, 6), dt.date(2024, 3, 8),
        dt.date(2024, 3, 9), dt.date(2024, 3, 9),
        Decimal("200.00"),
    )

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == "new_check_out"


def test_change_dates_unknown_reservation(service, seeded):
    result = service.change_dates(
        "res-missing",
        dt.date(2024, 3, 6), dt.date(2024, 3, 8),
        dt.date(2024, 3, 9), dt.date(2024, 3, 11),
        Decimal("200.00"),
    )

    assert result.error.code == ErrorCode.NOT_FOUND


class _RejectingRepository(SqlAlchemyCalendarRepository):
    def commit(self):
        raise IntegrityError("UPDATE reservation_rooms", {}, Exception("UNIQUE constraint failed"))


def test_integrity_error_on_commit_is_a_conflict(db_session, seeded):
    service = ReservationOperationsService(_RejectingRepository(db_session))

    result = service.move_to_room("res-ada", "rr-res-ada", "room-201", "room-101")

    assert not result.is_success
    assert result.error.code == ErrorCode.CONFLICT
    with pytest.raises(BusinessLogicError) as exc_info:
        unwrap_result(result)
    assert exc_info.value.status_code == 409

    db_session.expire_all()
    assert db_session.get(ReservationRoom, "rr-res-ada").room_id == "room-101"
