import datetime as dt
import os
from decimal import Decimal
from typing import Dict

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from hotelpms.models import (  # noqa: E402
    Base,
    Guest,
    Reservation,
    ReservationRoom,
    Room,
    RoomType,
)
from hotelpms.repositories.calendar.calendar_repository import (  # noqa: E402
    SqlAlchemyCalendarRepository,
)

PROPERTY_ID = "prop-1"
OTHER_PROPERTY_ID = "prop-2"

# Monday
WINDOW_START = dt.date(2024, 3, 4)
TODAY = dt.date(2024, 3, 6)


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite database per test, shared across threads so the
    TestClient worker sees the same data.
    """
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repository(db_session) -> SqlAlchemyCalendarRepository:
    return SqlAlchemyCalendarRepository(db_session)


@pytest.fixture()
def seeded(db_session) -> Dict[str, str]:
    """
    One property with four rooms on three floors plus a room elsewhere.

    Reservations in the Mar 4 - Mar 17, 2024 window:
    - Ada (VIP, confirmed) in 101, Wed 6 -> Fri 8
    - Bob (checked in) in 102, Sun 3 -> Wed 6
    - Cara (confirmed) without a room, Sun 10 -> Tue 12
    - Dan (cancelled) in 201, not shown
    - Eve (confirmed) in 101, Mar 20 -> 22, outside the window
    """
    deluxe = RoomType(id="rt-dlx", property_id=PROPERTY_ID, name="Deluxe King", code="DLX")
    standard = RoomType(id="rt-std", property_id=PROPERTY_ID, name="Standard Twin", code="STD")
    db_session.add_all([deluxe, standard])

    rooms = [
        Room(id="room-101", property_id=PROPERTY_ID, room_number="101", floor="1", room_type=deluxe),
        Room(id="room-102", property_id=PROPERTY_ID, room_number="102", floor="1", room_type=standard),
        Room(id="room-201", property_id=PROPERTY_ID, room_number="201", floor="2", room_type=deluxe),
        Room(id="room-301", property_id=PROPERTY_ID, room_number="301", floor=None),
        Room(
            id="room-999", property_id=PROPERTY_ID, room_number="999", floor="9", is_active=False,
        ),
        Room(id="room-x01", property_id=OTHER_PROPERTY_ID, room_number="X01", floor="1"),
    ]
    db_session.add_all(rooms)

    guests = {
        "ada": Guest(id="guest-ada", first_name="Ada", last_name="Lovelace", is_vip=True),
        "bob": Guest(id="guest-bob", first_name="Bob", last_name="Smith"),
        "cara": Guest(id="guest-cara", first_name="Cara", last_name="Diaz"),
        "dan": Guest(id="guest-dan", first_name="Dan", last_name="Ng"),
        "eve": Guest(id="guest-eve", first_name="Eve", last_name="Park"),
    }
    db_session.add_all(guests.values())

    def reservation(res_id, number, guest, check_in, check_out, status, total, room_id, room_type):
        res = Reservation(
            id=res_id,
            property_id=PROPERTY_ID,
            confirmation_number=number,
            check_in_date=check_in,
            check_out_date=check_out,
            status=status,
            total_amount=Decimal(total),
            guest=guest,
        )
        res.reservation_rooms.append(
            ReservationRoom(id=f"rr-{res_id}", room_id=room_id, room_type=room_type)
        )
        return res

    db_session.add_all([
        reservation("res-ada", "CNF-001", guests["ada"], dt.date(2024, 3, 6), dt.date(2024, 3, 8),
                    "confirmed", "200.00", "room-101", deluxe),
        reservation("res-bob", "CNF-002", guests["bob"], dt.date(2024, 3, 3), dt.date(2024, 3, 6),
                    "checked_in", "300.00", "room-102", standard),
        reservation("res-cara", "CNF-003", guests["cara"], dt.date(2024, 3, 10), dt.date(2024, 3, 12),
                    "confirmed", "180.00", None, standard),
        reservation("res-dan", "CNF-004", guests["dan"], dt.date(2024, 3, 5), dt.date(2024, 3, 7),
                    "cancelled", "150.00", "room-201", deluxe),
        reservation("res-eve", "CNF-005", guests["eve"], dt.date(2024, 3, 20), dt.date(2024, 3, 22),
                    "confirmed", "120.00", "room-101", deluxe),
    ])
    db_session.commit()

    return {"property_id": PROPERTY_ID}


@pytest.fixture()
def client(session_factory):
    """
    TestClient with the database dependency pointed at the test engine.
    """
    from hotelpms.db.session import get_db
    from hotelpms.main import app

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
