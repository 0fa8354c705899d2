import datetime as dt

import pytest

from hotelpms.core.exceptions import ValidationError
from hotelpms.services.calendar.navigation import CalendarWindow

MONDAY = dt.date(2024, 3, 4)


def test_label_and_end_date():
    window = CalendarWindow(MONDAY, 14)

    assert window.end_date == dt.date(2024, 3, 17)
    assert window.label == "Mar 4 - Mar 17, 2024"
    assert len(window.dates) == 14
    assert window.contains(dt.date(2024, 3, 17))
    assert not window.contains(dt.date(2024, 3, 18))


def test_paging_moves_by_window_size():
    window = CalendarWindow(MONDAY, 7)

    assert window.next().start_date == dt.date(2024, 3, 11)
    assert window.previous().start_date == dt.date(2024, 2, 26)
    assert window.next().previous() == window


def test_label_spanning_years_uses_end_year():
    window = CalendarWindow(dt.date(2023, 12, 25), 14)

    assert window.label == "Dec 25 - Jan 7, 2024"


def test_today_and_resize_keep_other_field():
    window = CalendarWindow(MONDAY, 21)

    assert window.today(dt.date(2024, 5, 1)) == CalendarWindow(dt.date(2024, 5, 1), 21)
    assert window.with_num_days(30) == CalendarWindow(MONDAY, 30)
    assert CalendarWindow.starting_today(today=MONDAY).num_days == 14


@pytest.mark.parametrize("num_days", [0, 10, 31])
def test_only_allowed_sizes(num_days):
    with pytest.raises(ValidationError):
        CalendarWindow(MONDAY, num_days)
