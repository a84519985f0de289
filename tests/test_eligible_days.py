from datetime import date, datetime

import pytest

from datesheet.eligible_days import eligible_days, expand_holidays
from datesheet.errors import InvalidRange
from datesheet.models import Holiday


def test_weekends_are_skipped():
    # Mon 6 Jan 2025 .. Sun 19 Jan 2025
    days = eligible_days(date(2025, 1, 6), date(2025, 1, 19))
    assert len(days) == 10
    assert all(d.weekday() < 5 for d in days)
    assert days[0] == date(2025, 1, 6)
    assert days[-1] == date(2025, 1, 17)
    assert days == sorted(days)


def test_holidays_are_skipped_and_time_of_day_ignored():
    holidays = [date(2025, 1, 7), datetime(2025, 1, 9, 15, 30)]
    days = eligible_days(date(2025, 1, 6), date(2025, 1, 10), holidays)
    assert days == [date(2025, 1, 6), date(2025, 1, 8), date(2025, 1, 10)]


def test_single_day_range():
    assert eligible_days(date(2025, 1, 8), date(2025, 1, 8)) == [date(2025, 1, 8)]


def test_weekend_only_range_is_empty_not_an_error():
    assert eligible_days(date(2025, 1, 11), date(2025, 1, 12)) == []


def test_end_before_start_raises():
    with pytest.raises(InvalidRange):
        eligible_days(date(2025, 1, 10), date(2025, 1, 6))
    # also a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        eligible_days(date(2025, 1, 10), date(2025, 1, 6))


def test_recurring_holiday_expands_into_range():
    holidays = [Holiday(date(2019, 1, 8), "Founders Day", recurring=True),
                Holiday(date(2025, 1, 9), "One-off")]
    closed = expand_holidays(holidays, date(2025, 1, 6), date(2025, 1, 10))
    assert closed == {date(2025, 1, 8), date(2025, 1, 9)}


def test_recurring_holiday_spanning_new_year():
    closed = expand_holidays([Holiday(date(2000, 1, 1), recurring=True)],
                             date(2024, 12, 20), date(2025, 1, 10))
    assert closed == {date(2025, 1, 1)}


def test_recurring_leap_day_skips_common_years():
    closed = expand_holidays([Holiday(date(2024, 2, 29), recurring=True)],
                             date(2025, 2, 1), date(2025, 3, 31))
    assert closed == set()


def test_plain_dates_pass_through_expand():
    closed = expand_holidays([date(2025, 1, 7)], date(2025, 1, 6), date(2025, 1, 10))
    assert closed == {date(2025, 1, 7)}
