from datetime import date

import pytest

from syncro.appointments.recurrence import BIWEEKLY, DAILY, MAX_OCCURRENCES, MONTHLY, NONE, WEEKLY, generate_dates


def test_weekly_series():
    assert generate_dates(date(2025, 1, 6), WEEKLY, 4) == [
        date(2025, 1, 6),
        date(2025, 1, 13),
        date(2025, 1, 20),
        date(2025, 1, 27),
    ]


def test_daily_series_crosses_month_end():
    assert generate_dates(date(2025, 1, 30), DAILY, 3) == [
        date(2025, 1, 30),
        date(2025, 1, 31),
        date(2025, 2, 1),
    ]


def test_biweekly_series():
    assert generate_dates(date(2025, 1, 6), BIWEEKLY, 3) == [
        date(2025, 1, 6),
        date(2025, 1, 20),
        date(2025, 2, 3),
    ]


def test_monthly_series_clamps_to_month_end():
    assert generate_dates(date(2025, 1, 31), MONTHLY, 4) == [
        date(2025, 1, 31),
        date(2025, 2, 28),
        date(2025, 3, 31),
        date(2025, 4, 30),
    ]


def test_monthly_series_on_leap_year():
    assert generate_dates(date(2024, 1, 31), MONTHLY, 2) == [date(2024, 1, 31), date(2024, 2, 29)]


def test_none_ignores_occurrences():
    assert generate_dates(date(2025, 1, 6), NONE, 5) == [date(2025, 1, 6)]


@pytest.mark.parametrize("cadence", [NONE, DAILY, WEEKLY, BIWEEKLY, MONTHLY])
def test_single_occurrence_is_the_base_date(cadence):
    assert generate_dates(date(2025, 1, 6), cadence, 1) == [date(2025, 1, 6)]


@pytest.mark.parametrize("cadence", [DAILY, WEEKLY, BIWEEKLY, MONTHLY])
def test_length_and_order(cadence):
    dates = generate_dates(date(2025, 1, 6), cadence, 6)
    assert len(dates) == 6
    assert dates == sorted(dates)
    assert dates[0] == date(2025, 1, 6)


def test_unknown_cadence_is_rejected():
    with pytest.raises(ValueError):
        generate_dates(date(2025, 1, 6), "yearly", 2)


@pytest.mark.parametrize("occurrences", [0, -1])
def test_occurrences_must_be_positive(occurrences):
    with pytest.raises(ValueError):
        generate_dates(date(2025, 1, 6), WEEKLY, occurrences)


def test_series_longer_than_the_limit_is_rejected():
    with pytest.raises(ValueError):
        generate_dates(date(2025, 1, 6), DAILY, MAX_OCCURRENCES + 1)


def test_none_ignores_the_limit():
    assert generate_dates(date(2025, 1, 6), NONE, MAX_OCCURRENCES + 1) == [date(2025, 1, 6)]


def test_series_past_the_last_date_is_a_value_error():
    with pytest.raises(ValueError, match="last supported date"):
        generate_dates(date(9999, 6, 1), MONTHLY, 12)
