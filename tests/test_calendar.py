"""Tests for calendar grid generation and month helpers."""

import calendar
from datetime import date, timedelta

import pytest

from models.dates import EN_GB, EN_US, KO
from services.calendar import (
    add_months,
    calendar_weeks,
    end_of_week,
    generate_calendar_days,
    get_month_options,
    get_month_year_options,
    get_year_options,
    start_of_week,
    weekday_labels,
)

SUNDAY = 6
MONDAY = 0


def test_january_2024_sunday_first():
    days = generate_calendar_days(date(2024, 1, 15), SUNDAY)

    assert len(days) == 35
    assert days[0] == date(2023, 12, 31)
    assert days[-1] == date(2024, 2, 3)


def test_january_2024_monday_first():
    days = generate_calendar_days(date(2024, 1, 1), MONDAY)

    assert days[0] == date(2024, 1, 1)
    assert days[-1] == date(2024, 2, 4)
    assert len(days) == 35


def test_six_week_month():
    # March 2025 starts on a Saturday and ends on a Monday
    days = generate_calendar_days(date(2025, 3, 1), SUNDAY)

    assert len(days) == 42
    assert days[0] == date(2025, 2, 23)
    assert days[-1] == date(2025, 4, 5)


def test_four_week_february_gets_trailing_week():
    # February 2015 starts on a Sunday and has exactly 28 days
    days = generate_calendar_days(date(2015, 2, 10), SUNDAY)

    assert len(days) == 35
    assert days[0] == date(2015, 2, 1)
    assert days[-1] == date(2015, 3, 7)


def test_datetime_anchor_gives_plain_dates():
    from datetime import datetime

    days = generate_calendar_days(datetime(2024, 1, 15, 14, 30), SUNDAY)
    assert all(type(d) is date for d in days)


@pytest.mark.parametrize("week_starts_on", range(7))
def test_grid_properties_for_every_month(week_starts_on):
    for year in range(2000, 2031):
        for month in range(1, 13):
            days = generate_calendar_days(date(year, month, 1), week_starts_on)

            assert len(days) in (35, 42), (year, month, week_starts_on)
            assert days[0].weekday() == week_starts_on
            assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

            _, last = calendar.monthrange(year, month)
            in_month = [d for d in days if d.year == year and d.month == month]
            assert in_month == [date(year, month, day) for day in range(1, last + 1)]


def test_grid_is_deterministic():
    assert generate_calendar_days(date(2025, 6, 1)) == generate_calendar_days(date(2025, 6, 30))


def test_calendar_weeks_rows():
    weeks = calendar_weeks(date(2025, 3, 1), SUNDAY)
    assert len(weeks) == 6
    assert all(len(week) == 7 for week in weeks)


def test_start_and_end_of_week():
    wednesday = date(2025, 11, 19)
    assert start_of_week(wednesday, SUNDAY) == date(2025, 11, 16)
    assert end_of_week(wednesday, SUNDAY) == date(2025, 11, 22)
    assert start_of_week(wednesday, MONDAY) == date(2025, 11, 17)


def test_add_months_clamps_day():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2025, 1, 15), -1) == date(2024, 12, 15)
    assert add_months(date(2025, 12, 1), 1) == date(2026, 1, 1)


def test_weekday_labels_follow_week_start():
    assert weekday_labels(EN_US) == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert weekday_labels(EN_GB)[0] == "Mon"
    assert weekday_labels(KO)[0] == "일"
    assert weekday_labels(EN_US, long=True)[0] == "Sunday"


def test_month_options():
    options = get_month_options(EN_US)
    assert len(options) == 12
    assert options[0].value == 0
    assert options[0].label == "January"
    assert get_month_options(KO)[11].label == "12월"


def test_year_options_span():
    options = get_year_options(2025)
    assert len(options) == 21
    assert options[0].value == 2015
    assert options[-1].label == "2035"


def test_month_year_options():
    options = get_month_year_options(KO, current_year=2025)
    assert len(options) == 21 * 12
    assert options[0].value == "2015-0"
    assert options[0].label == "2015년 1월"
    assert get_month_year_options(EN_US, current_year=2025, span=0)[10].label == "November 2025"
