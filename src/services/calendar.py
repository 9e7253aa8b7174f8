"""
Calendar grid generation and month navigation.
"""

import calendar
from datetime import date, timedelta

from core.config import YEAR_OPTION_SPAN
from models.dates import (
    CalendarDate,
    Locale,
    MonthOption,
    MonthYearOption,
    YearOption,
    as_day,
)

DAYS_PER_WEEK = 7
MIN_GRID_DAYS = 35


# =============================================================================
# DATE UTILITIES
# =============================================================================


def start_of_month(d: CalendarDate) -> date:
    return as_day(d).replace(day=1)


def end_of_month(d: CalendarDate) -> date:
    day = as_day(d)
    _, last_day = calendar.monthrange(day.year, day.month)
    return day.replace(day=last_day)


def start_of_week(d: CalendarDate, week_starts_on: int = 6) -> date:
    """First day of the week containing d (week_starts_on: 0=Monday ... 6=Sunday)."""
    day = as_day(d)
    offset = (day.weekday() - week_starts_on) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


def end_of_week(d: CalendarDate, week_starts_on: int = 6) -> date:
    return start_of_week(d, week_starts_on) + timedelta(days=DAYS_PER_WEEK - 1)


def add_months(d: CalendarDate, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    day = as_day(d)
    index = day.year * 12 + (day.month - 1) + months
    year, month0 = divmod(index, 12)
    _, last_day = calendar.monthrange(year, month0 + 1)
    return date(year, month0 + 1, min(day.day, last_day))


def is_same_month(a: CalendarDate, b: CalendarDate) -> bool:
    return as_day(a).year == as_day(b).year and as_day(a).month == as_day(b).month


# =============================================================================
# GRID
# =============================================================================


def generate_calendar_days(month: CalendarDate, week_starts_on: int = 6) -> list[date]:
    """
    Build the complete-week grid for the month containing `month`.

    Runs from the start of the week holding the 1st through the end of the
    week holding the last day, including spill-over days from the adjacent
    months. Returns 35 or 42 days; a month that fits in exactly four weeks
    (February starting on the week-start day) gets a trailing week appended.

    Example (Sunday-first):
        generate_calendar_days(date(2024, 1, 1))
        # 2023-12-31 through 2024-02-03, 35 days
    """
    first = start_of_week(start_of_month(month), week_starts_on)
    last = end_of_week(end_of_month(month), week_starts_on)

    total = (last - first).days + 1
    if total < MIN_GRID_DAYS:
        total = MIN_GRID_DAYS

    return [first + timedelta(days=i) for i in range(total)]


def calendar_weeks(month: CalendarDate, week_starts_on: int = 6) -> list[list[date]]:
    """Grid split into rows of seven."""
    days = generate_calendar_days(month, week_starts_on)
    return [days[i:i + DAYS_PER_WEEK] for i in range(0, len(days), DAYS_PER_WEEK)]


def weekday_labels(locale: Locale, long: bool = False) -> list[str]:
    """Column headers in display order, starting from the locale's week start."""
    names = locale.weekday_names if long else locale.weekday_abbr
    return [names[(locale.week_starts_on + i) % DAYS_PER_WEEK] for i in range(DAYS_PER_WEEK)]


# =============================================================================
# DROPDOWN OPTIONS
# =============================================================================


def get_month_options(locale: Locale) -> list[MonthOption]:
    """Month dropdown: value is the zero-based month index."""
    return [MonthOption(value=i, label=locale.month_names[i]) for i in range(12)]


def get_year_options(current_year: int | None = None, span: int = YEAR_OPTION_SPAN) -> list[YearOption]:
    """Year dropdown covering current_year - span through current_year + span."""
    if current_year is None:
        current_year = date.today().year
    return [
        YearOption(value=year, label=str(year))
        for year in range(current_year - span, current_year + span + 1)
    ]


def get_month_year_options(
    locale: Locale, current_year: int | None = None, span: int = YEAR_OPTION_SPAN
) -> list[MonthYearOption]:
    """Combined dropdown with every month of the +/- span year window."""
    if current_year is None:
        current_year = date.today().year

    options = []
    for year in range(current_year - span, current_year + span + 1):
        for month0 in range(12):
            options.append(
                MonthYearOption(
                    value=f"{year}-{month0}",
                    label=locale.format_month_year(year, month0 + 1),
                )
            )
    return options
