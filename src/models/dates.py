"""
Data models for date selection.

CalendarDate is a plain `datetime.date` or `datetime.datetime`. Selection
logic compares by calendar day only, so a datetime carrying a time picked
in the time input still matches the grid cell for its day.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Callable, TypeAlias

CalendarDate: TypeAlias = date  # datetime is a date subclass


def as_day(value: date) -> date:
    """Strip the time-of-day part (if any) for by-day comparisons."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_day(a: date | None, b: date | None) -> bool:
    """Same calendar day; False if either side is missing."""
    if a is None or b is None:
        return False
    return as_day(a) == as_day(b)


class SelectionMode(str, Enum):
    """Single date or two-click date range. Fixed per engine instance."""

    SINGLE = "single"
    RANGE = "range"


class SelectionPhase(str, Enum):
    """Range entry sub-state."""

    IDLE = "idle"
    AWAITING_END = "awaiting-end"


@dataclass(frozen=True)
class TimeValue:
    """Time of day picked in the time input."""

    hours: int
    minutes: int

    def __post_init__(self):
        if not (0 <= self.hours <= 23):
            raise ValueError(f"hours must be 0-23, got {self.hours}")
        if not (0 <= self.minutes <= 59):
            raise ValueError(f"minutes must be 0-59, got {self.minutes}")


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive date range. Committed ranges always have start <= end.

    Change callbacks under ISO or custom output receive a DateRange of
    formatted strings; the date helpers below apply to raw ranges only.
    """

    start: CalendarDate
    end: CalendarDate

    @classmethod
    def ordered(cls, a: CalendarDate, b: CalendarDate) -> "DateRange":
        """Build a range from two dates in either order."""
        if as_day(b) < as_day(a):
            return cls(start=b, end=a)
        return cls(start=a, end=b)

    @classmethod
    def single_day(cls, d: CalendarDate) -> "DateRange":
        return cls(start=d, end=d)

    @property
    def is_ordered(self) -> bool:
        return as_day(self.start) <= as_day(self.end)

    @property
    def is_single_day(self) -> bool:
        return is_same_day(self.start, self.end)

    @property
    def days(self) -> int:
        """Number of calendar days covered (both ends included)."""
        return (as_day(self.end) - as_day(self.start)).days + 1

    def contains(self, d: CalendarDate) -> bool:
        day = as_day(d)
        return as_day(self.start) <= day <= as_day(self.end)

    def same_days(self, other: "DateRange | None") -> bool:
        """Compare endpoints by day, ignoring time-of-day."""
        if other is None:
            return False
        return is_same_day(self.start, other.start) and is_same_day(self.end, other.end)


# =============================================================================
# LOCALE
# =============================================================================


@dataclass(frozen=True)
class Locale:
    """
    Week-start convention and label tables.

    week_starts_on uses Python weekday numbering (0=Monday ... 6=Sunday).
    Weekday tables are indexed the same way.
    """

    code: str
    week_starts_on: int
    month_names: tuple[str, ...]
    month_abbr: tuple[str, ...]
    weekday_names: tuple[str, ...]
    weekday_abbr: tuple[str, ...]
    am_pm: tuple[str, str] = ("AM", "PM")
    # Renders "<year> <month>" for month/year dropdown labels
    month_year_label: Callable[[int, int], str] | None = field(default=None, compare=False)

    def __post_init__(self):
        if not (0 <= self.week_starts_on <= 6):
            raise ValueError(f"week_starts_on must be 0-6, got {self.week_starts_on}")
        if len(self.month_names) != 12 or len(self.month_abbr) != 12:
            raise ValueError("month tables need 12 entries")
        if len(self.weekday_names) != 7 or len(self.weekday_abbr) != 7:
            raise ValueError("weekday tables need 7 entries")

    def format_month_year(self, year: int, month: int) -> str:
        if self.month_year_label is not None:
            return self.month_year_label(year, month)
        return f"{self.month_names[month - 1]} {year}"


EN_US = Locale(
    code="en-US",
    week_starts_on=6,
    month_names=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    month_abbr=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    weekday_names=("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    weekday_abbr=("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
)

EN_GB = Locale(
    code="en-GB",
    week_starts_on=0,
    month_names=EN_US.month_names,
    month_abbr=EN_US.month_abbr,
    weekday_names=EN_US.weekday_names,
    weekday_abbr=EN_US.weekday_abbr,
)

KO = Locale(
    code="ko",
    week_starts_on=6,
    month_names=tuple(f"{m}월" for m in range(1, 13)),
    month_abbr=tuple(f"{m}월" for m in range(1, 13)),
    weekday_names=("월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일"),
    weekday_abbr=("월", "화", "수", "목", "금", "토", "일"),
    am_pm=("오전", "오후"),
    month_year_label=lambda year, month: f"{year}년 {month}월",
)

LOCALES = {loc.code.lower(): loc for loc in (EN_US, EN_GB, KO)}


def get_locale(code: str) -> Locale:
    """Look up a built-in locale by code (case-insensitive)."""
    try:
        return LOCALES[code.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown locale '{code}'. Known: {', '.join(sorted(LOCALES))}") from None


# =============================================================================
# DROPDOWN OPTIONS
# =============================================================================


@dataclass(frozen=True)
class MonthOption:
    value: int  # 0-11
    label: str


@dataclass(frozen=True)
class YearOption:
    value: int
    label: str


@dataclass(frozen=True)
class MonthYearOption:
    value: str  # "YYYY-M", zero-based month
    label: str


# =============================================================================
# CELL STATE
# =============================================================================


@dataclass(frozen=True)
class DayState:
    """Flags deciding how a single calendar cell is drawn."""

    is_selected: bool = False
    is_today: bool = False
    is_disabled: bool = False
    is_outside_month: bool = False
    is_range_start: bool = False
    is_range_end: bool = False
    is_in_range: bool = False
    is_hovered: bool = False

    @property
    def variant(self) -> str:
        """Single visual state, highest precedence first."""
        if self.is_disabled:
            return "disabled"
        if self.is_range_start:
            return "rangeStart"
        if self.is_range_end:
            return "rangeEnd"
        if self.is_in_range or self.is_hovered:
            return "inRange"
        if self.is_selected:
            return "selected"
        if self.is_today:
            return "today"
        if self.is_outside_month:
            return "outsideMonth"
        return "default"
