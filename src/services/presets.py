"""
Named quick ranges relative to "now".
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable

from models.dates import CalendarDate, DateRange, as_day
from services.calendar import end_of_month, start_of_month


@dataclass(frozen=True)
class PresetRange:
    """A quick range. get_value is a pure function of the reference day."""

    key: str
    label: str
    label_ko: str
    compute: Callable[[date], DateRange]

    def get_value(self, now: CalendarDate | None = None) -> DateRange:
        today = as_day(now) if now is not None else date.today()
        return self.compute(today)


def _today(now: date) -> DateRange:
    return DateRange(start=now, end=now)


def _last_7_days(now: date) -> DateRange:
    return DateRange(start=now - timedelta(days=6), end=now)


def _this_month(now: date) -> DateRange:
    return DateRange(start=start_of_month(now), end=end_of_month(now))


def _this_year(now: date) -> DateRange:
    return DateRange(start=date(now.year, 1, 1), end=date(now.year, 12, 31))


PRESETS: tuple[PresetRange, ...] = (
    PresetRange(key="today", label="Today", label_ko="오늘", compute=_today),
    PresetRange(key="last_7_days", label="Last 7 Days", label_ko="최근 7일", compute=_last_7_days),
    PresetRange(key="this_month", label="This Month", label_ko="이번 달", compute=_this_month),
    PresetRange(key="this_year", label="This Year", label_ko="올해", compute=_this_year),
)


def get_preset_ranges() -> list[PresetRange]:
    """Presets in display order: Today, Last 7 Days, This Month, This Year."""
    return list(PRESETS)


def find_preset(name: str) -> PresetRange:
    """
    Look up a preset by key or label (case-insensitive).

    Raises:
        KeyError: no preset with that key or label
    """
    wanted = name.strip().casefold()
    for preset in PRESETS:
        if wanted in {preset.key, preset.label.casefold(), preset.label_ko}:
            return preset
    raise KeyError(f"Unknown preset '{name}'")


def matching_preset(range_: DateRange | None, now: CalendarDate | None = None) -> PresetRange | None:
    """The first preset whose range equals range_ by day (for highlighting)."""
    if range_ is None:
        return None
    for preset in PRESETS:
        if preset.get_value(now).same_days(range_):
            return preset
    return None
