"""
Date constraints: min/max bounds and caller-disabled dates.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, TypeAlias

from models.dates import CalendarDate, as_day


@dataclass(frozen=True)
class DisabledSet:
    """A finite set of disabled days (matched by calendar day)."""

    days: frozenset[date] = field(default_factory=frozenset)

    @classmethod
    def of(cls, dates: Iterable[CalendarDate]) -> "DisabledSet":
        return cls(frozenset(as_day(d) for d in dates))

    def __contains__(self, d: CalendarDate) -> bool:
        return as_day(d) in self.days


@dataclass(frozen=True)
class DisabledPredicate:
    """Caller function returning True for disabled dates."""

    func: Callable[[CalendarDate], bool]

    def __call__(self, d: CalendarDate) -> bool:
        return bool(self.func(d))


DisabledDates: TypeAlias = DisabledSet | DisabledPredicate


@dataclass(frozen=True)
class Constraints:
    """Rules that can make a date unselectable. All optional."""

    min_date: CalendarDate | None = None
    max_date: CalendarDate | None = None
    disabled: DisabledDates | None = None

    def __post_init__(self):
        if self.min_date is not None and self.max_date is not None:
            if as_day(self.max_date) < as_day(self.min_date):
                raise ValueError(
                    f"max_date {as_day(self.max_date)} is before min_date {as_day(self.min_date)}"
                )

    def is_disabled(self, d: CalendarDate) -> bool:
        return is_date_disabled(d, self)


NO_CONSTRAINTS = Constraints()


def is_date_disabled(d: CalendarDate, constraints: Constraints | None) -> bool:
    """
    Check whether a date is unselectable.

    Order matters:
    1. Before min_date
    2. After max_date
    3. In the disabled set
    4. Disabled predicate returns True

    Bounds win, so a caller predicate never sees out-of-bounds dates.
    """
    if constraints is None:
        return False

    day = as_day(d)

    if constraints.min_date is not None and day < as_day(constraints.min_date):
        return True
    if constraints.max_date is not None and day > as_day(constraints.max_date):
        return True

    disabled = constraints.disabled
    if isinstance(disabled, DisabledSet):
        return d in disabled
    if isinstance(disabled, DisabledPredicate):
        return disabled(d)

    return False
