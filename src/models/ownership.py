"""
Who holds the selected value.

External: the caller owns it. Reads go through `get`, commits go through
`set` with the formatted value, nothing is cached in the engine.

Owned: the engine owns it, starting from `initial`. `on_change` (optional)
observes commits with the formatted value.
"""

from dataclasses import dataclass
from typing import Any, Callable, TypeAlias

from models.dates import CalendarDate, DateRange

RawValue: TypeAlias = CalendarDate | DateRange | None


@dataclass(frozen=True)
class External:
    get: Callable[[], RawValue]
    set: Callable[[Any], None]


@dataclass(frozen=True)
class Owned:
    initial: RawValue = None
    on_change: Callable[[Any], None] | None = None


ValueOwnership: TypeAlias = External | Owned
