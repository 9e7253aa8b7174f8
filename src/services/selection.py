"""
Selection protocol for single dates and two-click date ranges.

Range gestures (phase / clicked date relative to stored start S):

    IDLE          any      -> {D, D}  AWAITING_END
    AWAITING_END  D <  S   -> {D, S}  IDLE   (swap)
    AWAITING_END  D == S   -> {D, D}  IDLE   (same-day collapse)
    AWAITING_END  D >  S   -> {S, D}  IDLE

The phase is a plain attribute read and written inside `click`, so a second
click always sees the phase left by the first one. It is kept apart from the
committed value, which lives in the ValueController and is what callers are
notified about.
"""

import logging
from datetime import date

from core.constraints import NO_CONSTRAINTS, Constraints, is_date_disabled
from core.errors import SelectionModeError
from models.dates import (
    CalendarDate,
    DateRange,
    DayState,
    SelectionMode,
    SelectionPhase,
    as_day,
    is_same_day,
)
from services.calendar import is_same_month
from services.value import ValueController

logger = logging.getLogger(__name__)


class SelectionStateMachine:
    """Owns the phase register and hover preview for one widget instance."""

    def __init__(self, controller: ValueController, constraints: Constraints | None = None):
        self._controller = controller
        self._mode = controller.mode
        self.constraints = constraints if constraints is not None else NO_CONSTRAINTS
        self.phase = SelectionPhase.IDLE
        self._hover_date: CalendarDate | None = None

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @mode.setter
    def mode(self, _value):
        raise SelectionModeError("Selection mode is fixed at construction")

    @property
    def controller(self) -> ValueController:
        return self._controller

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def value(self):
        """Committed raw value: a date, a DateRange or None."""
        return self._controller.value

    @property
    def selected_date(self) -> CalendarDate | None:
        self._require(SelectionMode.SINGLE, "selected_date")
        return self._controller.value

    @property
    def selected_range(self) -> DateRange | None:
        self._require(SelectionMode.RANGE, "selected_range")
        return self._controller.value

    @property
    def hovered_date(self) -> CalendarDate | None:
        return self._hover_date

    @property
    def hover_preview(self) -> DateRange | None:
        """
        Advisory interval between the pending start and the hovered date.

        Only exists while a range gesture is in progress.
        """
        if self._mode is not SelectionMode.RANGE or self.phase is not SelectionPhase.AWAITING_END:
            return None
        if self._hover_date is None:
            return None
        current = self._controller.value
        if current is None:
            return None
        return DateRange.ordered(current.start, self._hover_date)

    def is_disabled(self, d: CalendarDate) -> bool:
        return is_date_disabled(d, self.constraints)

    # -------------------------------------------------------------------------
    # Interaction
    # -------------------------------------------------------------------------

    def select(self, d: CalendarDate) -> bool:
        """
        Entry point for a date cell interaction.

        Returns False when the date was rejected by the constraints.
        """
        if self._mode is SelectionMode.RANGE:
            return self.click(d)

        if self.is_disabled(d):
            logger.debug("Rejected disabled date %s", d)
            return False

        self._controller.commit(d)
        return True

    def click(self, d: CalendarDate) -> bool:
        """One click of the two-click range gesture."""
        self._require(SelectionMode.RANGE, "click")

        if self.is_disabled(d):
            logger.debug("Rejected disabled date %s (phase %s)", d, self.phase.value)
            return False

        if self.phase is SelectionPhase.IDLE:
            logger.debug("First click %s - starting new range", d)
            self.phase = SelectionPhase.AWAITING_END
            self._controller.commit(DateRange.single_day(d))
            return True

        current = self._controller.value
        if current is None:
            # Awaiting an end but the owner dropped the start; begin again
            logger.debug("Awaiting end without a start, treating %s as first click", d)
            self.phase = SelectionPhase.AWAITING_END
            self._controller.commit(DateRange.single_day(d))
            return True

        start = current.start
        if as_day(d) < as_day(start):
            logger.debug("Second click %s before start %s - swapping", d, start)
            completed = DateRange(start=d, end=start)
        elif is_same_day(d, start):
            logger.debug("Second click %s on start - single day range", d)
            completed = DateRange.single_day(d)
        else:
            logger.debug("Second click %s - completing range from %s", d, start)
            completed = DateRange(start=start, end=d)

        self.phase = SelectionPhase.IDLE
        self._hover_date = None
        self._controller.commit(completed)
        return True

    def commit_range(self, range_: DateRange) -> bool:
        """
        Commit a complete range in one step (presets, typed input).

        The range is reordered if needed and the phase resets to IDLE.
        Returns False if either endpoint is disabled.
        """
        self._require(SelectionMode.RANGE, "commit_range")

        if self.is_disabled(range_.start) or self.is_disabled(range_.end):
            logger.debug("Rejected range %s..%s with a disabled endpoint", range_.start, range_.end)
            return False

        self.phase = SelectionPhase.IDLE
        self._hover_date = None
        self._controller.commit(DateRange.ordered(range_.start, range_.end))
        return True

    def clear(self) -> None:
        """Drop the selection and any gesture in progress."""
        self.phase = SelectionPhase.IDLE
        self._hover_date = None
        self._controller.commit(None)

    def hover(self, d: CalendarDate | None) -> None:
        """Pointer entered a cell (or left the grid when d is None)."""
        if d is None:
            self._hover_date = None
            return
        if self._mode is SelectionMode.RANGE and self.phase is SelectionPhase.AWAITING_END:
            self._hover_date = d

    # -------------------------------------------------------------------------
    # Rendering support
    # -------------------------------------------------------------------------

    def day_state(self, d: CalendarDate, display_month: CalendarDate, today: date | None = None) -> DayState:
        """Flags for one grid cell."""
        today = today if today is not None else date.today()
        current = self._controller.value

        is_selected = is_range_start = is_range_end = is_in_range = is_hovered = False

        if self._mode is SelectionMode.SINGLE:
            is_selected = is_same_day(d, current)
        elif current is not None:
            is_range_start = is_same_day(d, current.start)
            is_range_end = is_same_day(d, current.end)
            is_in_range = current.contains(d)
            preview = self.hover_preview
            is_hovered = preview is not None and preview.contains(d)

        return DayState(
            is_selected=is_selected,
            is_today=is_same_day(d, today),
            is_disabled=self.is_disabled(d),
            is_outside_month=not is_same_month(d, display_month),
            is_range_start=is_range_start,
            is_range_end=is_range_end,
            is_in_range=is_in_range,
            is_hovered=is_hovered,
        )

    def _require(self, mode: SelectionMode, operation: str) -> None:
        if self._mode is not mode:
            raise SelectionModeError(f"{operation} is only available in {mode.value} mode (engine is {self._mode.value})")
