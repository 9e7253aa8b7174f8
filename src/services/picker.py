"""
Date picker state object.

One DatePicker is built per widget mount and handed to every consumer
(grid, header, inputs, presets). It wires the value controller, the
selection state machine and the formatter together and keeps the bits of
UI state the engine needs: the month on display, the picked time and the
raw text of the inputs.
"""

import logging
from datetime import date
from typing import Callable

from core.config import (
    DEFAULT_CUSTOM_PATTERN,
    DEFAULT_INPUT_PATTERN,
    DEFAULT_LOCALE,
    DEFAULT_OUTPUT_FORMAT,
    TIME_INPUT_ERROR_MIN_LENGTH,
)
from core.constraints import Constraints
from core.errors import SelectionModeError
from models.dates import (
    CalendarDate,
    DateRange,
    DayState,
    Locale,
    MonthOption,
    SelectionMode,
    SelectionPhase,
    TimeValue,
    YearOption,
    get_locale,
)
from models.formats import OutputFormat, output_format_from_config
from models.ownership import ValueOwnership
from services.calendar import (
    add_months,
    generate_calendar_days,
    get_month_options,
    get_year_options,
    start_of_month,
    weekday_labels,
)
from services.formatting import (
    combine_date_and_time,
    format_date_for_display,
    format_range_for_display,
    format_time,
    parse_time_input,
    parse_user_input,
)
from services.presets import PresetRange, find_preset, get_preset_ranges, matching_preset
from services.selection import SelectionStateMachine
from services.value import ValueController

logger = logging.getLogger(__name__)

_UNSET = object()


class DatePicker:
    """Interaction surface between the rendering layer and the selection engine."""

    def __init__(
        self,
        mode: SelectionMode | str = SelectionMode.SINGLE,
        value: ValueOwnership | None = None,
        constraints: Constraints | None = None,
        output_format: OutputFormat | None = None,
        locale: Locale | None = None,
        time_picker: bool = False,
        input_pattern: str = DEFAULT_INPUT_PATTERN,
        today: Callable[[], date] | None = None,
    ):
        self.locale = locale if locale is not None else get_locale(DEFAULT_LOCALE)
        if output_format is None:
            output_format = output_format_from_config(DEFAULT_OUTPUT_FORMAT, DEFAULT_CUSTOM_PATTERN)

        self._controller = ValueController(SelectionMode(mode), value, output_format, self.locale)
        self._machine = SelectionStateMachine(self._controller, constraints)
        self._today = today or date.today

        self.time_picker = time_picker
        self.input_pattern = input_pattern
        self.selected_time: TimeValue | None = None
        self.start_text = ""
        self.end_text = ""
        self.time_text = ""
        self.time_input_error = False

        self.display_month = start_of_month(self._initial_month())
        self._sync_text()

    def _initial_month(self) -> CalendarDate:
        current = self._controller.value
        if isinstance(current, DateRange):
            return current.start
        if current is not None:
            return current
        return self._today()

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    @property
    def mode(self) -> SelectionMode:
        return self._machine.mode

    @property
    def machine(self) -> SelectionStateMachine:
        return self._machine

    @property
    def constraints(self) -> Constraints:
        return self._machine.constraints

    @property
    def output_format(self) -> OutputFormat:
        return self._controller.output_format

    def update(
        self,
        *,
        constraints=_UNSET,
        output_format=_UNSET,
        locale=_UNSET,
        input_pattern=_UNSET,
        mode=_UNSET,
        value=_UNSET,
    ) -> None:
        """
        Replace configuration between interactions.

        Mode and the kind of value ownership (External or Owned) are fixed for
        the lifetime of the picker. A new ownership object of the same kind
        replaces the getter/setter or observer.

        Raises:
            SelectionModeError: mode differs from the one given at construction
            OwnershipError: ownership of the other kind was passed
        """
        if mode is not _UNSET and SelectionMode(mode) is not self.mode:
            raise SelectionModeError(f"Cannot switch selection mode from {self.mode.value} to {SelectionMode(mode).value}")
        if value is not _UNSET:
            self._controller.rebind(value)

        if constraints is not _UNSET:
            self._machine.constraints = constraints if constraints is not None else Constraints()
        if output_format is not _UNSET:
            self._controller.output_format = output_format
        if locale is not _UNSET:
            self.locale = locale
            self._controller.locale = locale
        if input_pattern is not _UNSET:
            self.input_pattern = input_pattern
        self._sync_text()

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    @property
    def value(self):
        """Committed raw value (date, DateRange or None)."""
        return self._controller.value

    @property
    def formatted_value(self):
        """Committed value as the change callback would see it."""
        return self._controller.format(self._controller.value)

    @property
    def phase(self) -> SelectionPhase:
        return self._machine.phase

    @property
    def hover_preview(self) -> DateRange | None:
        return self._machine.hover_preview

    @property
    def grid(self) -> list[date]:
        return generate_calendar_days(self.display_month, self.locale.week_starts_on)

    @property
    def weekday_labels(self) -> list[str]:
        return weekday_labels(self.locale)

    @property
    def presets(self) -> list[PresetRange]:
        return get_preset_ranges()

    @property
    def active_preset(self) -> PresetRange | None:
        if self.mode is not SelectionMode.RANGE:
            return None
        return matching_preset(self.value, self._today())

    @property
    def month_options(self) -> list[MonthOption]:
        return get_month_options(self.locale)

    @property
    def year_options(self) -> list[YearOption]:
        return get_year_options(self.display_month.year)

    @property
    def display_text(self) -> str:
        """Committed value rendered for the trigger field."""
        current = self.value
        if current is None:
            return ""
        if isinstance(current, DateRange):
            return format_range_for_display(current, self.input_pattern, locale=self.locale)
        return format_date_for_display(current, self.input_pattern, self.locale)

    def is_disabled(self, d: CalendarDate) -> bool:
        return self._machine.is_disabled(d)

    def day_state(self, d: CalendarDate) -> DayState:
        return self._machine.day_state(d, self.display_month, self._today())

    def grid_states(self) -> list[tuple[date, DayState]]:
        """Every cell of the displayed month with its state."""
        return [(d, self.day_state(d)) for d in self.grid]

    # =========================================================================
    # EVENTS FROM THE RENDERING LAYER
    # =========================================================================

    def on_date_cell_interaction(self, d: CalendarDate) -> bool:
        """A grid cell was clicked. Returns False if the date was rejected."""
        accepted = self._machine.select(self._with_time(d))
        if accepted:
            self._sync_text()
        return accepted

    def on_hover_change(self, d: CalendarDate | None) -> None:
        self._machine.hover(d)

    def on_month_navigate(self, month: CalendarDate) -> None:
        self.display_month = start_of_month(month)

    def next_month(self) -> None:
        self.display_month = add_months(self.display_month, 1)

    def previous_month(self) -> None:
        self.display_month = add_months(self.display_month, -1)

    def set_month(self, month_index: int) -> None:
        """Jump to a zero-based month within the displayed year."""
        if not (0 <= month_index <= 11):
            raise ValueError(f"month_index must be 0-11, got {month_index}")
        self.display_month = self.display_month.replace(month=month_index + 1)

    def set_year(self, year: int) -> None:
        self.display_month = self.display_month.replace(year=year)

    def on_text_input_change(self, text: str, field: str = "start") -> bool:
        """
        Typed date in the start (or end) input.

        Only the raw text changes when the text does not parse, or when the
        parsed date is disabled. Returns True when a value was committed.
        """
        if field not in {"start", "end"}:
            raise ValueError(f"field must be 'start' or 'end', got {field!r}")
        if field == "end" and self.mode is SelectionMode.SINGLE:
            raise SelectionModeError("single mode has no end input")

        if field == "start":
            self.start_text = text
        else:
            self.end_text = text

        parsed = parse_user_input(text, self.input_pattern, self.locale, reference=self._today())
        if parsed is None:
            return False

        if self.mode is SelectionMode.SINGLE:
            accepted = self._machine.select(self._with_time(parsed))
            if accepted:
                self.display_month = start_of_month(parsed)
        else:
            current = self.value
            if current is None:
                proposed = DateRange.single_day(parsed)
            elif field == "start":
                proposed = DateRange(start=parsed, end=current.end)
            else:
                proposed = DateRange(start=current.start, end=parsed)
            accepted = self._machine.commit_range(proposed)

        if accepted:
            self._sync_text()
        return accepted

    def on_time_input_change(self, text: str) -> TimeValue | None:
        """
        Typed time. The error flag is raised only once the text is long
        enough to be a complete HH:MM and still fails to parse.
        """
        self.time_text = text
        parsed = parse_time_input(text)

        if parsed is None:
            if len(text) >= TIME_INPUT_ERROR_MIN_LENGTH:
                self.time_input_error = True
            return None

        self.time_input_error = False
        self.selected_time = parsed

        current = self.value
        if self.time_picker and self.mode is SelectionMode.SINGLE and current is not None:
            self._machine.select(combine_date_and_time(current, parsed))
        return parsed

    def apply_preset(self, name: str, now: CalendarDate | None = None) -> bool:
        """Commit a preset range and show the month it starts in."""
        preset = find_preset(name)
        range_ = preset.get_value(now if now is not None else self._today())
        accepted = self._machine.commit_range(range_)
        if accepted:
            self.display_month = start_of_month(range_.start)
            self._sync_text()
        return accepted

    def clear(self) -> None:
        self.start_text = ""
        self.end_text = ""
        self.time_text = ""
        self.time_input_error = False
        self._machine.clear()

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _with_time(self, d: CalendarDate) -> CalendarDate:
        if self.time_picker and self.selected_time is not None and self.mode is SelectionMode.SINGLE:
            return combine_date_and_time(d, self.selected_time)
        return d

    def _sync_text(self) -> None:
        """Mirror the committed value into the input texts."""
        current = self.value
        if current is None:
            return
        if isinstance(current, DateRange):
            self.start_text = format_date_for_display(current.start, self.input_pattern, self.locale)
            self.end_text = format_date_for_display(current.end, self.input_pattern, self.locale)
        else:
            self.start_text = format_date_for_display(current, self.input_pattern, self.locale)
            if self.time_picker and self.selected_time is not None:
                self.time_text = format_time(self.selected_time)
