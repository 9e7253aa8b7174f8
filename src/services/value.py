"""
Single read/write contract over an externally controlled or engine-owned value.
"""

import logging

from core.errors import OwnershipError
from models.dates import DateRange, Locale, SelectionMode
from models.formats import NATIVE, OutputFormat
from models.ownership import External, Owned, RawValue, ValueOwnership
from services.formatting import format_date_output, format_range_output

logger = logging.getLogger(__name__)


class ValueController:
    """
    Holds (or defers to the caller for) the committed selection.

    The raw value is always a date, a DateRange or None. Formatting is
    applied only on the way out to the caller's callback.
    """

    def __init__(
        self,
        mode: SelectionMode,
        ownership: ValueOwnership | None = None,
        output_format: OutputFormat = NATIVE,
        locale: Locale | None = None,
    ):
        if ownership is None:
            ownership = Owned()
        if not isinstance(ownership, (External, Owned)):
            raise TypeError(f"ownership must be External or Owned, got {type(ownership).__name__}")

        self._mode = SelectionMode(mode)
        self._ownership = ownership
        self._is_external = isinstance(ownership, External)
        self._value: RawValue = None if self._is_external else ownership.initial
        self.output_format = output_format
        self.locale = locale

        if not self._is_external:
            self._check_shape(self._value)

    # -------------------------------------------------------------------------
    # Read-only identity
    # -------------------------------------------------------------------------

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @property
    def ownership(self) -> ValueOwnership:
        return self._ownership

    @ownership.setter
    def ownership(self, _value):
        raise OwnershipError("Value ownership is fixed at construction and cannot be switched")

    def rebind(self, ownership: ValueOwnership) -> None:
        """
        Adopt a new ownership object of the same kind.

        External takes the new getter and setter. Owned keeps the held value
        and takes the new observer; its initial is ignored.

        Raises:
            OwnershipError: switching between External and Owned
        """
        if type(ownership) is not type(self._ownership):
            raise OwnershipError(
                f"Cannot switch value ownership from {type(self._ownership).__name__} "
                f"to {type(ownership).__name__}"
            )
        self._ownership = ownership

    @property
    def is_external(self) -> bool:
        return self._is_external

    # -------------------------------------------------------------------------
    # Value
    # -------------------------------------------------------------------------

    @property
    def value(self) -> RawValue:
        """Current committed raw value (from the getter when externally controlled)."""
        if self._is_external:
            return self._ownership.get()
        return self._value

    def commit(self, raw: RawValue) -> None:
        """Store (if owned) and emit the formatted value."""
        self._check_shape(raw)

        if not self._is_external:
            self._value = raw

        formatted = self.format(raw)
        logger.debug("Commit %s value %r -> %r", self._mode.value, raw, formatted)

        if self._is_external:
            self._ownership.set(formatted)
        elif self._ownership.on_change is not None:
            self._ownership.on_change(formatted)

    def format(self, raw: RawValue):
        """Caller-visible form of a raw value under the current output format."""
        if raw is None:
            return None
        if isinstance(raw, DateRange):
            return format_range_output(raw, self.output_format, self.locale)
        return format_date_output(raw, self.output_format, self.locale)

    def _check_shape(self, raw: RawValue) -> None:
        if raw is None:
            return
        if self._mode is SelectionMode.RANGE and not isinstance(raw, DateRange):
            raise TypeError(f"range mode expects a DateRange, got {type(raw).__name__}")
        if self._mode is SelectionMode.SINGLE and isinstance(raw, DateRange):
            raise TypeError("single mode expects a date, got a DateRange")
