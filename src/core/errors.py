"""
Exceptions for integration misuse.

Bad user input never raises (parsers return None, disabled dates are
ignored). These are reserved for code that wires the engine up wrongly.
"""


class DatePickerUsageError(RuntimeError):
    """Engine used in a way that indicates an integration bug."""


class SelectionModeError(DatePickerUsageError):
    """Operation does not match the engine's selection mode, or mode changed."""


class OwnershipError(DatePickerUsageError):
    """Attempt to switch between externally controlled and owned value."""
