"""
Output format variants.

The value handed to change callbacks is one of: the native date object,
an ISO 8601 UTC timestamp string, or a string rendered through a custom
pattern. Dispatch on the variant happens once, in
`services.formatting.format_date_output`.
"""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class NativeFormat:
    """Pass the date value through unchanged."""

    name = "date"


@dataclass(frozen=True)
class IsoFormat:
    """Canonical UTC timestamp, e.g. 2024-01-15T09:30:00.000Z."""

    name = "iso"


@dataclass(frozen=True)
class CustomFormat:
    """Render through a pattern such as 'yyyy/MM/dd'."""

    pattern: str
    name = "custom"

    def __post_init__(self):
        if not self.pattern:
            raise ValueError("custom output format needs a non-empty pattern")


OutputFormat: TypeAlias = NativeFormat | IsoFormat | CustomFormat

NATIVE = NativeFormat()
ISO = IsoFormat()


def output_format_from_config(name: str, pattern: str | None = None) -> OutputFormat:
    """
    Build an OutputFormat from configuration strings.

    Accepts "date"/"native", "iso" and "custom" (with pattern).
    """
    key = (name or "date").strip().lower()
    if key in {"date", "native"}:
        return NATIVE
    if key == "iso":
        return ISO
    if key == "custom":
        return CustomFormat(pattern or "")
    raise ValueError(f"Unknown output format '{name}' (expected date, iso or custom)")
