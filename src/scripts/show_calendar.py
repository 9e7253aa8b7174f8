#!/usr/bin/env python3
"""
Print a month grid with selection and constraint markers.

Replays clicks (or a preset) through the selection engine, then prints the
displayed month and the committed value. Handy for checking week-start
conventions and constraint setups from the terminal.

Usage:
    uv run python src/scripts/show_calendar.py --month 2025-11
    uv run python src/scripts/show_calendar.py --mode range --click 2025-11-10 --click 2025-11-05
    uv run python src/scripts/show_calendar.py --mode range --preset "Last 7 Days" --today 2025-11-18
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DEFAULT_CUSTOM_PATTERN, DEFAULT_LOCALE
from core.constraints import Constraints, DisabledSet
from core.logging import configure_logging
from models.dates import DateRange, SelectionMode, get_locale
from models.formats import output_format_from_config
from services.formatting import parse_user_input
from services.picker import DatePicker

logger = logging.getLogger(__name__)

ISO_DATE = "yyyy-MM-dd"

# variant -> (left, right) marker around the day number
CELL_MARKERS = {
    "disabled": ("~", "~"),
    "rangeStart": ("[", "]"),
    "rangeEnd": ("[", "]"),
    "selected": ("[", "]"),
    "inRange": ("-", "-"),
    "today": ("(", ")"),
    "outsideMonth": (" ", "."),
    "default": (" ", " "),
}
LEGEND = "[d] selected  -d- in range  (d) today  ~d~ disabled  d. other month"


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def parse_iso_date(value: str) -> date:
    """argparse type for YYYY-MM-DD values."""
    parsed = parse_user_input(value, ISO_DATE)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")
    return parsed


def parse_month(value: str) -> date:
    """argparse type for YYYY-MM values."""
    parsed = parse_user_input(value, "yyyy-MM")
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid month '{value}', expected YYYY-MM")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print a date picker month grid")
    parser.add_argument("--month", type=parse_month, help="Month to display (YYYY-MM)")
    parser.add_argument("--mode", choices=[m.value for m in SelectionMode], default=None)
    parser.add_argument("--locale", default=DEFAULT_LOCALE, help="Locale code (en-US, en-GB, ko)")
    parser.add_argument("--click", type=parse_iso_date, action="append", default=[], help="Replay a click")
    parser.add_argument("--preset", help="Apply a preset by key or label (range mode)")
    parser.add_argument("--min", dest="min_date", type=parse_iso_date)
    parser.add_argument("--max", dest="max_date", type=parse_iso_date)
    parser.add_argument("--disable", type=parse_iso_date, action="append", default=[])
    parser.add_argument("--today", type=parse_iso_date, help="Override today's date")
    parser.add_argument("--format", dest="output_format", default="custom", choices=["date", "iso", "custom"])
    parser.add_argument("--pattern", default=DEFAULT_CUSTOM_PATTERN, help="Pattern for the custom format")
    return parser


# =============================================================================
# RENDERING
# =============================================================================


def render_month(picker: DatePicker) -> str:
    """Grid of the picker's displayed month as plain text."""
    month = picker.display_month
    lines = [picker.locale.format_month_year(month.year, month.month)]
    lines.append(" ".join(f"{label[:3]:>4}" for label in picker.weekday_labels))

    row = []
    for day, state in picker.grid_states():
        left, right = CELL_MARKERS[state.variant]
        row.append(f"{left}{day.day:>2}{right}")
        if len(row) == 7:
            lines.append(" ".join(row))
            row = []
    return "\n".join(lines)


def describe_value(picker: DatePicker) -> str:
    formatted = picker.formatted_value
    if formatted is None:
        return "(none)"
    if isinstance(formatted, DateRange):
        return f"{formatted.start} .. {formatted.end}"
    return str(formatted)


# =============================================================================
# MAIN
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        locale = get_locale(args.locale)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 2

    mode = args.mode
    if mode is None:
        mode = "range" if args.preset or len(args.click) > 1 else "single"

    today = args.today or date.today()
    try:
        constraints = Constraints(
            min_date=args.min_date,
            max_date=args.max_date,
            disabled=DisabledSet.of(args.disable) if args.disable else None,
        )
        output_format = output_format_from_config(args.output_format, args.pattern)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    picker = DatePicker(
        mode=mode,
        constraints=constraints,
        output_format=output_format,
        locale=locale,
        today=lambda: today,
    )

    if args.preset:
        if picker.mode is not SelectionMode.RANGE:
            print("Error: presets need --mode range", file=sys.stderr)
            return 2
        try:
            picker.apply_preset(args.preset)
        except KeyError as e:
            print(f"Error: {e.args[0]}", file=sys.stderr)
            return 2

    for clicked in args.click:
        if not picker.on_date_cell_interaction(clicked):
            print(f"Ignored disabled date {clicked}")

    if args.month:
        picker.on_month_navigate(args.month)

    print(render_month(picker))
    print()
    print(LEGEND)
    print(f"Value: {describe_value(picker)}")
    if picker.mode is SelectionMode.RANGE:
        print(f"Phase: {picker.phase.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
