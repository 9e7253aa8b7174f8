"""
Conversion between date values and their external representations.

Patterns use Unicode / date-fns style tokens:

    y yy yyyy   year (yy = two digits)
    M MM        month number        MMM MMMM  month name (abbr / full)
    d dd        day of month
    E EEE EEEE  weekday name (abbr / full)
    H HH        hour 0-23           h hh      hour 1-12
    m mm        minute              s ss      second
    a           AM/PM marker
    'text'      literal text ('' for a single quote)

Anything else that is not a letter is copied literally.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from functools import lru_cache

from core.config import DEFAULT_DISPLAY_PATTERN, DEFAULT_INPUT_PATTERN, DEFAULT_LOCALE, RANGE_SEPARATOR
from models.dates import CalendarDate, DateRange, Locale, TimeValue, get_locale
from models.formats import CustomFormat, IsoFormat, NativeFormat, OutputFormat

logger = logging.getLogger(__name__)

# ASCII digits only
_TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")

# letter -> allowed token lengths
_SUPPORTED_TOKENS = {
    "y": {1, 2, 3, 4},
    "M": {1, 2, 3, 4},
    "d": {1, 2},
    "E": {1, 2, 3, 4},
    "H": {1, 2},
    "h": {1, 2},
    "m": {1, 2},
    "s": {1, 2},
    "a": {1, 2, 3},
}
_TIME_LETTERS = {"H", "h", "m", "s", "a"}


@dataclass(frozen=True)
class _Token:
    letter: str | None  # None for literal text
    text: str  # the token as written, or the literal text

    @property
    def width(self) -> int:
        return len(self.text)


def _resolve_locale(locale: Locale | None) -> Locale:
    return locale if locale is not None else get_locale(DEFAULT_LOCALE)


# =============================================================================
# PATTERN TOKENIZER
# =============================================================================


@lru_cache(maxsize=128)
def tokenize_pattern(pattern: str) -> tuple[_Token, ...]:
    """
    Split a pattern into field tokens and literal text.

    Raises:
        ValueError: unknown pattern letter, unsupported width or unterminated quote
    """
    tokens: list[_Token] = []
    literal: list[str] = []
    i = 0
    n = len(pattern)

    def flush_literal():
        if literal:
            tokens.append(_Token(None, "".join(literal)))
            literal.clear()

    while i < n:
        ch = pattern[i]

        if ch == "'":
            # '' outside a quoted section is a literal quote
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            j = i + 1
            while True:
                if j >= n:
                    raise ValueError(f"Unterminated quote in pattern {pattern!r}")
                if pattern[j] == "'":
                    if j + 1 < n and pattern[j + 1] == "'":
                        literal.append("'")
                        j += 2
                        continue
                    break
                literal.append(pattern[j])
                j += 1
            i = j + 1
            continue

        if ch.isascii() and ch.isalpha():
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            width = j - i
            allowed = _SUPPORTED_TOKENS.get(ch)
            if allowed is None:
                raise ValueError(f"Unsupported pattern letter '{ch}' in {pattern!r}")
            if width not in allowed:
                raise ValueError(f"Unsupported token '{ch * width}' in {pattern!r}")
            flush_literal()
            tokens.append(_Token(ch, ch * width))
            i = j
            continue

        literal.append(ch)
        i += 1

    flush_literal()
    return tuple(tokens)


def pattern_has_time(pattern: str) -> bool:
    return any(t.letter in _TIME_LETTERS for t in tokenize_pattern(pattern))


# =============================================================================
# FORMATTING
# =============================================================================


def _format_token(token: _Token, value: CalendarDate, locale: Locale) -> str:
    letter, width = token.letter, token.width
    hour = value.hour if isinstance(value, datetime) else 0
    minute = value.minute if isinstance(value, datetime) else 0
    second = value.second if isinstance(value, datetime) else 0

    if letter == "y":
        if width == 2:
            return f"{value.year % 100:02d}"
        return str(value.year).zfill(width)
    if letter == "M":
        if width == 1:
            return str(value.month)
        if width == 2:
            return f"{value.month:02d}"
        if width == 3:
            return locale.month_abbr[value.month - 1]
        return locale.month_names[value.month - 1]
    if letter == "d":
        return str(value.day).zfill(width)
    if letter == "E":
        if width == 4:
            return locale.weekday_names[value.weekday()]
        return locale.weekday_abbr[value.weekday()]
    if letter == "H":
        return str(hour).zfill(width)
    if letter == "h":
        return str(hour % 12 or 12).zfill(width)
    if letter == "m":
        return str(minute).zfill(width)
    if letter == "s":
        return str(second).zfill(width)
    if letter == "a":
        return locale.am_pm[0 if hour < 12 else 1]
    raise ValueError(f"Unsupported token {token.text!r}")


def format_pattern(value: CalendarDate, pattern: str, locale: Locale | None = None) -> str:
    """
    Render a date through a pattern.

    Example:
        format_pattern(date(2024, 1, 15), "yyyy/MM/dd")  # "2024/01/15"
        format_pattern(date(2024, 1, 15), "MMMM d, yyyy")  # "January 15, 2024"
    """
    loc = _resolve_locale(locale)
    parts = []
    for token in tokenize_pattern(pattern):
        if token.letter is None:
            parts.append(token.text)
        else:
            parts.append(_format_token(token, value, loc))
    return "".join(parts)


def to_iso_timestamp(value: CalendarDate) -> str:
    """
    Canonical UTC timestamp with millisecond precision.

    Plain dates are taken as midnight; naive datetimes are taken as UTC.
    """
    if not isinstance(value, datetime):
        moment = datetime.combine(value, time.min, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        moment = value.replace(tzinfo=timezone.utc)
    else:
        moment = value.astimezone(timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{moment.microsecond // 1000:03d}Z"


def format_date_output(value: CalendarDate, output_format: OutputFormat, locale: Locale | None = None):
    """
    Convert a date to the representation handed to change callbacks.

    Returns the date itself for NativeFormat, a string otherwise.
    """
    if isinstance(output_format, NativeFormat):
        return value
    if isinstance(output_format, IsoFormat):
        return to_iso_timestamp(value)
    if isinstance(output_format, CustomFormat):
        return format_pattern(value, output_format.pattern, locale)
    raise TypeError(f"Unknown output format: {output_format!r}")


def format_range_output(range_: DateRange, output_format: OutputFormat, locale: Locale | None = None) -> DateRange:
    """
    Apply format_date_output to both ends of a range.

    Under IsoFormat and CustomFormat the returned range holds strings. It is
    a carrier for the two formatted endpoints only; days, contains and
    is_ordered are meaningful on raw ranges alone.
    """
    return DateRange(
        start=format_date_output(range_.start, output_format, locale),
        end=format_date_output(range_.end, output_format, locale),
    )


def format_date_for_display(
    value: CalendarDate, pattern: str = DEFAULT_DISPLAY_PATTERN, locale: Locale | None = None
) -> str:
    return format_pattern(value, pattern, locale)


def format_range_for_display(
    range_: DateRange,
    pattern: str = DEFAULT_DISPLAY_PATTERN,
    separator: str = RANGE_SEPARATOR,
    locale: Locale | None = None,
) -> str:
    """E.g. '2024-01-01 - 2024-01-31'."""
    start = format_pattern(range_.start, pattern, locale)
    end = format_pattern(range_.end, pattern, locale)
    return f"{start}{separator}{end}"


# =============================================================================
# PARSING
# =============================================================================


def _names_group(names) -> str:
    # Longest first so "May" does not shadow a longer name sharing its prefix
    ordered = sorted(set(names), key=len, reverse=True)
    return "(?i:" + "|".join(re.escape(n) for n in ordered) + ")"


def _token_regex(token: _Token, locale: Locale) -> str:
    letter, width = token.letter, token.width
    if letter == "y":
        if width == 1:
            return r"([0-9]{1,4})"
        if width == 3:
            # yyy pads to three digits but prints four-digit years in full
            return r"([0-9]{3,4})"
        return rf"([0-9]{{{width}}})"
    if letter == "M" and width >= 3:
        names = locale.month_abbr if width == 3 else locale.month_names
        return f"({_names_group(names)})"
    if letter == "E":
        names = locale.weekday_names if width == 4 else locale.weekday_abbr
        return f"({_names_group(names)})"
    if letter == "a":
        return f"({_names_group(locale.am_pm)})"
    # M, d, H, h, m, s
    if width == 1:
        return r"([0-9]{1,2})"
    return r"([0-9]{2})"


@lru_cache(maxsize=128)
def _compile_parser(pattern: str, locale: Locale) -> tuple[re.Pattern, tuple[_Token, ...]]:
    tokens = tokenize_pattern(pattern)
    fields = []
    regex = []
    for token in tokens:
        if token.letter is None:
            regex.append(re.escape(token.text))
        else:
            regex.append(_token_regex(token, locale))
            fields.append(token)
    return re.compile("".join(regex)), tuple(fields)


def _index_of(name: str, names) -> int:
    folded = name.casefold()
    for i, candidate in enumerate(names):
        if candidate.casefold() == folded:
            return i
    raise ValueError(name)


def _resolve_two_digit_year(yy: int, reference_year: int) -> int:
    """Pick the year ending in yy that is closest to the reference year."""
    century = reference_year - reference_year % 100
    candidates = (century - 100 + yy, century + yy, century + 100 + yy)
    return min(candidates, key=lambda y: abs(y - reference_year))


def parse_user_input(
    text: str,
    pattern: str = DEFAULT_INPUT_PATTERN,
    locale: Locale | None = None,
    reference: CalendarDate | None = None,
) -> CalendarDate | None:
    """
    Parse typed text against a pattern.

    Returns a date (or a datetime when the pattern carries time fields), or
    None when the text does not match the pattern or is not a real calendar
    date. Never raises for bad text.

    Fields missing from the pattern come from the reference date (default
    today) for units above the most significant parsed unit, and from the
    start of the unit below it.

    Example:
        parse_user_input("2024/01/15")  # date(2024, 1, 15)
        parse_user_input("2024-13-01", "yyyy-MM-dd")  # None
    """
    if not isinstance(text, str) or not text:
        return None

    loc = _resolve_locale(locale)
    regex, fields = _compile_parser(pattern, loc)
    match = regex.fullmatch(text)
    if not match:
        logger.debug("Input %r does not match pattern %r", text, pattern)
        return None

    ref = reference if reference is not None else date.today()
    parsed: dict[str, int] = {}
    weekday = None
    meridiem = None

    try:
        for token, raw in zip(fields, match.groups()):
            letter, width = token.letter, token.width
            if letter == "y":
                year = int(raw)
                parsed["year"] = _resolve_two_digit_year(year, ref.year) if width == 2 else year
            elif letter == "M":
                if width >= 3:
                    names = loc.month_abbr if width == 3 else loc.month_names
                    parsed["month"] = _index_of(raw, names) + 1
                else:
                    parsed["month"] = int(raw)
            elif letter == "d":
                parsed["day"] = int(raw)
            elif letter == "E":
                names = loc.weekday_names if width == 4 else loc.weekday_abbr
                weekday = _index_of(raw, names)
            elif letter == "H":
                parsed["hour"] = int(raw)
            elif letter == "h":
                hour12 = int(raw)
                if not (1 <= hour12 <= 12):
                    return None
                parsed["hour12"] = hour12
            elif letter == "m":
                parsed["minute"] = int(raw)
            elif letter == "s":
                parsed["second"] = int(raw)
            elif letter == "a":
                meridiem = _index_of(raw, loc.am_pm)
    except ValueError:
        return None

    if "hour12" in parsed:
        hour12 = parsed.pop("hour12")
        if meridiem is None:
            parsed.setdefault("hour", hour12)
        else:
            parsed.setdefault("hour", hour12 % 12 + (12 if meridiem == 1 else 0))

    # Units above the most significant parsed unit come from the reference
    units = ("year", "month", "day")
    ref_values = {"year": ref.year, "month": ref.month, "day": ref.day}
    start_values = {"year": ref.year, "month": 1, "day": 1}
    highest = next((i for i, unit in enumerate(units) if unit in parsed), len(units))
    resolved = {}
    for i, unit in enumerate(units):
        if unit in parsed:
            resolved[unit] = parsed[unit]
        elif i < highest:
            resolved[unit] = ref_values[unit]
        else:
            resolved[unit] = start_values[unit]

    try:
        result = date(resolved["year"], resolved["month"], resolved["day"])
        if weekday is not None and result.weekday() != weekday:
            logger.debug("Weekday in %r does not match %s", text, result)
            return None
        if not pattern_has_time(pattern):
            return result
        return datetime.combine(
            result,
            time(parsed.get("hour", 0), parsed.get("minute", 0), parsed.get("second", 0)),
        )
    except ValueError:
        logger.debug("Input %r is not a valid calendar date", text)
        return None


def parse_time_input(text: str) -> TimeValue | None:
    """
    Parse 'H:MM' or 'HH:MM'. Returns None when hours or minutes are out of range.

    Example:
        parse_time_input("9:05")   # TimeValue(9, 5)
        parse_time_input("24:00")  # None
    """
    if not isinstance(text, str):
        return None
    match = _TIME_RE.match(text.strip())
    if not match:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return TimeValue(hours=hours, minutes=minutes)


def format_time(value: TimeValue) -> str:
    """'HH:MM', zero-padded."""
    return f"{value.hours:02d}:{value.minutes:02d}"


def combine_date_and_time(value: CalendarDate, time_value: TimeValue) -> datetime:
    """Set hour and minute on a date; everything else is kept."""
    if isinstance(value, datetime):
        return value.replace(hour=time_value.hours, minute=time_value.minutes)
    return datetime.combine(value, time(time_value.hours, time_value.minutes))
