"""Tests for date/time formatting and parsing."""

from datetime import date, datetime, timedelta, timezone

import pytest

from models.dates import EN_US, KO, DateRange, TimeValue
from models.formats import ISO, NATIVE, CustomFormat, output_format_from_config
from services.formatting import (
    combine_date_and_time,
    format_date_for_display,
    format_date_output,
    format_pattern,
    format_range_for_display,
    format_range_output,
    format_time,
    parse_time_input,
    parse_user_input,
    tokenize_pattern,
    to_iso_timestamp,
)

REFERENCE = date(2025, 11, 18)


# =============================================================================
# TIME INPUT
# =============================================================================


def test_parse_time_boundaries():
    assert parse_time_input("23:59") == TimeValue(23, 59)
    assert parse_time_input("00:00") == TimeValue(0, 0)
    assert parse_time_input("24:00") is None
    assert parse_time_input("12:60") is None


@pytest.mark.parametrize(
    "text",
    [
        "", "9", "9:5", "123:00", "ab:cd", "12-30", "12:300", None,
        "\u0661\u0662:\u0663\u0660",  # Arabic-Indic digits
        "\uff11\uff12:\uff13\uff10",  # full-width digits
    ],
)
def test_parse_time_rejects_malformed(text):
    assert parse_time_input(text) is None


def test_parse_time_single_digit_hour():
    assert parse_time_input("9:05") == TimeValue(9, 5)


def test_format_time_pads():
    assert format_time(TimeValue(9, 5)) == "09:05"
    assert format_time(TimeValue(14, 30)) == "14:30"


def test_time_value_validates():
    with pytest.raises(ValueError):
        TimeValue(24, 0)
    with pytest.raises(ValueError):
        TimeValue(0, 60)


def test_combine_date_and_time():
    assert combine_date_and_time(date(2024, 1, 15), TimeValue(14, 30)) == datetime(2024, 1, 15, 14, 30)

    tz = timezone(timedelta(hours=9))
    original = datetime(2024, 1, 15, 8, 0, 45, tzinfo=tz)
    combined = combine_date_and_time(original, TimeValue(14, 30))
    assert combined == datetime(2024, 1, 15, 14, 30, 45, tzinfo=tz)


# =============================================================================
# PATTERN FORMATTING
# =============================================================================


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("yyyy/MM/dd", "2024/01/05"),
        ("yyyy-M-d", "2024-1-5"),
        ("dd.MM.yy", "05.01.24"),
        ("MMMM d, yyyy", "January 5, 2024"),
        ("EEE, d MMM yyyy", "Fri, 5 Jan 2024"),
        ("EEEE", "Friday"),
        ("yyyy'T'HH:mm", "2024T00:00"),
        ("'Today is' EEEE", "Today is Friday"),
        ("h 'o''clock'", "12 o'clock"),
    ],
)
def test_format_pattern(pattern, expected):
    assert format_pattern(date(2024, 1, 5), pattern, EN_US) == expected


def test_format_pattern_with_time():
    value = datetime(2024, 1, 15, 14, 5, 9)
    assert format_pattern(value, "yyyy-MM-dd HH:mm:ss", EN_US) == "2024-01-15 14:05:09"
    assert format_pattern(value, "hh:mm a", EN_US) == "02:05 PM"
    assert format_pattern(value, "a h시 m분", KO) == "오후 2시 5분"


def test_format_pattern_korean_literals():
    assert format_pattern(date(2024, 1, 15), "yyyy년 M월 d일", KO) == "2024년 1월 15일"


@pytest.mark.parametrize("pattern", ["yyyy-QQ", "dddd", "'unterminated"])
def test_bad_patterns_raise(pattern):
    with pytest.raises(ValueError):
        tokenize_pattern(pattern)


# =============================================================================
# OUTPUT FORMATS
# =============================================================================


def test_native_output_is_unchanged():
    value = date(2024, 1, 15)
    assert format_date_output(value, NATIVE) is value


def test_iso_output():
    assert format_date_output(date(2024, 1, 15), ISO) == "2024-01-15T00:00:00.000Z"
    assert to_iso_timestamp(datetime(2024, 1, 15, 9, 30, 0, 123456)) == "2024-01-15T09:30:00.123Z"

    seoul = timezone(timedelta(hours=9))
    assert to_iso_timestamp(datetime(2024, 1, 15, 9, 30, tzinfo=seoul)) == "2024-01-15T00:30:00.000Z"


def test_custom_output():
    assert format_date_output(date(2024, 1, 15), CustomFormat("yyyy년 M월 d일"), KO) == "2024년 1월 15일"


def test_range_output_formats_both_ends():
    formatted = format_range_output(DateRange(date(2024, 1, 1), date(2024, 1, 31)), ISO)
    assert formatted == DateRange("2024-01-01T00:00:00.000Z", "2024-01-31T00:00:00.000Z")


def test_output_format_from_config():
    assert output_format_from_config("date") is NATIVE
    assert output_format_from_config("Native") is NATIVE
    assert output_format_from_config("iso") is ISO
    assert output_format_from_config("custom", "dd/MM/yyyy") == CustomFormat("dd/MM/yyyy")
    with pytest.raises(ValueError):
        output_format_from_config("custom")
    with pytest.raises(ValueError):
        output_format_from_config("xml")


def test_display_helpers():
    range_ = DateRange(date(2024, 1, 1), date(2024, 1, 31))
    assert format_date_for_display(date(2024, 1, 15), locale=EN_US) == "2024-01-15"
    assert format_range_for_display(range_, locale=EN_US) == "2024-01-01 - 2024-01-31"
    assert format_range_for_display(range_, "M/d", " ~ ", EN_US) == "1/1 ~ 1/31"


# =============================================================================
# USER INPUT PARSING
# =============================================================================


def test_parse_default_pattern():
    assert parse_user_input("2024/01/15", locale=EN_US) == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text",
    [
        "2024/13/01",  # month 13
        "2024/02/30",  # no such day
        "2023/02/29",  # not a leap year
        "2024-01-15",  # wrong separators
        "2024/1/15",  # MM needs two digits
        "2024/01/15 ",  # trailing text
        "",
        "garbage",
        "\uff12\uff10\uff12\uff14/\uff10\uff11/\uff11\uff15",  # full-width digits
        "\u0662\u0660\u0662\u0664/\u0660\u0661/\u0661\u0665",  # Arabic-Indic digits
    ],
)
def test_parse_invalid_returns_none(text):
    assert parse_user_input(text, "yyyy/MM/dd", EN_US, reference=REFERENCE) is None


def test_parse_never_raises_on_non_string():
    assert parse_user_input(None, "yyyy/MM/dd", EN_US) is None


def test_parse_loose_numeric_tokens():
    assert parse_user_input("2024/1/5", "yyyy/M/d", EN_US) == date(2024, 1, 5)
    assert parse_user_input("2024/01/05", "yyyy/M/d", EN_US) == date(2024, 1, 5)


def test_parse_month_names_case_insensitive():
    assert parse_user_input("jan 15, 2024", "MMM d, yyyy", EN_US) == date(2024, 1, 15)
    assert parse_user_input("MAY 1, 2024", "MMMM d, yyyy", EN_US) == date(2024, 5, 1)


def test_parse_weekday_must_match():
    assert parse_user_input("Mon 2024-01-15", "EEE yyyy-MM-dd", EN_US) == date(2024, 1, 15)
    assert parse_user_input("Tue 2024-01-15", "EEE yyyy-MM-dd", EN_US) is None


def test_parse_two_digit_year_uses_closest_century():
    assert parse_user_input("24/01/15", "yy/MM/dd", EN_US, reference=REFERENCE) == date(2024, 1, 15)
    assert parse_user_input("99/01/01", "yy/MM/dd", EN_US, reference=REFERENCE) == date(1999, 1, 1)


def test_parse_missing_fields_from_reference():
    assert parse_user_input("03/04", "MM/dd", EN_US, reference=REFERENCE) == date(2025, 3, 4)
    assert parse_user_input("2024-07", "yyyy-MM", EN_US, reference=REFERENCE) == date(2024, 7, 1)
    assert parse_user_input("2024", "yyyy", EN_US, reference=REFERENCE) == date(2024, 1, 1)


def test_parse_with_time_fields():
    pattern = "yyyy/MM/dd HH:mm"
    assert parse_user_input("2024/01/15 14:30", pattern, EN_US) == datetime(2024, 1, 15, 14, 30)
    assert parse_user_input("2024/01/15 25:00", pattern, EN_US) is None
    assert parse_user_input("2024/01/15 02:30 PM", "yyyy/MM/dd hh:mm a", EN_US) == datetime(2024, 1, 15, 14, 30)
    assert parse_user_input("2024/01/15 12:05 AM", "yyyy/MM/dd hh:mm a", EN_US) == datetime(2024, 1, 15, 0, 5)


def test_parse_korean_pattern():
    assert parse_user_input("2024년 12월 3일", "yyyy년 M월 d일", KO) == date(2024, 12, 3)


@pytest.mark.parametrize(
    "pattern, locale",
    [
        ("yyyy/MM/dd", EN_US),
        ("dd.MM.yyyy", EN_US),
        ("MMMM d, yyyy", EN_US),
        ("EEE, d MMM yyyy", EN_US),
        ("yyyy년 M월 d일", KO),
        ("yyyyMMdd", EN_US),
        ("yyy-MM-dd", EN_US),
    ],
)
def test_custom_format_round_trip(fake, pattern, locale):
    for _ in range(200):
        value = fake.date_between(start_date=date(1900, 1, 1), end_date=date(2100, 12, 31))
        text = format_date_output(value, CustomFormat(pattern), locale)
        assert parse_user_input(text, pattern, locale) == value, text


def test_three_letter_year_keeps_four_digit_years():
    assert format_pattern(date(2024, 1, 15), "yyy-MM-dd", EN_US) == "2024-01-15"
    assert parse_user_input("2024-01-15", "yyy-MM-dd", EN_US) == date(2024, 1, 15)
    assert parse_user_input("24-01-15", "yyy-MM-dd", EN_US) is None
