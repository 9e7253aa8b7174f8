"""Calendar grid and preset endpoints."""

from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from api.dependencies import resolve_locale
from api.models.responses import CalendarDay, CalendarResponse, ErrorCodes, PresetResponse
from core.constraints import Constraints, DisabledSet, is_date_disabled
from services.calendar import generate_calendar_days, is_same_month, weekday_labels
from services.presets import get_preset_ranges

router = APIRouter()


@router.get("/calendar/{year}/{month}", response_model=CalendarResponse)
async def get_calendar(
    year: int,
    month: int,
    locale: str | None = None,
    min_date: date | None = None,
    max_date: date | None = None,
    disabled: list[date] = Query(default=[]),
    today: date | None = None,
):
    """
    Month grid with per-day flags.

    Disabled dates are passed as repeated query params:
    /calendar/2025/11?disabled=2025-11-05&disabled=2025-11-06
    """
    if not (1 <= month <= 12) or not (1 <= year <= 9999):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid year or month", "code": ErrorCodes.INVALID_REQUEST, "details": []},
        )

    loc = resolve_locale(locale)
    try:
        constraints = Constraints(
            min_date=min_date,
            max_date=max_date,
            disabled=DisabledSet.of(disabled) if disabled else None,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e), "code": ErrorCodes.INVALID_CONSTRAINTS, "details": []},
        )

    anchor = date(year, month, 1)
    today = today or date.today()
    days = [
        CalendarDay(
            day=d,
            in_month=is_same_month(d, anchor),
            disabled=is_date_disabled(d, constraints),
            today=d == today,
        )
        for d in generate_calendar_days(anchor, loc.week_starts_on)
    ]

    return CalendarResponse(
        year=year,
        month=month,
        locale=loc.code,
        title=loc.format_month_year(year, month),
        weekdays=weekday_labels(loc),
        days=days,
    )


@router.get("/presets", response_model=list[PresetResponse])
async def list_presets(today: date | None = None):
    """Quick ranges computed for `today` (defaults to the server date)."""
    now = today or date.today()
    result = []
    for preset in get_preset_ranges():
        range_ = preset.get_value(now)
        result.append(
            PresetResponse(
                key=preset.key,
                label=preset.label,
                label_ko=preset.label_ko,
                start=range_.start,
                end=range_.end,
            )
        )
    return result
