"""Text parsing and output formatting endpoints."""

from fastapi import APIRouter

from api.dependencies import check_pattern, resolve_locale
from api.models.requests import FormatRequest, ParseDateRequest, ParseTimeRequest
from api.models.responses import FormatResponse, ParseDateResponse, ParseTimeResponse
from models.formats import output_format_from_config
from services.formatting import (
    format_date_output,
    format_time,
    parse_time_input,
    parse_user_input,
)

router = APIRouter()


@router.post("/parse/date", response_model=ParseDateResponse)
async def parse_date(request: ParseDateRequest):
    """Parse typed text. Text that does not parse is not an error: valid=False."""
    check_pattern(request.pattern)
    loc = resolve_locale(request.locale)

    parsed = parse_user_input(request.text, request.pattern, loc)
    if parsed is None:
        return ParseDateResponse(valid=False)
    return ParseDateResponse(valid=True, value=parsed.isoformat())


@router.post("/parse/time", response_model=ParseTimeResponse)
async def parse_time(request: ParseTimeRequest):
    parsed = parse_time_input(request.text)
    if parsed is None:
        return ParseTimeResponse(valid=False)
    return ParseTimeResponse(
        valid=True, hours=parsed.hours, minutes=parsed.minutes, text=format_time(parsed)
    )


@router.post("/format", response_model=FormatResponse)
async def format_value(request: FormatRequest):
    """Render a value the way a change callback would receive it."""
    if request.pattern:
        check_pattern(request.pattern)
    loc = resolve_locale(request.locale)

    output_format = output_format_from_config(request.format, request.pattern)
    formatted = format_date_output(request.value, output_format, loc)
    if not isinstance(formatted, str):
        formatted = formatted.isoformat()
    return FormatResponse(value=formatted)
