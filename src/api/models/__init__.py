"""API Pydantic models."""

from .requests import FormatRequest, ParseDateRequest, ParseTimeRequest
from .responses import (
    CalendarDay,
    CalendarResponse,
    ErrorCodes,
    ErrorResponse,
    FormatResponse,
    HealthResponse,
    ParseDateResponse,
    ParseTimeResponse,
    PresetResponse,
)

__all__ = [
    "HealthResponse",
    "CalendarDay",
    "CalendarResponse",
    "PresetResponse",
    "ParseDateResponse",
    "ParseTimeResponse",
    "FormatResponse",
    "ErrorResponse",
    "ErrorCodes",
    "ParseDateRequest",
    "ParseTimeRequest",
    "FormatRequest",
]
