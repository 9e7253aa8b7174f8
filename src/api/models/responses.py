"""Pydantic response models for API endpoints."""

from datetime import date

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy"
    version: str
    default_locale: str
    timestamp: str  # ISO 8601 UTC


class CalendarDay(BaseModel):
    """One grid cell."""

    day: date
    in_month: bool
    disabled: bool
    today: bool


class CalendarResponse(BaseModel):
    """Month grid in display order."""

    year: int
    month: int
    locale: str
    title: str
    weekdays: list[str]
    days: list[CalendarDay]


class PresetResponse(BaseModel):
    key: str
    label: str
    label_ko: str
    start: date
    end: date


class ParseDateResponse(BaseModel):
    valid: bool
    value: str | None = None  # ISO date or datetime, None when invalid


class ParseTimeResponse(BaseModel):
    valid: bool
    hours: int | None = None
    minutes: int | None = None
    text: str | None = None  # normalized HH:MM


class FormatResponse(BaseModel):
    value: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_PATTERN = "INVALID_PATTERN"
    UNKNOWN_LOCALE = "UNKNOWN_LOCALE"
    INVALID_CONSTRAINTS = "INVALID_CONSTRAINTS"
    INTERNAL_ERROR = "INTERNAL_ERROR"
