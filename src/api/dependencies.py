"""Shared request helpers for the API routes."""

from fastapi import HTTPException, status

from api.models.responses import ErrorCodes
from core.config import DEFAULT_LOCALE
from models.dates import Locale, get_locale
from services.formatting import tokenize_pattern


def resolve_locale(code: str | None) -> Locale:
    """
    Look up a locale code, falling back to the configured default.

    Raises:
        HTTPException: 400 if the code is unknown
    """
    try:
        return get_locale(code or DEFAULT_LOCALE)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": str(e.args[0]),
                "code": ErrorCodes.UNKNOWN_LOCALE,
                "details": [],
            },
        )


def check_pattern(pattern: str) -> None:
    """
    Reject patterns with unsupported tokens before using them.

    Raises:
        HTTPException: 400 if the pattern cannot be tokenized
    """
    try:
        tokenize_pattern(pattern)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": str(e),
                "code": ErrorCodes.INVALID_PATTERN,
                "details": [],
            },
        )
