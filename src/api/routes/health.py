"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from api.models.responses import HealthResponse
from core.config import API_VERSION, DEFAULT_LOCALE

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for monitoring."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        default_locale=DEFAULT_LOCALE,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
