"""API route modules."""

from .calendar import router as calendar_router
from .health import router as health_router
from .parsing import router as parsing_router

__all__ = ["health_router", "calendar_router", "parsing_router"]
