"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import calendar_router, health_router, parsing_router
from core.config import API_DEBUG, API_VERSION, DEFAULT_LOCALE
from core.errors import DatePickerUsageError
from core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    configure_logging()
    logger.info("Date picker API %s starting (default locale %s)", API_VERSION, DEFAULT_LOCALE)

    yield


app = FastAPI(
    title="Date Picker Engine API",
    description="Calendar grids, quick ranges and date/time parsing for date picker widgets",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Time every request and write it to the access log."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        query=request.url.query,
        client_ip=request.client.host if request.client else None,
    )

    response = await call_next(request)

    request_log.status_code = response.status_code
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)
    response.headers["X-Request-ID"] = request_log.request_id
    log_request(request_log)
    return response


@app.exception_handler(DatePickerUsageError)
async def usage_error_handler(request: Request, exc: DatePickerUsageError):
    """Engine misuse reached through a request is a bad request, not a crash."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=str(exc),
            code=ErrorCodes.INVALID_REQUEST,
            details=[],
        ).model_dump(),
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(calendar_router)
app.include_router(parsing_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
