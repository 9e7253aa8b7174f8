"""Per-request access log for the API."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger("api.requests")


@dataclass
class RequestLog:
    """Captured request/response data for one API call."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    query: str = ""
    client_ip: str | None = None
    status_code: int = 0
    processing_time_ms: int = 0

    @property
    def failed(self) -> bool:
        return self.status_code >= 400


def log_request(log: RequestLog) -> None:
    """Emit one line per request; client and server errors at WARNING."""
    level = logging.WARNING if log.failed else logging.INFO
    target = f"{log.endpoint}?{log.query}" if log.query else log.endpoint
    logger.log(
        level,
        "%s %s -> %d in %dms (client %s, id %s)",
        log.method,
        target,
        log.status_code,
        log.processing_time_ms,
        log.client_ip or "-",
        log.request_id,
    )
