"""Logging setup shared by the HTTP service and the scripts."""

import logging
import sys

from core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after each record (live output under uvicorn)."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger once.

    Level comes from LOG_LEVEL unless given explicitly. Calling this again
    only adjusts the level, it does not stack handlers.
    """
    level_name = (level or LOG_LEVEL).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(resolved)

    if any(isinstance(h, FlushingStreamHandler) for h in root.handlers):
        return

    handler = FlushingStreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)

    # uvicorn access lines duplicate the request info we already get
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
