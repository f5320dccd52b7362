"""
Logging configuration for the application.

One line per record. Request context attached through ``extra``
(method, path, status code) is appended as ``key=value`` pairs, and
a captured stack is printed under the line.
Never logs secrets, tokens or raw request bodies.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONTEXT_FIELDS = ("method", "path", "status_code")


class ContextFormatter(logging.Formatter):
    """Formatter that renders request context passed via ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if hasattr(record, name)
        ]
        if context:
            line = f"{line} | {' '.join(context)}"
        stack = getattr(record, "stack", None)
        if stack and not record.exc_info:
            line = f"{line}\n{stack.rstrip()}"
        return line


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    # Access lines duplicate what the error middleware already logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
