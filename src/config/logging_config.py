"""
Logging configuration.

Console logging for every environment: a plain format in development and
structured JSON elsewhere. Each record is stamped with the ID of the request
it was emitted for, so log lines of one request can be correlated.
"""

import json
import logging
import sys

from src.config.config import Config

logger = logging.getLogger(__name__)

NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "urllib3")


class RequestIdFilter(logging.Filter):
    """
    Logging filter that adds the current request ID to log records.

    Returns True for every record; it only enriches.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        from src.middleware.request_id_middleware import request_id_var

        request_id = request_id_var.get()
        if request_id:
            record.request_id = request_id
        return True


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as JSON with the request ID and exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "request_id"):
            log_data["request_id"] = record.request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(level: str | None = None) -> None:
    """
    Configure application logging.

    Sets up:
    - Console handler on stdout
    - Request ID filter for correlation
    - Plain format in development, JSON formatting otherwise
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level or Config.LOG_LEVEL)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.addFilter(RequestIdFilter())

    if Config.IS_DEVELOPMENT:
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    else:
        console_handler.setFormatter(StructuredFormatter())

    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Console logging configured (environment: {Config.APP_ENV})")
