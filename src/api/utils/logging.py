"""
Logging Configuration

Single stdout handler for the service and the CLI jobs. Guard decisions pass
request_id / tenant_id / user_id / path through `extra`; records without them
render "-".
"""

import logging
import sys

CONTEXT_FIELDS = ("request_id", "tenant_id", "user_id", "path")


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field) or getattr(record, field) is None:
                setattr(record, field, "-")
        return True


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure application logging.

    Call once at application or job startup.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [req=%(request_id)s tenant=%(tenant_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
