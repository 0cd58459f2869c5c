"""
Error capture: decides which failures are persisted and writes them to
error_logs with secrets redacted.

Failures inside capture are logged and dropped.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from src.app.services.redaction import redact_secrets, redact_secrets_from_object
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ErrorLog, Principal

logger = logging.getLogger(__name__)

CAPTURED_CLIENT_STATUSES = frozenset({403, 404, 429})


def should_capture(status: int) -> bool:
    return status >= 500 or status in CAPTURED_CLIENT_STATUSES


def build_error_log(
    request_id: str,
    method: str,
    path: str,
    status: int,
    message: str,
    principal: Optional[Principal] = None,
    exc: Optional[BaseException] = None,
    meta: Optional[Dict[str, Any]] = None,
    environment: str = "development",
) -> ErrorLog:
    stack = None
    error_name = None
    db_code = None
    db_constraint = None
    if exc is not None:
        error_name = type(exc).__name__
        stack = redact_secrets("".join(traceback.format_exception(exc)))
        # DBAPI errors wrapped by SQLAlchemy carry the driver error in .orig
        orig = getattr(exc, "orig", None)
        if orig is not None:
            db_code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
            db_constraint = getattr(orig, "constraint_name", None)

    return ErrorLog(
        request_id=request_id,
        tenant_id=principal.tenant_id if principal else None,
        user_id=principal.user_id if principal else None,
        method=method,
        path=path,
        status=status,
        error_name=error_name,
        message=redact_secrets(message),
        stack=stack,
        db_code=str(db_code) if db_code else None,
        db_constraint=db_constraint,
        meta=redact_secrets_from_object(meta) if meta else None,
        environment=environment,
    )


async def capture_error(uow: UnitOfWork, error_log: ErrorLog) -> bool:
    """
    Persist an error log row.

    Returns:
        True when the row was written, False when capture itself failed
    """
    if not should_capture(error_log.status):
        return False

    try:
        async with uow:
            await uow.error_logs.create(error_log)
            await uow.commit()
    except Exception as exc:
        logger.error(
            f"Failed to capture error log: {redact_secrets(str(exc))}",
            extra={"request_id": error_log.request_id, "path": error_log.path},
        )
        return False

    return True
