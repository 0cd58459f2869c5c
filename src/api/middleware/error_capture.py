"""
Error Capture Middleware

Turns exceptions that escaped every handler into a 500 envelope and an
error_logs row. Stack traces stay server-side.
"""

import logging

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from src.api.error import error_body
from src.app.services.error_capture import build_error_log, capture_error
from src.app.services.redaction import redact_secrets

logger = logging.getLogger(__name__)


class ErrorCaptureMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", None)
            principal = getattr(request.state, "principal", None)
            logger.error(
                f"Unhandled error on {request.method} {request.url.path}: "
                f"{redact_secrets(str(exc))}",
                extra={
                    "request_id": request_id,
                    "tenant_id": str(principal.tenant_id) if principal and principal.tenant_id else None,
                    "user_id": str(principal.user_id) if principal else None,
                    "path": request.url.path,
                },
            )

            config = request.app.state.config
            error_log = build_error_log(
                request_id=request_id or "unknown",
                method=request.method,
                path=request.url.path,
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message=str(exc) or type(exc).__name__,
                principal=principal,
                exc=exc,
                meta={"query": dict(request.query_params)},
                environment=config.APP_ENV,
            )
            async with request.app.state.uow_scope() as uow:
                await capture_error(uow, error_log)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body(
                    "INTERNAL_ERROR",
                    "Internal server error",
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    request_id,
                ),
            )
