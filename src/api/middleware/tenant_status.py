"""
Tenant Status Middleware

Runs the tenant status guard and renders its decision: 403 on rejection,
the soft-mode warning header when the guard allows with a warning.
"""

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

TENANT_STATUS_WARNING_HEADER = "X-Tenant-Status-Warning"


class TenantStatusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        guard = request.app.state.tenant_status_guard
        principal = getattr(request.state, "principal", None)

        async with request.app.state.uow_scope() as uow:
            result = await guard.check(
                uow,
                principal,
                request.url.path,
                request_id=getattr(request.state, "request_id", None),
            )

        if result.is_err():
            error = result.error
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": {"code": error.code, "message": error.message}},
            )

        response = await call_next(request)
        if result.value:
            response.headers[TENANT_STATUS_WARNING_HEADER] = result.value
        return response
