"""
Agreement Middleware

Runs the agreement guard and renders rejections as 451 with a redirect hint.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from fastapi.responses import JSONResponse

from src.api.error import error_body

HTTP_451_UNAVAILABLE_FOR_LEGAL_REASONS = 451


class AgreementMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        guard = request.app.state.agreement_guard
        request_id = getattr(request.state, "request_id", None)

        async with request.app.state.uow_scope() as uow:
            result = await guard.check(
                uow,
                getattr(request.state, "principal", None),
                request.url.path,
                request_id=request_id,
            )

        if result.is_err():
            error = result.error
            return JSONResponse(
                status_code=HTTP_451_UNAVAILABLE_FOR_LEGAL_REASONS,
                content=error_body(
                    error.code,
                    error.message,
                    HTTP_451_UNAVAILABLE_FOR_LEGAL_REASONS,
                    request_id,
                    error.details,
                ),
            )

        return await call_next(request)
