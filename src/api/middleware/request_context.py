"""
Request Context Middleware

Outermost application middleware. Assigns the correlation id and resolves
the principal once so the guards and routes share it.
"""

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from src.api.utils.jwt import bearer_token, principal_from_token

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        request.state.principal = principal_from_token(
            bearer_token(request.headers.get("Authorization"))
        )

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
