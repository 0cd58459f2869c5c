from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.agreement import AgreementMiddleware
from src.api.middleware.error_capture import ErrorCaptureMiddleware
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.tenant_status import TenantStatusMiddleware
from src.app.guards.agreement_guard import AgreementGuard
from src.app.guards.tenant_status_guard import TenantStatusGuard
from src.app.services.error_capture import build_error_log, capture_error, should_capture
from src.app.services.ttl_cache import TTLCache
from src.domain.entities import EnforcementMode
from .error import ClientError, ServerError, error_body

logger = logging.getLogger(__name__)


async def _capture(request: Request, status_code: int, code: str, message: str):
    if not should_capture(status_code):
        return
    config = request.app.state.config
    error_log = build_error_log(
        request_id=getattr(request.state, "request_id", None) or "unknown",
        method=request.method,
        path=request.url.path,
        status=status_code,
        message=message,
        principal=getattr(request.state, "principal", None),
        meta={"code": code},
        environment=config.APP_ENV,
    )
    async with request.app.state.uow_scope() as uow:
        await capture_error(uow, error_log)


async def handle_client_error(request: Request, exc: ClientError):
    error = exc.base_error
    logger.warning(
        f"Client error: {error.code} {error.message}",
        extra={"request_id": getattr(request.state, "request_id", None), "path": request.url.path},
    )
    await _capture(request, exc.status_code, error.code, error.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(
            error.code,
            error.message,
            exc.status_code,
            getattr(request.state, "request_id", None),
            error.details,
        ),
    )


async def handle_server_error(request: Request, exc: ServerError):
    error = exc.base_error
    logger.error(
        f"Server error: {error.code}",
        extra={"request_id": getattr(request.state, "request_id", None), "path": request.url.path},
    )
    await _capture(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, error.code, error.message
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            error.code,
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            getattr(request.state, "request_id", None),
        ),
    )


def parse_enforcement_mode(value: str) -> EnforcementMode:
    try:
        return EnforcementMode(str(value).lower())
    except ValueError:
        logger.warning(f"Unknown TENANCY_ENFORCEMENT {value!r}, using strict")
        return EnforcementMode.strict


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.config.RUN_PARITY_CHECK_ON_STARTUP:
        from src.app.use_cases.ops import ParityCheckUseCase

        async with app.state.uow_scope() as uow:
            report = await ParityCheckUseCase(uow, environment=app.state.config.APP_ENV).execute()
        if not report.passed:
            logger.error(
                f"Parity check found {len(report.critical_issues)} critical issue(s); "
                f"continuing startup"
            )

    if app.state.config.RUN_TENANT_ID_CHECK_ON_STARTUP:
        from src.app.use_cases.ops import log_missing_tenant_ids

        async with app.state.uow_scope() as uow:
            await log_missing_tenant_ids(uow)
    yield


def create_app(ApplicationConfig, uow_scope=None) -> FastAPI:
    app = FastAPI(title="Tenant Guard API", version="0.1.0", lifespan=lifespan)

    mode = parse_enforcement_mode(ApplicationConfig.TENANCY_ENFORCEMENT)
    logger.info(f"Tenancy enforcement mode: {mode.value}")

    if uow_scope is None:
        from src.depends import unit_of_work_scope

        uow_scope = unit_of_work_scope

    app.state.config = ApplicationConfig
    app.state.uow_scope = uow_scope
    app.state.tenant_status_guard = TenantStatusGuard(
        mode, TTLCache(ApplicationConfig.TENANT_STATUS_CACHE_TTL_SECONDS)
    )
    app.state.agreement_guard = AgreementGuard(
        TTLCache(ApplicationConfig.AGREEMENT_CACHE_TTL_SECONDS)
    )

    # Added innermost first: the last middleware added runs first
    app.add_middleware(AgreementMiddleware)
    app.add_middleware(TenantStatusMiddleware)
    app.add_middleware(ErrorCaptureMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id", "X-Tenant-Status-Warning"],
    )

    from src.api.routes import admin, agreements, health_check, super_admin, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(user.router, tags=["User"])
    app.include_router(agreements.router, tags=["Agreements"])
    app.include_router(super_admin.router, tags=["Super Admin"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
