"""
Admin API Routes - Tenant Lifecycle Endpoints

These endpoints are for internal service integrations (billing, support).
Authentication is via Admin API Key, not user JWTs. Every transition drops
the tenant's cached status so the guards see it on the next request.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, Request, status

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    ActivateTenantUseCase,
    RestoreTenantUseCase,
    SuspendTenantUseCase,
    TenantStatusChangeResponse,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


def _raise_for_error(error):
    if error.code == "TENANT_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in ("TENANT_NOT_SUSPENDED", "TENANT_SUSPENDED"):
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


@router.post(
    "/tenants/{tenant_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusChangeResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def suspend_tenant(
    tenant_id: UUID,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Tenant

    Blocks every non-exempt request from the tenant's users.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
    """
    use_case = SuspendTenantUseCase(uow)
    result = await use_case.execute(tenant_id)

    if result.is_err():
        _raise_for_error(result.error)

    request.app.state.tenant_status_guard.invalidate(tenant_id)
    return result.value


@router.post(
    "/tenants/{tenant_id}/restore",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusChangeResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def restore_tenant(
    tenant_id: UUID,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Restore Tenant

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: TENANT_NOT_SUSPENDED
    """
    use_case = RestoreTenantUseCase(uow)
    result = await use_case.execute(tenant_id)

    if result.is_err():
        _raise_for_error(result.error)

    request.app.state.tenant_status_guard.invalidate(tenant_id)
    return result.value


@router.post(
    "/tenants/{tenant_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusChangeResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def activate_tenant(
    tenant_id: UUID,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Activate Tenant (onboarding complete)

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: TENANT_SUSPENDED
    """
    use_case = ActivateTenantUseCase(uow)
    result = await use_case.execute(tenant_id)

    if result.is_err():
        _raise_for_error(result.error)

    request.app.state.tenant_status_guard.invalidate(tenant_id)
    return result.value
