"""
Platform Operator Routes - data-integrity health, tenancy readiness and agreement activation.

Authentication is a super_user bearer token. Everything under /api/v1/super/
is exempt from the agreement guard, and operators bypass the tenant status
guard.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel, ConfigDict, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.agreements import ActivateAgreementResponse, ActivateAgreementUseCase
from src.app.use_cases.ops import TenancyReadinessResponse, TenancyReadinessUseCase
from src.app.use_cases.orphans import (
    DetectOrphansResponse,
    DetectOrphansUseCase,
    FixOrphansResponse,
    FixOrphansUseCase,
)
from src.depends import get_unit_of_work, require_platform_operator
from src.domain.entities import Principal

router = APIRouter(prefix="/api/v1/super", tags=["Super Admin"])

MAX_ORPHAN_SAMPLE_LIMIT = 50


class FixOrphansRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dry_run: bool = Field(default=True, alias="dryRun")
    confirm_text: Optional[str] = Field(default=None, alias="confirmText")


@router.get(
    "/health/orphans",
    status_code=status.HTTP_200_OK,
    response_model=DetectOrphansResponse,
)
async def detect_orphans(
    limit: int = Query(
        default=ApplicationConfig.ORPHAN_SAMPLE_LIMIT, ge=0, le=MAX_ORPHAN_SAMPLE_LIMIT
    ),
    principal: Principal = Depends(require_platform_operator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Orphan Report

    Read-only count of rows without a tenant id per tenant-scoped table,
    with sample ids for review.
    """
    use_case = DetectOrphansUseCase(uow)
    result = await use_case.execute(sample_limit=limit)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/tenancy/health",
    status_code=status.HTTP_200_OK,
    response_model=TenancyReadinessResponse,
)
async def tenancy_health(
    request: Request,
    principal: Principal = Depends(require_platform_operator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Tenancy Readiness

    Current enforcement mode, rows missing a tenant id per table, and whether
    strict mode can be enabled.
    """
    mode = request.app.state.tenant_status_guard.mode
    return await TenancyReadinessUseCase(uow).execute(current_mode=mode.value)


@router.post(
    "/health/orphans/fix",
    status_code=status.HTTP_200_OK,
    response_model=FixOrphansResponse,
)
async def fix_orphans(
    body: FixOrphansRequest,
    principal: Principal = Depends(require_platform_operator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Orphan Quarantine Fix

    Dry run by default. Execution requires confirm_text "FIX_ORPHANS".

    Raises:
        - 400 Bad Request: CONFIRMATION_REQUIRED
    """
    use_case = FixOrphansUseCase(uow)
    result = await use_case.execute(
        dry_run=body.dry_run,
        confirm_text=body.confirm_text,
        actor_user_id=principal.user_id,
    )

    if result.is_err():
        error = result.error
        if error.code == "CONFIRMATION_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post(
    "/agreements/{agreement_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=ActivateAgreementResponse,
)
async def activate_agreement(
    agreement_id: UUID,
    request: Request,
    principal: Principal = Depends(require_platform_operator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Activate Agreement

    Retires the other active agreement in the same scope and invalidates the
    agreement cache (one tenant, or everything for a global agreement).

    Raises:
        - 404 Not Found: AGREEMENT_NOT_FOUND
        - 409 Conflict: AGREEMENT_RETIRED
    """
    use_case = ActivateAgreementUseCase(uow)
    result = await use_case.execute(agreement_id, actor_user_id=principal.user_id)

    if result.is_err():
        error = result.error
        if error.code == "AGREEMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "AGREEMENT_RETIRED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    response = result.value
    request.app.state.agreement_guard.invalidate(
        UUID(response.tenant_id) if response.tenant_id else None
    )
    return response
