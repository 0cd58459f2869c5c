"""
Agreement API Routes - caller-facing agreement status and acceptance.

Both routes are exempt from the agreement guard so a blocked user can reach
the accept-terms flow.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.agreements import (
    AcceptAgreementResponse,
    AcceptAgreementUseCase,
    AgreementStatusResponse,
    GetAgreementStatusUseCase,
)
from src.depends import get_current_principal, get_unit_of_work
from src.domain.entities import Principal

router = APIRouter(prefix="/api/v1/me/agreement", tags=["Agreements"])


class AcceptAgreementRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    agreement_id: UUID = Field(alias="agreementId")
    version: int = Field(ge=1)


@router.get("/status", status_code=status.HTTP_200_OK, response_model=AgreementStatusResponse)
async def get_agreement_status(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetAgreementStatusUseCase(uow)
    result = await use_case.execute(principal)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post("/accept", status_code=status.HTTP_200_OK, response_model=AcceptAgreementResponse)
async def accept_agreement(
    body: AcceptAgreementRequest,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept the active agreement at its current version.

    Raises:
        - 400 Bad Request: TENANT_REQUIRED
        - 404 Not Found: AGREEMENT_NOT_FOUND
        - 409 Conflict: VERSION_MISMATCH
    """
    use_case = AcceptAgreementUseCase(uow)
    result = await use_case.execute(
        principal,
        body.agreement_id,
        body.version,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("User-Agent"),
    )

    if result.is_err():
        error = result.error
        if error.code == "TENANT_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "AGREEMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "VERSION_MISMATCH":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
