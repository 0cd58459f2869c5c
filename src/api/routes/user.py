from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import LoadContextUseCase
from src.depends import get_current_principal, get_unit_of_work
from src.domain.entities import Principal

router = APIRouter(prefix="/api/v1", tags=["User"])


class UserResponse(BaseModel):
    """User details in response"""
    id: str
    role: str
    is_platform_operator: bool


class TenantContextResponse(BaseModel):
    """Tenant context in response"""
    id: str
    name: str
    slug: str
    status: str


class MeResponse(BaseModel):
    """GET /me response payload"""
    user: UserResponse
    tenant: Optional[TenantContextResponse] = None


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User & Tenant Context

    Tenant-scoped business route: it sits behind both tenant guards.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: TENANT_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = LoadContextUseCase(uow)
    result = await use_case.execute(principal)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
