"""
Load Context Use Case

Loads the caller's principal and tenant context for /me.
"""

from typing import Any, Dict

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Principal


class LoadContextUseCase:
    """
    Use case for loading current user and tenant context.

    Business Rules:
    - Principal comes from the verified bearer token
    - Tenant is optional for platform operators
    - A tenant id that no longer exists is an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[Dict[str, Any]]:
        context: Dict[str, Any] = {
            "user": {
                "id": str(principal.user_id),
                "role": principal.role.value,
                "is_platform_operator": principal.is_platform_operator,
            },
            "tenant": None,
        }

        if principal.tenant_id is None:
            return Return.ok(context)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(principal.tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            context["tenant"] = {
                "id": str(tenant.id),
                "name": tenant.name,
                "slug": tenant.slug,
                "status": tenant.status.value,
            }

        return Return.ok(context)
