"""
Tenant Status Guard

Blocks users of suspended or inactive tenants from non-exempt routes.

Lookup errors fail open here. The agreement guard fails closed.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.guards.route_matching import is_tenant_status_exempt
from src.app.services.ttl_cache import TTLCache
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EnforcementMode, Principal, TenantStatus

logger = logging.getLogger(__name__)

SOFT_MODE_WARNING = "Tenant is inactive - would be blocked in strict mode"


class TenantStatusGuard:
    """
    Decide whether a request may proceed given its tenant's status.

    Platform operators pass before any tenant is resolved, so an X-Tenant-Id
    impersonation header never changes the outcome. Everyone else is checked
    against their own tenant.

    Returns:
        Ok(None) to proceed, Ok(warning) to proceed with a soft-mode warning,
        Err(TENANT_SUSPENDED | TENANT_INACTIVE) to reject.
    """

    def __init__(self, mode: EnforcementMode, cache: TTLCache):
        self.mode = mode
        self.cache = cache

    async def check(
        self,
        uow: UnitOfWork,
        principal: Optional[Principal],
        path: str,
        request_id: Optional[str] = None,
    ) -> Result[Optional[str]]:
        if principal is None:
            return Return.ok(None)

        if principal.is_platform_operator:
            return Return.ok(None)

        if is_tenant_status_exempt(path):
            return Return.ok(None)

        tenant_id = principal.tenant_id
        if tenant_id is None:
            return Return.ok(None)

        log_context = {
            "request_id": request_id,
            "tenant_id": str(tenant_id),
            "user_id": str(principal.user_id),
            "path": path,
        }

        try:
            status = await self.get_status(uow, tenant_id)
        except Exception:
            logger.exception("Tenant status lookup failed, allowing request", extra=log_context)
            return Return.ok(None)

        if status is None:
            # Unknown tenant: other layers reject this case
            return Return.ok(None)

        if status == TenantStatus.suspended:
            logger.warning(f"Blocked request to {path}: tenant suspended", extra=log_context)
            return Return.err(
                Error(
                    "TENANT_SUSPENDED",
                    "Your organization's account has been suspended. Please contact support.",
                )
            )

        if status != TenantStatus.active:
            if self.mode == EnforcementMode.strict:
                logger.warning(f"Blocked request to {path}: tenant inactive", extra=log_context)
                return Return.err(Error("TENANT_INACTIVE", "Tenant onboarding incomplete."))
            if self.mode == EnforcementMode.soft:
                logger.warning(
                    f"SOFT MODE: would block request to {path} for inactive tenant {tenant_id}",
                    extra=log_context,
                )
                return Return.ok(SOFT_MODE_WARNING)

        return Return.ok(None)

    async def get_status(self, uow: UnitOfWork, tenant_id: UUID) -> Optional[TenantStatus]:
        entry = self.cache.get(tenant_id)
        if entry is not None:
            return entry.value

        # Read inside the block; leaving it rolls back and expires the row
        async with uow:
            tenant = await uow.tenants.get_by_id(tenant_id)
            status = tenant.status if tenant else None

        self.cache.set(tenant_id, status)
        return status

    def invalidate(self, tenant_id: UUID) -> None:
        self.cache.invalidate(tenant_id)
