"""
Use Case: Activate Tenant

Marks onboarding complete for an inactive tenant.
"""

from datetime import datetime, UTC
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities.enums import TenantStatus

from .suspend_tenant_use_case import TenantStatusChangeResponse


class ActivateTenantUseCase:
    """
    Activate an inactive tenant.

    Suspended tenants must go through restore instead, so a suspension is
    never lifted by the onboarding flow. Activating an active tenant is a no-op.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[TenantStatusChangeResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            previous = tenant.status
            if previous == TenantStatus.suspended:
                return Return.err(
                    Error(
                        "TENANT_SUSPENDED",
                        "Suspended tenants must be restored, not activated",
                    )
                )

            if previous == TenantStatus.active:
                return Return.ok(
                    TenantStatusChangeResponse(
                        tenant_id=str(tenant_id),
                        previous_status=previous.value,
                        status=previous.value,
                        changed=False,
                    )
                )

            tenant.status = TenantStatus.active
            tenant.updated_at = datetime.now(UTC).replace(tzinfo=None)
            await self.uow.tenants.update(tenant)

            from src.domain.entities import AuditEvent

            audit_event = AuditEvent(
                tenant_id=tenant_id,
                user_id=None,
                action="tenant_activated",
                event_metadata={
                    "previous_status": previous.value,
                    "activated_at": datetime.now(UTC).isoformat(),
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                TenantStatusChangeResponse(
                    tenant_id=str(tenant_id),
                    previous_status=previous.value,
                    status=TenantStatus.active.value,
                    changed=True,
                )
            )
