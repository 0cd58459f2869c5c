"""
Use Case: Accept Agreement

Records that the caller accepted one exact version of the agreement that
applies to their tenant.
"""

from datetime import datetime, UTC
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AgreementAcceptance, AgreementStatus, Principal

from .dtos import AcceptAgreementResponse


class AcceptAgreementUseCase:
    """
    Accept the active agreement.

    Business Logic:
    1. Caller must belong to a tenant
    2. Agreement must be active and either global or owned by the caller's tenant
    3. Submitted version must equal the agreement's current version
    4. Existing acceptance is returned as-is (idempotent)
    5. Otherwise record acceptance and audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Principal,
        agreement_id: UUID,
        version: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[AcceptAgreementResponse]:
        """
        Errors:
            - TENANT_REQUIRED: Caller has no tenant
            - AGREEMENT_NOT_FOUND: Unknown, inactive or foreign agreement
            - VERSION_MISMATCH: Caller accepted a stale version
        """
        # 1. Tenant
        tenant_id = principal.tenant_id
        if tenant_id is None:
            return Return.err(
                Error("TENANT_REQUIRED", "Your account is not associated with an organization.")
            )

        async with self.uow:
            # 2. Agreement
            agreement = await self.uow.agreements.get_by_id(agreement_id)
            if (
                agreement is None
                or agreement.status != AgreementStatus.active
                or agreement.tenant_id not in (None, tenant_id)
            ):
                return Return.err(Error("AGREEMENT_NOT_FOUND", "Agreement not found"))

            # 3. Version
            if agreement.version != version:
                return Return.err(
                    Error(
                        "VERSION_MISMATCH",
                        "Agreement has been updated. Please review the latest version.",
                        reason=f"Current version is {agreement.version}, got {version}",
                    )
                )

            # 4. Idempotency
            existing = await self.uow.acceptances.get(
                tenant_id, principal.user_id, agreement.id, version
            )
            if existing is not None:
                return Return.ok(
                    AcceptAgreementResponse(
                        agreement_id=str(agreement.id),
                        version=version,
                        accepted_at=existing.accepted_at.isoformat(),
                        already_accepted=True,
                    )
                )

            # 5. Record
            acceptance = await self.uow.acceptances.create(
                AgreementAcceptance(
                    tenant_id=tenant_id,
                    user_id=principal.user_id,
                    agreement_id=agreement.id,
                    version=version,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    accepted_at=datetime.now(UTC).replace(tzinfo=None),
                )
            )
            accepted_at = acceptance.accepted_at.isoformat()

            from src.domain.entities import AuditEvent

            audit_event = AuditEvent(
                tenant_id=tenant_id,
                user_id=principal.user_id,
                action="agreement_accepted",
                event_metadata={"agreement_id": str(agreement.id), "version": version},
            )
            await self.uow.audit_events.create(audit_event)
            await self.uow.commit()

        return Return.ok(
            AcceptAgreementResponse(
                agreement_id=str(agreement_id),
                version=version,
                accepted_at=accepted_at,
                already_accepted=False,
            )
        )
