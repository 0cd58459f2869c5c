"""
Agreement Enforcement Guard

Blocks tenant users from non-exempt routes until they accept the active
agreement for their tenant. Fails closed: any error while verifying yields an
INTERNAL_ERROR rejection rather than letting the request through.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.guards.route_matching import is_agreement_exempt
from src.app.services.redaction import redact_secrets
from src.app.services.ttl_cache import TTLCache
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Principal

logger = logging.getLogger(__name__)

ACCEPT_TERMS_REDIRECT = "/accept-terms"
LOGIN_REDIRECT = "/login"


@dataclass(frozen=True)
class ActiveAgreementRef:
    id: UUID
    version: int


def agreement_required_error() -> Error:
    return Error(
        "AGREEMENT_REQUIRED",
        "You must accept the terms of service before continuing.",
        details={"redirectTo": ACCEPT_TERMS_REDIRECT},
    )


def tenant_required_error() -> Error:
    return Error(
        "TENANT_REQUIRED",
        "Your account is not associated with an organization. Please contact support.",
        details={"redirectTo": LOGIN_REDIRECT},
    )


def verification_failed_error() -> Error:
    return Error(
        "INTERNAL_ERROR",
        "Unable to verify agreement status. Please try again.",
        details={"redirectTo": ACCEPT_TERMS_REDIRECT},
    )


class AgreementGuard:
    def __init__(self, cache: TTLCache):
        self.cache = cache

    async def check(
        self,
        uow: UnitOfWork,
        principal: Optional[Principal],
        path: str,
        request_id: Optional[str] = None,
    ) -> Result[None]:
        if is_agreement_exempt(path):
            return Return.ok(None)

        if principal is None:
            return Return.ok(None)

        # Operators bypass, including while impersonating a tenant
        if principal.is_platform_operator:
            return Return.ok(None)

        tenant_id = principal.tenant_id
        if tenant_id is None:
            logger.warning(
                f"Blocking user without tenant on {path}",
                extra={"request_id": request_id, "user_id": str(principal.user_id), "path": path},
            )
            return Return.err(tenant_required_error())

        log_context = {
            "request_id": request_id,
            "tenant_id": str(tenant_id),
            "user_id": str(principal.user_id),
            "path": path,
        }

        try:
            agreement = await self.get_active_agreement(uow, tenant_id)
            if agreement is None:
                return Return.ok(None)

            async with uow:
                accepted = await uow.acceptances.exists(
                    tenant_id, principal.user_id, agreement.id, agreement.version
                )
        except Exception as exc:
            logger.error(
                f"Agreement verification failed: {redact_secrets(str(exc))}",
                extra=log_context,
            )
            return Return.err(verification_failed_error())

        if accepted:
            return Return.ok(None)

        logger.warning(
            f"Blocked request to {path}: agreement v{agreement.version} not accepted",
            extra=log_context,
        )
        return Return.err(agreement_required_error())

    async def get_active_agreement(
        self, uow: UnitOfWork, tenant_id: UUID
    ) -> Optional[ActiveAgreementRef]:
        """
        Resolve the agreement a tenant's users must accept.

        Tenant-specific active agreement first, then the global default.
        None means nothing to accept until an administrator activates one.
        """
        entry = self.cache.get(tenant_id)
        if entry is not None:
            return entry.value

        async with uow:
            agreement = await uow.agreements.get_active(tenant_id)
            if agreement is None:
                agreement = await uow.agreements.get_active(None)
            ref = ActiveAgreementRef(agreement.id, agreement.version) if agreement else None

        self.cache.set(tenant_id, ref)
        return ref

    def invalidate(self, tenant_id: Optional[UUID] = None) -> None:
        """Drop one tenant's entry, or every entry when the global agreement changed."""
        if tenant_id is None:
            self.cache.clear()
        else:
            self.cache.invalidate(tenant_id)
