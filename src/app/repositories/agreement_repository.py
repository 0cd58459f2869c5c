from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Agreement, AgreementAcceptance


class IAgreementRepository(ABC):
    """Agreement repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, agreement_id: UUID) -> Optional[Agreement]:
        """Get agreement by ID"""
        pass

    @abstractmethod
    async def get_active(self, tenant_id: Optional[UUID]) -> Optional[Agreement]:
        """
        Get the active agreement of one scope.

        tenant_id None selects the global default scope only; no fallback
        between scopes happens here.
        """
        pass

    @abstractmethod
    async def list_active(self, tenant_id: Optional[UUID]) -> List[Agreement]:
        """List every active agreement in a scope (normally zero or one)"""
        pass

    @abstractmethod
    async def create(self, agreement: Agreement) -> Agreement:
        """Create a new agreement"""
        pass

    @abstractmethod
    async def update(self, agreement: Agreement) -> Agreement:
        """Update existing agreement"""
        pass


class IAgreementAcceptanceRepository(ABC):
    """AgreementAcceptance repository interface - application layer"""

    @abstractmethod
    async def exists(
        self, tenant_id: UUID, user_id: UUID, agreement_id: UUID, version: int
    ) -> bool:
        """Check whether the exact (tenant, user, agreement, version) acceptance exists"""
        pass

    @abstractmethod
    async def get(
        self, tenant_id: UUID, user_id: UUID, agreement_id: UUID, version: int
    ) -> Optional[AgreementAcceptance]:
        """Get the exact (tenant, user, agreement, version) acceptance"""
        pass

    @abstractmethod
    async def create(self, acceptance: AgreementAcceptance) -> AgreementAcceptance:
        """Record an acceptance"""
        pass
