from abc import ABC, abstractmethod

from src.app.repositories.agreement_repository import (
    IAgreementAcceptanceRepository,
    IAgreementRepository,
)
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.error_log_repository import IErrorLogRepository
from src.app.repositories.record_store import IRecordStore
from src.app.repositories.tenant_repository import ITenantRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    agreements: IAgreementRepository
    acceptances: IAgreementAcceptanceRepository
    audit_events: IAuditEventRepository
    error_logs: IErrorLogRepository
    records: IRecordStore

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
