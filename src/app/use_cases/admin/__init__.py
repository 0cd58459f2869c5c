"""Admin use cases for tenant lifecycle operations."""

from .activate_tenant_use_case import ActivateTenantUseCase
from .restore_tenant_use_case import RestoreTenantUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase, TenantStatusChangeResponse

__all__ = [
    "SuspendTenantUseCase",
    "RestoreTenantUseCase",
    "ActivateTenantUseCase",
    "TenantStatusChangeResponse",
]
