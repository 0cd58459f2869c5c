"""Operational use cases: schema parity, tenancy readiness and data purge."""

from .parity_check_use_case import (
    COLUMN_CHECKS,
    TABLE_CHECKS,
    ParityCheckResponse,
    ParityCheckUseCase,
)
from .purge_app_data_use_case import (
    PURGE_CONFIRMATION,
    PurgeAppDataResponse,
    PurgeAppDataUseCase,
    check_purge_safety,
)
from .tenancy_readiness_use_case import (
    COUNT_FAILED,
    TenancyReadinessResponse,
    TenancyReadinessUseCase,
    log_missing_tenant_ids,
)

__all__ = [
    "ParityCheckUseCase",
    "ParityCheckResponse",
    "TABLE_CHECKS",
    "COLUMN_CHECKS",
    "PurgeAppDataUseCase",
    "PurgeAppDataResponse",
    "PURGE_CONFIRMATION",
    "check_purge_safety",
    "TenancyReadinessUseCase",
    "TenancyReadinessResponse",
    "COUNT_FAILED",
    "log_missing_tenant_ids",
]
