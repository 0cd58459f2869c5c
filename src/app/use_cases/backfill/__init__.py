"""Tenant backfill use case."""

from .backfill_tenants_use_case import (
    DEFAULT_TENANT_NAME,
    DEFAULT_TENANT_SLUG,
    BackfillTenantsResponse,
    BackfillTenantsUseCase,
)

__all__ = [
    "BackfillTenantsUseCase",
    "BackfillTenantsResponse",
    "DEFAULT_TENANT_NAME",
    "DEFAULT_TENANT_SLUG",
]
