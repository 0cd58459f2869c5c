"""
Orphan Use Case DTOs

Response classes for the orphan detection and quarantine fix operations.
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import OrphanFixAction

QUARANTINE_TENANT_SLUG = "quarantine"
QUARANTINE_TENANT_NAME = "Quarantine (Orphan Data)"
FIX_ORPHANS_CONFIRMATION = "FIX_ORPHANS"


class OrphanSample(BaseModel):
    id: str
    display: Optional[str] = None


class OrphanTableReport(BaseModel):
    table: str
    count: int
    sample_ids: List[OrphanSample]
    recommended_action: str  # "quarantine" | "skip"


class QuarantineTenantInfo(BaseModel):
    exists: bool
    id: Optional[str] = None
    name: Optional[str] = None


class DetectOrphansResponse(BaseModel):
    total_orphans: int
    tables_with_orphans: int
    tables: List[OrphanTableReport]
    quarantine_tenant: QuarantineTenantInfo


class OrphanFixResult(BaseModel):
    table: str
    action: OrphanFixAction
    count_before: int
    count_fixed: int
    target_tenant_id: Optional[str] = None
    error: Optional[str] = None


class FixOrphansResponse(BaseModel):
    dry_run: bool
    quarantine_tenant_id: Optional[str]
    quarantine_created: bool
    total_fixed: int
    total_would_fix: int
    results: List[OrphanFixResult]
