"""
AuditEvent Entity

Immutable log of administrative and data-integrity operations.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - who changed what during guard and reconciliation work.

    Business Rules:
    - Immutable (never updated or deleted, survives app data purge)
    - tenant_id nullable for platform-wide events (orphan fix, backfill)
    - user_id nullable for system actions (CLI jobs, billing integration)
    - Metadata stores the per-table results of the operation
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: Optional[UUID] = Field(default=None, index=True)
    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "orphans_fixed", "tenant_suspended"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
    )
