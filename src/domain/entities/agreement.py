"""
Agreement Entity

Versioned legal terms a tenant's users must accept.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from .enums import AgreementStatus


class Agreement(SQLModel, table=True):
    """
    Agreement entity - versioned terms document.

    Business Rules:
    - tenant_id None means the global default for all tenants
    - At most one active agreement per tenant and one active global agreement
    - A tenant-specific active agreement takes precedence over the global one
    - version increases monotonically within a scope
    """

    __tablename__ = "tenant_agreements"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id", index=True)

    title: str = Field(max_length=255)
    body: str = Field(default="", sa_column=Column(Text))
    version: int = Field(default=1)
    status: AgreementStatus = Field(default=AgreementStatus.draft)

    effective_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_agreement_tenant_status", "tenant_id", "status"),)
