"""
Agreement Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel


class AgreementSummary(BaseModel):
    id: str
    title: str
    version: int


class AgreementStatusResponse(BaseModel):
    required: bool
    accepted: bool
    agreement: Optional[AgreementSummary] = None


class AcceptAgreementResponse(BaseModel):
    agreement_id: str
    version: int
    accepted_at: str
    already_accepted: bool


class ActivateAgreementResponse(BaseModel):
    agreement_id: str
    tenant_id: Optional[str]
    version: int
    retired_agreement_ids: list[str]
    activated_at: str
