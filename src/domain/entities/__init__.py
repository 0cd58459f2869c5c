"""
Tenant Guard Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AgreementStatus,
    EnforcementMode,
    OrphanFixAction,
    PrincipalRole,
    TenantStatus,
)

# Export all entities
from .tenant import Tenant
from .agreement import Agreement
from .agreement_acceptance import AgreementAcceptance
from .audit_event import AuditEvent
from .error_log import ErrorLog
from .principal import Principal

__all__ = [
    # Enums
    "AgreementStatus",
    "EnforcementMode",
    "OrphanFixAction",
    "PrincipalRole",
    "TenantStatus",
    # Entities
    "Tenant",
    "Agreement",
    "AgreementAcceptance",
    "AuditEvent",
    "ErrorLog",
    "Principal",
]
