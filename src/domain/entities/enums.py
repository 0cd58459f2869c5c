"""
Tenant Guard Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant lifecycle status"""

    active = "active"
    inactive = "inactive"  # pending onboarding
    suspended = "suspended"


class AgreementStatus(str, Enum):
    """Agreement lifecycle status"""

    draft = "draft"
    active = "active"
    retired = "retired"


class PrincipalRole(str, Enum):
    """Role carried by an authenticated principal"""

    super_user = "super_user"
    admin = "admin"
    employee = "employee"
    client = "client"


class EnforcementMode(str, Enum):
    """How strictly the tenant status guard blocks inactive tenants"""

    disabled = "disabled"
    soft = "soft"
    strict = "strict"


class OrphanFixAction(str, Enum):
    """Per-table outcome of an orphan fix run"""

    no_orphans = "no_orphans"
    would_fix = "would_fix"
    fixed = "fixed"
    skipped = "skipped"
    error = "error"
