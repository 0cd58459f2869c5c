"""
Exempt-route matching for the request guards.

Pure functions from request path to bool. Patterns are checked in order.
"""

import re
from typing import Iterable, Pattern

TENANT_STATUS_ALLOWED_PATTERNS = [
    re.compile(r"^/api/v1/auth/"),
    re.compile(r"^/api/auth/"),
    re.compile(r"^/api/v1/tenant/"),
    re.compile(r"^/api/v1/settings/mailgun"),
    re.compile(r"^/api/health$"),
    re.compile(r"^/api/v1/super/bootstrap$"),
]

AGREEMENT_EXEMPT_PATTERNS = [
    re.compile(r"^/api/auth/"),
    re.compile(r"^/api/v1/auth/"),
    re.compile(r"^/api/v1/me/agreement/"),
    re.compile(r"^/api/v1/tenant/onboarding"),
    re.compile(r"^/api/v1/tenant/branding$"),
    re.compile(r"^/api/v1/invitations/"),
    re.compile(r"^/api/v1/super/"),
    re.compile(r"^/api/v1/notifications(/unread-count)?$"),
    re.compile(r"^/api/health$"),
]

AGREEMENT_EXEMPT_EXACT_ROUTES = frozenset(
    [
        "/api/user",
        "/api/v1/me/avatar",
        "/api/auth/me",
        "/api/auth/logout",
    ]
)


def _matches_any(path: str, patterns: Iterable[Pattern]) -> bool:
    return any(pattern.search(path) for pattern in patterns)


def is_tenant_status_exempt(path: str) -> bool:
    return _matches_any(path, TENANT_STATUS_ALLOWED_PATTERNS)


def is_agreement_exempt(path: str) -> bool:
    """True for paths a user may reach before accepting the active agreement.

    Anything outside /api/ (assets, documents, the SPA shell) is exempt.
    """
    if not path.startswith("/api/"):
        return True
    if path in AGREEMENT_EXEMPT_EXACT_ROUTES:
        return True
    return _matches_any(path, AGREEMENT_EXEMPT_PATTERNS)
