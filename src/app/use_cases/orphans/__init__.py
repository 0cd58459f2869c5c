"""Orphan detection and quarantine use cases."""

from .detect_orphans_use_case import DetectOrphansUseCase
from .dtos import (
    FIX_ORPHANS_CONFIRMATION,
    QUARANTINE_TENANT_NAME,
    QUARANTINE_TENANT_SLUG,
    DetectOrphansResponse,
    FixOrphansResponse,
)
from .fix_orphans_use_case import FixOrphansUseCase

__all__ = [
    "DetectOrphansUseCase",
    "FixOrphansUseCase",
    "DetectOrphansResponse",
    "FixOrphansResponse",
    "FIX_ORPHANS_CONFIRMATION",
    "QUARANTINE_TENANT_NAME",
    "QUARANTINE_TENANT_SLUG",
]
