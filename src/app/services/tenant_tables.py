"""
Single source of truth for tenant-scoped tables.

Used by the orphan endpoints, the backfill job and the purge job. Every table
listed here carries a nullable tenant_id column.

When a tenant-scoped table is added, re-derive BACKFILL_ORDER from its foreign
keys rather than appending it at the end.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

TENANT_COLUMN = "tenant_id"

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


@dataclass(frozen=True)
class ScopedTable:
    name: str
    display_column: Optional[str] = None


ORPHAN_SCAN_TABLES: Tuple[ScopedTable, ...] = (
    ScopedTable("clients", "name"),
    ScopedTable("projects", "name"),
    ScopedTable("tasks", "title"),
    ScopedTable("teams", "name"),
    ScopedTable("users", "email"),
    ScopedTable("workspaces", "name"),
    ScopedTable("time_entries", "description"),
    ScopedTable("active_timers"),
    ScopedTable("invitations", "email"),
    ScopedTable("subtasks", "title"),
    ScopedTable("task_attachments", "file_name"),
)

# Parents before children: users are referenced (without enforced FKs) by
# nearly every other row, workspaces own teams/clients, projects own tasks.
BACKFILL_ORDER: Tuple[str, ...] = (
    "users",
    "workspaces",
    "teams",
    "clients",
    "projects",
    "tasks",
    "subtasks",
    "time_entries",
    "active_timers",
    "invitations",
    "task_attachments",
    "app_settings",
)

# Children first, tenants last. audit_events is retained.
PURGE_ORDER: Tuple[str, ...] = (
    "tenant_agreement_acceptances",
    "tenant_agreements",
    "task_comments",
    "task_attachments",
    "subtasks",
    "task_assignees",
    "task_tags",
    "time_entries",
    "active_timers",
    "activity_logs",
    "tasks",
    "tags",
    "sections",
    "projects",
    "client_contacts",
    "clients",
    "team_members",
    "teams",
    "workspace_members",
    "workspaces",
    "invitations",
    "notifications",
    "tenant_settings",
    "app_settings",
    "error_logs",
    "users",
    "tenants",
)


def is_safe_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))
