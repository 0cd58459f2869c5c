"""
Use Cases

Organized into domain folders:
- orphans/: Orphan detection and quarantine fix
- backfill/: Tenant id backfill
- ops/: Schema parity check and data purge
- agreements/: Agreement status, acceptance and activation
- admin/: Tenant lifecycle transitions
- users/: Caller context

Import from subdirectories.
"""
