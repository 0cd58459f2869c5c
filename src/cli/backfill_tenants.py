"""
Backfill tenant_id on historical rows.

Usage:
    python -m src.cli.backfill_tenants --dry-run
    python -m src.cli.backfill_tenants --target-tenant acme
"""

import argparse
import asyncio
import logging
import sys

from config import ApplicationConfig
from src.api.utils.logging import setup_logging
from src.app.use_cases.backfill import BackfillTenantsUseCase

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backfill_tenants", description="Assign a tenant to rows with no tenant_id"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Count missing rows without updating anything"
    )
    parser.add_argument(
        "--target-tenant",
        default=None,
        help="Slug or id of the receiving tenant (default: the 'default' tenant)",
    )
    return parser


async def run(dry_run: bool, target_tenant, uow_scope) -> int:
    async with uow_scope() as uow:
        result = await BackfillTenantsUseCase(uow).execute(
            dry_run=dry_run, target_tenant=target_tenant
        )

    if result.is_err():
        logger.error(f"{result.error.code}: {result.error.message}")
        print(f"Backfill failed: {result.error.message}")
        return 1

    report = result.value
    mode = "DRY RUN" if report.dry_run else "EXECUTE"
    print(f"Tenant backfill ({mode}) -> {report.target_tenant_slug} ({report.target_tenant_id})")
    for table in report.tables:
        if table.error:
            print(f"  {table.table}: ERROR {table.error}")
            continue
        print(
            f"  {table.table}: {table.before_count} missing, "
            f"{table.updated_count} updated, {table.after_count} remaining"
        )
    for table in report.skipped_tables:
        print(f"  {table}: skipped (table not found)")
    print(
        f"Total missing: {report.total_missing}, updated: {report.total_updated}, "
        f"remaining: {report.remaining}"
    )

    if report.failed_tables:
        print(f"Failed tables: {', '.join(report.failed_tables)}. Re-run to retry them")
        return 1

    if report.remaining == 0:
        print("You can now safely enable TENANCY_ENFORCEMENT=strict")
    elif report.dry_run:
        print("Re-run without --dry-run to apply")

    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(ApplicationConfig.LOG_LEVEL)

    from src.depends import unit_of_work_scope

    return asyncio.run(run(args.dry_run, args.target_tenant, unit_of_work_scope))


if __name__ == "__main__":
    sys.exit(main())
