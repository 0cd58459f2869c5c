"""
Delete all application data. Audit events are kept.

Usage:
    PURGE_APP_DATA_ALLOWED=true PURGE_APP_DATA_CONFIRM=YES_PURGE_APP_DATA \
        python -m src.cli.purge_app_data

Production (APP_ENV=production) additionally requires PURGE_PROD_ALLOWED=true.
"""

import asyncio
import os
import sys
from typing import Mapping

from config import ApplicationConfig
from src.api.utils.logging import setup_logging
from src.app.use_cases.ops import PurgeAppDataUseCase, check_purge_safety


async def run(env: Mapping[str, str], uow_scope) -> int:
    async with uow_scope() as uow:
        result = await PurgeAppDataUseCase(uow).execute(env)

    if result.is_err():
        print(f"Purge refused: {result.error.message}. {result.error.reason}")
        return 1

    report = result.value
    for table in report.tables:
        if table.status == "success":
            print(f"  {table.table}: {table.rows_deleted} rows deleted")
        elif table.status == "skipped":
            print(f"  {table.table}: skipped (table not found)")
        else:
            print(f"  {table.table}: ERROR {table.error}")
    print(f"Deleted {report.total_deleted} rows in {report.environment}")

    return 1 if report.failed_tables else 0


def main(argv=None) -> int:
    setup_logging(ApplicationConfig.LOG_LEVEL)

    env = dict(os.environ)
    env.setdefault("APP_ENV", ApplicationConfig.APP_ENV)

    # Refuse before touching the database
    error = check_purge_safety(env)
    if error:
        print(f"Purge refused: {error.message}. {error.reason}")
        return 1

    from src.depends import unit_of_work_scope

    return asyncio.run(run(env, unit_of_work_scope))


if __name__ == "__main__":
    sys.exit(main())
