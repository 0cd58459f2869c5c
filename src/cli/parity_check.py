"""
Check the live schema for tables and columns tenant isolation depends on.

Usage:
    python -m src.cli.parity_check

Exits 1 when a critical table or column is missing.
"""

import asyncio
import sys

from config import ApplicationConfig
from src.api.utils.logging import setup_logging
from src.app.use_cases.ops import ParityCheckUseCase


async def run(uow_scope, environment: str) -> int:
    async with uow_scope() as uow:
        report = await ParityCheckUseCase(uow, environment=environment).execute()

    for issue in report.critical_issues:
        target = f"{issue.table}.{issue.column}" if issue.column else issue.table
        print(f"CRITICAL  {target}: {issue.guidance}")
    for issue in report.warnings:
        target = f"{issue.table}.{issue.column}" if issue.column else issue.table
        print(f"WARNING   {target}: {issue.guidance}")

    print("Parity check passed" if report.passed else "Parity check FAILED")
    return 0 if report.passed else 1


def main(argv=None) -> int:
    setup_logging(ApplicationConfig.LOG_LEVEL)

    from src.depends import unit_of_work_scope

    return asyncio.run(run(unit_of_work_scope, ApplicationConfig.APP_ENV))


if __name__ == "__main__":
    sys.exit(main())
