#!/usr/bin/env python3
"""
People Profile — Bulk import CLI

Runs the spreadsheet importer against the database configured through
``DATABASE_URL`` (same settings as the API).

Usage examples
--------------
  # Import / update profiles from a workbook
  python scripts/import_users.py users.xlsx

  # Delete profiles missing from the workbook first
  python scripts/import_users.py users.xlsx --reset-database

  # Machine-readable result
  python scripts/import_users.py users.xlsx --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Ensure the project root is importable
sys.path.insert(0, ".")

from app.database import async_session_factory, engine
from app.excel.reader import ExcelParseError, parse_excel_file
from app.services.import_service import ImportResult, ImportService
from app.utils import cache


def print_report(result: ImportResult, total_rows: int) -> None:
    print(f"\n{'=' * 60}")
    print("  Import Results")
    print(f"{'=' * 60}")
    for detail in result.details:
        print(f"  row {detail['row']:>4}  {detail['action']:<8} {detail['email']} ({detail['name']})")
    for error in result.errors:
        print(f"  row {error['row']:>4}  ERROR    {error['email'] or '-'}: {error['error']}")

    print(f"\n  Total rows:   {total_rows}")
    print(f"  Imported:     {result.success_count}")
    print(f"  Errors:       {result.error_count}")
    if result.deleted_count:
        print(f"  Deleted:      {result.deleted_count}")
    print(f"{'=' * 60}\n")


async def run_import(path: Path, reset_database: bool) -> tuple[ImportResult, int]:
    rows = parse_excel_file(path.read_bytes())
    if not rows:
        raise ExcelParseError("Excel file is empty or has no valid data")

    await cache.connect_redis()
    try:
        async with async_session_factory() as session:
            try:
                result = await ImportService().import_rows(
                    session, rows, reset_database=reset_database
                )
                await session.commit()
            except Exception:
                await session.rollback()
                raise
        await cache.invalidate_profiles()
    finally:
        await cache.close_redis()
        await engine.dispose()
    return result, len(rows)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Import user profiles from an Excel workbook.",
    )
    parser.add_argument("file", type=Path, help="Path to the .xlsx workbook.")
    parser.add_argument(
        "--reset-database",
        action="store_true",
        default=False,
        help="Delete profiles whose email is not in the file (protected emails are kept).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the result as JSON instead of a table.",
    )
    args = parser.parse_args()

    if not args.file.is_file():
        print(f"File not found: {args.file}", file=sys.stderr)
        sys.exit(1)

    if args.reset_database:
        print("WARNING: reset mode will delete profiles not present in the file.", file=sys.stderr)

    try:
        result, total_rows = asyncio.run(run_import(args.file, args.reset_database))
    except ExcelParseError as exc:
        print(f"Could not read {args.file}: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Import failed: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps({**result.to_dict(), "total_rows": total_rows}, indent=2))
    else:
        print_report(result, total_rows)


if __name__ == "__main__":
    main()
