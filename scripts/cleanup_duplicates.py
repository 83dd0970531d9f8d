"""
Duplicate Category Cleanup Script

Removes categories that share a name, keeping the most recently created
one, and deletes the menu items of every removed duplicate.
Run from project root: python scripts/cleanup_duplicates.py

Author: Khalil Bannouri
Version: 1.0.0
"""

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from restaurant_menu.core.config import get_settings, setup_logging
from restaurant_menu.database import Database
from restaurant_menu.services.cleanup import CleanupReport, cleanup_duplicate_categories


async def run_cleanup(database_url: str) -> CleanupReport:
    database = Database(database_url)
    await database.connect(create_tables=False)
    try:
        async with database.session() as session:
            return await cleanup_duplicate_categories(session)
    finally:
        await database.disconnect()


def print_report(report: CleanupReport) -> None:
    print("=" * 60)
    print("🧹 DUPLICATE CATEGORY CLEANUP")
    print("=" * 60)

    if not report.duplicate_groups:
        print("\n✅ No duplicate categories found")
        return

    for name, category_id in report.kept.items():
        print(f"   {name}: kept category #{category_id}")

    print(f"\n📊 Duplicate names: {report.duplicate_groups}")
    print(f"   Categories deleted: {report.categories_deleted}")
    print(f"   Items deleted: {report.items_deleted}")
    print("=" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Remove duplicate categories")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args()

    setup_logging()
    url = args.database_url or get_settings().database_url

    try:
        report = asyncio.run(run_cleanup(url))
    except Exception as e:
        print(f"\n❌ Cleanup failed: {e}")
        sys.exit(1)

    print_report(report)
