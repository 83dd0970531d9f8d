"""
Default Data Seeding Script

Creates whatever part of the default restaurant dataset is missing.
Categories and items are matched by name, so running it again never
creates duplicates.
Run from project root: python scripts/seed.py

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
from restaurant_menu.services.seed import SyncReport, sync_default_data


async def run_seed(database_url: str) -> SyncReport:
    database = Database(database_url)
    await database.connect()
    try:
        async with database.session() as session:
            return await sync_default_data(session)
    finally:
        await database.disconnect()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the default restaurant data")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args()

    setup_logging()
    url = args.database_url or get_settings().database_url

    print("=" * 60)
    print("🌱 SEEDING DATABASE")
    print("=" * 60)

    try:
        report = asyncio.run(run_seed(url))
    except Exception as e:
        print(f"\n❌ Seeding failed: {e}")
        sys.exit(1)

    print(f"\n📊 Settings created: {report.settings_created}")
    print(f"   Categories created: {report.categories_created}")
    print(f"   Items created: {report.items_created}")
    print(f"   Admins created: {report.admins_created}")

    if report.total_created:
        print("\n✅ Seeding complete")
    else:
        print("\n✅ Nothing to do, default data already present")
