"""
Data Verification Script

Prints the restaurant settings, the categories with their item counts and
a couple of sample items per category.
Run from project root: python scripts/verify_data.py

Author: Khalil Bannouri
Version: 1.0.0
"""

import argparse
import asyncio
import os
import sys
from collections import Counter

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func, select

from restaurant_menu.core.config import get_settings
from restaurant_menu.database import Database
from restaurant_menu.models import Category, MenuItem, RestaurantSettings
from restaurant_menu.services.repository import count_entities, list_categories


async def verify_data(database_url: str) -> bool:
    """Print a report of the stored content."""
    database = Database(database_url)
    await database.connect(create_tables=False)

    try:
        async with database.session() as session:
            print("=" * 60)
            print("🔍 DATA VERIFICATION REPORT")
            print("=" * 60)

            result = await session.execute(select(RestaurantSettings).limit(1))
            settings = result.scalar_one_or_none()
            print("\n🏪 Restaurant Settings:")
            if settings is None:
                print("   ⚠️ No settings row found")
            else:
                print(f"   Name: {settings.name}")
                print(f"   Phone: {settings.contact_phone}")
                print(f"   Email: {settings.contact_email}")
                print(f"   Address: {settings.address}")

            categories = await list_categories(session, include_items=True)
            print("\n📂 Categories:")
            for index, category in enumerate(categories, start=1):
                hidden = "" if category.visible else " (hidden)"
                print(f"   {index}. {category.name} - {category.description}{hidden}")

            name_counts = Counter(c.name for c in categories)
            duplicates = {name: n for name, n in name_counts.items() if n > 1}
            if duplicates:
                print(f"\n⚠️ Duplicate category names: {duplicates}")
                print("   Run: python scripts/cleanup_duplicates.py")
            else:
                print("\n✅ No duplicate category names")

            print("\n🍽️ Menu Items per Category:")
            for category in categories:
                print(f"   {category.name}: {len(category.items)} items")

            print("\n📋 Sample Menu Items:")
            for category in categories:
                print(f"\n   {category.name}:")
                for item in category.items[:2]:
                    print(f"     - {item.name}: {item.price}")
                    if item.description:
                        print(f"       {item.description}")

            orphan_result = await session.execute(
                select(func.count(MenuItem.id)).where(
                    MenuItem.category_id.not_in(select(Category.id))
                )
            )
            orphans = orphan_result.scalar() or 0
            if orphans:
                print(f"\n⚠️ {orphans} items reference a missing category")

            counts = await count_entities(session)
            print(f"\n📊 Totals: {counts.to_dict()}")
    finally:
        await database.disconnect()

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE")
    print("=" * 60)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Verify stored menu data")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args()

    url = args.database_url or get_settings().database_url
    try:
        asyncio.run(verify_data(url))
    except Exception as e:
        print(f"\n❌ Error verifying data: {e}")
        sys.exit(1)
