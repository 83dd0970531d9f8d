"""
Default Data Seeding

Two entry points:

ensure_default_data()
    Startup reconciler. Writes the full default dataset only when the store
    is completely empty (settings, categories, items and admins all at
    zero). Any non-zero count means no writes at all, so partial states are
    left as they are. Errors are logged and reported in the returned
    SeedResult instead of raised.

sync_default_data()
    Per-entity upsert used by scripts/seed.py. Creates whatever part of the
    default dataset is missing, matching categories and items by name.
    Errors propagate.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_menu.core.security import hash_password
from restaurant_menu.models import Admin, Category, MenuItem, RestaurantSettings
from restaurant_menu.services.default_data import (
    DEFAULT_ADMIN_USER,
    DEFAULT_CATEGORIES,
    DEFAULT_RESTAURANT_SETTINGS,
    MENU_ITEMS_BY_CATEGORY,
)
from restaurant_menu.services.repository import EntityCounts, count_entities

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    """
    Outcome of ensure_default_data().

    Attributes:
        success: False only when seeding was attempted and failed
        seeded: True when the default dataset was written
        counts: Entity counts observed before any writes
        error_message: Failure description when success is False
    """
    success: bool
    seeded: bool = False
    counts: Optional[EntityCounts] = None
    error_message: Optional[str] = None


@dataclass
class SyncReport:
    """Rows created by sync_default_data()."""
    settings_created: int = 0
    categories_created: int = 0
    items_created: int = 0
    admins_created: int = 0
    created_names: list[str] = field(default_factory=list)

    @property
    def total_created(self) -> int:
        return (
            self.settings_created
            + self.categories_created
            + self.items_created
            + self.admins_created
        )


def _build_admin() -> Admin:
    return Admin(
        email=DEFAULT_ADMIN_USER["email"],
        password_hash=hash_password(DEFAULT_ADMIN_USER["password"]),
        name=DEFAULT_ADMIN_USER["name"],
    )


async def ensure_default_data(session: AsyncSession) -> SeedResult:
    """
    Populate an empty store with the default dataset.

    Returns:
        SeedResult: seeded=True if data was written, seeded=False if the
        store already held data, success=False if the attempt failed
    """
    try:
        counts = await count_entities(session)

        if not counts.is_empty:
            logger.info(
                "Database already contains data. Skipping seeding. "
                f"({counts.to_dict()})"
            )
            return SeedResult(success=True, seeded=False, counts=counts)

        logger.info("No data found. Seeding database with default data...")

        session.add(RestaurantSettings(**DEFAULT_RESTAURANT_SETTINGS))

        for category_data in DEFAULT_CATEGORIES:
            category = Category(**category_data)
            category.items = [
                MenuItem(**item_data)
                for item_data in MENU_ITEMS_BY_CATEGORY.get(category_data["name"], [])
            ]
            session.add(category)

        session.add(_build_admin())

        await session.commit()
        logger.info("Database seeded successfully with default data!")
        return SeedResult(success=True, seeded=True, counts=counts)

    except Exception as e:
        await session.rollback()
        logger.exception(f"Error ensuring default data: {e}")
        return SeedResult(success=False, seeded=False, error_message=str(e))


async def sync_default_data(session: AsyncSession) -> SyncReport:
    """
    Create any missing part of the default dataset.

    Settings and admin are created only if none exist; categories and
    items are matched by name so repeated runs never duplicate them.
    """
    report = SyncReport()

    existing_settings = await session.execute(select(RestaurantSettings.id).limit(1))
    if existing_settings.scalar_one_or_none() is None:
        session.add(RestaurantSettings(**DEFAULT_RESTAURANT_SETTINGS))
        report.settings_created += 1
        logger.info("Created restaurant settings")

    result = await session.execute(select(Category).order_by(Category.created_at.desc(), Category.id.desc()))
    categories_by_name: dict[str, Category] = {}
    for category in result.scalars().all():
        # Newest wins when duplicates already exist
        categories_by_name.setdefault(category.name, category)

    for category_data in DEFAULT_CATEGORIES:
        if category_data["name"] in categories_by_name:
            continue
        category = Category(**category_data)
        session.add(category)
        categories_by_name[category.name] = category
        report.categories_created += 1
        report.created_names.append(category.name)
        logger.info(f"Created category: {category.name}")

    # Assigns ids to new categories before items reference them
    await session.flush()

    item_names = await session.execute(select(MenuItem.name))
    existing_item_names = set(item_names.scalars().all())

    for category_name, items in MENU_ITEMS_BY_CATEGORY.items():
        category = categories_by_name.get(category_name)
        if category is None:
            continue
        for item_data in items:
            if item_data["name"] in existing_item_names:
                continue
            session.add(MenuItem(category_id=category.id, **item_data))
            existing_item_names.add(item_data["name"])
            report.items_created += 1
            report.created_names.append(item_data["name"])
            logger.info(f"Created menu item: {item_data['name']}")

    existing_admin = await session.execute(select(Admin.id).limit(1))
    if existing_admin.scalar_one_or_none() is None:
        session.add(_build_admin())
        report.admins_created += 1
        logger.info(f"Created admin user: {DEFAULT_ADMIN_USER['email']}")

    await session.commit()
    logger.info(f"Default data sync complete ({report.total_created} rows created)")
    return report
