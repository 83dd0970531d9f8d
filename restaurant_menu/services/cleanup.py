"""
Duplicate Category Cleanup

Repairs stores where repeated seeding created several categories with the
same name. For every name held by more than one category, the most
recently created one is kept (ties broken by the higher id) and the others
are deleted together with their menu items.

This is a manual maintenance tool (scripts/cleanup_duplicates.py); it is
not run on the request path. Errors propagate to the caller.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_menu.models import Category
from restaurant_menu.services.repository import delete_category_cascade

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class CleanupReport:
    """
    Outcome of cleanup_duplicate_categories().

    Attributes:
        duplicate_groups: Number of names that had more than one category
        categories_deleted: Duplicate categories removed
        items_deleted: Menu items removed with them
        kept: Category id kept for each duplicated name
    """
    duplicate_groups: int = 0
    categories_deleted: int = 0
    items_deleted: int = 0
    kept: dict[str, int] = field(default_factory=dict)


def _newest_first_key(category: Category) -> tuple[datetime, int]:
    created = category.created_at or _EPOCH
    if created.tzinfo is None:
        # SQLite hands back naive datetimes
        created = created.replace(tzinfo=timezone.utc)
    return created, category.id


def group_by_name(categories: list[Category]) -> dict[str, list[Category]]:
    groups: dict[str, list[Category]] = {}
    for category in categories:
        groups.setdefault(category.name, []).append(category)
    return groups


async def cleanup_duplicate_categories(session: AsyncSession) -> CleanupReport:
    """
    Delete all but the newest category for every duplicated name.

    All deletes are committed in one transaction at the end.

    Returns:
        CleanupReport describing what was removed
    """
    logger.info("Cleaning up database...")
    report = CleanupReport()

    result = await session.execute(select(Category))
    groups = group_by_name(list(result.scalars().all()))

    for name, group in groups.items():
        if len(group) < 2:
            continue

        report.duplicate_groups += 1
        logger.info(f"Found {len(group)} duplicates for category: {name}")

        keep, *duplicates = sorted(group, key=_newest_first_key, reverse=True)
        report.kept[name] = keep.id

        logger.info(
            f"Keeping category {keep.id} and deleting {len(duplicates)} duplicates"
        )

        for category in duplicates:
            items_removed = await delete_category_cascade(session, category.id)
            report.categories_deleted += 1
            report.items_deleted += items_removed
            logger.debug(f"Deleted category {category.id} with {items_removed} items")

    await session.commit()
    logger.info(
        f"Database cleanup completed! Removed {report.categories_deleted} categories "
        f"and {report.items_deleted} items across {report.duplicate_groups} names"
    )
    return report
