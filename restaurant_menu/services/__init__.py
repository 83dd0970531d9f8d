"""
Services Package

Default-data seeding, duplicate cleanup, the TTL cache and the cached
repository used by the route handlers.
"""

from restaurant_menu.services.cache import DataCache
from restaurant_menu.services.cleanup import CleanupReport, cleanup_duplicate_categories
from restaurant_menu.services.repository import CacheKind, EntityCounts, MenuRepository
from restaurant_menu.services.seed import (
    SeedResult,
    SyncReport,
    ensure_default_data,
    sync_default_data,
)

__all__ = [
    "DataCache",
    "CleanupReport",
    "cleanup_duplicate_categories",
    "CacheKind",
    "EntityCounts",
    "MenuRepository",
    "SeedResult",
    "SyncReport",
    "ensure_default_data",
    "sync_default_data",
]
