"""
Menu Repository

Query helpers shared by the route handlers, the seeding code and the
cleanup utility. Read paths used by the public site go through the
DataCache; admin writes call clear_cache() for the kind they touched.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurant_menu.models import Admin, Category, MenuItem, RestaurantSettings
from restaurant_menu.schemas import (
    CategoryResponse,
    CategoryWithItemsResponse,
    MenuItemResponse,
    SettingsResponse,
)
from restaurant_menu.services.cache import DataCache

logger = logging.getLogger(__name__)


class CacheKind(str, Enum):
    """Groups of cache keys invalidated together."""
    SETTINGS = "settings"
    CATEGORIES = "categories"
    ITEMS = "items"
    ALL = "all"


@dataclass
class EntityCounts:
    """Row counts of the four record types."""
    settings: int = 0
    categories: int = 0
    items: int = 0
    admins: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.settings or self.categories or self.items or self.admins)

    def to_dict(self) -> dict:
        return {
            "settings": self.settings,
            "categories": self.categories,
            "items": self.items,
            "admins": self.admins,
        }


# =============================================================================
# UNCACHED HELPERS
# =============================================================================

async def count_entities(session: AsyncSession) -> EntityCounts:
    async def _count(column) -> int:
        result = await session.execute(select(func.count(column)))
        return result.scalar() or 0

    return EntityCounts(
        settings=await _count(RestaurantSettings.id),
        categories=await _count(Category.id),
        items=await _count(MenuItem.id),
        admins=await _count(Admin.id),
    )


async def get_or_create_settings(session: AsyncSession) -> RestaurantSettings:
    """Return the settings row, creating one from column defaults if missing."""
    result = await session.execute(
        select(RestaurantSettings).order_by(RestaurantSettings.id).limit(1)
    )
    settings = result.scalar_one_or_none()
    if settings is None:
        logger.info("No restaurant settings found, creating defaults")
        settings = RestaurantSettings()
        session.add(settings)
        await session.commit()
        await session.refresh(settings)
    return settings


async def get_category(
    session: AsyncSession,
    category_id: int,
    include_items: bool = False,
) -> Optional[Category]:
    query = select(Category).where(Category.id == category_id)
    if include_items:
        query = query.options(selectinload(Category.items))
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def list_categories(
    session: AsyncSession,
    include_items: bool = False,
    visible_only: bool = False,
) -> list[Category]:
    """Categories ordered by display order (then id)."""
    query = select(Category).order_by(Category.order.asc(), Category.id.asc())
    if visible_only:
        query = query.where(Category.visible.is_(True))
    if include_items:
        query = query.options(selectinload(Category.items))
    result = await session.execute(query)
    return list(result.scalars().all())


async def next_category_order(session: AsyncSession) -> int:
    """Highest existing order plus one, or 0 when there are no categories."""
    result = await session.execute(select(func.max(Category.order)))
    highest = result.scalar()
    return highest + 1 if highest is not None else 0


async def delete_category_cascade(session: AsyncSession, category_id: int) -> int:
    """
    Delete a category's items and then the category itself.

    The caller owns the transaction (nothing is committed here).

    Returns:
        Number of menu items removed
    """
    items_result = await session.execute(
        delete(MenuItem).where(MenuItem.category_id == category_id)
    )
    await session.execute(delete(Category).where(Category.id == category_id))
    return items_result.rowcount or 0


# =============================================================================
# CACHED READS
# =============================================================================

class MenuRepository:
    """
    Cached read access for the public site.

    Cached values are response models, never ORM instances, so they stay
    valid after the session that loaded them is closed.
    """

    SETTINGS_KEY = "restaurant-settings"

    def __init__(
        self,
        cache: DataCache,
        settings_ttl: float = 300.0,
        categories_ttl: float = 180.0,
        items_ttl: float = 120.0,
    ):
        self.cache = cache
        self.settings_ttl = settings_ttl
        self.categories_ttl = categories_ttl
        self.items_ttl = items_ttl

    @staticmethod
    def categories_key(include_items: bool) -> str:
        return f"categories-{str(include_items).lower()}"

    @staticmethod
    def items_key(category_id: int) -> str:
        return f"items-category-{category_id}"

    async def get_settings(self, session: AsyncSession) -> SettingsResponse:
        cached = self.cache.get(self.SETTINGS_KEY)
        if cached is not None:
            return cached

        settings = await get_or_create_settings(session)
        response = SettingsResponse.model_validate(settings)
        self.cache.set(self.SETTINGS_KEY, response, self.settings_ttl)
        return response

    async def get_categories(
        self,
        session: AsyncSession,
        include_items: bool = False,
    ) -> list[CategoryResponse]:
        """Visible categories ordered by display order."""
        key = self.categories_key(include_items)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        categories = await list_categories(
            session, include_items=include_items, visible_only=True
        )
        schema = CategoryWithItemsResponse if include_items else CategoryResponse
        response = [schema.model_validate(c) for c in categories]
        self.cache.set(key, response, self.categories_ttl)
        return response

    async def get_items_by_category(
        self,
        session: AsyncSession,
        category_id: int,
    ) -> list[MenuItemResponse]:
        key = self.items_key(category_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = await session.execute(
            select(MenuItem)
            .where(MenuItem.category_id == category_id)
            .order_by(MenuItem.created_at.asc(), MenuItem.id.asc())
        )
        response = [MenuItemResponse.model_validate(i) for i in result.scalars().all()]
        self.cache.set(key, response, self.items_ttl)
        return response

    def clear_cache(self, kind: CacheKind = CacheKind.ALL) -> None:
        """Drop cached entries affected by a write of the given kind."""
        kind = CacheKind(kind)
        if kind == CacheKind.SETTINGS:
            self.cache.delete(self.SETTINGS_KEY)
        elif kind == CacheKind.CATEGORIES:
            self.cache.delete(self.categories_key(True))
            self.cache.delete(self.categories_key(False))
        else:
            # Item keys are per category; drop everything
            self.cache.clear()
        logger.debug(f"Cache cleared: {kind.value}")
