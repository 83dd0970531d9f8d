from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from restaurant_menu.models import Category, MenuItem
from restaurant_menu.services.cleanup import cleanup_duplicate_categories, group_by_name
from restaurant_menu.services.repository import count_entities

pytestmark = pytest.mark.anyio

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_category(name, created_at, item_names=(), order=1):
    category = Category(name=name, order=order, created_at=created_at)
    category.items = [MenuItem(name=item, price="10 ريال") for item in item_names]
    return category


async def test_keeps_most_recent_duplicate_with_its_items(session):
    older = make_category("الحلويات", BASE_TIME, ["كنافة", "بقلاوة"])
    newer = make_category("الحلويات", BASE_TIME + timedelta(hours=1), ["أم علي"])
    session.add_all([older, newer])
    await session.commit()
    older_id, newer_id = older.id, newer.id

    report = await cleanup_duplicate_categories(session)

    assert report.duplicate_groups == 1
    assert report.categories_deleted == 1
    assert report.items_deleted == 2
    assert report.kept == {"الحلويات": newer_id}

    remaining = (await session.execute(select(Category.id))).scalars().all()
    assert remaining == [newer_id]
    assert older_id not in remaining

    item_names = (await session.execute(select(MenuItem.name))).scalars().all()
    assert item_names == ["أم علي"]


async def test_many_duplicates_converge_to_one(session):
    for i in range(4):
        session.add(make_category("المشروبات", BASE_TIME + timedelta(minutes=i), ["شاي"]))
    session.add(make_category("المقبلات", BASE_TIME, ["حمص"]))
    await session.commit()

    report = await cleanup_duplicate_categories(session)

    assert report.duplicate_groups == 1
    assert report.categories_deleted == 3
    assert report.items_deleted == 3

    rows = await session.execute(
        select(Category.name, func.count(Category.id)).group_by(Category.name)
    )
    assert dict(rows.all()) == {"المشروبات": 1, "المقبلات": 1}


async def test_equal_timestamps_keep_higher_id(session):
    first = make_category("المشويات", BASE_TIME)
    second = make_category("المشويات", BASE_TIME)
    session.add(first)
    await session.flush()
    session.add(second)
    await session.commit()

    report = await cleanup_duplicate_categories(session)

    assert report.kept["المشويات"] == max(first.id, second.id)


async def test_no_duplicates_changes_nothing(session):
    session.add_all([
        make_category("المقبلات", BASE_TIME, ["حمص"]),
        make_category("الحلويات", BASE_TIME, ["بقلاوة"]),
    ])
    await session.commit()

    report = await cleanup_duplicate_categories(session)
    counts = await count_entities(session)

    assert report.duplicate_groups == 0
    assert report.categories_deleted == 0
    assert report.kept == {}
    assert counts.categories == 2
    assert counts.items == 2


async def test_cleanup_leaves_no_orphan_items(session):
    for i in range(3):
        session.add(make_category("الأطباق الرئيسية", BASE_TIME + timedelta(days=i), ["منسف", "مقلوبة"]))
    await session.commit()

    await cleanup_duplicate_categories(session)

    orphans = await session.execute(
        select(func.count(MenuItem.id)).where(
            MenuItem.category_id.not_in(select(Category.id))
        )
    )
    assert orphans.scalar() == 0
    assert (await count_entities(session)).items == 2


async def test_group_by_name():
    a = Category(name="A")
    b = Category(name="B")
    a2 = Category(name="A")

    groups = group_by_name([a, b, a2])

    assert groups == {"A": [a, a2], "B": [b]}
