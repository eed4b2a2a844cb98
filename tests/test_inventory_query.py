"""Inventory query filter tests."""

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.inventory_query import filter_inventory
from models.clothing_item import ClothingItem
from models.taxonomy import ALL_CATEGORIES, Category, Season


def _item(item_id: str, category: Category, name: str, color: str, location: str) -> ClothingItem:
    return ClothingItem(
        id=item_id,
        image_url="https://example.com/item.jpg",
        name=name,
        category=category,
        season=Season.ALL_SEASON,
        color=color,
        location=location,
        description="Denim",
        created_at=0,
    )


INVENTORY = [
    _item("1", Category.TOP, "Blue Denim Jacket", "蓝色", "衣柜 - 挂衣区"),
    _item("2", Category.BOTTOM, "黑色西裤", "Black", "抽屉 - 上层"),
    _item("3", Category.SHOES, "小白鞋", "白色", "鞋架"),
]


def test_all_sentinel_returns_everything() -> None:
    assert filter_inventory(INVENTORY, ALL_CATEGORIES, "") == INVENTORY
    assert filter_inventory(INVENTORY, None, None) == INVENTORY


def test_category_filter_is_exact() -> None:
    assert [i.id for i in filter_inventory(INVENTORY, Category.BOTTOM)] == ["2"]
    assert [i.id for i in filter_inventory(INVENTORY, "鞋履")] == ["3"]
    assert filter_inventory(INVENTORY, "鞋") == []


def test_search_is_case_insensitive_across_name_location_and_color() -> None:
    assert [i.id for i in filter_inventory(INVENTORY, ALL_CATEGORIES, "denim")] == ["1"]
    assert [i.id for i in filter_inventory(INVENTORY, ALL_CATEGORIES, "BLACK")] == ["2"]
    assert [i.id for i in filter_inventory(INVENTORY, ALL_CATEGORIES, "鞋架")] == ["3"]


def test_description_is_not_searched_and_unmatched_term_is_empty() -> None:
    assert filter_inventory(INVENTORY, ALL_CATEGORIES, "nothing-matches") == []
    assert [i.id for i in filter_inventory(INVENTORY, ALL_CATEGORIES, "denim")] == ["1"]


def test_filters_are_combined_and_query_is_pure() -> None:
    first = filter_inventory(INVENTORY, Category.TOP, "蓝")
    second = filter_inventory(INVENTORY, Category.TOP, "蓝")
    assert first == second == [INVENTORY[0]]
    assert filter_inventory(INVENTORY, Category.SHOES, "蓝") == []
    assert len(INVENTORY) == 3
