"""Taxonomy, clothing item and outfit suggestion model tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models import taxonomy
from models.clothing_item import ClothingItem
from models.outfit import OutfitSuggestion
from models.taxonomy import Category, Season


def _item(item_id: str, category: object = Category.TOP) -> ClothingItem:
    return ClothingItem(
        id=item_id,
        image_url="data:image/png;base64,aGVsbG8=",
        name=f"item {item_id}",
        category=category,
        season=Season.ALL_SEASON,
        color="蓝色",
        location="鞋架",
        description="",
        created_at=1700000000000,
    )


def test_taxonomy_enumerations_are_closed() -> None:
    assert [c.name for c in Category] == [
        "TOP",
        "BOTTOM",
        "SHOES",
        "OUTERWEAR",
        "ACCESSORY",
        "DRESS",
        "OTHER",
    ]
    assert [s.name for s in Season] == ["SUMMER", "WINTER", "SPRING_AUTUMN", "ALL_SEASON"]
    assert taxonomy.LOCATIONS[0] == "衣柜 - 挂衣区"


def test_validate_category_accepts_label_and_member_name() -> None:
    assert taxonomy.validate_category("上装") is Category.TOP
    assert taxonomy.validate_category("dress") is Category.DRESS
    assert taxonomy.validate_season("四季通用") is Season.ALL_SEASON

    with pytest.raises(ValueError):
        taxonomy.validate_category("帽子")
    with pytest.raises(ValueError):
        taxonomy.validate_season(None)


def test_clothing_item_coerces_and_rejects_enumerations() -> None:
    item = _item("a", category="下装")
    assert item.category is Category.BOTTOM

    with pytest.raises(ValueError):
        _item("b", category="hat")


def test_clothing_item_requires_id_and_image() -> None:
    with pytest.raises(ValueError):
        _item("")
    with pytest.raises(ValueError):
        ClothingItem(
            id="x",
            image_url="",
            name="",
            category=Category.TOP,
            season=Season.SUMMER,
            color="",
            location="",
            description="",
            created_at=0,
        )


def test_record_uses_labels_and_summary_omits_image() -> None:
    item = _item("a")
    record = item.to_record()
    assert record["category"] == "上装"
    assert record["imageUrl"].startswith("data:image/png")
    assert ClothingItem.from_record(record) == item

    summary = item.summary()
    assert set(summary) == {"id", "name", "category", "color", "season", "location"}
    assert "imageUrl" not in summary


def test_outfit_suggestion_resolve_drops_unknown_ids() -> None:
    inventory = [_item("a"), _item("b", Category.BOTTOM), _item("c", Category.SHOES)]
    suggestion = OutfitSuggestion(outfit_name="通勤", items=("b", "ghost", "a"), reasoning="")

    assert [item.id for item in suggestion.resolve(inventory)] == ["a", "b"]
    assert suggestion.unknown_ids(inventory) == ["ghost"]
