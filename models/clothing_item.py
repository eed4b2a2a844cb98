"""Clothing item data model and helpers."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict

from models.taxonomy import Category, Season, validate_category, validate_season


def new_item_id() -> str:
    return str(uuid.uuid4())


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ClothingItem:
    """One physical garment in a user's inventory.

    Records are constructed fully formed and never mutated in place; the
    constructor coerces ``category`` and ``season`` into their enumerations and
    rejects anything outside them.
    """

    id: str
    image_url: str
    name: str
    category: Category
    season: Season
    color: str
    location: str
    description: str
    created_at: int

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ClothingItem requires a non-empty id")
        if not self.image_url:
            raise ValueError("ClothingItem requires an image")
        object.__setattr__(self, "category", validate_category(self.category))
        object.__setattr__(self, "season", validate_season(self.season))
        object.__setattr__(self, "created_at", int(self.created_at))

    def summary(self) -> Dict[str, str]:
        """Reduced projection shared with the recommendation capability."""

        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "color": self.color,
            "season": self.season.value,
            "location": self.location,
        }

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "imageUrl": self.image_url,
            "name": self.name,
            "category": self.category.value,
            "season": self.season.value,
            "color": self.color,
            "location": self.location,
            "description": self.description,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ClothingItem":
        """Build an item from its persisted record.

        Raises :class:`ValueError` (or :class:`KeyError` for missing keys) when
        the record does not describe a valid item.
        """

        return cls(
            id=str(record["id"]),
            image_url=str(record["imageUrl"]),
            name=str(record.get("name") or ""),
            category=record["category"],
            season=record["season"],
            color=str(record.get("color") or ""),
            location=str(record.get("location") or ""),
            description=str(record.get("description") or ""),
            created_at=record.get("createdAt") or 0,
        )


__all__ = ["ClothingItem", "new_item_id", "now_millis"]
