"""Per-user inventory store persisted through a :class:`KeyValueStore`."""
from __future__ import annotations

import json
import logging
from typing import List, Optional

from logic.errors import DuplicateIdentifier
from models.clothing_item import ClothingItem
from tools.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

INVENTORY_KEY_PREFIX = "smart-wardrobe-inventory-"


def inventory_key(username: str) -> str:
    return f"{INVENTORY_KEY_PREFIX}{username}"


class ItemStore:
    """Ordered, newest-first inventory scoped to one username.

    The full sequence is written to the backend before the in-memory list is
    swapped, so a failed write leaves both sides at the previous state.
    """

    def __init__(self, username: str, backend: KeyValueStore) -> None:
        if not username:
            raise ValueError("ItemStore requires a username")
        self.username = username
        self.backend = backend
        self._key = inventory_key(username)
        self._items: List[ClothingItem] = self._load()

    def _load(self) -> List[ClothingItem]:
        raw = self.backend.get(self._key)
        if raw is None:
            return []
        records = json.loads(raw)
        if not isinstance(records, list):
            raise ValueError(f"Inventory document for key {self._key!r} is not a list")

        items: List[ClothingItem] = []
        seen = set()
        for record in records:
            try:
                item = ClothingItem.from_record(record)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping stored wardrobe record due to validation error: %s", exc)
                continue
            if item.id in seen:
                logger.warning("Skipping stored wardrobe record with repeated id %s", item.id)
                continue
            seen.add(item.id)
            items.append(item)
        return items

    def _persist(self, items: List[ClothingItem]) -> None:
        payload = json.dumps([item.to_record() for item in items], ensure_ascii=False)
        self.backend.set(self._key, payload)

    def list(self) -> List[ClothingItem]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[ClothingItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    def add(self, item: ClothingItem) -> ClothingItem:
        if item.id in self:
            raise DuplicateIdentifier(f"Item id {item.id!r} already exists for this user")
        updated = [item, *self._items]
        self._persist(updated)
        self._items = updated
        logger.info("Stored wardrobe item", extra={"item_id": item.id, "item_count": len(updated)})
        return item

    def remove(self, item_id: str) -> bool:
        """Delete ``item_id``; a missing id is a no-op and returns ``False``."""

        if item_id not in self:
            return False
        updated = [item for item in self._items if item.id != item_id]
        self._persist(updated)
        self._items = updated
        logger.info("Removed wardrobe item", extra={"item_id": item_id, "item_count": len(updated)})
        return True

    def reload(self) -> List[ClothingItem]:
        self._items = self._load()
        return self.list()


__all__ = ["ItemStore", "inventory_key", "INVENTORY_KEY_PREFIX"]
