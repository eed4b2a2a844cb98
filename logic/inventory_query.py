"""Pure filtering helpers for browsing an inventory."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from models.clothing_item import ClothingItem
from models.taxonomy import ALL_CATEGORIES, Category, validate_category

logger = logging.getLogger(__name__)


def _matches_term(item: ClothingItem, term: str) -> bool:
    return any(term in field.lower() for field in (item.name, item.location, item.color))


def filter_inventory(
    inventory: Sequence[ClothingItem],
    category_filter: Optional[str | Category] = ALL_CATEGORIES,
    search_term: Optional[str] = "",
) -> List[ClothingItem]:
    """Filter by exact category and case-insensitive search over name, location and color.

    ``category_filter`` is either the ``ALL_CATEGORIES`` sentinel (``None`` and
    the empty string are treated the same way) or one category. An unknown
    category matches nothing. Both filters must hold for an item to be kept.
    """

    category: Optional[Category] = None
    if category_filter not in (None, "", ALL_CATEGORIES):
        try:
            category = validate_category(category_filter)
        except ValueError:
            logger.debug("Unknown category filter %r", category_filter)
            return []

    term = (search_term or "").lower()
    return [
        item
        for item in inventory
        if (category is None or item.category == category) and _matches_term(item, term)
    ]


__all__ = ["filter_inventory"]
