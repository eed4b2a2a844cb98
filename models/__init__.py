"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_item import ClothingItem, new_item_id, now_millis
from models.outfit import OutfitSuggestion

__all__ = ["ClothingItem", "OutfitSuggestion", "new_item_id", "now_millis"]
