"""Per-user wiring of the inventory store and the two workflows over it."""

from __future__ import annotations

import logging
from typing import List, Optional

from agents.classification_adapter import ClassificationAdapter
from agents.item_creation import ItemCreationWorkflow
from agents.recommendation_engine import RecommendationEngine
from agents.stylist_workflow import StylistWorkflow
from agents.visualization import VisualizationWorkflow
from logic.inventory_query import filter_inventory
from models.clothing_item import ClothingItem
from models.taxonomy import ALL_CATEGORIES, Category
from tools.capabilities import CapabilitySet
from tools.image_payload import decode_image_url
from tools.item_store import ItemStore
from tools.kv_store import KeyValueStore
from wardrobe_app.config import WardrobeConfig
from wardrobe_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

DELETE_CONFIRMATION_PROMPT = "确定要删除这件衣物吗？"


class WardrobeSession:
    """Everything one signed-in user works with.

    A session is bound to a single username for its whole life; switching users
    means building a new session, which loads a different namespace.
    """

    def __init__(
        self,
        username: str,
        backend: KeyValueStore,
        capabilities: CapabilitySet,
        config: Optional[WardrobeConfig] = None,
    ) -> None:
        self.config = config or WardrobeConfig()
        self.store = ItemStore(username, backend)

        def load_image(image_url: str):
            return decode_image_url(image_url, timeout_seconds=self.config.image_fetch_timeout_seconds)

        self.creation = ItemCreationWorkflow(
            self.store, ClassificationAdapter(capabilities.classifier, image_loader=load_image)
        )
        self.stylist = StylistWorkflow(
            self.store,
            RecommendationEngine(capabilities.reasoner, language=self.config.response_language),
            VisualizationWorkflow(capabilities.synthesizer, image_loader=load_image),
        )

    @property
    def username(self) -> str:
        return self.store.username

    def browse(
        self,
        category_filter: Optional[str | Category] = ALL_CATEGORIES,
        search_term: Optional[str] = "",
    ) -> List[ClothingItem]:
        return filter_inventory(self.store.list(), category_filter, search_term)

    def delete_item(self, item_id: str, confirmed: bool = False) -> bool:
        """Remove an item once the user has confirmed ``DELETE_CONFIRMATION_PROMPT``."""

        if not confirmed:
            return False
        removed = self.store.remove(item_id)
        log_event(LOGGER, logging.INFO, "item_delete_requested", item_id=item_id, removed=removed)
        return removed


__all__ = ["WardrobeSession", "DELETE_CONFIRMATION_PROMPT"]
