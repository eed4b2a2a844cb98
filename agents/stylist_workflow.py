"""Styling workflow: request an outfit, then optionally visualize it."""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from agents.recommendation_engine import RecommendationEngine
from agents.visualization import VisualizationWorkflow
from logic.errors import RecommendationFailed, VisualizationFailed, WorkflowBusy
from logic.outcomes import Outcome
from models.clothing_item import ClothingItem
from models.outfit import OutfitSuggestion
from tools.item_store import ItemStore
from wardrobe_app.logging_config import get_logger, log_event, operation_context

logger = get_logger(__name__)

MIN_ITEMS_FOR_RECOMMENDATION = 2

INVENTORY_TOO_SMALL_MESSAGE = "衣橱里的衣服太少了，AI 搭配师需要更多选择！"
MISSING_CONTEXT_MESSAGE = "请输入天气和场合。"
RECOMMENDATION_FAILED_MESSAGE = "获取建议失败，请尝试其他关键词。"
NO_SUGGESTION_MESSAGE = "请先生成穿搭建议。"
NO_ITEMS_SELECTED_MESSAGE = "建议中的衣物已不在衣橱中，请重新生成搭配。"
VISUALIZATION_FAILED_MESSAGE = "无法生成试穿效果，请稍后重试。"


class StylistState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    VISUALIZING = "visualizing"


class StylistWorkflow:
    """Holds the current suggestion for one styling session.

    The suggestion lives only in memory and is replaced by every new request.
    Visualization is a separate step that can fail or be repeated without
    touching the suggestion.
    """

    def __init__(
        self,
        store: ItemStore,
        engine: RecommendationEngine,
        visualizer: VisualizationWorkflow,
    ) -> None:
        self.store = store
        self.engine = engine
        self.visualizer = visualizer
        self.state = StylistState.IDLE
        self.suggestion: Optional[OutfitSuggestion] = None
        self.visualization_url: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.state is not StylistState.IDLE

    def _ensure_idle(self) -> None:
        if self.busy:
            raise WorkflowBusy(f"Stylist is {self.state.value}; wait for the current call to finish")

    def selected_items(self) -> List[ClothingItem]:
        """Suggested items that still exist in the live inventory."""

        if self.suggestion is None:
            return []
        return self.suggestion.resolve(self.store.list())

    async def request_outfit(self, occasion: str, weather: str) -> Outcome[OutfitSuggestion]:
        self._ensure_idle()
        inventory = self.store.list()
        if len(inventory) < MIN_ITEMS_FOR_RECOMMENDATION:
            return Outcome.rejected("inventory_too_small", INVENTORY_TOO_SMALL_MESSAGE)
        if not (occasion or "").strip() or not (weather or "").strip():
            return Outcome.rejected("missing_context", MISSING_CONTEXT_MESSAGE)

        self.state = StylistState.GENERATING
        self.suggestion = None
        self.visualization_url = None
        with operation_context("workflow:stylist.request_outfit") as correlation_id:
            try:
                suggestion = await self.engine.recommend(inventory, occasion, weather)
            except RecommendationFailed as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "recommendation_failed",
                    workflow="stylist",
                    reason=exc.reason,
                    error=str(exc),
                    correlation_id=correlation_id,
                )
                return Outcome.failure(exc.reason, RECOMMENDATION_FAILED_MESSAGE)
            finally:
                self.state = StylistState.IDLE

            self.suggestion = suggestion
            unknown = suggestion.unknown_ids(self.store.list())
            log_event(
                logger,
                logging.INFO,
                "recommendation_ready",
                workflow="stylist",
                suggested=len(suggestion.items),
                dropped_unknown=len(unknown),
                correlation_id=correlation_id,
            )
        return Outcome.success(suggestion)

    async def visualize(self) -> Outcome[str]:
        self._ensure_idle()
        if self.suggestion is None:
            return Outcome.rejected("no_suggestion", NO_SUGGESTION_MESSAGE)
        items = self.selected_items()
        if not items:
            return Outcome.rejected("no_items_selected", NO_ITEMS_SELECTED_MESSAGE)

        self.state = StylistState.VISUALIZING
        with operation_context("workflow:stylist.visualize") as correlation_id:
            try:
                image_url = await self.visualizer.visualize(items)
            except VisualizationFailed as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "visualization_failed",
                    workflow="stylist",
                    reason=exc.reason,
                    error=str(exc),
                    correlation_id=correlation_id,
                )
                return Outcome.failure(exc.reason, VISUALIZATION_FAILED_MESSAGE)
            finally:
                self.state = StylistState.IDLE

        self.visualization_url = image_url
        return Outcome.success(image_url)

    def discard(self) -> None:
        """Forget the suggestion, e.g. when the styling view is left."""

        self._ensure_idle()
        self.suggestion = None
        self.visualization_url = None


__all__ = [
    "StylistState",
    "StylistWorkflow",
    "MIN_ITEMS_FOR_RECOMMENDATION",
    "INVENTORY_TOO_SMALL_MESSAGE",
    "MISSING_CONTEXT_MESSAGE",
    "RECOMMENDATION_FAILED_MESSAGE",
    "VISUALIZATION_FAILED_MESSAGE",
]
