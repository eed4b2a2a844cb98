"""Recommendation engine delegating outfit selection to a reasoning capability."""
from __future__ import annotations

from typing import Sequence

from logic.errors import RecommendationFailed
from logic.prompts import DEFAULT_LANGUAGE, recommendation_instruction
from logic.validation import (
    InventorySummaryEntry,
    OutfitSuggestionPayload,
    RecommendationRequest,
    parse_json_payload,
)
from models.clothing_item import ClothingItem
from models.outfit import OutfitSuggestion
from tools.capabilities import OutfitReasoner
from tools.observability import instrument_capability
from wardrobe_app.logging_config import get_logger

logger = get_logger(__name__)


class RecommendationEngine:
    """Owns the contract around the external outfit reasoning call.

    The engine does not check inventory size or whether the returned ids exist;
    callers enforce the request policy and resolve ids against the live
    inventory before showing anything.
    """

    def __init__(self, reasoner: OutfitReasoner, language: str = DEFAULT_LANGUAGE) -> None:
        self.reasoner = reasoner
        self.language = language

    @staticmethod
    def build_request(
        inventory: Sequence[ClothingItem], occasion: str, weather: str
    ) -> RecommendationRequest:
        return RecommendationRequest(
            occasion=occasion,
            weather=weather,
            inventory_summary=[InventorySummaryEntry(**item.summary()) for item in inventory],
        )

    @instrument_capability("recommend_outfit")
    async def recommend(
        self, inventory: Sequence[ClothingItem], occasion: str, weather: str
    ) -> OutfitSuggestion:
        """Return a parsed suggestion or raise :class:`RecommendationFailed`."""

        request = self.build_request(inventory, occasion, weather)
        instruction = recommendation_instruction(request, self.language)
        try:
            raw = await self.reasoner.recommend_outfit(request, instruction)
        except Exception as exc:  # noqa: BLE001 - any transport or SDK error ends this call
            raise RecommendationFailed(f"Outfit reasoning call failed: {exc}") from exc

        payload = parse_json_payload(raw, OutfitSuggestionPayload)
        suggestion = OutfitSuggestion(
            outfit_name=payload.outfit_name,
            items=tuple(dict.fromkeys(payload.items)),
            reasoning=payload.reasoning,
        )
        logger.debug(
            "Parsed outfit suggestion",
            extra={"suggested_ids": list(suggestion.items), "inventory_size": len(inventory)},
        )
        return suggestion


__all__ = ["RecommendationEngine"]
