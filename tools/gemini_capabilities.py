"""Gemini-backed implementations of the generative capabilities."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from google import generativeai as genai

from logic.validation import RecommendationRequest
from tools.capabilities import (
    CapabilitySet,
    ImageClassifier,
    ImagePayload,
    ImageSynthesizer,
    OutfitReasoner,
    ResponsePart,
)
from wardrobe_app.config import WardrobeConfig

LOGGER = logging.getLogger(__name__)


def _blob(image: ImagePayload) -> Dict[str, Any]:
    return {"mime_type": image.mime_type, "data": image.data}


class _GeminiCapability:
    def __init__(self, config: WardrobeConfig, model_name: str) -> None:
        self.config = config
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

    def _request_options(self) -> Optional[Dict[str, float]]:
        if self.config.request_timeout_seconds:
            return {"timeout": self.config.request_timeout_seconds}
        return None


class GeminiImageClassifier(_GeminiCapability, ImageClassifier):
    """Vision tagging through the text model with a JSON response."""

    def __init__(self, config: WardrobeConfig) -> None:
        super().__init__(config, config.text_model)

    async def classify_image(self, image: ImagePayload, instruction: str) -> str:
        response = await self._model.generate_content_async(
            [_blob(image), instruction],
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                temperature=self.config.classification_temperature,
            ),
            request_options=self._request_options(),
        )
        return response.text


class GeminiOutfitReasoner(_GeminiCapability, OutfitReasoner):
    """Outfit selection through the text model with a JSON response."""

    def __init__(self, config: WardrobeConfig) -> None:
        super().__init__(config, config.text_model)

    async def recommend_outfit(self, request: RecommendationRequest, instruction: str) -> str:
        LOGGER.debug(
            "Requesting outfit from Gemini",
            extra={"model": self.model_name, "inventory_size": len(request.inventory_summary)},
        )
        response = await self._model.generate_content_async(
            instruction,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                temperature=self.config.recommendation_temperature,
            ),
            request_options=self._request_options(),
        )
        return response.text


class GeminiImageSynthesizer(_GeminiCapability, ImageSynthesizer):
    """Composite rendering through the image model."""

    def __init__(self, config: WardrobeConfig) -> None:
        super().__init__(config, config.image_model)

    async def synthesize_composite(
        self, images: Sequence[ImagePayload], instruction: str
    ) -> List[ResponsePart]:
        contents: List[Any] = [_blob(image) for image in images]
        contents.append(instruction)
        response = await self._model.generate_content_async(
            contents, request_options=self._request_options()
        )

        parts: List[ResponsePart] = []
        for candidate in list(response.candidates)[:1]:
            for part in candidate.content.parts:
                blob = getattr(part, "inline_data", None)
                if blob is not None and blob.data:
                    parts.append(ResponsePart(mime_type=blob.mime_type or None, data=bytes(blob.data)))
                elif getattr(part, "text", None):
                    parts.append(ResponsePart(text=part.text))
        return parts


def build_gemini_capabilities(config: WardrobeConfig) -> CapabilitySet:
    """Configure the SDK once and return the three Gemini capabilities."""

    genai.configure(api_key=config.api_key)
    return CapabilitySet(
        classifier=GeminiImageClassifier(config),
        reasoner=GeminiOutfitReasoner(config),
        synthesizer=GeminiImageSynthesizer(config),
    )


__all__ = [
    "GeminiImageClassifier",
    "GeminiOutfitReasoner",
    "GeminiImageSynthesizer",
    "build_gemini_capabilities",
]
