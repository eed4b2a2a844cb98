"""Contracts for the external generative capabilities and offline stand-ins.

The core only talks to these three abstract capabilities. The Gemini-backed
implementations live in :mod:`tools.gemini_capabilities`; the ``Mock*``
classes return canned responses for tests and local runs.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from logic.validation import RecommendationRequest

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePayload:
    """Decoded image bytes ready to send to a capability."""

    mime_type: str
    data: bytes


@dataclass(frozen=True)
class ResponsePart:
    """One part of a multimodal capability response."""

    text: Optional[str] = None
    mime_type: Optional[str] = None
    data: Optional[bytes] = None

    @property
    def is_image(self) -> bool:
        if not self.data:
            return False
        return self.mime_type is None or self.mime_type.startswith("image/")


class ImageClassifier(ABC):
    """Turns one garment image into JSON text describing it."""

    @abstractmethod
    async def classify_image(self, image: ImagePayload, instruction: str) -> str:
        """Return the raw JSON text produced for ``image``."""


class OutfitReasoner(ABC):
    """Selects outfit items from an inventory summary."""

    @abstractmethod
    async def recommend_outfit(self, request: RecommendationRequest, instruction: str) -> str:
        """Return the raw JSON text of the suggestion."""


class ImageSynthesizer(ABC):
    """Renders a composite image from several item images."""

    @abstractmethod
    async def synthesize_composite(
        self, images: Sequence[ImagePayload], instruction: str
    ) -> List[ResponsePart]:
        """Return every part of the response in order."""


@dataclass
class CapabilitySet:
    classifier: ImageClassifier
    reasoner: OutfitReasoner
    synthesizer: ImageSynthesizer


class _CannedResponse:
    """Shared behaviour for the mocks: optional gate, call log, canned result."""

    def __init__(self, response: Any = None, gate: Optional[asyncio.Event] = None) -> None:
        self.response = response
        self.gate = gate
        self.calls: List[dict] = []

    async def _respond(self, **call: Any) -> Any:
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response


class MockImageClassifier(_CannedResponse, ImageClassifier):
    """Offline deterministic classifier for tests."""

    def __init__(self, response: Any = None, gate: Optional[asyncio.Event] = None) -> None:
        super().__init__(
            response
            if response is not None
            else {
                "name": "白色棉质T恤",
                "category": "上装",
                "season": "夏季",
                "color": "白色",
                "description": "基础款纯棉短袖",
            },
            gate,
        )

    async def classify_image(self, image: ImagePayload, instruction: str) -> str:
        LOGGER.info("Returning mock classification", extra={"mime_type": image.mime_type})
        result = await self._respond(image=image, instruction=instruction)
        return result if isinstance(result, str) else json.dumps(result, ensure_ascii=False)


class MockOutfitReasoner(_CannedResponse, OutfitReasoner):
    """Offline reasoner; by default picks the first two summarised items."""

    async def recommend_outfit(self, request: RecommendationRequest, instruction: str) -> str:
        result = await self._respond(request=request, instruction=instruction)
        if result is None:
            result = {
                "outfitName": "简约日常",
                "items": [entry.id for entry in request.inventory_summary[:2]],
                "reasoning": "颜色协调，适合当前场合与天气。",
            }
        return result if isinstance(result, str) else json.dumps(result, ensure_ascii=False)


class MockImageSynthesizer(_CannedResponse, ImageSynthesizer):
    """Offline synthesizer returning a fixed list of response parts."""

    async def synthesize_composite(
        self, images: Sequence[ImagePayload], instruction: str
    ) -> List[ResponsePart]:
        result = await self._respond(images=list(images), instruction=instruction)
        if result is None:
            return [ResponsePart(text="Here is the outfit."), ResponsePart(mime_type="image/png", data=b"\x89PNG")]
        return list(result)


__all__ = [
    "ImagePayload",
    "ResponsePart",
    "ImageClassifier",
    "OutfitReasoner",
    "ImageSynthesizer",
    "CapabilitySet",
    "MockImageClassifier",
    "MockOutfitReasoner",
    "MockImageSynthesizer",
]
