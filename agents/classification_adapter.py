"""Classification adapter turning an item image into a validated partial record."""

from __future__ import annotations

import asyncio
from typing import Callable

import requests

from logic.errors import ClassificationFailed, UnreadableImage
from logic.prompts import classification_instruction
from logic.validation import ClassificationPayload, parse_json_payload
from tools.capabilities import ImageClassifier, ImagePayload
from tools.image_payload import decode_image_url
from tools.observability import instrument_capability


class ClassificationAdapter:
    """Wraps the one external call that tags an image.

    Every failure surfaces as :class:`ClassificationFailed`; a payload that
    does not parse, or names a category or season outside the taxonomy, raises
    the :class:`MalformedResponse` subtype and an image that cannot be decoded or
    fetched raises :class:`UnreadableImage` before the classifier is called.
    Image loading runs in a worker thread so remote fetches do not block the
    event loop.
    """

    def __init__(
        self,
        classifier: ImageClassifier,
        image_loader: Callable[[str], ImagePayload] = decode_image_url,
    ) -> None:
        self.classifier = classifier
        self.image_loader = image_loader

    @instrument_capability("classify_image")
    async def classify(self, image_url: str) -> ClassificationPayload:
        try:
            image = await asyncio.to_thread(self.image_loader, image_url)
        except (ValueError, requests.RequestException) as exc:
            raise UnreadableImage(f"Unable to read item image: {exc}") from exc

        try:
            raw = await self.classifier.classify_image(image, classification_instruction())
        except Exception as exc:  # noqa: BLE001 - any transport or SDK error ends this call
            raise ClassificationFailed(f"Image classification call failed: {exc}") from exc

        return parse_json_payload(raw, ClassificationPayload)


__all__ = ["ClassificationAdapter"]
