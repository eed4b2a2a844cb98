"""Visualization workflow rendering the selected items worn together."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Sequence

import requests

from logic.errors import NoImageProduced, VisualizationFailed
from logic.prompts import VISUALIZATION_INSTRUCTION
from models.clothing_item import ClothingItem
from tools.capabilities import ImagePayload, ImageSynthesizer
from tools.image_payload import decode_image_url, encode_data_url
from tools.observability import instrument_capability

DEFAULT_OUTPUT_MIME_TYPE = "image/png"


class VisualizationWorkflow:
    """Turns resolved outfit items into one composite image data URL."""

    def __init__(
        self,
        synthesizer: ImageSynthesizer,
        image_loader: Callable[[str], ImagePayload] = decode_image_url,
        instruction: str = VISUALIZATION_INSTRUCTION,
    ) -> None:
        self.synthesizer = synthesizer
        self.image_loader = image_loader
        self.instruction = instruction

    @instrument_capability("synthesize_composite")
    async def visualize(self, items: Sequence[ClothingItem]) -> str:
        """Return the first image part of the response as a data URL.

        Raises :class:`NoImageProduced` when the response carries no image and
        :class:`VisualizationFailed` when the images cannot be read or the call
        fails.
        Item images are loaded concurrently in worker threads.
        """

        if not items:
            raise ValueError("visualize() needs at least one selected item")

        try:
            images: List[ImagePayload] = list(
                await asyncio.gather(
                    *(asyncio.to_thread(self.image_loader, item.image_url) for item in items)
                )
            )
        except (ValueError, requests.RequestException) as exc:
            raise VisualizationFailed(f"Unable to read item image: {exc}") from exc

        try:
            parts = await self.synthesizer.synthesize_composite(images, self.instruction)
        except Exception as exc:  # noqa: BLE001 - any transport or SDK error ends this call
            raise VisualizationFailed(f"Composite synthesis call failed: {exc}") from exc

        for part in parts:
            if part.is_image:
                return encode_data_url(
                    ImagePayload(mime_type=part.mime_type or DEFAULT_OUTPUT_MIME_TYPE, data=part.data or b"")
                )
        raise NoImageProduced(f"Synthesis returned {len(parts)} part(s) without an image")


__all__ = ["VisualizationWorkflow"]
