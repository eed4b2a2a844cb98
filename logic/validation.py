"""Pydantic schemas for capability payloads and a strict JSON parser."""

from __future__ import annotations

import json
import re
from typing import List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from logic.errors import MalformedResponse
from models.taxonomy import Category, Season, validate_category, validate_season

M = TypeVar("M", bound=BaseModel)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(?P<body>.*?)\s*```$", re.DOTALL)


class ClassificationPayload(BaseModel):
    """Partial clothing record produced by the image classifier."""

    model_config = ConfigDict(extra="ignore")

    name: str
    category: Category
    season: Season
    color: str
    description: str

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> Category:
        return validate_category(value)

    @field_validator("season", mode="before")
    @classmethod
    def _coerce_season(cls, value: object) -> Season:
        return validate_season(value)


class InventorySummaryEntry(BaseModel):
    """Reduced projection of an item; never carries image data."""

    id: str
    name: str
    category: str
    color: str
    season: str
    location: str


class RecommendationRequest(BaseModel):
    """Input contract for the outfit reasoning capability."""

    model_config = ConfigDict(populate_by_name=True)

    occasion: str
    weather: str
    inventory_summary: List[InventorySummaryEntry] = Field(alias="inventorySummary")


class OutfitSuggestionPayload(BaseModel):
    """Output contract of the outfit reasoning capability."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    outfit_name: str = Field(alias="outfitName")
    items: List[str]
    reasoning: str


def parse_json_payload(raw: str | None, model: Type[M]) -> M:
    """Parse capability text into ``model`` or raise :class:`MalformedResponse`.

    A markdown code fence around the JSON document is tolerated.
    """

    text = (raw or "").strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group("body")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"Response is not valid JSON: {exc.msg}") from exc
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponse(
            f"Response does not match {model.__name__}: {exc.error_count()} error(s)"
        ) from exc


__all__ = [
    "ClassificationPayload",
    "InventorySummaryEntry",
    "RecommendationRequest",
    "OutfitSuggestionPayload",
    "parse_json_payload",
]
