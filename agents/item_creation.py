"""Item creation workflow: image capture, automatic tagging, drafting and submit."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, Optional

from agents.classification_adapter import ClassificationAdapter
from logic.errors import ClassificationFailed, UnreadableImage, WorkflowBusy, WorkflowStateError
from logic.outcomes import Outcome
from logic.validation import ClassificationPayload
from models.clothing_item import ClothingItem, new_item_id, now_millis
from models.taxonomy import (
    DEFAULT_CATEGORY,
    DEFAULT_ITEM_NAME,
    DEFAULT_SEASON,
    LOCATIONS,
    UNKNOWN_LABEL,
    Category,
    Season,
    validate_category,
    validate_season,
)
from tools.item_store import ItemStore
from wardrobe_app.logging_config import get_logger, log_event, operation_context

logger = get_logger(__name__)

CLASSIFICATION_FAILED_MESSAGE = "自动识别图片失败，请手动填写详情。"
MISSING_IMAGE_MESSAGE = "请先拍照或上传衣物图片。"
UNREADABLE_IMAGE_MESSAGE = "无法读取该图片，请重新拍照或上传。"


class CreationState(str, Enum):
    CAPTURING = "capturing"
    ANALYZING = "analyzing"
    DRAFTING = "drafting"


@dataclass
class ItemDraft:
    """User-editable fields of an item that has not been submitted yet."""

    name: str = ""
    category: Optional[Category] = DEFAULT_CATEGORY
    season: Optional[Season] = DEFAULT_SEASON
    color: str = ""
    location: str = LOCATIONS[0]
    description: str = ""

    @classmethod
    def blank(cls) -> "ItemDraft":
        return cls(name="", category=None, season=None, color="", location="", description="")

    def merge(self, payload: ClassificationPayload) -> None:
        self.name = payload.name
        self.category = payload.category
        self.season = payload.season
        self.color = payload.color
        self.description = payload.description

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value if self.category else None
        data["season"] = self.season.value if self.season else None
        return data


def _text_or_default(value: Optional[str], default: str) -> str:
    text = (value or "").strip()
    return text or default


class ItemCreationWorkflow:
    """Drives one new item from image capture to a stored record.

    ``capturing`` has no image; ``analyzing`` runs the classifier and keeps the
    draft read-only; ``drafting`` lets the user edit before submitting. Only
    one classification call may be in flight per workflow instance.
    """

    def __init__(
        self,
        store: ItemStore,
        adapter: ClassificationAdapter,
        id_factory: Callable[[], str] = new_item_id,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.store = store
        self.adapter = adapter
        self.id_factory = id_factory
        self.clock = clock
        self.state = CreationState.CAPTURING
        self.image_url: Optional[str] = None
        self.draft = ItemDraft()

    @property
    def busy(self) -> bool:
        return self.state is CreationState.ANALYZING

    def _ensure_idle(self) -> None:
        if self.busy:
            raise WorkflowBusy("Image analysis is still running for this item")

    async def supply_image(self, image_url: str) -> Outcome[ItemDraft]:
        """Attach an image and pre-fill the draft from automatic classification.

        Classification failure is not fatal: the workflow still moves to
        ``drafting`` with default fields and the returned outcome carries the
        notification asking the user to fill the form manually. An image that
        cannot be decoded or fetched is rejected instead and the workflow goes
        back to ``capturing`` without it, so it can never be stored.
        """

        self._ensure_idle()
        if not image_url:
            return Outcome.rejected("missing_image", MISSING_IMAGE_MESSAGE)

        self.image_url = image_url
        self.draft = ItemDraft()
        self.state = CreationState.ANALYZING
        with operation_context("workflow:item_creation.supply_image") as correlation_id:
            try:
                payload = await self.adapter.classify(image_url)
            except UnreadableImage as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "image_rejected",
                    workflow="item_creation",
                    reason=exc.reason,
                    error=str(exc),
                    correlation_id=correlation_id,
                )
                self.image_url = None
                outcome: Outcome[ItemDraft] = Outcome.rejected(exc.reason, UNREADABLE_IMAGE_MESSAGE)
            except ClassificationFailed as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "classification_failed",
                    workflow="item_creation",
                    reason=exc.reason,
                    error=str(exc),
                    correlation_id=correlation_id,
                )
                outcome = Outcome.failure(exc.reason, CLASSIFICATION_FAILED_MESSAGE)
            else:
                self.draft.merge(payload)
                outcome = Outcome.success(self.draft)
            finally:
                self.state = CreationState.DRAFTING if self.image_url else CreationState.CAPTURING
        return outcome

    def update_draft(self, **changes: Any) -> ItemDraft:
        """Apply user edits; ``None`` for category or season means unset."""

        self._ensure_idle()
        if self.state is not CreationState.DRAFTING:
            raise WorkflowStateError("Supply an image before editing item details")

        allowed = {field.name for field in fields(ItemDraft)}
        unknown = sorted(set(changes) - allowed)
        if unknown:
            raise ValueError(f"Unknown draft fields: {unknown}")

        for key, value in changes.items():
            if key == "category":
                value = validate_category(value) if value not in (None, "") else None
            elif key == "season":
                value = validate_season(value) if value not in (None, "") else None
            else:
                value = "" if value is None else str(value)
            setattr(self.draft, key, value)
        return self.draft

    def discard_image(self) -> None:
        """Drop the current image and clear every field."""

        self._ensure_idle()
        self.state = CreationState.CAPTURING
        self.image_url = None
        self.draft = ItemDraft.blank()

    def build_item(self) -> ClothingItem:
        if not self.image_url:
            raise WorkflowStateError("An item cannot be built without an image")
        draft = self.draft
        return ClothingItem(
            id=self.id_factory(),
            image_url=self.image_url,
            name=_text_or_default(draft.name, DEFAULT_ITEM_NAME),
            category=draft.category or DEFAULT_CATEGORY,
            season=draft.season or DEFAULT_SEASON,
            color=_text_or_default(draft.color, UNKNOWN_LABEL),
            location=_text_or_default(draft.location, UNKNOWN_LABEL),
            description=(draft.description or "").strip(),
            created_at=self.clock(),
        )

    def submit(self) -> Outcome[ClothingItem]:
        """Store the drafted item and reset the workflow.

        :class:`DuplicateIdentifier` from the store is not caught here.
        """

        self._ensure_idle()
        if not self.image_url:
            return Outcome.rejected("missing_image", MISSING_IMAGE_MESSAGE)

        item = self.build_item()
        self.store.add(item)
        log_event(
            logger,
            logging.INFO,
            "item_created",
            workflow="item_creation",
            item_id=item.id,
            category=item.category.value,
        )
        self.reset()
        return Outcome.success(item)

    def reset(self) -> None:
        self._ensure_idle()
        self.state = CreationState.CAPTURING
        self.image_url = None
        self.draft = ItemDraft()


__all__ = [
    "CreationState",
    "ItemDraft",
    "ItemCreationWorkflow",
    "CLASSIFICATION_FAILED_MESSAGE",
    "MISSING_IMAGE_MESSAGE",
    "UNREADABLE_IMAGE_MESSAGE",
]
