"""Outfit suggestion schema."""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from models.clothing_item import ClothingItem


@dataclass(frozen=True)
class OutfitSuggestion:
    """A recommendation held in memory for one styling session only."""

    outfit_name: str
    items: Tuple[str, ...]
    reasoning: str

    def resolve(self, inventory: Sequence[ClothingItem]) -> List[ClothingItem]:
        """Return the suggested items still present in ``inventory``.

        Identifiers the reasoning capability returned that are not in the live
        inventory are dropped.
        """

        wanted = set(self.items)
        return [item for item in inventory if item.id in wanted]

    def unknown_ids(self, inventory: Sequence[ClothingItem]) -> List[str]:
        known = {item.id for item in inventory}
        return [item_id for item_id in self.items if item_id not in known]
