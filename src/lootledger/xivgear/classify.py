"""Raid vs. Aug. Tome classification.

The chain is fixed and each step only runs when the previous one is silent:

1. Explicit API fields on the item (``source``, ``itemCategory``, then any
   property that mentions tomestones).
2. The scraped page's per-item-id mapping.
3. The scraped page's per-slot text (``Body: i790 Aug. Tome``).
4. Name keywords.
5. Raid.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from lootledger.gear.models import GearSlot, ItemType

log = structlog.get_logger(__name__)

TOME_KEYWORDS: tuple[str, ...] = (
    "augmented",
    "aug.",
    "aug ",
    "tome",
    "tomestone",
    "credendum",
    "diadochos",
    "rinascita",
    "asphodelos",
    "radiant",
    "cryptlurker",
    "edenmorn",
    "law's order",
    "law order",
    "exarchic",
    "crystarium",
    "scaevan",
)

RAID_KEYWORDS: tuple[str, ...] = (
    "grand champion",
    "babyface champion",
    "savage",
    "champion's",
    "champions",
    "ultima",
    "dreadwyrm",
    "alexandrian",
    "midan",
    "genesis",
)

_TOME_MARKERS: tuple[str, ...] = ("tome", "tomestone", "augmented")
_RAID_MARKERS: tuple[str, ...] = ("raid", "savage")


def _mentions(text: str, markers: tuple[str, ...]) -> bool:
    return any(marker in text for marker in markers)


def type_from_label(label: str) -> ItemType:
    """Map free text like ``Aug. Tome`` or ``Raid`` to an item type."""
    text = label.lower()
    return ItemType.AUG_TOME if "tome" in text or "aug" in text else ItemType.RAID


def classify_api_item(item: Mapping[str, Any]) -> ItemType | None:
    """Classify from fields on the API item object, if any are telling."""
    source = item.get("source")
    if isinstance(source, str):
        text = source.lower()
        if _mentions(text, _TOME_MARKERS):
            return ItemType.AUG_TOME
        if _mentions(text, _RAID_MARKERS):
            return ItemType.RAID

    category = item.get("itemCategory")
    if isinstance(category, str) and _mentions(category.lower(), ("tome", "tomestone")):
        return ItemType.AUG_TOME

    for key, value in item.items():
        if _mentions(str(value).lower(), _TOME_MARKERS):
            log.debug("tome_property_found", property=key)
            return ItemType.AUG_TOME
    return None


def classify_by_name(name: str) -> ItemType | None:
    """Keyword heuristic over the item name. None when no keyword matches."""
    if not name:
        return None
    text = name.lower()
    if _mentions(text, TOME_KEYWORDS):
        return ItemType.AUG_TOME
    if _mentions(text, RAID_KEYWORDS):
        return ItemType.RAID
    return None


def slot_label(slot: GearSlot) -> str:
    """Label the gear planner page uses for a slot (rings share one)."""
    if slot in (GearSlot.LEFT_RING, GearSlot.RIGHT_RING):
        return "Ring"
    return slot.value


def resolve_item_type(
    slot: GearSlot,
    item_id: int,
    item_name: str | None,
    api_item: Mapping[str, Any],
    page_items: Mapping[int, tuple[str, ItemType]],
    page_slot_types: Mapping[str, ItemType],
) -> ItemType:
    """Run the full classification chain for one item."""
    item_type = classify_api_item(api_item)
    if item_type is not None:
        step = "api"
    elif item_id in page_items:
        item_type, step = page_items[item_id][1], "page_item"
    elif slot_label(slot) in page_slot_types:
        item_type, step = page_slot_types[slot_label(slot)], "page_slot"
    elif item_name and (by_name := classify_by_name(item_name)) is not None:
        item_type, step = by_name, "name"
    else:
        item_type, step = ItemType.RAID, "default"

    log.debug(
        "item_classified",
        slot=slot.value,
        item_id=item_id,
        item_type=item_type.value,
        step=step,
    )
    return item_type
