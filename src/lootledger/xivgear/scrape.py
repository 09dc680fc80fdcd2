"""Best-effort scraping of the gear planner page.

The page is a client-rendered app, so most of the time none of these
patterns match and callers fall through to name heuristics. Nothing here
raises on odd markup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import structlog
from bs4 import BeautifulSoup

from lootledger.gear.models import ItemType
from lootledger.xivgear.classify import type_from_label

log = structlog.get_logger(__name__)

PAGE_SLOT_LABELS: tuple[str, ...] = (
    "Weapon",
    "Head",
    "Body",
    "Hand",
    "Legs",
    "Feet",
    "Ears",
    "Neck",
    "Wrist",
    "Ring",
)

_TYPE_TEXT = r"(Aug\.?\s*Tome|Augmented\s*Tome|Raid)"

_SCRIPT_ITEM_RE = re.compile(
    r'"id"\s*:\s*(\d+)[\s\S]*?"name"\s*:\s*"([^"]+)"[\s\S]*?"(?:source|type|itemType)"\s*:\s*"([^"]+)"',
    re.IGNORECASE,
)


@dataclass
class ScrapedPage:
    """What the page told us, keyed by item id and by slot label."""

    items: dict[int, tuple[str, ItemType]] = field(default_factory=dict)
    slot_types: dict[str, ItemType] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.slot_types


def _slot_types(text: str) -> dict[str, ItemType]:
    found: dict[str, ItemType] = {}
    for label in PAGE_SLOT_LABELS:
        strict = re.search(rf"{label}\s*:\s*i\d+\s+{_TYPE_TEXT}", text, re.IGNORECASE)
        match = strict or re.search(rf"{label}[^:]*:\s*i\d+\s+{_TYPE_TEXT}", text, re.IGNORECASE)
        if match:
            found[label] = type_from_label(match.group(1))
    return found


def _script_items(soup: BeautifulSoup) -> dict[int, tuple[str, ItemType]]:
    found: dict[int, tuple[str, ItemType]] = {}
    for script in soup.find_all("script"):
        content = script.string or script.get_text() or ""
        for match in _SCRIPT_ITEM_RE.finditer(content):
            found[int(match.group(1))] = (match.group(2), type_from_label(match.group(3)))
    return found


def _attribute_items(soup: BeautifulSoup) -> dict[int, tuple[str, ItemType]]:
    found: dict[int, tuple[str, ItemType]] = {}
    for tag in soup.find_all(attrs={"data-item-id": True}):
        raw_id = str(tag.get("data-item-id", "")).strip()
        name = str(tag.get("data-item-name", "")).strip()
        type_text = str(tag.get("data-item-type", "")).strip()
        if not raw_id.isdigit() or not name or not type_text:
            continue
        found[int(raw_id)] = (name, type_from_label(type_text))
    return found


def parse_page(html: str) -> ScrapedPage:
    """Extract item names/types and per-slot type labels from page HTML."""
    soup = BeautifulSoup(html, "lxml")
    page = ScrapedPage(slot_types=_slot_types(soup.get_text(" ")))
    page.items.update(_script_items(soup))
    page.items.update(_attribute_items(soup))
    log.debug(
        "page_parsed",
        items=len(page.items),
        slot_types=len(page.slot_types),
        html_length=len(html),
    )
    return page
