"""Tests for xivgear/classify.py - Raid vs. Aug. Tome classification."""

import pytest

from lootledger.gear.models import GearSlot, ItemType
from lootledger.xivgear.classify import (
    classify_api_item,
    classify_by_name,
    resolve_item_type,
    slot_label,
    type_from_label,
)

TOME = ItemType.AUG_TOME
RAID = ItemType.RAID


class TestClassifyApiItem:
    @pytest.mark.parametrize(
        ("item", "expected"),
        [
            ({"id": 1, "source": "Allagan Tomestone of Poetics"}, TOME),
            ({"id": 1, "source": "Savage Raid"}, RAID),
            ({"id": 1, "itemCategory": "Tomestone gear"}, TOME),
            ({"id": 1, "acquisition": "Augmented via twine"}, TOME),
            ({"id": 1, "materia": []}, None),
        ],
    )
    def test_fields(self, item: dict, expected: ItemType | None) -> None:
        assert classify_api_item(item) == expected


class TestClassifyByName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Augmented Quetzalli Coat of Fending", TOME),
            ("Credendum Ring of Healing", TOME),
            ("Ascension Hat", None),
            ("Babyface Champion's Ring of Healing", RAID),
            ("", None),
        ],
    )
    def test_keywords(self, name: str, expected: ItemType | None) -> None:
        assert classify_by_name(name) == expected


class TestLabels:
    def test_type_from_label(self) -> None:
        assert type_from_label("Aug. Tome") == TOME
        assert type_from_label("Raid") == RAID

    def test_rings_share_page_label(self) -> None:
        assert slot_label(GearSlot.LEFT_RING) == slot_label(GearSlot.RIGHT_RING) == "Ring"
        assert slot_label(GearSlot.HEAD) == "Head"


class TestResolveItemType:
    def test_api_fields_win_over_page(self) -> None:
        result = resolve_item_type(
            GearSlot.HEAD,
            10,
            "Augmented Hat",
            {"id": 10, "source": "Raid"},
            {10: ("Augmented Hat", TOME)},
            {"Head": TOME},
        )
        assert result == RAID

    def test_page_item_before_slot_text(self) -> None:
        result = resolve_item_type(
            GearSlot.HEAD, 10, None, {"id": 10}, {10: ("Hat", RAID)}, {"Head": TOME}
        )
        assert result == RAID

    def test_slot_text_before_name(self) -> None:
        result = resolve_item_type(
            GearSlot.RIGHT_RING, 10, "Savage Ring", {"id": 10}, {}, {"Ring": TOME}
        )
        assert result == TOME

    def test_name_before_default(self) -> None:
        assert resolve_item_type(GearSlot.BODY, 10, "Augmented Coat", {"id": 10}, {}, {}) == TOME

    def test_default_is_raid(self) -> None:
        assert resolve_item_type(GearSlot.BODY, 10, "Coat", {"id": 10}, {}, {}) == RAID
