"""Gear domain models: slots, items, tracks and loot targets.

A member carries two independent gear tracks (main spec and off spec). Each
track holds the item list imported from its current link plus a link-state
cache that remembers acquisition progress per link.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from pydantic import BaseModel, Field

from lootledger.core.errors import InvalidInputError

# ============================================================================
# ENUMS
# ============================================================================


class GearSlot(str, Enum):
    """Fixed equipment slots.

    Declaration order is the tie-break order for every first-match lookup.
    """

    WEAPON = "Weapon"
    HEAD = "Head"
    BODY = "Body"
    HAND = "Hand"
    LEGS = "Legs"
    FEET = "Feet"
    EARS = "Ears"
    NECK = "Neck"
    WRIST = "Wrist"
    LEFT_RING = "LeftRing"
    RIGHT_RING = "RightRing"

    @classmethod
    def parse(cls, value: str) -> GearSlot:
        for slot in cls:
            if slot.value.lower() == value.strip().lower():
                return slot
        raise InvalidInputError.slot(value)


class ItemType(str, Enum):
    """Where a BiS piece comes from."""

    RAID = "Raid"
    AUG_TOME = "AugTome"


class SpecType(str, Enum):
    MAIN_SPEC = "MainSpec"
    OFF_SPEC = "OffSpec"
    EXTRA = "Extra"

    @classmethod
    def parse(cls, value: str) -> SpecType:
        for spec in cls:
            if spec.value.lower() == value.strip().lower():
                return spec
        raise InvalidInputError.spec_type(value, "expected MainSpec, OffSpec or Extra")


class FloorNumber(IntEnum):
    FLOOR1 = 1
    FLOOR2 = 2
    FLOOR3 = 3
    FLOOR4 = 4

    @classmethod
    def parse(cls, value: int | str) -> FloorNumber:
        try:
            return cls(int(value))
        except ValueError:
            raise InvalidInputError.floor(value) from None


class UpgradeMaterial(str, Enum):
    ARMOR = "Armor"
    ACCESSORY = "Accessory"


class MemberRole(str, Enum):
    DPS = "DPS"
    SUPPORT = "Support"


# ============================================================================
# SLOT TABLES
# ============================================================================

RING_SLOTS: tuple[GearSlot, ...] = (GearSlot.LEFT_RING, GearSlot.RIGHT_RING)

ARMOR_UPGRADE_SLOTS: frozenset[GearSlot] = frozenset(
    {GearSlot.HEAD, GearSlot.HAND, GearSlot.FEET, GearSlot.BODY, GearSlot.LEGS}
)

ACCESSORY_UPGRADE_SLOTS: frozenset[GearSlot] = frozenset(
    {GearSlot.EARS, GearSlot.NECK, GearSlot.WRIST, GearSlot.LEFT_RING, GearSlot.RIGHT_RING}
)

MATERIAL_SLOTS: dict[UpgradeMaterial, frozenset[GearSlot]] = {
    UpgradeMaterial.ARMOR: ARMOR_UPGRADE_SLOTS,
    UpgradeMaterial.ACCESSORY: ACCESSORY_UPGRADE_SLOTS,
}

SLOT_ORDER: dict[GearSlot, int] = {slot: i for i, slot in enumerate(GearSlot)}

# Upgrade materials land on (and are reverted from) RightRing before LeftRing.
UPGRADE_ORDER: tuple[GearSlot, ...] = (
    GearSlot.HEAD,
    GearSlot.BODY,
    GearSlot.HAND,
    GearSlot.LEGS,
    GearSlot.FEET,
    GearSlot.EARS,
    GearSlot.NECK,
    GearSlot.WRIST,
    GearSlot.RIGHT_RING,
    GearSlot.LEFT_RING,
)


def material_for_slot(slot: GearSlot) -> UpgradeMaterial | None:
    """Upgrade material category that augments the given slot."""
    if slot in ARMOR_UPGRADE_SLOTS:
        return UpgradeMaterial.ARMOR
    if slot in ACCESSORY_UPGRADE_SLOTS:
        return UpgradeMaterial.ACCESSORY
    return None


# ============================================================================
# LOOT TARGETS
# ============================================================================

RING_KEY = "Ring"
_MATERIAL_KEYS = {
    UpgradeMaterial.ARMOR: "ArmorMaterial",
    UpgradeMaterial.ACCESSORY: "AccessoryMaterial",
}


@dataclass(frozen=True)
class LootTarget:
    """A droppable thing: either a gear slot or an upgrade material.

    Exactly one of ``slot`` / ``material`` is set.
    """

    slot: GearSlot | None = None
    material: UpgradeMaterial | None = None

    def __post_init__(self) -> None:
        if (self.slot is None) == (self.material is None):
            raise ValueError("LootTarget needs exactly one of slot or material")

    @classmethod
    def for_slot(cls, slot: GearSlot) -> LootTarget:
        return cls(slot=slot)

    @classmethod
    def for_material(cls, material: UpgradeMaterial) -> LootTarget:
        return cls(material=material)

    @classmethod
    def parse(cls, value: str) -> LootTarget:
        """Parse a slot name, ``Ring``, ``ArmorMaterial`` or ``AccessoryMaterial``."""
        normalized = value.strip().lower()
        if normalized == RING_KEY.lower():
            return cls(slot=GearSlot.LEFT_RING)
        for material, key in _MATERIAL_KEYS.items():
            if normalized == key.lower():
                return cls(material=material)
        for slot in GearSlot:
            if slot.value.lower() == normalized:
                return cls(slot=slot)
        raise InvalidInputError.slot(value)

    @property
    def is_material(self) -> bool:
        return self.material is not None

    @property
    def is_ring(self) -> bool:
        return self.slot in RING_SLOTS

    @property
    def key(self) -> str:
        """Identity key. Both rings share ``Ring``."""
        if self.material is not None:
            return _MATERIAL_KEYS[self.material]
        assert self.slot is not None
        return RING_KEY if self.is_ring else self.slot.value

    def __str__(self) -> str:
        return self.key


FLOOR_TARGETS: dict[FloorNumber, tuple[LootTarget, ...]] = {
    FloorNumber.FLOOR1: (
        LootTarget(slot=GearSlot.EARS),
        LootTarget(slot=GearSlot.NECK),
        LootTarget(slot=GearSlot.WRIST),
        LootTarget(slot=GearSlot.LEFT_RING),
    ),
    FloorNumber.FLOOR2: (
        LootTarget(slot=GearSlot.HEAD),
        LootTarget(slot=GearSlot.HAND),
        LootTarget(slot=GearSlot.FEET),
        LootTarget(material=UpgradeMaterial.ACCESSORY),
    ),
    FloorNumber.FLOOR3: (
        LootTarget(slot=GearSlot.BODY),
        LootTarget(slot=GearSlot.LEGS),
        LootTarget(material=UpgradeMaterial.ARMOR),
    ),
    FloorNumber.FLOOR4: (LootTarget(slot=GearSlot.WEAPON),),
}


# ============================================================================
# GEAR RECORD
# ============================================================================


class GearItem(BaseModel):
    """One slot's BiS piece and its acquisition state."""

    slot: GearSlot
    item_name: str = ""
    item_type: ItemType = ItemType.RAID
    is_acquired: bool = False
    upgrade_material_acquired: bool = False
    item_id: int | None = None


class SlotState(BaseModel):
    """Cached acquisition flags for one slot under one link."""

    is_acquired: bool = False
    upgrade_material_acquired: bool = False


class GearTrack(BaseModel):
    """One spec variant: current link, its items and per-link progress."""

    link: str | None = None
    items: list[GearItem] = Field(default_factory=list)
    link_states: dict[str, dict[GearSlot, SlotState]] = Field(default_factory=dict)

    def item(self, slot: GearSlot) -> GearItem | None:
        for item in self.items:
            if item.slot == slot:
                return item
        return None

    def ordered_items(self) -> list[GearItem]:
        return sorted(self.items, key=lambda i: SLOT_ORDER[i.slot])


class Member(BaseModel):
    """A roster member with both gear tracks."""

    id: str
    name: str
    role: MemberRole = MemberRole.DPS
    main_spec: GearTrack = Field(default_factory=GearTrack)
    off_spec: GearTrack = Field(default_factory=GearTrack)

    def track(self, spec_type: SpecType) -> GearTrack:
        if spec_type == SpecType.MAIN_SPEC:
            return self.main_spec
        if spec_type == SpecType.OFF_SPEC:
            return self.off_spec
        raise InvalidInputError.spec_type(spec_type.value, "Extra has no gear track")
