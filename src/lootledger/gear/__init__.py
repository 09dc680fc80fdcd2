"""Gear records: slots, items, tracks and per-link progress."""

from lootledger.gear.models import (
    FLOOR_TARGETS,
    FloorNumber,
    GearItem,
    GearSlot,
    GearTrack,
    ItemType,
    LootTarget,
    Member,
    MemberRole,
    SlotState,
    SpecType,
    UpgradeMaterial,
)

__all__ = [
    "FLOOR_TARGETS",
    "FloorNumber",
    "GearItem",
    "GearSlot",
    "GearTrack",
    "ItemType",
    "LootTarget",
    "Member",
    "MemberRole",
    "SlotState",
    "SpecType",
    "UpgradeMaterial",
]
