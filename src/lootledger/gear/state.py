"""Apply and revert the gear mutation behind a ledger entry.

Both directions keep the link-state cache of the track's current link in
sync with the mutated slot.
"""

from __future__ import annotations

import structlog

from lootledger.core.errors import NoMatchingItemError
from lootledger.gear import linkstate
from lootledger.gear.models import (
    MATERIAL_SLOTS,
    RING_SLOTS,
    UPGRADE_ORDER,
    GearItem,
    GearSlot,
    GearTrack,
    ItemType,
    LootTarget,
    Member,
    SpecType,
    UpgradeMaterial,
)

log = structlog.get_logger(__name__)


def _first_upgradable(
    track: GearTrack, material: UpgradeMaterial, *, upgraded: bool
) -> GearItem | None:
    slots = MATERIAL_SLOTS[material]
    for slot in UPGRADE_ORDER:
        if slot not in slots:
            continue
        item = track.item(slot)
        if (
            item is not None
            and item.item_type == ItemType.AUG_TOME
            and item.upgrade_material_acquired == upgraded
        ):
            return item
    return None


def _free_ring(track: GearTrack) -> GearItem | None:
    for slot in RING_SLOTS:
        item = track.item(slot)
        if item is not None and item.item_type == ItemType.RAID and not item.is_acquired:
            return item
    return None


def apply(member: Member, target: LootTarget, spec_type: SpecType) -> GearSlot | None:
    """Mark the target acquired on the member's track.

    Returns the slot actually mutated (rings may resolve to either ring),
    or None for upgrade materials.

    Raises:
        NoMatchingItemError: The track has nothing that can take the drop.
    """
    track = member.track(spec_type)

    if target.material is not None:
        item = _first_upgradable(track, target.material, upgraded=False)
        if item is None:
            raise NoMatchingItemError.for_target(member.id, target.key, spec_type.value)
        item.upgrade_material_acquired = True
        linkstate.remember_slot(track, item.slot)
        return None

    if target.is_ring:
        item = _free_ring(track)
    else:
        assert target.slot is not None
        item = track.item(target.slot)
    if item is None:
        raise NoMatchingItemError.for_target(member.id, target.key, spec_type.value)

    item.is_acquired = True
    linkstate.remember_slot(track, item.slot)
    return item.slot


def revert(
    member: Member,
    spec_type: SpecType,
    slot: GearSlot | None,
    material: UpgradeMaterial | None,
) -> bool:
    """Undo a previously applied mutation.

    Gear entries clear ``is_acquired`` on the recorded slot. Material entries
    clear the first upgraded AugTome item of the category in upgrade order, which
    may not be the item that was originally upgraded.

    Returns True when something changed.
    """
    if spec_type == SpecType.EXTRA:
        return False
    track = member.track(spec_type)

    if material is not None:
        item = _first_upgradable(track, material, upgraded=True)
        if item is None:
            log.debug("revert_no_upgraded_item", member_id=member.id, material=material.value)
            return False
        item.upgrade_material_acquired = False
        linkstate.remember_slot(track, item.slot)
        return True

    if slot is None:
        return False
    item = track.item(slot)
    if item is None:
        log.debug("revert_slot_missing", member_id=member.id, slot=slot.value)
        return False
    item.is_acquired = False
    linkstate.remember_slot(track, item.slot)
    return True
