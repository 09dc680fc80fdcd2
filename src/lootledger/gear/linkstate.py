"""Per-link acquisition memory.

Re-importing (or switching back to) a previously used gear list restores the
flags recorded for that link instead of starting over.
"""

from __future__ import annotations

from lootledger.gear.models import GearItem, GearSlot, GearTrack, SlotState


def restore(track: GearTrack, link: str, items: list[GearItem]) -> int:
    """Overwrite flags on ``items`` from the cache entry for ``link``.

    Returns the number of slots restored.
    """
    cached = track.link_states.get(link)
    if not cached:
        return 0
    restored = 0
    for item in items:
        state = cached.get(item.slot)
        if state is None:
            continue
        item.is_acquired = state.is_acquired
        item.upgrade_material_acquired = state.upgrade_material_acquired
        restored += 1
    return restored


def remember(track: GearTrack, link: str, items: list[GearItem]) -> None:
    """Record the flags of every item under ``link``."""
    entry = track.link_states.setdefault(link, {})
    for item in items:
        entry[item.slot] = SlotState(
            is_acquired=item.is_acquired,
            upgrade_material_acquired=item.upgrade_material_acquired,
        )


def remember_slot(track: GearTrack, slot: GearSlot) -> None:
    """Sync one slot of the track's current link into the cache."""
    if not track.link:
        return
    item = track.item(slot)
    if item is None:
        return
    remember(track, track.link, [item])
