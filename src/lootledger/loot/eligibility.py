"""Eligibility resolution - who still needs each drop of a floor.

Main-spec need always wins: off-spec need is only consulted when no member
needs the drop for their main spec. When nobody needs it at all, the whole
roster is offered the drop as Extra with a need count of zero.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from lootledger.gear.models import (
    FLOOR_TARGETS,
    MATERIAL_SLOTS,
    RING_SLOTS,
    FloorNumber,
    GearTrack,
    ItemType,
    LootTarget,
    Member,
    SpecType,
)
from lootledger.store.models import Assignment


@dataclass
class MemberNeed:
    """One member's claim on a drop."""

    member_id: str
    member_name: str
    needed_count: int
    spec_type: SpecType


@dataclass
class AvailableLoot:
    """One drop of a floor with its eligible members and assignment status."""

    floor: FloorNumber
    target: LootTarget
    eligible: list[MemberNeed] = field(default_factory=list)
    is_assigned: bool = False
    assigned_member_id: str | None = None
    assignment_id: str | None = None


def _track_need(track: GearTrack, target: LootTarget) -> int:
    """How many of this drop the track still needs (0 = not eligible)."""
    if not track.items:
        return 0
    if target.material is not None:
        slots = MATERIAL_SLOTS[target.material]
        return sum(
            1
            for item in track.items
            if item.slot in slots
            and item.item_type == ItemType.AUG_TOME
            and not item.upgrade_material_acquired
        )

    slots = RING_SLOTS if target.is_ring else (target.slot,)
    needs = any(
        item.slot in slots and item.item_type == ItemType.RAID and not item.is_acquired
        for item in track.items
    )
    return 1 if needs else 0


def _needs_for_spec(
    members: Iterable[Member], target: LootTarget, spec_type: SpecType
) -> list[MemberNeed]:
    needs: list[MemberNeed] = []
    for member in members:
        count = _track_need(member.track(spec_type), target)
        if count:
            needs.append(MemberNeed(member.id, member.name, count, spec_type))
    return needs


def eligible_members(members: Sequence[Member], target: LootTarget) -> list[MemberNeed]:
    """Members who need ``target``, with main spec taking total priority."""
    needs = _needs_for_spec(members, target, SpecType.MAIN_SPEC)
    if not needs:
        needs = _needs_for_spec(members, target, SpecType.OFF_SPEC)
    if not needs:
        needs = [MemberNeed(m.id, m.name, 0, SpecType.EXTRA) for m in members]
    return needs


def resolve_floor(
    floor: FloorNumber,
    members: Sequence[Member],
    assignments: Iterable[Assignment],
) -> list[AvailableLoot]:
    """Eligibility for every drop of ``floor``.

    ``assignments`` are the floor's active distribution entries for the week
    being viewed.
    """
    by_key: dict[str, Assignment] = {}
    for assignment in assignments:
        key = assignment.target_key
        if key is not None:
            by_key.setdefault(key, assignment)

    loot: list[AvailableLoot] = []
    for target in FLOOR_TARGETS[floor]:
        assignment = by_key.get(target.key)
        loot.append(
            AvailableLoot(
                floor=floor,
                target=target,
                eligible=eligible_members(members, target),
                is_assigned=assignment is not None,
                assigned_member_id=assignment.member_id if assignment else None,
                assignment_id=assignment.id if assignment else None,
            )
        )
    return loot
