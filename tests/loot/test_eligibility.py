"""Tests for loot/eligibility.py - pure eligibility resolution."""

from lootledger.gear.models import (
    FloorNumber,
    GearItem,
    GearSlot,
    GearTrack,
    ItemType,
    LootTarget,
    Member,
    SpecType,
    UpgradeMaterial,
)
from lootledger.loot.eligibility import eligible_members, resolve_floor
from lootledger.store.models import Assignment

HEAD = LootTarget.for_slot(GearSlot.HEAD)
RING = LootTarget.for_slot(GearSlot.LEFT_RING)


def _member(
    member_id: str,
    main: list[GearItem] | None = None,
    off: list[GearItem] | None = None,
) -> Member:
    return Member(
        id=member_id,
        name=member_id.title(),
        main_spec=GearTrack(items=main or []),
        off_spec=GearTrack(items=off or []),
    )


class TestPriority:
    def test_given_main_and_off_need_when_resolved_then_only_main_spec(self) -> None:
        """Main-spec need excludes every off-spec claimant."""
        # Given
        m1 = _member("m1", main=[GearItem(slot=GearSlot.HEAD)])
        m2 = _member("m2", off=[GearItem(slot=GearSlot.HEAD)])

        # When
        needs = eligible_members([m1, m2], HEAD)

        # Then
        assert [(n.member_id, n.needed_count, n.spec_type) for n in needs] == [
            ("m1", 1, SpecType.MAIN_SPEC)
        ]

    def test_given_only_off_need_when_resolved_then_off_spec(self) -> None:
        m1 = _member("m1", main=[GearItem(slot=GearSlot.HEAD, is_acquired=True)])
        m2 = _member("m2", off=[GearItem(slot=GearSlot.HEAD)])

        needs = eligible_members([m1, m2], HEAD)

        assert [(n.member_id, n.spec_type) for n in needs] == [("m2", SpecType.OFF_SPEC)]

    def test_given_nobody_needs_when_resolved_then_whole_roster_as_extra(self) -> None:
        m1 = _member("m1", main=[GearItem(slot=GearSlot.HEAD, is_acquired=True)])
        m2 = _member("m2")

        needs = eligible_members([m1, m2], HEAD)

        assert [(n.member_id, n.needed_count, n.spec_type) for n in needs] == [
            ("m1", 0, SpecType.EXTRA),
            ("m2", 0, SpecType.EXTRA),
        ]

    def test_tome_item_does_not_want_raid_drop(self) -> None:
        m1 = _member("m1", main=[GearItem(slot=GearSlot.HEAD, item_type=ItemType.AUG_TOME)])
        needs = eligible_members([m1], HEAD)
        assert needs[0].spec_type == SpecType.EXTRA


class TestRings:
    def test_given_both_rings_needed_when_resolved_then_listed_once(self) -> None:
        m1 = _member(
            "m1",
            main=[GearItem(slot=GearSlot.LEFT_RING), GearItem(slot=GearSlot.RIGHT_RING)],
        )
        needs = eligible_members([m1], RING)
        assert len(needs) == 1
        assert needs[0].needed_count == 1

    def test_given_only_left_ring_needed_when_resolved_then_listed_once(self) -> None:
        m1 = _member(
            "m1",
            main=[
                GearItem(slot=GearSlot.LEFT_RING),
                GearItem(slot=GearSlot.RIGHT_RING, item_type=ItemType.AUG_TOME),
            ],
        )
        needs = eligible_members([m1], LootTarget.for_slot(GearSlot.RIGHT_RING))
        assert [(n.member_id, n.spec_type) for n in needs] == [("m1", SpecType.MAIN_SPEC)]


class TestMaterials:
    def test_need_count_is_number_of_unupgraded_tome_items(self) -> None:
        m1 = _member(
            "m1",
            main=[
                GearItem(slot=GearSlot.HEAD, item_type=ItemType.AUG_TOME),
                GearItem(slot=GearSlot.LEGS, item_type=ItemType.AUG_TOME),
                GearItem(
                    slot=GearSlot.FEET,
                    item_type=ItemType.AUG_TOME,
                    upgrade_material_acquired=True,
                ),
                GearItem(slot=GearSlot.EARS, item_type=ItemType.AUG_TOME),
            ],
        )
        needs = eligible_members([m1], LootTarget.for_material(UpgradeMaterial.ARMOR))
        assert needs[0].needed_count == 2
        assert needs[0].spec_type == SpecType.MAIN_SPEC


class TestResolveFloor:
    def test_marks_assigned_targets(self) -> None:
        m1 = _member("m1", main=[GearItem(slot=GearSlot.RIGHT_RING)])
        ring_entry = Assignment(
            id="a1",
            week_number=1,
            floor_number=1,
            member_id="m1",
            slot=GearSlot.RIGHT_RING.value,
        )

        loot = resolve_floor(FloorNumber.FLOOR1, [m1], [ring_entry])

        by_key = {entry.target.key: entry for entry in loot}
        assert list(by_key) == ["Ears", "Neck", "Wrist", "Ring"]
        assert by_key["Ring"].is_assigned is True
        assert by_key["Ring"].assigned_member_id == "m1"
        assert by_key["Ring"].assignment_id == "a1"
        assert by_key["Ears"].is_assigned is False

    def test_empty_roster_yields_no_eligible(self) -> None:
        loot = resolve_floor(FloorNumber.FLOOR4, [], [])
        assert len(loot) == 1
        assert loot[0].eligible == []
