"""Tests for loot/weeks.py - week directory and deletion reversion."""

from collections.abc import Callable

import pytest

from lootledger.core.errors import ConflictError, InvalidInputError, NotFoundError
from lootledger.gear.models import (
    FloorNumber,
    GearSlot,
    LootTarget,
    Member,
    SpecType,
    UpgradeMaterial,
)
from lootledger.gear.ops import GearOps
from lootledger.loot.ledger import DistributionOps
from lootledger.loot.weeks import WeekOps
from lootledger.roster.ops import RosterOps
from lootledger.store.db import Database
from lootledger.store.repos import AssignmentRepository
from tests.factories import LINK_A

MAIN = SpecType.MAIN_SPEC


class TestWeekDirectory:
    def test_no_week_initially(self, weeks: WeekOps) -> None:
        assert weeks.get_current() is None
        assert weeks.list_weeks() == []

    def test_start_new_week_increments_and_becomes_current(self, weeks: WeekOps) -> None:
        first = weeks.start_new_week()
        second = weeks.start_new_week()

        assert (first.week_number, second.week_number) == (1, 2)
        current = weeks.get_current()
        assert current is not None and current.week_number == 2
        assert [(w.week_number, w.is_current) for w in weeks.list_weeks()] == [
            (2, True),
            (1, False),
        ]

    def test_start_after_explicit_week_uses_max_plus_one(self, weeks: WeekOps) -> None:
        weeks.create_week(7)
        assert weeks.start_new_week().week_number == 8

    def test_create_existing_week_conflicts(self, weeks: WeekOps) -> None:
        weeks.create_week(3)
        with pytest.raises(ConflictError):
            weeks.create_week(3)

    @pytest.mark.parametrize("number", [0, -2])
    def test_create_non_positive_week_rejected(self, weeks: WeekOps, number: int) -> None:
        with pytest.raises(InvalidInputError):
            weeks.create_week(number)

    def test_created_week_is_not_current(self, weeks: WeekOps) -> None:
        week = weeks.create_week(4)
        assert week.is_current is False
        assert weeks.get_current() is None

    def test_set_current_week_switches_and_creates(self, weeks: WeekOps) -> None:
        weeks.start_new_week()
        weeks.set_current_week(5)

        current = weeks.get_current()
        assert current is not None and current.week_number == 5
        assert sum(1 for w in weeks.list_weeks() if w.is_current) == 1

        weeks.set_current_week(1)
        current = weeks.get_current()
        assert current is not None and current.week_number == 1


class TestDeleteWeek:
    def test_unknown_week_not_found(self, weeks: WeekOps) -> None:
        with pytest.raises(NotFoundError):
            weeks.delete_week(9)

    def test_deletion_reverts_every_live_assignment(
        self,
        db: Database,
        roster: RosterOps,
        weeks: WeekOps,
        distribution: DistributionOps,
        member_factory: Callable[..., Member],
    ) -> None:
        # Given
        weeks.start_new_week()
        alice = member_factory("Alice")
        bob = member_factory("Bob")
        distribution.assign(alice.id, LootTarget.for_slot(GearSlot.BODY), FloorNumber.FLOOR3, MAIN)
        distribution.assign(
            bob.id, LootTarget.for_material(UpgradeMaterial.ARMOR), FloorNumber.FLOOR3, MAIN
        )
        distribution.assign(
            bob.id, LootTarget.for_slot(GearSlot.WEAPON), FloorNumber.FLOOR4, MAIN
        )

        # When
        weeks.delete_week(1)

        # Then
        alice_after = roster.get_member(alice.id).main_spec
        bob_after = roster.get_member(bob.id).main_spec
        assert alice_after.item(GearSlot.BODY).is_acquired is False  # type: ignore[union-attr]
        assert bob_after.item(GearSlot.WEAPON).is_acquired is False  # type: ignore[union-attr]
        assert not any(i.upgrade_material_acquired for i in bob_after.items)
        with db.session() as session:
            assert list(AssignmentRepository(session).for_week(1)) == []
        assert weeks.list_weeks() == []

    def test_deletion_reverts_manual_edits(
        self,
        db: Database,
        roster: RosterOps,
        weeks: WeekOps,
        gear: GearOps,
        member_factory: Callable[..., Member],
    ) -> None:
        # Given
        weeks.start_new_week()
        alice = member_factory("Alice")
        gear.set_item_acquired(alice.id, GearSlot.BODY, True, MAIN)
        gear.set_upgrade_acquired(alice.id, GearSlot.HEAD, True, MAIN)
        with db.session() as session:
            manual = list(AssignmentRepository(session).for_week(1))
        assert len(manual) == 2 and all(entry.is_manual_edit for entry in manual)

        # When
        weeks.delete_week(1)

        # Then
        track = roster.get_member(alice.id).main_spec
        body, head = track.item(GearSlot.BODY), track.item(GearSlot.HEAD)
        assert body is not None and body.is_acquired is False
        assert head is not None and head.upgrade_material_acquired is False
        assert track.link_states[LINK_A][GearSlot.BODY].is_acquired is False
        assert track.link_states[LINK_A][GearSlot.HEAD].upgrade_material_acquired is False
        with db.session() as session:
            assert list(AssignmentRepository(session).for_week(1)) == []

    def test_undone_entries_are_not_reverted_twice(
        self,
        roster: RosterOps,
        weeks: WeekOps,
        distribution: DistributionOps,
        member_factory: Callable[..., Member],
        gear: GearOps,
    ) -> None:
        weeks.start_new_week()
        alice = member_factory("Alice")
        assignment_id = distribution.assign(
            alice.id, LootTarget.for_slot(GearSlot.BODY), FloorNumber.FLOOR3, MAIN
        )
        distribution.undo(assignment_id)
        weeks.set_current_week(2)
        gear.set_item_acquired(alice.id, GearSlot.BODY, True, MAIN)

        weeks.delete_week(1)

        body = roster.get_member(alice.id).main_spec.item(GearSlot.BODY)
        assert body is not None and body.is_acquired is True

    def test_deleting_current_week_promotes_newest(self, weeks: WeekOps) -> None:
        weeks.start_new_week()
        weeks.start_new_week()
        weeks.start_new_week()

        weeks.delete_week(3)

        current = weeks.get_current()
        assert current is not None and current.week_number == 2

    def test_deleting_other_week_keeps_current(self, weeks: WeekOps) -> None:
        weeks.start_new_week()
        weeks.start_new_week()

        weeks.delete_week(1)

        current = weeks.get_current()
        assert current is not None and current.week_number == 2

    def test_deleted_member_entries_are_skipped(
        self,
        db: Database,
        roster: RosterOps,
        weeks: WeekOps,
        distribution: DistributionOps,
        member_factory: Callable[..., Member],
    ) -> None:
        weeks.start_new_week()
        alice = member_factory("Alice")
        distribution.assign(alice.id, LootTarget.for_slot(GearSlot.BODY), FloorNumber.FLOOR3, MAIN)
        roster.delete_member(alice.id)

        weeks.delete_week(1)

        with db.session() as session:
            assert list(AssignmentRepository(session).for_week(1)) == []
