"""Loot distribution - eligibility, assignment, undo and Extra counts.

Every assignment is one immediate transaction: the at-most-once check, the
gear mutation and the ledger entry commit together or not at all.
"""

from __future__ import annotations

from collections import Counter

import structlog

from lootledger.core.errors import ConflictError, NotFoundError
from lootledger.gear import state
from lootledger.gear.models import FloorNumber, LootTarget, SpecType, UpgradeMaterial
from lootledger.loot.eligibility import AvailableLoot, resolve_floor
from lootledger.store.db import Database
from lootledger.store.models import Assignment
from lootledger.store.repos import AssignmentRepository, MemberRepository, WeekRepository

log = structlog.get_logger(__name__)

DEFAULT_WEEK_NUMBER = 1


class DistributionOps:
    """Assignment ledger operations."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def get_eligibility(
        self, floor: FloorNumber, week_number: int | None = None
    ) -> list[AvailableLoot]:
        """Who needs each drop of ``floor``, plus assignment status for the week.

        Without ``week_number`` the current week is used, or week 1 when no
        week is current.
        """
        with self._db.session() as session:
            if week_number is None:
                current = WeekRepository(session).current()
                week_number = current.week_number if current else DEFAULT_WEEK_NUMBER
            members = MemberRepository(session).list()
            assignments = AssignmentRepository(session).active_distribution(
                week_number, int(floor)
            )
            return resolve_floor(floor, members, assignments)

    def assign(
        self,
        member_id: str,
        target: LootTarget,
        floor: FloorNumber,
        spec_type: SpecType,
    ) -> str:
        """Give ``target`` from ``floor`` to a member for the current week.

        Returns:
            The new assignment id.

        Raises:
            NotFoundError: Unknown member.
            ConflictError: No current week, or the drop is already assigned.
            NoMatchingItemError: The member's track has nothing to mark.
        """
        with self._db.immediate_transaction() as session:
            members = MemberRepository(session)
            assignments = AssignmentRepository(session)

            member = members.get(member_id)
            week = WeekRepository(session).current()
            if week is None:
                raise ConflictError.no_current_week()

            existing = assignments.find_distribution(week.week_number, int(floor), target.key)
            if existing is not None:
                raise ConflictError.already_assigned(week.week_number, int(floor), target.key)

            recorded_slot = target.slot
            if spec_type != SpecType.EXTRA:
                recorded_slot = state.apply(member, target, spec_type)
                members.save(member)

            entry = assignments.add(
                Assignment(
                    week_number=week.week_number,
                    floor_number=int(floor),
                    member_id=member_id,
                    slot=recorded_slot.value if recorded_slot else None,
                    is_upgrade_material=target.is_material,
                    is_armor_material=target.material == UpgradeMaterial.ARMOR,
                    spec_type=spec_type.value,
                )
            )

        log.info(
            "loot_assigned",
            assignment_id=entry.id,
            member_id=member_id,
            week=entry.week_number,
            floor=int(floor),
            target=target.key,
            slot=entry.slot,
            spec_type=spec_type.value,
        )
        return entry.id

    def undo(self, assignment_id: str) -> None:
        """Reverse an assignment's gear mutation and mark it undone.

        Raises:
            NotFoundError: Unknown assignment, or its member is gone.
            ConflictError: Already undone.
        """
        with self._db.immediate_transaction() as session:
            assignments = AssignmentRepository(session)
            members = MemberRepository(session)

            entry = assignments.get(assignment_id)
            if entry is None:
                raise NotFoundError.assignment(assignment_id)
            if entry.is_undone:
                raise ConflictError.already_undone(assignment_id)

            member = members.get(entry.member_id)
            if state.revert(member, entry.spec, entry.gear_slot, entry.material):
                members.save(member)

            entry.is_undone = True
            assignments.save(entry)

        log.info(
            "assignment_undone",
            assignment_id=assignment_id,
            member_id=entry.member_id,
            week=entry.week_number,
        )

    def get_extra_counts(self, target: LootTarget) -> dict[str, int]:
        """How often each member has received ``target`` as Extra."""
        with self._db.session() as session:
            entries = AssignmentRepository(session).active_extra()
            counts = Counter(e.member_id for e in entries if e.target_key == target.key)
        return dict(counts)
