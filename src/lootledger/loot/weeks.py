"""Week directory and week deletion.

At most one week is current. Deleting a week reverses every gear mutation
its live entries made before the rows are removed.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from lootledger.core.errors import ConflictError, InvalidInputError, NotFoundError
from lootledger.gear import state
from lootledger.gear.models import Member
from lootledger.store.db import Database
from lootledger.store.models import Assignment, Week
from lootledger.store.repos import AssignmentRepository, MemberRepository, WeekRepository

log = structlog.get_logger(__name__)


def _validate_week_number(week_number: int) -> None:
    if week_number < 1:
        raise InvalidInputError.week_number(week_number)


class WeekOps:
    """Week lifecycle operations."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def get_current(self) -> Week | None:
        with self._db.session() as session:
            return WeekRepository(session).current()

    def list_weeks(self) -> list[Week]:
        """All weeks, newest first."""
        with self._db.session() as session:
            return list(WeekRepository(session).list())

    def start_new_week(self) -> Week:
        """Create the week after the highest existing one and make it current."""
        with self._db.immediate_transaction() as session:
            weeks = WeekRepository(session)
            week = weeks.add(Week(week_number=weeks.max_number() + 1))
            weeks.make_current(week)
        log.info("week_started", week=week.week_number)
        return week

    def create_week(self, week_number: int) -> Week:
        """Create a (non-current) week with an explicit number."""
        _validate_week_number(week_number)
        with self._db.immediate_transaction() as session:
            weeks = WeekRepository(session)
            if weeks.get(week_number) is not None:
                raise ConflictError.week_exists(week_number)
            week = weeks.add(Week(week_number=week_number))
        log.info("week_created", week=week_number)
        return week

    def set_current_week(self, week_number: int) -> Week:
        """Make ``week_number`` the only current week, creating it if needed."""
        _validate_week_number(week_number)
        with self._db.immediate_transaction() as session:
            weeks = WeekRepository(session)
            week = weeks.get(week_number)
            if week is None:
                week = weeks.add(Week(week_number=week_number))
            weeks.make_current(week)
        log.info("current_week_set", week=week_number)
        return week

    def delete_week(self, week_number: int) -> None:
        """Reverse and remove every entry of a week, then the week itself.

        Raises:
            NotFoundError: The week does not exist.
        """
        with self._db.immediate_transaction() as session:
            weeks = WeekRepository(session)
            assignments = AssignmentRepository(session)
            members = MemberRepository(session)

            week = weeks.get(week_number)
            if week is None:
                raise NotFoundError.week(week_number)

            live = assignments.for_week(week_number, include_undone=False)
            touched = self._revert_all(members, live)
            for member in touched.values():
                members.save(member)

            removed = assignments.delete_week(week_number)
            was_current = week.is_current
            weeks.delete(week)

            if was_current:
                newest = weeks.newest()
                if newest is not None:
                    weeks.make_current(newest)

        log.info(
            "week_deleted",
            week=week_number,
            reverted=len(live),
            removed_entries=removed,
            members_touched=len(touched),
        )

    @staticmethod
    def _revert_all(
        members: MemberRepository, entries: Sequence[Assignment]
    ) -> dict[str, Member]:
        touched: dict[str, Member] = {}
        for entry in entries:
            member = touched.get(entry.member_id) or members.find(entry.member_id)
            if member is None:
                log.debug("revert_member_missing", member_id=entry.member_id)
                continue
            if state.revert(member, entry.spec, entry.gear_slot, entry.material):
                touched[member.id] = member
        return touched
