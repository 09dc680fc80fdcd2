"""Query helpers over the three record sets.

Each repository wraps a Session supplied by the caller, so the caller
decides whether it runs in a read session or an immediate transaction.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlmodel import Session, col, select

from lootledger.core.errors import NotFoundError
from lootledger.gear.models import GearSlot, Member, SpecType, UpgradeMaterial
from lootledger.store.models import Assignment, MemberRow, Week


class MemberRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find(self, member_id: str) -> Member | None:
        row = self._session.get(MemberRow, member_id)
        return row.to_domain() if row else None

    def get(self, member_id: str) -> Member:
        member = self.find(member_id)
        if member is None:
            raise NotFoundError.member(member_id)
        return member

    def exists(self, member_id: str) -> bool:
        return self._session.get(MemberRow, member_id) is not None

    def list(self) -> list[Member]:
        rows = self._session.exec(select(MemberRow).order_by(col(MemberRow.created_at))).all()
        return [row.to_domain() for row in rows]

    def names(self) -> dict[str, str]:
        rows = self._session.exec(select(MemberRow)).all()
        return {row.id: row.name for row in rows}

    def add(self, member: Member) -> None:
        row = MemberRow(id=member.id, name=member.name)
        row.update_from(member)
        self._session.add(row)
        self._session.flush()

    def save(self, member: Member) -> None:
        row = self._session.get(MemberRow, member.id)
        if row is None:
            raise NotFoundError.member(member.id)
        row.update_from(member)
        self._session.add(row)
        self._session.flush()

    def delete(self, member_id: str) -> None:
        row = self._session.get(MemberRow, member_id)
        if row is None:
            raise NotFoundError.member(member_id)
        self._session.delete(row)
        self._session.flush()


class WeekRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, week_number: int) -> Week | None:
        return self._session.get(Week, week_number)

    def current(self) -> Week | None:
        stmt = (
            select(Week)
            .where(Week.is_current == True)  # noqa: E712
            .order_by(col(Week.week_number).desc())
        )
        return self._session.exec(stmt).first()

    def list(self) -> Sequence[Week]:
        return self._session.exec(select(Week).order_by(col(Week.week_number).desc())).all()

    def newest(self) -> Week | None:
        return self._session.exec(select(Week).order_by(col(Week.week_number).desc())).first()

    def max_number(self) -> int:
        return self._session.exec(select(func.max(Week.week_number))).one() or 0

    def add(self, week: Week) -> Week:
        self._session.add(week)
        self._session.flush()
        return week

    def make_current(self, week: Week) -> None:
        """Mark ``week`` as the only current week."""
        stmt = select(Week).where(Week.is_current == True)  # noqa: E712
        for other in self._session.exec(stmt).all():
            if other.week_number != week.week_number:
                other.is_current = False
                self._session.add(other)
        week.is_current = True
        self._session.add(week)
        self._session.flush()

    def delete(self, week: Week) -> None:
        self._session.delete(week)
        self._session.flush()


class AssignmentRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, assignment_id: str) -> Assignment | None:
        return self._session.get(Assignment, assignment_id)

    def add(self, assignment: Assignment) -> Assignment:
        self._session.add(assignment)
        self._session.flush()
        return assignment

    def save(self, assignment: Assignment) -> None:
        self._session.add(assignment)
        self._session.flush()

    def for_week(self, week_number: int, *, include_undone: bool = True) -> Sequence[Assignment]:
        stmt = select(Assignment).where(Assignment.week_number == week_number)
        if not include_undone:
            stmt = stmt.where(Assignment.is_undone == False)  # noqa: E712
        return self._session.exec(stmt.order_by(col(Assignment.assigned_at))).all()

    def active(self) -> Sequence[Assignment]:
        stmt = (
            select(Assignment)
            .where(Assignment.is_undone == False)  # noqa: E712
            .order_by(col(Assignment.assigned_at))
        )
        return self._session.exec(stmt).all()

    def active_distribution(self, week_number: int, floor_number: int) -> list[Assignment]:
        """Non-undone ledger (non-manual) entries for a week/floor."""
        stmt = select(Assignment).where(
            Assignment.week_number == week_number,
            Assignment.floor_number == floor_number,
            Assignment.is_undone == False,  # noqa: E712
            Assignment.is_manual_edit == False,  # noqa: E712
        )
        return list(self._session.exec(stmt).all())

    def find_distribution(
        self, week_number: int, floor_number: int, target_key: str
    ) -> Assignment | None:
        for assignment in self.active_distribution(week_number, floor_number):
            if assignment.target_key == target_key:
                return assignment
        return None

    def find_manual(
        self,
        week_number: int,
        member_id: str,
        spec_type: SpecType,
        *,
        slot: GearSlot | None = None,
        material: UpgradeMaterial | None = None,
    ) -> Assignment | None:
        """Open manual-edit entry for an exact slot, or for a material category."""
        stmt = select(Assignment).where(
            Assignment.week_number == week_number,
            Assignment.member_id == member_id,
            Assignment.spec_type == spec_type.value,
            Assignment.is_manual_edit == True,  # noqa: E712
            Assignment.is_undone == False,  # noqa: E712
        )
        if material is not None:
            stmt = stmt.where(
                Assignment.is_upgrade_material == True,  # noqa: E712
                Assignment.is_armor_material == (material == UpgradeMaterial.ARMOR),
            )
        else:
            assert slot is not None
            stmt = stmt.where(
                Assignment.is_upgrade_material == False,  # noqa: E712
                Assignment.slot == slot.value,
            )
        return self._session.exec(stmt).first()

    def active_extra(self) -> Sequence[Assignment]:
        stmt = select(Assignment).where(
            Assignment.spec_type == SpecType.EXTRA.value,
            Assignment.is_undone == False,  # noqa: E712
        )
        return self._session.exec(stmt).all()

    def delete_week(self, week_number: int) -> int:
        rows = self.for_week(week_number)
        for row in rows:
            self._session.delete(row)
        self._session.flush()
        return len(rows)
