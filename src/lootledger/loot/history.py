"""Loot history views over the ledger."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

from lootledger.config.constants import UNKNOWN_MEMBER_NAME
from lootledger.store.db import Database
from lootledger.store.models import Assignment, Week
from lootledger.store.repos import AssignmentRepository, MemberRepository, WeekRepository


@dataclass
class HistoryEntry:
    """A live ledger entry with the member's display name."""

    assignment: Assignment
    member_name: str


@dataclass
class WeekHistory:
    week_number: int
    started_at: datetime | None
    is_current: bool
    entries: list[HistoryEntry] = field(default_factory=list)


def _entries(
    assignments: Iterable[Assignment], names: Mapping[str, str]
) -> list[HistoryEntry]:
    ordered = sorted(assignments, key=lambda a: (a.floor_number, a.assigned_at))
    return [HistoryEntry(a, names.get(a.member_id, UNKNOWN_MEMBER_NAME)) for a in ordered]


def _week_history(
    week_number: int,
    week: Week | None,
    assignments: Iterable[Assignment],
    names: Mapping[str, str],
) -> WeekHistory:
    return WeekHistory(
        week_number=week_number,
        started_at=week.started_at if week else None,
        is_current=bool(week and week.is_current),
        entries=_entries(assignments, names),
    )


class HistoryOps:
    """Read-only history queries."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def all_history(self) -> list[WeekHistory]:
        """Live entries grouped by week, newest week first."""
        with self._db.session() as session:
            names = MemberRepository(session).names()
            weeks = {w.week_number: w for w in WeekRepository(session).list()}
            grouped: dict[int, list[Assignment]] = defaultdict(list)
            for assignment in AssignmentRepository(session).active():
                grouped[assignment.week_number].append(assignment)

        return [
            _week_history(number, weeks.get(number), grouped[number], names)
            for number in sorted(grouped, reverse=True)
        ]

    def week_history(self, week_number: int) -> WeekHistory | None:
        """Live entries of one week; None when neither week nor entries exist."""
        with self._db.session() as session:
            week = WeekRepository(session).get(week_number)
            assignments = AssignmentRepository(session).for_week(
                week_number, include_undone=False
            )
            if week is None and not assignments:
                return None
            names = MemberRepository(session).names()
        return _week_history(week_number, week, assignments, names)
