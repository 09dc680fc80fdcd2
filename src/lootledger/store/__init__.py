"""Persistence: SQLite via SQLModel."""

from lootledger.store.db import Database
from lootledger.store.models import Assignment, MemberRow, Week
from lootledger.store.repos import AssignmentRepository, MemberRepository, WeekRepository

__all__ = [
    "Database",
    "Assignment",
    "MemberRow",
    "Week",
    "AssignmentRepository",
    "MemberRepository",
    "WeekRepository",
]
