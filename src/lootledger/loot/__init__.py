"""Loot distribution: eligibility, ledger, manual edits, weeks, history."""

from lootledger.loot.eligibility import AvailableLoot, MemberNeed, eligible_members, resolve_floor
from lootledger.loot.history import HistoryEntry, HistoryOps, WeekHistory
from lootledger.loot.ledger import DistributionOps
from lootledger.loot.manual import ManualEditTracker
from lootledger.loot.weeks import WeekOps

__all__ = [
    "AvailableLoot",
    "MemberNeed",
    "eligible_members",
    "resolve_floor",
    "DistributionOps",
    "ManualEditTracker",
    "WeekOps",
    "HistoryOps",
    "HistoryEntry",
    "WeekHistory",
]
