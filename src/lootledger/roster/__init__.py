"""Roster management."""

from lootledger.roster.ops import RosterOps

__all__ = ["RosterOps"]
