"""LootLedger command line interface."""

from lootledger.cli.main import cli

__all__ = ["cli"]
