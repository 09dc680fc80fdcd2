"""Application context for HTTP and CLI handlers.

Single object holding the wired-up ops classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lootledger.config.models import LootLedgerConfig
    from lootledger.gear.ops import GearOps, GearSource
    from lootledger.loot.history import HistoryOps
    from lootledger.loot.ledger import DistributionOps
    from lootledger.loot.weeks import WeekOps
    from lootledger.roster.ops import RosterOps
    from lootledger.store.db import Database


@dataclass
class AppContext:
    """Context object passed to all handlers.

    Provides access to all ops classes and shared state.
    """

    data_dir: Path
    config: LootLedgerConfig
    db: Database
    roster: RosterOps
    gear: GearOps
    distribution: DistributionOps
    weeks: WeekOps
    history: HistoryOps

    @classmethod
    def create(
        cls,
        data_dir: Path,
        config: LootLedgerConfig,
        source: GearSource | None = None,
    ) -> AppContext:
        """Factory to create context with all ops wired together.

        Args:
            data_dir: Directory holding the database
            config: Resolved configuration
            source: Gear-list source (defaults to the HTTP client)
        """
        from lootledger.config.loader import get_database_path
        from lootledger.gear.ops import GearOps
        from lootledger.loot.history import HistoryOps
        from lootledger.loot.ledger import DistributionOps
        from lootledger.loot.manual import ManualEditTracker
        from lootledger.loot.weeks import WeekOps
        from lootledger.roster.ops import RosterOps
        from lootledger.store.db import Database
        from lootledger.xivgear.client import XivGearClient

        db = Database.from_config(get_database_path(config, data_dir), config.database)
        db.create_all()

        if source is None:
            source = XivGearClient(config.xivgear)
        tracker = ManualEditTracker(floor_placeholder=config.loot.manual_edit_floor)

        return cls(
            data_dir=data_dir,
            config=config,
            db=db,
            roster=RosterOps(db),
            gear=GearOps(db, source, tracker),
            distribution=DistributionOps(db),
            weeks=WeekOps(db),
            history=HistoryOps(db),
        )

    def close(self) -> None:
        """Fold the WAL back into the database file and release connections."""
        self.db.checkpoint("TRUNCATE")
        self.db.dispose()
