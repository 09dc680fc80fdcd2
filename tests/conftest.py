"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides a throwaway database with the ops classes wired to it.
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local lootledger package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of lootledger modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("lootledger"):
        del sys.modules[module_name]

from lootledger.gear.models import Member, SpecType  # noqa: E402
from lootledger.gear.ops import GearOps  # noqa: E402
from lootledger.loot.history import HistoryOps  # noqa: E402
from lootledger.loot.ledger import DistributionOps  # noqa: E402
from lootledger.loot.manual import ManualEditTracker  # noqa: E402
from lootledger.loot.weeks import WeekOps  # noqa: E402
from lootledger.roster.ops import RosterOps  # noqa: E402
from lootledger.store.db import Database  # noqa: E402
from tests.factories import LINK_A, FakeGearSource  # noqa: E402


@pytest.fixture
def db(tmp_path: Path) -> Generator[Database, None, None]:
    """Fresh database in a temp directory."""
    database = Database(tmp_path / "ledger.db", retry_base_delay=0.01)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def source() -> FakeGearSource:
    return FakeGearSource()


@pytest.fixture
def roster(db: Database) -> RosterOps:
    return RosterOps(db)


@pytest.fixture
def gear(db: Database, source: FakeGearSource) -> GearOps:
    return GearOps(db, source, ManualEditTracker())


@pytest.fixture
def distribution(db: Database) -> DistributionOps:
    return DistributionOps(db)


@pytest.fixture
def weeks(db: Database) -> WeekOps:
    return WeekOps(db)


@pytest.fixture
def history(db: Database) -> HistoryOps:
    return HistoryOps(db)


@pytest.fixture
def member_factory(roster: RosterOps, gear: GearOps) -> Callable[..., Member]:
    """Create a member and optionally import a main-spec link."""

    def _create(name: str, link: str | None = LINK_A) -> Member:
        member = roster.create_member(name)
        if link is not None:
            member = gear.import_gear(member.id, link, SpecType.MAIN_SPEC)
        return member

    return _create
