"""Tests for store/db.py - WAL engine and immediate transactions."""

from pathlib import Path

import pytest
from sqlalchemy import text

from lootledger.config.models import DatabaseConfig
from lootledger.core.errors import (
    ConflictError,
    LootLedgerError,
    NoMatchingItemError,
    NotFoundError,
)
from lootledger.store.db import Database, _is_database_locked_error
from lootledger.store.models import Week
from lootledger.store.repos import WeekRepository


class TestDatabase:
    def test_create_all_makes_parent_directory(self, tmp_path: Path) -> None:
        database = Database(tmp_path / "nested" / "dir" / "ledger.db")
        database.create_all()
        assert (tmp_path / "nested" / "dir" / "ledger.db").exists()
        database.dispose()

    def test_wal_mode_enabled(self, db: Database) -> None:
        with db.engine.connect() as conn:
            mode = conn.execute(text("PRAGMA journal_mode")).scalar()
        assert str(mode).lower() == "wal"

    def test_from_config_applies_retry_settings(self, tmp_path: Path) -> None:
        config = DatabaseConfig(max_retries=7, retry_base_delay_sec=0.5, busy_timeout_ms=1000)
        database = Database.from_config(tmp_path / "x.db", config)
        assert database._max_retries == 7
        assert database._retry_base_delay == 0.5
        assert database._busy_timeout_ms == 1000
        database.dispose()


class TestImmediateTransaction:
    def test_commits_on_success(self, db: Database) -> None:
        with db.immediate_transaction() as session:
            WeekRepository(session).add(Week(week_number=1))

        with db.session() as session:
            assert WeekRepository(session).get(1) is not None

    def test_rolls_back_on_error(self, db: Database) -> None:
        with pytest.raises(RuntimeError), db.immediate_transaction() as session:
            WeekRepository(session).add(Week(week_number=1))
            raise RuntimeError("boom")

        with db.session() as session:
            assert WeekRepository(session).get(1) is None

    @pytest.mark.parametrize(
        "error",
        [
            ConflictError.no_current_week(),
            NotFoundError.member("m1"),
            NoMatchingItemError.for_target("m1", "Head", "MainSpec"),
        ],
    )
    def test_typed_errors_propagate_unchanged(
        self, db: Database, error: LootLedgerError
    ) -> None:
        with pytest.raises(type(error)) as exc_info, db.immediate_transaction():
            raise error

        assert exc_info.value is error
        assert exc_info.value.__traceback__ is not None

    def test_typed_errors_propagate_from_read_session(self, db: Database) -> None:
        with pytest.raises(NotFoundError), db.session():
            raise NotFoundError.week(4)

    def test_checkpoint_rejects_unknown_mode(self, db: Database) -> None:
        with pytest.raises(ValueError):
            db.checkpoint("SIDEWAYS")
        db.checkpoint("passive")


class TestLockedErrorDetection:
    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("database is locked", True),
            ("Database is busy", True),
            ("no such table: weeks", False),
        ],
    )
    def test_detection(self, message: str, expected: bool) -> None:
        assert _is_database_locked_error(Exception(message)) is expected
