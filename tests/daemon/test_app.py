"""Tests for daemon.app module.

Tests the Starlette application factory and app creation.
"""

from __future__ import annotations

from pathlib import Path

from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

from lootledger.config.models import LootLedgerConfig
from lootledger.daemon.app import create_app
from lootledger.daemon.context import AppContext
from tests.factories import FakeGearSource


class TestCreateApp:
    def test_returns_starlette_app(self, app_context: AppContext) -> None:
        assert isinstance(create_app(app_context), Starlette)

    def test_registers_api_routes(self, app_context: AppContext) -> None:
        app = create_app(app_context)
        paths = {r.path for r in app.routes if isinstance(r, Route)}
        assert {"/health", "/members", "/loot/assignments", "/weeks", "/history"} <= paths

    def test_lifespan_runs(self, app_context: AppContext) -> None:
        with TestClient(create_app(app_context)) as client:
            assert client.get("/health").status_code == 200


class TestAppContext:
    def test_create_initializes_database(self, app_context: AppContext) -> None:
        assert app_context.db.db_path == app_context.data_dir / "lootledger.db"
        assert app_context.db.db_path.exists()
        assert app_context.roster.list_members() == []

    def test_close_truncates_write_ahead_log(self, tmp_path: Path) -> None:
        context = AppContext.create(tmp_path, LootLedgerConfig(), source=FakeGearSource())
        context.roster.create_member("Alice")

        context.close()

        wal = context.db.db_path.with_name(context.db.db_path.name + "-wal")
        assert not wal.exists() or wal.stat().st_size == 0
