"""Fixtures for HTTP API tests."""

from collections.abc import Generator
from pathlib import Path

import pytest
from starlette.testclient import TestClient

from lootledger.config.models import LootLedgerConfig
from lootledger.daemon.app import create_app
from lootledger.daemon.context import AppContext
from tests.factories import FakeGearSource


@pytest.fixture
def app_context(tmp_path: Path) -> Generator[AppContext, None, None]:
    context = AppContext.create(tmp_path, LootLedgerConfig(), source=FakeGearSource())
    yield context
    context.close()


@pytest.fixture
def client(app_context: AppContext) -> TestClient:
    return TestClient(create_app(app_context))
