"""Starlette application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware

from lootledger.core.errors import LootLedgerError
from lootledger.daemon.middleware import (
    RequestIdMiddleware,
    handle_lootledger_error,
    handle_validation_error,
)
from lootledger.daemon.routes import create_routes

if TYPE_CHECKING:
    from lootledger.daemon.context import AppContext

log = structlog.get_logger(__name__)


def create_app(context: AppContext) -> Starlette:
    """Create the Starlette application bound to ``context``."""

    @asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        log.info("server_started", data_dir=str(context.data_dir))
        yield
        log.info("server_stopping")

    return Starlette(
        routes=create_routes(context),
        middleware=[Middleware(RequestIdMiddleware)],
        exception_handlers={
            LootLedgerError: handle_lootledger_error,
            ValidationError: handle_validation_error,
        },
        lifespan=lifespan,
    )
