"""Config module exports."""

from lootledger.config.loader import get_database_path, load_config
from lootledger.config.models import (
    DatabaseConfig,
    LoggingConfig,
    LootConfig,
    LootLedgerConfig,
    ServerConfig,
    XivGearConfig,
)

__all__ = [
    "load_config",
    "get_database_path",
    "LootLedgerConfig",
    "ServerConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "LootConfig",
    "XivGearConfig",
]
