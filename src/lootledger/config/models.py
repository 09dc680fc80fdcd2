"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (LOOTLEDGER__SECTION__KEY)
3. Data-dir YAML (<data_dir>/config.yaml)
4. Global YAML (~/.config/lootledger/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    LOOTLEDGER__<SECTION>__<KEY>=<VALUE>

Examples:
    LOOTLEDGER__LOGGING__LEVEL=DEBUG
    LOOTLEDGER__SERVER__PORT=8080
    LOOTLEDGER__XIVGEAR__TIMEOUT_SEC=15
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        LOOTLEDGER__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every gear classification decision.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServerConfig(BaseModel):
    """HTTP server configuration.

    Env vars:
        LOOTLEDGER__SERVER__HOST: Bind address (default: 127.0.0.1)
        LOOTLEDGER__SERVER__PORT: Port number (default: 5080)
    """

    host: str = Field(
        default="127.0.0.1",
        description="Bind address. Use 0.0.0.0 to expose the API on the network.",
    )
    port: int = Field(default=5080, description="Server port.")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (0 <= v <= 65535):
            raise ValueError(f"Port must be 0-65535, got {v}")
        return v


class DatabaseConfig(BaseModel):
    """Database connection configuration.

    Env vars:
        LOOTLEDGER__DATABASE__PATH: SQLite file (default: <data_dir>/lootledger.db)
        LOOTLEDGER__DATABASE__BUSY_TIMEOUT_MS: SQLite busy timeout
        LOOTLEDGER__DATABASE__MAX_RETRIES: Max retry attempts for locked DB
    """

    path: str | None = Field(
        default=None,
        description="SQLite database file. Relative paths resolve against the data dir.",
    )
    busy_timeout_ms: int = Field(
        default=30000,
        description="SQLite busy timeout (ms). How long a writer waits for the write lock.",
    )
    max_retries: int = Field(
        default=3,
        description="Max retry attempts for locked database errors.",
    )
    retry_base_delay_sec: float = Field(
        default=0.1,
        description="Base delay between retries (exponential backoff).",
    )


class XivGearConfig(BaseModel):
    """Gear-list source configuration.

    Env vars:
        LOOTLEDGER__XIVGEAR__API_BASE_URL: Gear-set API
        LOOTLEDGER__XIVGEAR__TIMEOUT_SEC: Per-request timeout
        LOOTLEDGER__XIVGEAR__SCRAPE_HTML: Scrape the set page for names/types
    """

    api_base_url: str = Field(default="https://api.xivgear.app")
    data_base_url: str = Field(default="https://data.xivgear.app")
    timeout_sec: float = Field(
        default=20.0,
        description="Timeout for every outbound request. Keep within 10-30s.",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        description="User-Agent sent when scraping the set page.",
    )
    scrape_html: bool = Field(
        default=True,
        description="Scrape the set page for item names and Raid/Aug. Tome labels.",
    )
    load_item_names: bool = Field(
        default=True,
        description="Resolve item names from the item data endpoint.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class LootConfig(BaseModel):
    """Loot distribution configuration.

    Env vars:
        LOOTLEDGER__LOOT__MANUAL_EDIT_FLOOR: Floor recorded on manual edits
    """

    manual_edit_floor: int = Field(
        default=1,
        description="Placeholder floor stored on manual-edit history entries.",
    )

    @field_validator("manual_edit_floor")
    @classmethod
    def validate_floor(cls, v: int) -> int:
        if not (1 <= v <= 4):
            raise ValueError(f"Floor must be 1-4, got {v}")
        return v


class LootLedgerConfig(BaseModel):
    """Root configuration for LootLedger."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    xivgear: XivGearConfig = Field(default_factory=XivGearConfig)
    loot: LootConfig = Field(default_factory=LootConfig)
