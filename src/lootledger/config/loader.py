"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (LOOTLEDGER__SECTION__KEY)
3. Data-dir config (<data_dir>/config.yaml)
4. Global config (~/.config/lootledger/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from lootledger.config.constants import CONFIG_FILE_NAME, DATABASE_FILE_NAME, DEFAULT_DATA_DIR
from lootledger.config.models import (
    DatabaseConfig,
    LoggingConfig,
    LootConfig,
    LootLedgerConfig,
    ServerConfig,
    XivGearConfig,
)
from lootledger.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/lootledger/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class LootLedgerSettings(BaseSettings):
        """Root config. Env vars: LOOTLEDGER__LOGGING__LEVEL, LOOTLEDGER__SERVER__PORT, etc."""

        model_config = SettingsConfigDict(
            env_prefix="LOOTLEDGER__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        server: ServerConfig = ServerConfig()
        database: DatabaseConfig = DatabaseConfig()
        xivgear: XivGearConfig = XivGearConfig()
        loot: LootConfig = LootConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return LootLedgerSettings


def load_config(data_dir: Path | None = None, **kwargs: Any) -> LootLedgerConfig:
    """Load config: defaults < global yaml < data-dir yaml < env vars < kwargs.

    Args:
        data_dir: Directory holding config.yaml and the database.
                  Defaults to ./.lootledger.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    data_dir = data_dir or Path.cwd() / DEFAULT_DATA_DIR

    yaml_config = _load_yaml(data_dir / CONFIG_FILE_NAME)

    global_config = _load_yaml(GLOBAL_CONFIG_PATH)
    if global_config:
        yaml_config = _deep_merge(global_config, yaml_config)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return LootLedgerConfig.model_validate(settings.model_dump())


def get_database_path(config: LootLedgerConfig, data_dir: Path) -> Path:
    """Resolve the SQLite path, respecting config.database.path."""
    if config.database.path:
        path = Path(config.database.path).expanduser()
        return path if path.is_absolute() else data_dir / path
    return data_dir / DATABASE_FILE_NAME
