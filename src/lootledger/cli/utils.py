"""CLI utilities."""

from __future__ import annotations

import functools
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click
import structlog
from rich.console import Console

from lootledger.config.loader import load_config
from lootledger.core.errors import ErrorCategory, LootLedgerError
from lootledger.core.logging import configure_logging, get_log_file_path
from lootledger.daemon.context import AppContext

log = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_console: Console | None = None


def get_console() -> Console:
    """Shared rich console."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def build_context(ctx: click.Context) -> AppContext:
    """Load config for the selected data dir and wire the ops classes.

    The context is cached on the click context so nested calls share it.
    """
    obj = ctx.ensure_object(dict)
    if "app_context" in obj:
        return obj["app_context"]  # type: ignore[no-any-return]

    data_dir: Path = obj["data_dir"]
    try:
        config = load_config(data_dir)
    except LootLedgerError as e:
        raise click.ClickException(str(e)) from e

    if obj.get("verbose"):
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    app_context = AppContext.create(data_dir, config, source=obj.get("gear_source"))
    ctx.call_on_close(app_context.close)
    obj["app_context"] = app_context
    return app_context


_POINTER_CATEGORIES = frozenset(
    {ErrorCategory.UPSTREAM_FAILURE, ErrorCategory.CONFIG, ErrorCategory.INTERNAL}
)


def error_message(error: LootLedgerError) -> str:
    """One-line CLI message, pointing at the log file for non-business failures."""
    message = str(error)
    log_file = get_log_file_path()
    if log_file is not None and error.category in _POINTER_CATEGORIES:
        message = f"{message}. See {log_file} for details."
    return message


def handle_errors(func: F) -> F:
    """Turn LootLedgerError into a clean click error."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except LootLedgerError as e:
            log.warning("command_failed", error=e.error_name, details=e.details)
            raise click.ClickException(error_message(e)) from e

    return wrapper  # type: ignore[return-value]
