"""structlog setup for the daemon and CLI.

Events go through stdlib ``logging`` so every output (console stream or
file) gets its own handler, level and renderer. HTTP requests bind a short
correlation id that is stamped onto every event logged while handling them.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from lootledger.config.models import LoggingConfig, LogOutputConfig

_CONSOLE_DESTINATIONS = ("stderr", "stdout")

# Per-request chatter from gear-list fetches and the ASGI server
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

# First file output of the active configuration; CLI errors point users at it
_log_file: Path | None = None


# ============================================================================
# Request correlation
# ============================================================================


def get_request_id() -> str | None:
    return _request_id.get()


def set_request_id(request_id: str | None = None) -> str:
    """Bind ``request_id`` (or a fresh 12-char hex id) to the current context."""
    rid = request_id or uuid4().hex[:12]
    _request_id.set(rid)
    return rid


def clear_request_id() -> None:
    _request_id.set(None)


def _stamp_request_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if rid := get_request_id():
        event_dict["request_id"] = rid
    return event_dict


# ============================================================================
# Configuration
# ============================================================================


def get_log_file_path() -> Path | None:
    """File receiving logs under the current configuration, if any."""
    return _log_file


def _level(name: str | None, default: int) -> int:
    if not name:
        return default
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def _handler_for(
    output: LogOutputConfig,
    level: int,
    pre_chain: list[structlog.types.Processor],
) -> logging.Handler:
    handler: logging.Handler
    if output.destination in _CONSOLE_DESTINATIONS:
        stream = sys.stdout if output.destination == "stdout" else sys.stderr
        handler = logging.StreamHandler(stream)
        colors = stream.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")
        colors = False

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)

    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def configure_logging(*, config: LoggingConfig | None = None, level: str = "INFO") -> None:
    """Route structlog through stdlib handlers, one per configured output.

    Without ``config`` a single console output on stderr is set up at
    ``level``. Safe to call repeatedly; previous handlers are closed.
    """
    global _log_file
    from lootledger.config.models import LoggingConfig

    if config is None:
        config = LoggingConfig(level=level)
    root_level = _level(config.level, logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _stamp_request_id,  # type: ignore[list-item]
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers created at import time
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    root.setLevel(root_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _log_file = None
    for output in config.outputs:
        if _log_file is None and output.destination not in _CONSOLE_DESTINATIONS:
            _log_file = Path(output.destination)
        root.addHandler(_handler_for(output, _level(output.level, root_level), pre_chain))
