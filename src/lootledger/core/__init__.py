"""Core module exports."""

from lootledger.core.errors import (
    ConfigError,
    ConflictError,
    ErrorCategory,
    ErrorCode,
    InternalError,
    InvalidInputError,
    LootLedgerError,
    NoMatchingItemError,
    NotFoundError,
    UpstreamError,
)
from lootledger.core.logging import (
    clear_request_id,
    configure_logging,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ConflictError",
    "ErrorCategory",
    "ErrorCode",
    "InternalError",
    "InvalidInputError",
    "LootLedgerError",
    "NoMatchingItemError",
    "NotFoundError",
    "UpstreamError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_request_id",
    "set_request_id",
]
