"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
For configurable values, see models.py.
"""

# =============================================================================
# Data directory layout
# =============================================================================

DEFAULT_DATA_DIR = ".lootledger"
"""Default data directory, relative to the working directory."""

CONFIG_FILE_NAME = "config.yaml"
"""User config file inside the data directory."""

DATABASE_FILE_NAME = "lootledger.db"
"""SQLite database file inside the data directory."""

# =============================================================================
# HTTP API
# =============================================================================

REQUEST_ID_HEADER = "X-Request-ID"
"""Header carrying the request correlation ID in both directions."""

UNKNOWN_MEMBER_NAME = "Unknown"
"""Display name for history entries whose member was removed."""
