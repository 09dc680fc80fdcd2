"""HTTP API daemon."""

from lootledger.daemon.app import create_app
from lootledger.daemon.context import AppContext

__all__ = ["create_app", "AppContext"]
