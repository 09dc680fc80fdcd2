"""External gear-list source."""

from lootledger.xivgear.client import XivGearClient
from lootledger.xivgear.links import GearLink, LinkKind, parse_link

__all__ = ["XivGearClient", "GearLink", "LinkKind", "parse_link"]
