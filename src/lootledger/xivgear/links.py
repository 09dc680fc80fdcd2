"""Gear-list link parsing.

Two link shapes are accepted:
    https://xivgear.app/?page=sl|<set-id>
    https://xivgear.app/?page=bis|<job>|<category>

The ``|`` separator may arrive URL-encoded (``%7C``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import unquote

from lootledger.core.errors import InvalidInputError

_SHORTLINK_RE = re.compile(r"[?&]page=sl\|([a-f0-9\-]+)", re.IGNORECASE)
_BIS_RE = re.compile(r"[?&]page=bis\|([^|&]+)\|([^&]+)", re.IGNORECASE)


class LinkKind(str, Enum):
    SHORTLINK = "shortlink"
    BIS = "bis"


@dataclass(frozen=True)
class GearLink:
    """A parsed gear-list link."""

    raw: str
    kind: LinkKind
    set_id: str | None = None
    job: str | None = None
    category: str | None = None

    @property
    def api_path(self) -> str:
        if self.kind == LinkKind.BIS:
            return f"/fulldata/bis/{self.job}/{self.category}"
        return f"/shortlink/{self.set_id}"


def parse_link(link: str) -> GearLink:
    """Parse a gear-list link.

    Raises:
        InvalidInputError: Empty link or neither shape matched.
    """
    if not link or not link.strip():
        raise InvalidInputError.link(link or "", "link cannot be empty")
    raw = link.strip()
    decoded = unquote(raw)

    match = _BIS_RE.search(decoded)
    if match:
        return GearLink(
            raw=raw,
            kind=LinkKind.BIS,
            job=match.group(1).lower(),
            category=match.group(2).lower(),
        )

    match = _SHORTLINK_RE.search(decoded)
    if match:
        return GearLink(raw=raw, kind=LinkKind.SHORTLINK, set_id=match.group(1))

    raise InvalidInputError.link(
        raw, "expected ?page=sl|<setId> or ?page=bis|<job>|<category>"
    )
