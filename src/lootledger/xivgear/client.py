"""HTTP client for the gear planner API.

Fetches a set by link, resolves item names and classifies every slot as
Raid or Aug. Tome. Only the set fetch itself can fail an import; page
scraping and name lookup degrade quietly.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from lootledger.config.models import XivGearConfig
from lootledger.core.errors import UpstreamError
from lootledger.gear.models import GearItem, GearSlot
from lootledger.xivgear.classify import resolve_item_type
from lootledger.xivgear.links import GearLink, parse_link
from lootledger.xivgear.scrape import ScrapedPage, parse_page

log = structlog.get_logger(__name__)

API_SLOT_KEYS: dict[str, GearSlot] = {
    "weapon": GearSlot.WEAPON,
    "head": GearSlot.HEAD,
    "body": GearSlot.BODY,
    "hand": GearSlot.HAND,
    "legs": GearSlot.LEGS,
    "feet": GearSlot.FEET,
    "ears": GearSlot.EARS,
    "neck": GearSlot.NECK,
    "wrist": GearSlot.WRIST,
    "ringleft": GearSlot.LEFT_RING,
    "ringright": GearSlot.RIGHT_RING,
}


def _select_items(url: str, payload: Any) -> Mapping[str, Any]:
    """Pick the slot->item object out of either response shape."""
    if not isinstance(payload, dict):
        raise UpstreamError.bad_response(url, "response is not a JSON object")

    sets = payload.get("sets")
    if isinstance(sets, list):
        for gear_set in sets:
            if not isinstance(gear_set, dict) or gear_set.get("isSeparator"):
                continue
            items = gear_set.get("items")
            if isinstance(items, dict):
                return items
        raise UpstreamError.bad_response(url, "no gear set found in response")

    items = payload.get("items")
    if isinstance(items, dict):
        return items
    raise UpstreamError.bad_response(url, "neither 'sets' array nor 'items' object found")


def _item_id(value: Any) -> int | None:
    if not isinstance(value, dict):
        return None
    raw = value.get("id")
    try:
        item_id = int(raw)
    except (TypeError, ValueError):
        return None
    return item_id or None


class XivGearClient:
    """Gear-list source backed by httpx.

    Args:
        config: Endpoint, timeout and scraping switches.
        client: Pre-built httpx client (tests pass one with a MockTransport).
    """

    def __init__(self, config: XivGearConfig | None = None, client: httpx.Client | None = None):
        self._config = config or XivGearConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self._config.timeout_sec,
            follow_redirects=True,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> XivGearClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch(self, link: str) -> list[GearItem]:
        """Fetch and classify the gear list behind ``link``.

        Raises:
            InvalidInputError: Link has neither accepted shape.
            UpstreamError: The set could not be fetched or understood.
        """
        parsed = parse_link(link)
        page = self._scrape_page(parsed) if self._config.scrape_html else ScrapedPage()

        url = f"{self._config.api_base_url.rstrip('/')}{parsed.api_path}"
        payload = self._get_json(url)
        job = parsed.job
        if job is None and isinstance(payload, dict) and isinstance(payload.get("job"), str):
            job = payload["job"]

        names = {item_id: name for item_id, (name, _) in page.items.items()}
        if job and self._config.load_item_names:
            for item_id, name in self._load_item_names(job).items():
                names.setdefault(item_id, name)

        items = self._build_items(_select_items(url, payload), names, page)
        log.info(
            "gear_list_fetched",
            kind=parsed.kind.value,
            job=job,
            items=len(items),
            page_items=len(page.items),
        )
        return items

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_items(
        self,
        api_items: Mapping[str, Any],
        names: Mapping[int, str],
        page: ScrapedPage,
    ) -> list[GearItem]:
        items: list[GearItem] = []
        for key, value in api_items.items():
            slot = API_SLOT_KEYS.get(key.lower())
            item_id = _item_id(value)
            if slot is None or item_id is None:
                continue
            name = names.get(item_id)
            item_type = resolve_item_type(slot, item_id, name, value, page.items, page.slot_types)
            items.append(
                GearItem(
                    slot=slot,
                    item_name=name or f"Item {item_id}",
                    item_type=item_type,
                    item_id=item_id,
                )
            )
        return items

    def _get_json(self, url: str) -> Any:
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status >= 500:
                raise UpstreamError.unavailable(url, f"HTTP {status}") from e
            raise UpstreamError.bad_response(url, f"HTTP {status}") from e
        except httpx.HTTPError as e:
            raise UpstreamError.unavailable(url, str(e) or type(e).__name__) from e
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise UpstreamError.bad_response(url, "invalid JSON") from e

    def _scrape_page(self, link: GearLink) -> ScrapedPage:
        try:
            response = self._client.get(
                link.raw, headers={"User-Agent": self._config.user_agent}
            )
            response.raise_for_status()
            return parse_page(response.text)
        except Exception as e:  # noqa: BLE001
            log.warning("html_scrape_failed", link=link.raw, error=str(e))
            return ScrapedPage()

    def _load_item_names(self, job: str) -> dict[int, str]:
        url = f"{self._config.data_base_url.rstrip('/')}/Items"
        try:
            response = self._client.get(url, params={"job": job})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, json.JSONDecodeError) as e:
            log.warning("item_names_unavailable", job=job, error=str(e))
            return {}

        names: dict[int, str] = {}
        entries = payload.get("items") if isinstance(payload, dict) else None
        for entry in entries if isinstance(entries, list) else []:
            if not isinstance(entry, dict):
                continue
            row_id, name = entry.get("rowId"), entry.get("name")
            if isinstance(row_id, int) and row_id > 0 and isinstance(name, str) and name:
                names[row_id] = name
        return names
