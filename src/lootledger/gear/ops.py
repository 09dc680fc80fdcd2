"""Gear operations - import a BiS list, toggle acquisition flags.

Import keeps both spec tracks isolated and restores per-link progress.
Toggles made here are manual edits and are mirrored into the ledger.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from lootledger.core.errors import InvalidInputError, NoMatchingItemError
from lootledger.gear import linkstate
from lootledger.gear.models import GearItem, GearSlot, ItemType, Member, SpecType
from lootledger.loot.manual import ManualEditTracker
from lootledger.store.db import Database
from lootledger.store.repos import MemberRepository

log = structlog.get_logger(__name__)


class GearSource(Protocol):
    """Anything that turns a gear-list link into items."""

    def fetch(self, link: str) -> list[GearItem]: ...


def _require_track_spec(spec_type: SpecType) -> None:
    if spec_type == SpecType.EXTRA:
        raise InvalidInputError.spec_type(spec_type.value, "must be MainSpec or OffSpec")


class GearOps:
    """Import and manual-toggle operations over member gear records."""

    def __init__(
        self,
        db: Database,
        source: GearSource,
        tracker: ManualEditTracker | None = None,
    ) -> None:
        self._db = db
        self._source = source
        self._tracker = tracker or ManualEditTracker()

    def import_gear(self, member_id: str, link: str, spec_type: SpecType) -> Member:
        """Replace one track's items with the list behind ``link``.

        Slots remembered for ``link`` keep their flags. The other track is
        snapshotted before the update and restored after it.

        Raises:
            InvalidInputError: Extra spec or unparseable link.
            NotFoundError: Unknown member.
            UpstreamError: The gear list could not be fetched.
        """
        _require_track_spec(spec_type)
        with self._db.session() as session:
            MemberRepository(session).get(member_id)

        items = [item.model_copy() for item in self._source.fetch(link)]

        with self._db.immediate_transaction() as session:
            members = MemberRepository(session)
            member = members.get(member_id)
            other_spec = (
                SpecType.OFF_SPEC if spec_type == SpecType.MAIN_SPEC else SpecType.MAIN_SPEC
            )
            other_snapshot = member.track(other_spec).model_copy(deep=True)

            track = member.track(spec_type)
            restored = linkstate.restore(track, link, items)
            linkstate.remember(track, link, items)
            track.link = link
            track.items = items

            if other_spec == SpecType.MAIN_SPEC:
                member.main_spec = other_snapshot
            else:
                member.off_spec = other_snapshot
            members.save(member)

        log.info(
            "gear_imported",
            member_id=member_id,
            spec_type=spec_type.value,
            items=len(items),
            restored_slots=restored,
        )
        return member

    def set_item_acquired(
        self, member_id: str, slot: GearSlot, value: bool, spec_type: SpecType
    ) -> Member:
        """Toggle ``is_acquired`` on one slot and record it as a manual edit."""
        _require_track_spec(spec_type)
        with self._db.immediate_transaction() as session:
            members = MemberRepository(session)
            member = members.get(member_id)
            track = member.track(spec_type)
            item = track.item(slot)
            if item is None:
                raise NoMatchingItemError.for_target(member_id, slot.value, spec_type.value)

            item.is_acquired = value
            linkstate.remember_slot(track, slot)
            members.save(member)
            self._tracker.item_toggled(session, member_id, spec_type, item, value)

        log.info(
            "item_acquisition_set",
            member_id=member_id,
            slot=slot.value,
            spec_type=spec_type.value,
            value=value,
        )
        return member

    def set_upgrade_acquired(
        self, member_id: str, slot: GearSlot, value: bool, spec_type: SpecType
    ) -> Member:
        """Toggle ``upgrade_material_acquired`` on an Aug. Tome slot."""
        _require_track_spec(spec_type)
        with self._db.immediate_transaction() as session:
            members = MemberRepository(session)
            member = members.get(member_id)
            track = member.track(spec_type)
            item = track.item(slot)
            if item is None:
                raise NoMatchingItemError.for_target(member_id, slot.value, spec_type.value)
            if item.item_type != ItemType.AUG_TOME:
                raise InvalidInputError.not_aug_tome(slot.value)

            item.upgrade_material_acquired = value
            linkstate.remember_slot(track, slot)
            members.save(member)
            self._tracker.upgrade_toggled(session, member_id, spec_type, item, value)

        log.info(
            "upgrade_acquisition_set",
            member_id=member_id,
            slot=slot.value,
            spec_type=spec_type.value,
            value=value,
        )
        return member
