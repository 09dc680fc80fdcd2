"""Manual-edit history.

Acquisition flags toggled from the tracker (outside distribution) still land
in the ledger, as entries flagged ``is_manual_edit``. Those entries are
matched only against each other, never against distribution entries.
"""

from __future__ import annotations

import structlog
from sqlmodel import Session

from lootledger.gear.models import (
    GearItem,
    ItemType,
    SpecType,
    UpgradeMaterial,
    material_for_slot,
)
from lootledger.store.models import Assignment
from lootledger.store.repos import AssignmentRepository, WeekRepository

log = structlog.get_logger(__name__)


class ManualEditTracker:
    """Writes manual-edit ledger entries inside the caller's transaction."""

    def __init__(self, floor_placeholder: int = 1) -> None:
        self._floor_placeholder = floor_placeholder

    def item_toggled(
        self,
        session: Session,
        member_id: str,
        spec_type: SpecType,
        item: GearItem,
        value: bool,
    ) -> Assignment | None:
        return self._record(session, member_id, spec_type, item, value, upgrade=False)

    def upgrade_toggled(
        self,
        session: Session,
        member_id: str,
        spec_type: SpecType,
        item: GearItem,
        value: bool,
    ) -> Assignment | None:
        return self._record(session, member_id, spec_type, item, value, upgrade=True)

    def _record(
        self,
        session: Session,
        member_id: str,
        spec_type: SpecType,
        item: GearItem,
        value: bool,
        *,
        upgrade: bool,
    ) -> Assignment | None:
        """Create or close the matching manual entry.

        Returns the entry that was created or flipped, if any. Nothing is
        recorded while no week is current.
        """
        week = WeekRepository(session).current()
        if week is None:
            return None

        assignments = AssignmentRepository(session)
        material = material_for_slot(item.slot) if upgrade else None
        existing = assignments.find_manual(
            week.week_number,
            member_id,
            spec_type,
            slot=None if upgrade else item.slot,
            material=material,
        )

        if value:
            if existing is not None:
                return None
            entry = Assignment(
                week_number=week.week_number,
                floor_number=self._floor_placeholder,
                member_id=member_id,
                slot=None if upgrade else item.slot.value,
                is_upgrade_material=upgrade,
                is_armor_material=material == UpgradeMaterial.ARMOR,
                spec_type=spec_type.value,
                is_manual_edit=True,
                item_type=ItemType.AUG_TOME.value if upgrade else item.item_type.value,
            )
            assignments.add(entry)
            log.info(
                "manual_edit_recorded",
                member_id=member_id,
                week=week.week_number,
                slot=item.slot.value,
                upgrade=upgrade,
            )
            return entry

        if existing is None:
            return None
        existing.is_undone = True
        assignments.save(existing)
        log.info(
            "manual_edit_cleared",
            member_id=member_id,
            week=week.week_number,
            assignment_id=existing.id,
        )
        return existing
