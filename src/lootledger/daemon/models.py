"""Request bodies and response serializers for the HTTP API.

Request bodies are camelCase JSON validated by pydantic; unknown fields are
rejected. Responses use the same casing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lootledger.gear.models import GearItem, GearSlot, GearTrack, Member, MemberRole, SpecType
from lootledger.loot.eligibility import AvailableLoot
from lootledger.loot.history import WeekHistory
from lootledger.store.models import Assignment, Week


class BaseBody(BaseModel):
    """Base class for request bodies."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class MemberCreate(BaseBody):
    name: str = Field(min_length=1)
    role: MemberRole = MemberRole.DPS


class MemberUpdate(BaseBody):
    name: str | None = None
    role: MemberRole | None = None


class GearImportRequest(BaseBody):
    link: str
    spec_type: SpecType = SpecType.MAIN_SPEC


class AcquisitionRequest(BaseBody):
    slot: GearSlot
    value: bool
    spec_type: SpecType = SpecType.MAIN_SPEC


class AssignRequest(BaseBody):
    member_id: str
    target: str = Field(description="Slot name, Ring, ArmorMaterial or AccessoryMaterial")
    floor: int
    spec_type: SpecType = SpecType.MAIN_SPEC


class WeekCreate(BaseBody):
    week_number: int


# =============================================================================
# Serializers
# =============================================================================


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def item_to_dict(item: GearItem) -> dict[str, Any]:
    return {
        "slot": item.slot.value,
        "itemName": item.item_name,
        "itemType": item.item_type.value,
        "isAcquired": item.is_acquired,
        "upgradeMaterialAcquired": item.upgrade_material_acquired,
        "itemId": item.item_id,
    }


def track_to_dict(track: GearTrack) -> dict[str, Any]:
    return {
        "link": track.link,
        "items": [item_to_dict(i) for i in track.ordered_items()],
    }


def member_to_dict(member: Member) -> dict[str, Any]:
    return {
        "id": member.id,
        "name": member.name,
        "role": member.role.value,
        "mainSpec": track_to_dict(member.main_spec),
        "offSpec": track_to_dict(member.off_spec),
    }


def loot_to_dict(loot: AvailableLoot) -> dict[str, Any]:
    return {
        "floor": int(loot.floor),
        "target": loot.target.key,
        "isUpgradeMaterial": loot.target.is_material,
        "eligible": [
            {
                "memberId": need.member_id,
                "memberName": need.member_name,
                "neededCount": need.needed_count,
                "specType": need.spec_type.value,
            }
            for need in loot.eligible
        ],
        "isAssigned": loot.is_assigned,
        "assignedMemberId": loot.assigned_member_id,
        "assignmentId": loot.assignment_id,
    }


def assignment_to_dict(assignment: Assignment, member_name: str | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": assignment.id,
        "weekNumber": assignment.week_number,
        "floorNumber": assignment.floor_number,
        "memberId": assignment.member_id,
        "slot": assignment.slot,
        "isUpgradeMaterial": assignment.is_upgrade_material,
        "isArmorMaterial": assignment.is_armor_material,
        "specType": assignment.spec_type,
        "assignedAt": _iso(assignment.assigned_at),
        "isUndone": assignment.is_undone,
        "isManualEdit": assignment.is_manual_edit,
        "itemType": assignment.item_type,
    }
    if member_name is not None:
        data["memberName"] = member_name
    return data


def week_to_dict(week: Week) -> dict[str, Any]:
    return {
        "weekNumber": week.week_number,
        "startedAt": _iso(week.started_at),
        "isCurrent": week.is_current,
    }


def history_to_dict(history: WeekHistory) -> dict[str, Any]:
    return {
        "weekNumber": history.week_number,
        "startedAt": _iso(history.started_at),
        "isCurrent": history.is_current,
        "assignments": [
            assignment_to_dict(entry.assignment, entry.member_name) for entry in history.entries
        ],
    }
