"""SQLModel table definitions.

Three record sets: members (each row embeds both gear tracks as JSON),
assignments (the loot ledger) and weeks. Enum-valued columns store the
enum's string value.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import Field, SQLModel

from lootledger.gear.models import (
    GearSlot,
    GearTrack,
    ItemType,
    LootTarget,
    Member,
    MemberRole,
    SpecType,
    UpgradeMaterial,
)


def new_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemberRow(SQLModel, table=True):
    """Persisted roster member."""

    __tablename__ = "members"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(index=True)
    role: str = Field(default=MemberRole.DPS.value)
    main_spec_json: str = Field(default="{}")
    off_spec_json: str = Field(default="{}")
    created_at: datetime = Field(default_factory=utcnow)

    def to_domain(self) -> Member:
        return Member(
            id=self.id,
            name=self.name,
            role=MemberRole(self.role),
            main_spec=GearTrack.model_validate_json(self.main_spec_json),
            off_spec=GearTrack.model_validate_json(self.off_spec_json),
        )

    def update_from(self, member: Member) -> None:
        self.name = member.name
        self.role = member.role.value
        self.main_spec_json = member.main_spec.model_dump_json()
        self.off_spec_json = member.off_spec.model_dump_json()


class Week(SQLModel, table=True):
    """A raid week. At most one week is current."""

    __tablename__ = "weeks"

    week_number: int = Field(primary_key=True)
    started_at: datetime = Field(default_factory=utcnow)
    is_current: bool = Field(default=False, index=True)


class Assignment(SQLModel, table=True):
    """Loot ledger entry, from a distribution or a manual edit."""

    __tablename__ = "assignments"

    id: str = Field(default_factory=new_id, primary_key=True)
    week_number: int = Field(index=True)
    floor_number: int
    member_id: str = Field(index=True)
    slot: str | None = None  # None for upgrade materials
    is_upgrade_material: bool = False
    is_armor_material: bool = False
    spec_type: str = Field(default=SpecType.MAIN_SPEC.value)
    assigned_at: datetime = Field(default_factory=utcnow)
    is_undone: bool = Field(default=False, index=True)
    is_manual_edit: bool = Field(default=False)
    item_type: str | None = None  # Recorded for manual edits only

    @property
    def gear_slot(self) -> GearSlot | None:
        return GearSlot(self.slot) if self.slot else None

    @property
    def spec(self) -> SpecType:
        return SpecType(self.spec_type)

    @property
    def material(self) -> UpgradeMaterial | None:
        if not self.is_upgrade_material:
            return None
        return UpgradeMaterial.ARMOR if self.is_armor_material else UpgradeMaterial.ACCESSORY

    @property
    def target_key(self) -> str | None:
        """Identity key of what was assigned (rings merged)."""
        material = self.material
        if material is not None:
            return LootTarget.for_material(material).key
        slot = self.gear_slot
        return LootTarget.for_slot(slot).key if slot else None

    @property
    def item_kind(self) -> ItemType | None:
        return ItemType(self.item_type) if self.item_type else None
