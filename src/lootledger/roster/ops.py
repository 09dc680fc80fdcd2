"""Roster operations - member CRUD."""

from __future__ import annotations

import structlog

from lootledger.core.errors import InvalidInputError
from lootledger.gear.models import Member, MemberRole
from lootledger.store.db import Database
from lootledger.store.models import new_id
from lootledger.store.repos import MemberRepository

log = structlog.get_logger(__name__)


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise InvalidInputError.value("name", "must not be empty")
    return cleaned


class RosterOps:
    """Create, read, update and delete roster members.

    New members start with empty gear tracks.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def create_member(self, name: str, role: MemberRole = MemberRole.DPS) -> Member:
        member = Member(id=new_id(), name=_clean_name(name), role=role)
        with self._db.immediate_transaction() as session:
            MemberRepository(session).add(member)
        log.info("member_created", member_id=member.id, name=member.name)
        return member

    def list_members(self) -> list[Member]:
        with self._db.session() as session:
            return MemberRepository(session).list()

    def get_member(self, member_id: str) -> Member:
        with self._db.session() as session:
            return MemberRepository(session).get(member_id)

    def update_member(
        self,
        member_id: str,
        *,
        name: str | None = None,
        role: MemberRole | None = None,
    ) -> Member:
        with self._db.immediate_transaction() as session:
            members = MemberRepository(session)
            member = members.get(member_id)
            if name is not None:
                member.name = _clean_name(name)
            if role is not None:
                member.role = role
            members.save(member)
        log.info("member_updated", member_id=member_id)
        return member

    def delete_member(self, member_id: str) -> None:
        """Remove a member. Their ledger entries stay and show as Unknown."""
        with self._db.immediate_transaction() as session:
            MemberRepository(session).delete(member_id)
        log.info("member_deleted", member_id=member_id)
