"""Data access for guild members."""

from __future__ import annotations

import uuid
from typing import List, Optional

from . import db


class MemberNotFoundError(Exception):
    """Raised when no active member matches the requested IGN."""


def _row_to_dict(row) -> dict:
    data = dict(row)
    data["is_active"] = bool(data.get("is_active"))
    return data


def add_member(guild_id: str, ign: str, nickname: Optional[str] = None, *, is_active: bool = True) -> dict:
    member_id = uuid.uuid4().hex
    db.execute(
        "INSERT INTO members (id, guild_id, ign, nickname, is_active) VALUES (?, ?, ?, ?, ?)",
        (member_id, guild_id, ign, nickname, int(is_active)),
    )
    return get_member(member_id)  # type: ignore[return-value]


def get_member(member_id: str) -> Optional[dict]:
    row = db.query_one("SELECT * FROM members WHERE id = ?", (member_id,))
    return _row_to_dict(row) if row else None


def get_member_by_ign(guild_id: str, ign: str) -> Optional[dict]:
    row = db.query_one(
        "SELECT * FROM members WHERE guild_id = ? AND ign = ? AND is_active = 1",
        (guild_id, ign),
    )
    return _row_to_dict(row) if row else None


def ensure_member_by_ign(guild_id: str, ign: str) -> dict:
    member = get_member_by_ign(guild_id, ign)
    if member is None:
        raise MemberNotFoundError(f"Member {ign} is not on the active roster")
    return member


def list_active_members(guild_id: str) -> List[dict]:
    """Active members in roster order, i.e. the order they were added."""
    rows = db.query_all(
        "SELECT * FROM members WHERE guild_id = ? AND is_active = 1 ORDER BY created_at, rowid",
        (guild_id,),
    )
    return [_row_to_dict(row) for row in rows]


def list_public_members(guild_id: str) -> List[dict]:
    rows = db.query_all(
        "SELECT id, ign FROM members WHERE guild_id = ? AND is_active = 1 ORDER BY ign",
        (guild_id,),
    )
    return [dict(row) for row in rows]
