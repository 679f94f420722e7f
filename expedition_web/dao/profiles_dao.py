"""Data access for per-member boss score profiles."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from expedition.domain.bosses import BOSSES

from . import db


class ProfileNotFoundError(Exception):
    """Raised when the requested score profile is missing."""


def _row_to_dict(row) -> Dict[str, Any]:
    data = dict(row)
    data["scores"] = json.loads(data.pop("scores_json") or "{}")
    return data


def list_profiles(guild_id: str, cycle_id: Optional[str] = None) -> List[Dict[str, Any]]:
    if cycle_id:
        rows = db.query_all(
            "SELECT * FROM advent_profiles WHERE guild_id = ? AND cycle_id = ? ORDER BY member_ign",
            (guild_id, cycle_id),
        )
    else:
        rows = db.query_all(
            "SELECT * FROM advent_profiles WHERE guild_id = ? ORDER BY member_ign",
            (guild_id,),
        )
    return [_row_to_dict(row) for row in rows]


def get_profile(profile_id: str) -> Optional[Dict[str, Any]]:
    row = db.query_one("SELECT * FROM advent_profiles WHERE id = ?", (profile_id,))
    return _row_to_dict(row) if row else None


def get_profile_by_ign(guild_id: str, member_ign: str, cycle_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
    row = db.query_one(
        "SELECT * FROM advent_profiles WHERE guild_id = ? AND member_ign = ? AND IFNULL(cycle_id, '') = ?",
        (guild_id, member_ign, cycle_id or ""),
    )
    return _row_to_dict(row) if row else None


def upsert_profile(
    guild_id: str,
    member_ign: str,
    scores: Mapping[str, int],
    *,
    member_id: Optional[str] = None,
    cycle_id: Optional[str] = None,
) -> Dict[str, Any]:
    now = datetime.now(timezone.utc).isoformat()
    existing = get_profile_by_ign(guild_id, member_ign, cycle_id)
    if existing:
        db.execute(
            "UPDATE advent_profiles SET scores_json = ?, member_id = ?, updated_at = ? WHERE id = ?",
            (json.dumps(dict(scores)), member_id or existing.get("member_id"), now, existing["id"]),
        )
    else:
        db.execute(
            """
            INSERT INTO advent_profiles (id, guild_id, member_id, member_ign, scores_json, cycle_id, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (uuid.uuid4().hex, guild_id, member_id, member_ign, json.dumps(dict(scores)), cycle_id, now),
        )
    return get_profile_by_ign(guild_id, member_ign, cycle_id)  # type: ignore[return-value]


def submit_score(
    guild_id: str,
    member_ign: str,
    boss: str,
    score: int,
    *,
    member_id: Optional[str] = None,
    cycle_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Replace a single boss score, keeping the member's other scores."""
    existing = get_profile_by_ign(guild_id, member_ign, cycle_id)
    scores = dict(existing["scores"]) if existing else {key: 0 for key in BOSSES}
    scores[boss] = score
    return upsert_profile(guild_id, member_ign, scores, member_id=member_id, cycle_id=cycle_id)


def update_profile_scores(profile_id: str, scores: Mapping[str, int]) -> Dict[str, Any]:
    """Overwrite every boss score of an existing profile."""
    updated = db.execute(
        "UPDATE advent_profiles SET scores_json = ?, updated_at = ? WHERE id = ?",
        (json.dumps(dict(scores)), datetime.now(timezone.utc).isoformat(), profile_id),
    )
    if updated == 0:
        raise ProfileNotFoundError(f"Profile {profile_id} is not present in the database")
    return get_profile(profile_id)  # type: ignore[return-value]
