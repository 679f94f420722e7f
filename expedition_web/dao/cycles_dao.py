"""Data access for advent cycles and their stored plans."""

from __future__ import annotations

import json
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from expedition.domain.bosses import STATUS_ACTIVE, STATUS_COLLECTING, STATUS_COMPLETED, STATUS_PLANNING, full_hp

from . import db


class CycleNotFoundError(Exception):
    """Raised when the requested cycle is missing."""


class ActiveCycleExistsError(Exception):
    """Raised when a guild already has a cycle that is not completed."""


class CycleInProgressError(Exception):
    """Raised when deleting a cycle whose status is active."""


_JSON_COLUMNS = {
    "boss_hp": "boss_hp_json",
    "plan": "plan_json",
    "member_availability": "member_availability_json",
}

_UPDATABLE = ("name", "status", "start_date", "end_date", "target_day", "auto_regenerate", "actual_days", "boss_hp")


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")


def _encode(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return int(value)
    return value


def _row_to_dict(row) -> Dict[str, Any]:
    data = dict(row)
    for key, column in _JSON_COLUMNS.items():
        blob = data.pop(column, None)
        data[key] = json.loads(blob) if blob else None
    data["auto_regenerate"] = bool(data.get("auto_regenerate"))
    return data


def get_cycle(cycle_id: str) -> Optional[Dict[str, Any]]:
    row = db.query_one("SELECT * FROM advent_cycles WHERE id = ?", (cycle_id,))
    return _row_to_dict(row) if row else None


def ensure_cycle(cycle_id: str) -> Dict[str, Any]:
    cycle = get_cycle(cycle_id)
    if cycle is None:
        raise CycleNotFoundError(f"Cycle {cycle_id} is not present in the database")
    return cycle


def list_cycles(guild_id: str, limit: int = 20) -> List[Dict[str, Any]]:
    rows = db.query_all(
        "SELECT * FROM advent_cycles WHERE guild_id = ? ORDER BY created_at DESC LIMIT ?",
        (guild_id, limit),
    )
    return [_row_to_dict(row) for row in rows]


def get_active_cycle(guild_id: str) -> Optional[Dict[str, Any]]:
    row = db.query_one(
        "SELECT * FROM advent_cycles WHERE guild_id = ? AND status != ? ORDER BY created_at DESC LIMIT 1",
        (guild_id, STATUS_COMPLETED),
    )
    return _row_to_dict(row) if row else None


def create_cycle(
    guild_id: str,
    *,
    name: str,
    start_date: date,
    end_date: date,
    target_day: int,
    auto_regenerate: bool = True,
) -> Dict[str, Any]:
    """Insert a new cycle; only one non-completed cycle may exist per guild."""
    active = get_active_cycle(guild_id)
    if active is not None:
        raise ActiveCycleExistsError(f"Guild {guild_id} already has an open cycle {active['id']}")
    cycle_id = uuid.uuid4().hex
    now = _now()
    db.execute(
        """
        INSERT INTO advent_cycles (id, guild_id, name, status, start_date, end_date, target_day,
                                   auto_regenerate, boss_hp_json, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            cycle_id,
            guild_id,
            name,
            STATUS_COLLECTING,
            start_date.isoformat(),
            end_date.isoformat(),
            target_day,
            int(auto_regenerate),
            json.dumps(full_hp()),
            now,
            now,
        ),
    )
    return ensure_cycle(cycle_id)


def _ensure_single_open(guild_id: str, cycle_id: str) -> None:
    active = get_active_cycle(guild_id)
    if active is not None and active["id"] != cycle_id:
        raise ActiveCycleExistsError(f"Guild {guild_id} already has an open cycle {active['id']}")


def update_cycle(cycle_id: str, values: Mapping[str, Any]) -> Dict[str, Any]:
    cycle = ensure_cycle(cycle_id)
    if values.get("status", STATUS_COMPLETED) != STATUS_COMPLETED:
        _ensure_single_open(cycle["guild_id"], cycle_id)
    assignments: List[str] = []
    params: List[Any] = []
    for key in _UPDATABLE:
        if key not in values:
            continue
        if key in _JSON_COLUMNS:
            assignments.append(f"{_JSON_COLUMNS[key]} = ?")
            params.append(json.dumps(values[key]) if values[key] is not None else None)
        else:
            assignments.append(f"{key} = ?")
            params.append(_encode(values[key]))
    assignments.append("updated_at = ?")
    params.append(_now())
    params.append(cycle_id)
    db.execute(f"UPDATE advent_cycles SET {', '.join(assignments)} WHERE id = ?", params)
    return ensure_cycle(cycle_id)


def save_cycle_plan(cycle_id: str, plan: Mapping[str, Any], estimated_days: int) -> Dict[str, Any]:
    """Store a generated plan; a cycle still collecting scores moves to planning."""
    cycle = ensure_cycle(cycle_id)
    status = STATUS_PLANNING if cycle["status"] == STATUS_COLLECTING else cycle["status"]
    db.execute(
        "UPDATE advent_cycles SET plan_json = ?, estimated_days = ?, status = ?, updated_at = ? WHERE id = ?",
        (json.dumps(plan, ensure_ascii=False), estimated_days, status, _now(), cycle_id),
    )
    return ensure_cycle(cycle_id)


def update_member_availability(cycle_id: str, availability: Mapping[str, date]) -> None:
    payload = {member_id: _encode(value) for member_id, value in availability.items()}
    db.execute(
        "UPDATE advent_cycles SET member_availability_json = ?, updated_at = ? WHERE id = ?",
        (json.dumps(payload), _now(), cycle_id),
    )


def delete_cycle(cycle_id: str) -> None:
    cycle = get_cycle(cycle_id)
    if cycle is not None and cycle["status"] == STATUS_ACTIVE:
        raise CycleInProgressError(f"Cycle {cycle_id} is active and cannot be deleted")
    if db.execute("DELETE FROM advent_cycles WHERE id = ?", (cycle_id,)) == 0:
        raise CycleNotFoundError(f"Cycle {cycle_id} is not present in the database")
