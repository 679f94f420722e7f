"""Scenario files: a roster plus cycle settings, stored as JSON or YAML."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..domain.bosses import DEFAULT_TARGET_DAY
from ..domain.models import MemberDamage
from ..services import validation


@dataclass
class Scenario:
    name: str
    members: List[MemberDamage]
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    target_day: int = DEFAULT_TARGET_DAY
    member_availability: Dict[str, date] = field(default_factory=dict)
    initial_hp: Optional[Dict[str, int]] = None


def load_config(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(fh) or {}
        return json.load(fh)


def _members(raw: List[Mapping[str, Any]]) -> List[MemberDamage]:
    members: List[MemberDamage] = []
    for index, entry in enumerate(raw):
        if "id" not in entry:
            raise validation.ValidationError(f"members[{index}].id", "member id is required")
        member_id = str(entry["id"])
        members.append(
            MemberDamage(
                member_id=member_id,
                member_ign=str(entry.get("ign", entry.get("name", member_id))),
                member_nickname=entry.get("nickname"),
                scores=validation.validate_scores(entry.get("scores"), f"members[{index}].scores"),
            )
        )
    return members


def scenario_from_mapping(raw: Mapping[str, Any], *, name: str = "scenario") -> Scenario:
    start = raw.get("start_date")
    end = raw.get("end_date")
    start_date = validation.parse_date(start, "start_date") if start is not None else None
    end_date = validation.parse_date(end, "end_date") if end is not None else None
    if start_date and end_date:
        validation.validate_window(start_date, end_date)
    return Scenario(
        name=str(raw.get("name") or name),
        members=_members(raw.get("members") or []),
        start_date=start_date,
        end_date=end_date,
        target_day=validation.validate_target_day(raw.get("target_day")),
        member_availability=validation.validate_availability(raw.get("member_availability")) or {},
        initial_hp=validation.validate_initial_hp(raw.get("initial_hp")),
    )


def load_scenario(path: str | Path) -> Scenario:
    path = Path(path)
    return scenario_from_mapping(load_config(path), name=path.stem)


__all__ = ["Scenario", "load_config", "load_scenario", "scenario_from_mapping"]
