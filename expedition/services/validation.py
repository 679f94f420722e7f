"""Input validation for cycles, scores and plan requests.

The scheduler itself assumes well-formed input; everything coming from
users, files or HTTP payloads passes through here first.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from ..domain.bosses import (
    BOSSES,
    CYCLE_STATUSES,
    DEFAULT_TARGET_DAY,
    MAX_TARGET_DAY,
    is_boss,
)


class ValidationError(ValueError):
    """Raised when a payload field fails validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass(frozen=True)
class CycleCreate:
    name: str
    start_date: date
    end_date: date
    target_day: int = DEFAULT_TARGET_DAY
    auto_regenerate: bool = True


@dataclass(frozen=True)
class ScoreSubmission:
    member_ign: str
    boss: str
    score: int
    cycle_id: Optional[str] = None


@dataclass(frozen=True)
class ProfileUpdate:
    member_ign: str
    scores: Dict[str, int]
    cycle_id: Optional[str] = None


def parse_date(value: Any, field: str = "date") -> date:
    """Validate a YYYY-MM-DD value."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError(field, "date is required (YYYY-MM-DD)")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(field, "invalid date format (YYYY-MM-DD)") from exc


def _non_negative_int(value: Any, field: str) -> int:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "must be an integer")
    if value < 0:
        raise ValidationError(field, "must be zero or greater")
    return value


def validate_target_day(value: Any, field: str = "target_day") -> int:
    if value is None:
        return DEFAULT_TARGET_DAY
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "must be an integer")
    if not 1 <= value <= MAX_TARGET_DAY:
        raise ValidationError(field, f"must be between 1 and {MAX_TARGET_DAY}")
    return value


def validate_scores(raw: Optional[Mapping[str, Any]], field: str = "scores") -> Dict[str, int]:
    """Normalise a boss -> damage mapping; missing bosses become 0."""
    raw = raw or {}
    unknown = [key for key in raw if not is_boss(key)]
    if unknown:
        raise ValidationError(field, f"unknown boss {unknown[0]!r}")
    scores: Dict[str, int] = {}
    for boss in BOSSES:
        value = raw.get(boss)
        scores[boss] = 0 if value is None else _non_negative_int(value, f"{field}.{boss}")
    return scores


def validate_initial_hp(raw: Optional[Mapping[str, Any]], field: str = "initial_hp") -> Optional[Dict[str, int]]:
    if raw is None:
        return None
    unknown = [key for key in raw if not is_boss(key)]
    if unknown:
        raise ValidationError(field, f"unknown boss {unknown[0]!r}")
    return {boss: _non_negative_int(value, f"{field}.{boss}") for boss, value in raw.items()}


def validate_availability(raw: Optional[Mapping[str, Any]], field: str = "member_availability") -> Optional[Dict[str, date]]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ValidationError(field, "must be an object of member_id -> date")
    return {str(member_id): parse_date(value, f"{field}.{member_id}") for member_id, value in raw.items()}


def validate_window(start: date, end: date, *, field: str = "end_date") -> None:
    if end <= start:
        raise ValidationError(field, "end date must be after start date")


def validate_cycle_create(payload: Mapping[str, Any]) -> CycleCreate:
    name = payload.get("name")
    if not name or not isinstance(name, str) or not name.strip():
        raise ValidationError("name", "cycle name is required")
    start = parse_date(payload.get("start_date"), "start_date")
    end = parse_date(payload.get("end_date"), "end_date")
    validate_window(start, end)
    auto_regenerate = payload.get("auto_regenerate", True)
    if not isinstance(auto_regenerate, bool):
        raise ValidationError("auto_regenerate", "must be a boolean")
    return CycleCreate(
        name=name.strip(),
        start_date=start,
        end_date=end,
        target_day=validate_target_day(payload.get("target_day")),
        auto_regenerate=auto_regenerate,
    )


def validate_cycle_update(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a partial update; only keys present in ``payload`` are returned."""
    out: Dict[str, Any] = {}
    if "name" in payload:
        name = payload["name"]
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("name", "cycle name must not be empty")
        out["name"] = name.strip()
    if "status" in payload:
        if payload["status"] not in CYCLE_STATUSES:
            raise ValidationError("status", f"must be one of {', '.join(CYCLE_STATUSES)}")
        out["status"] = payload["status"]
    for key in ("start_date", "end_date"):
        if key in payload:
            out[key] = parse_date(payload[key], key)
    if "target_day" in payload:
        out["target_day"] = validate_target_day(payload["target_day"])
    if "auto_regenerate" in payload:
        if not isinstance(payload["auto_regenerate"], bool):
            raise ValidationError("auto_regenerate", "must be a boolean")
        out["auto_regenerate"] = payload["auto_regenerate"]
    if "actual_days" in payload:
        actual = payload["actual_days"]
        if isinstance(actual, bool) or not isinstance(actual, int) or actual < 1:
            raise ValidationError("actual_days", "must be a positive integer")
        out["actual_days"] = actual
    if "boss_hp" in payload:
        out["boss_hp"] = validate_initial_hp(payload["boss_hp"], "boss_hp")
    return out


def validate_submission(payload: Mapping[str, Any]) -> ScoreSubmission:
    member_ign = payload.get("member_ign")
    if not member_ign or not isinstance(member_ign, str):
        raise ValidationError("member_ign", "member is required")
    boss = payload.get("boss")
    if not isinstance(boss, str) or not is_boss(boss):
        raise ValidationError("boss", "boss is required")
    score = _non_negative_int(payload.get("score"), "score")
    cycle_id = payload.get("cycle_id")
    return ScoreSubmission(member_ign=member_ign, boss=boss, score=score, cycle_id=cycle_id)


def validate_profile_scores(payload: Mapping[str, Any]) -> Dict[str, int]:
    scores = payload.get("scores")
    if not isinstance(scores, Mapping):
        raise ValidationError("scores", "scores are required")
    return validate_scores(scores)


def validate_profile(payload: Mapping[str, Any]) -> ProfileUpdate:
    """Full score profile for one member, as entered by an officer."""
    member_ign = payload.get("member_ign")
    if not member_ign or not isinstance(member_ign, str):
        raise ValidationError("member_ign", "member is required")
    return ProfileUpdate(
        member_ign=member_ign,
        scores=validate_profile_scores(payload),
        cycle_id=payload.get("cycle_id"),
    )


__all__ = [
    "ValidationError",
    "CycleCreate",
    "ScoreSubmission",
    "ProfileUpdate",
    "parse_date",
    "validate_target_day",
    "validate_scores",
    "validate_initial_hp",
    "validate_availability",
    "validate_window",
    "validate_cycle_create",
    "validate_cycle_update",
    "validate_submission",
    "validate_profile_scores",
    "validate_profile",
]
