"""Glue between stored cycles, member scores and the planning engine."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from expedition.domain.bosses import BOSSES, DEFAULT_TARGET_DAY
from expedition.domain.models import MemberDamage, PlanResult
from expedition.services import statistics
from expedition.services.scheduler import SchedulerService
from expedition.services.validation import CycleCreate, ProfileUpdate, ScoreSubmission, parse_date

from ..dao import cycles_dao, members_dao, profiles_dao


class PlanGenerationError(Exception):
    """Raised when a plan cannot be produced for a cycle."""


def build_member_damages(guild_id: str, cycle_id: Optional[str]) -> List[MemberDamage]:
    """Active roster with the cycle's scores; members without a profile score zero everywhere."""
    profiles = {profile["member_ign"]: profile for profile in profiles_dao.list_profiles(guild_id, cycle_id)}
    damages: List[MemberDamage] = []
    for member in members_dao.list_active_members(guild_id):
        scores = (profiles.get(member["ign"]) or {}).get("scores") or {}
        damages.append(
            MemberDamage(
                member_id=member["id"],
                member_ign=member["ign"],
                member_nickname=member.get("nickname"),
                scores={boss: int(scores.get(boss) or 0) for boss in BOSSES},
            )
        )
    return damages


def _optional_date(value: Any) -> Optional[date]:
    return parse_date(value) if value else None


def generate_plan(cycle_id: str, member_availability: Optional[Mapping[str, date]] = None) -> PlanResult:
    cycle = cycles_dao.ensure_cycle(cycle_id)
    members = build_member_damages(cycle["guild_id"], cycle_id)
    if not members:
        raise PlanGenerationError("No active members to plan for")

    service = SchedulerService(
        {"target_day": int(cycle.get("target_day") or DEFAULT_TARGET_DAY), "initial_hp": cycle.get("boss_hp")}
    )
    result = service.plan(
        members,
        start_date=_optional_date(cycle.get("start_date")),
        end_date=_optional_date(cycle.get("end_date")),
        member_availability=member_availability,
    )

    cycles_dao.save_cycle_plan(cycle_id, result.to_dict(), result.estimated_days)
    # An omitted override clears the stored one.
    cycles_dao.update_member_availability(cycle_id, member_availability or {})

    logger.info(
        "Plan generated",
        cycle_id=cycle_id,
        estimated_days=result.estimated_days,
        target_met=result.target_met,
        days=result.days_simulated,
        members=result.total_members,
    )
    return result


def load_plan(cycle_id: str) -> Optional[PlanResult]:
    cycle = cycles_dao.ensure_cycle(cycle_id)
    payload = cycle.get("plan")
    return PlanResult.from_dict(payload) if payload else None


def create_cycle(guild_id: str, data: CycleCreate) -> Dict[str, Any]:
    cycle = cycles_dao.create_cycle(
        guild_id,
        name=data.name,
        start_date=data.start_date,
        end_date=data.end_date,
        target_day=data.target_day,
        auto_regenerate=data.auto_regenerate,
    )
    logger.info("Cycle created", guild_id=guild_id, cycle_id=cycle["id"])
    return cycle


def submit_score(guild_id: str, submission: ScoreSubmission) -> Dict[str, Any]:
    member = members_dao.ensure_member_by_ign(guild_id, submission.member_ign)
    if submission.cycle_id:
        cycles_dao.ensure_cycle(submission.cycle_id)
    profile = profiles_dao.submit_score(
        guild_id,
        submission.member_ign,
        submission.boss,
        submission.score,
        member_id=member["id"],
        cycle_id=submission.cycle_id,
    )
    if submission.cycle_id:
        _maybe_regenerate(submission.cycle_id)
    return profile


def save_profile(guild_id: str, data: ProfileUpdate) -> Dict[str, Any]:
    """Create or replace a member's full score profile for a cycle."""
    member = members_dao.ensure_member_by_ign(guild_id, data.member_ign)
    if data.cycle_id:
        cycles_dao.ensure_cycle(data.cycle_id)
    profile = profiles_dao.upsert_profile(
        guild_id,
        data.member_ign,
        data.scores,
        member_id=member["id"],
        cycle_id=data.cycle_id,
    )
    logger.info("Profile saved", guild_id=guild_id, member_ign=data.member_ign, cycle_id=data.cycle_id)
    if data.cycle_id:
        _maybe_regenerate(data.cycle_id)
    return profile


def update_profile_scores(profile_id: str, scores: Mapping[str, int]) -> Dict[str, Any]:
    profile = profiles_dao.update_profile_scores(profile_id, scores)
    if profile.get("cycle_id"):
        _maybe_regenerate(profile["cycle_id"])
    return profile


def _maybe_regenerate(cycle_id: str) -> None:
    cycle = cycles_dao.get_cycle(cycle_id)
    if cycle is None or not cycle.get("auto_regenerate") or not cycle.get("plan"):
        return
    availability = {k: parse_date(v) for k, v in (cycle.get("member_availability") or {}).items()}
    generate_plan(cycle_id, availability or None)


def guild_stats(guild_id: str, cycle_id: Optional[str] = None) -> statistics.RosterStats:
    total = len(members_dao.list_active_members(guild_id))
    profiles = [
        MemberDamage(
            member_id=profile.get("member_id") or profile["id"],
            member_ign=profile["member_ign"],
            scores=profile.get("scores") or {},
        )
        for profile in profiles_dao.list_profiles(guild_id, cycle_id)
    ]
    return statistics.roster_stats(total, profiles)
