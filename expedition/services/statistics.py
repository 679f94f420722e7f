"""Derive statistics from plans and rosters."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence

from ..domain.bosses import BOSSES
from ..domain.models import MemberDamage, PlanResult, damage_table


def damage_by_day(plan: PlanResult, members: Iterable[MemberDamage]) -> Dict[int, int]:
    lookup = damage_table(members)
    out: Dict[int, int] = {}
    for day in plan.daily_plans:
        total = 0
        for assignment in day.assignments:
            member = lookup.get(assignment.member_id)
            if member is not None:
                total += member.damage_to(assignment.boss)
        out[day.day_number] = total
    return out


def damage_by_boss(plan: PlanResult, members: Iterable[MemberDamage]) -> Dict[str, int]:
    lookup = damage_table(members)
    totals: Dict[str, int] = {boss: 0 for boss in BOSSES}
    for day in plan.daily_plans:
        for assignment in day.assignments:
            member = lookup.get(assignment.member_id)
            if member is not None:
                totals[assignment.boss] += member.damage_to(assignment.boss)
    return totals


def entries_by_member(plan: PlanResult) -> Dict[str, Dict[str, int]]:
    """member_id -> boss -> number of days assigned to that boss."""
    out: Dict[str, Dict[str, int]] = defaultdict(lambda: {boss: 0 for boss in BOSSES})
    for day in plan.daily_plans:
        for assignment in day.assignments:
            out[assignment.member_id][assignment.boss] += 1
    return dict(out)


@dataclass
class RosterStats:
    total_members: int
    members_with_profiles: int
    members_missing: int
    total_damage_capacity: int
    average_damage: int
    boss_totals: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_members": self.total_members,
            "members_with_profiles": self.members_with_profiles,
            "members_missing": self.members_missing,
            "total_damage_capacity": self.total_damage_capacity,
            "average_damage": self.average_damage,
            "boss_totals": dict(self.boss_totals),
        }


def roster_stats(total_members: int, profiles: Sequence[MemberDamage]) -> RosterStats:
    """Summarise the damage capacity of submitted profiles against the active roster."""
    boss_totals = {boss: 0 for boss in BOSSES}
    for profile in profiles:
        for boss in BOSSES:
            boss_totals[boss] += profile.damage_to(boss)
    capacity = sum(boss_totals.values())
    average = round(capacity / len(profiles)) if profiles else 0
    return RosterStats(
        total_members=total_members,
        members_with_profiles=len(profiles),
        members_missing=max(0, total_members - len(profiles)),
        total_damage_capacity=capacity,
        average_damage=average,
        boss_totals=boss_totals,
    )


__all__ = [
    "damage_by_day",
    "damage_by_boss",
    "entries_by_member",
    "RosterStats",
    "roster_stats",
]
