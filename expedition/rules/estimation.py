"""Completion-day projection for a simulated plan."""
from __future__ import annotations

from fractions import Fraction
from typing import Mapping, Optional, Sequence

from ..domain.boss_state import BossState
from ..domain.bosses import UNESTIMABLE_DAYS
from ..domain.models import DayPlan, MemberDamage


def total_damage(daily_plans: Sequence[DayPlan], members: Mapping[str, MemberDamage]) -> int:
    total = 0
    for plan in daily_plans:
        for assignment in plan.assignments:
            member = members.get(assignment.member_id)
            if member is not None:
                total += member.damage_to(assignment.boss)
    return total


def average_daily_damage(
    daily_plans: Sequence[DayPlan],
    members: Mapping[str, MemberDamage],
) -> Optional[Fraction]:
    """Mean damage per produced day, or ``None`` when no day was produced."""
    if not daily_plans:
        return None
    return Fraction(total_damage(daily_plans, members), len(daily_plans))


def estimate_days(
    state: BossState,
    daily_plans: Sequence[DayPlan],
    members: Mapping[str, MemberDamage],
    days_simulated: int,
) -> int:
    if state.all_cleared():
        if state.kill_days:
            return max(state.kill_days.values())
        return days_simulated

    average = average_daily_damage(daily_plans, members)
    if not average:
        return UNESTIMABLE_DAYS
    remaining = state.remaining_total()
    # Exact ceiling of remaining / average.
    return days_simulated + -(-remaining // average)


def target_warning(target_day: int, estimated_days: int) -> Optional[str]:
    if estimated_days <= target_day:
        return None
    return (
        f"Cannot finish by day {target_day}: estimated completion on day {estimated_days}. "
        "Total daily damage is insufficient."
    )


__all__ = ["total_damage", "average_daily_damage", "estimate_days", "target_warning"]
