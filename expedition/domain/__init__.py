"""Domain objects for the expedition planner."""

from .bosses import BOSSES, BOSS_MAX_HP, KARMA, KYLE, TEO, YEONHEE
from .boss_state import BossState, DayLedger
from .models import (
    DailyAssignment,
    DayPlan,
    MemberDamage,
    MemberRef,
    PlanResult,
    damage_table,
)

__all__ = [
    "BOSSES",
    "BOSS_MAX_HP",
    "TEO",
    "YEONHEE",
    "KYLE",
    "KARMA",
    "BossState",
    "DayLedger",
    "DailyAssignment",
    "DayPlan",
    "MemberDamage",
    "MemberRef",
    "PlanResult",
    "damage_table",
]
