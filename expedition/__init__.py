"""Advent expedition planner package exposing primary components."""

from loguru import logger

from .domain.bosses import BOSSES, BOSS_MAX_HP
from .domain.models import DailyAssignment, DayPlan, MemberDamage, MemberRef, PlanResult
from .services.scheduler import optimize_daily_plan

# Library code stays quiet until an application calls setup_logger().
logger.disable("expedition")

__all__ = [
    "BOSSES",
    "BOSS_MAX_HP",
    "DailyAssignment",
    "DayPlan",
    "MemberDamage",
    "MemberRef",
    "PlanResult",
    "optimize_daily_plan",
]
