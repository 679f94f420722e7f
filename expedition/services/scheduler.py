"""Day-by-day boss assignment simulation."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from ..domain.boss_state import BossState, DayLedger
from ..domain.bosses import DEFAULT_TARGET_DAY, DEFAULT_WINDOW_DAYS
from ..domain.models import (
    DailyAssignment,
    DayPlan,
    MemberDamage,
    MemberRef,
    PlanResult,
    damage_table,
)
from ..rules import estimation, targeting


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def default_window(
    start_date: Optional[date],
    end_date: Optional[date],
    *,
    today: Optional[date] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> Tuple[date, date]:
    start = start_date or today or date.today()
    end = end_date or start + timedelta(days=window_days)
    return start, end


def _assign_day(
    members: Sequence[MemberDamage],
    state: BossState,
    alive: List[str],
) -> Tuple[List[DailyAssignment], DayLedger]:
    ledger = state.open_day()
    assignments: List[DailyAssignment] = []
    for member in members:
        boss = targeting.choose_boss(member, alive, ledger.headroom)
        if boss is None:
            continue
        ledger.commit(boss, member.damage_to(boss))
        assignments.append(
            DailyAssignment(
                member_id=member.member_id,
                member_ign=member.member_ign,
                boss=boss,
                member_nickname=member.member_nickname,
            )
        )
    return assignments, ledger


def optimize_daily_plan(
    members: Sequence[MemberDamage],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    target_day: int = DEFAULT_TARGET_DAY,
    member_availability: Optional[Mapping[str, date]] = None,
    initial_hp: Optional[Mapping[str, int]] = None,
    *,
    today: Optional[date] = None,
) -> PlanResult:
    """Greedily assign members to bosses for every day of the window.

    Members are processed in roster order each day. The simulation stops
    early once every boss is dead; otherwise the remaining days are projected
    from the average damage dealt per simulated day.
    """
    start, end = default_window(start_date, end_date, today=today)
    overrides = member_availability or {}
    available_from: Dict[str, date] = {m.member_id: overrides.get(m.member_id, start) for m in members}

    state = BossState(initial_hp)
    scored = [m for m in members if m.has_scores()]
    unscored = [MemberRef(m.member_id, m.member_ign) for m in members if not m.has_scores()]

    daily_plans: List[DayPlan] = []
    day_number = 0
    for current in iter_dates(start, end):
        day_number += 1
        alive = state.alive()
        if not alive:
            break

        available = [m for m in scored if available_from.get(m.member_id, start) <= current]
        if not available:
            daily_plans.append(DayPlan(current, day_number, [], state.snapshot(), []))
            continue

        assignments, ledger = _assign_day(available, state, alive)
        killed = state.close_day(ledger, alive, day_number)
        if killed:
            logger.debug("Bosses killed", day=day_number, date=current.isoformat(), bosses=killed)
        daily_plans.append(DayPlan(current, day_number, assignments, state.snapshot(), killed))

    lookup = damage_table(members)
    estimated_days = estimation.estimate_days(state, daily_plans, lookup, day_number)
    warning = estimation.target_warning(target_day, estimated_days)

    logger.info(
        "Advent plan simulated",
        start=start.isoformat(),
        end=end.isoformat(),
        days=len(daily_plans),
        estimated_days=estimated_days,
        target_day=target_day,
        members=len(members),
    )

    return PlanResult(
        estimated_days=estimated_days,
        target_day=target_day,
        target_met=warning is None,
        warning_message=warning,
        daily_plans=daily_plans,
        summary=dict(state.kill_days),
        total_entries_per_boss=dict(state.entries),
        total_members=len(members),
        members_with_scores=len(scored),
        members_without_scores=unscored,
        generated_at=datetime.now(timezone.utc),
    )


class SchedulerService:
    """Config-driven front for :func:`optimize_daily_plan`.

    Recognised keys: ``target_day``, ``window_days`` (days after the start
    date covered by the window) and ``initial_hp``.
    """

    def __init__(self, config: Optional[Dict] = None):
        self.config = dict(config or {})
        self.target_day = int(self.config.get("target_day", DEFAULT_TARGET_DAY))
        self.window_days = int(self.config.get("window_days", DEFAULT_WINDOW_DAYS))
        self.initial_hp: Optional[Mapping[str, int]] = self.config.get("initial_hp")

    def window(self, start_date: Optional[date] = None, end_date: Optional[date] = None, *, today: Optional[date] = None) -> Tuple[date, date]:
        return default_window(start_date, end_date, today=today, window_days=self.window_days)

    def plan(
        self,
        members: Sequence[MemberDamage],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        member_availability: Optional[Mapping[str, date]] = None,
        *,
        today: Optional[date] = None,
    ) -> PlanResult:
        start, end = self.window(start_date, end_date, today=today)
        return optimize_daily_plan(
            members,
            start_date=start,
            end_date=end,
            target_day=self.target_day,
            member_availability=member_availability,
            initial_hp=self.initial_hp,
        )

    def plan_scenario(self, scenario) -> PlanResult:
        return self.plan(
            scenario.members,
            start_date=scenario.start_date,
            end_date=scenario.end_date,
            member_availability=scenario.member_availability,
        )


__all__ = ["optimize_daily_plan", "iter_dates", "default_window", "SchedulerService"]
