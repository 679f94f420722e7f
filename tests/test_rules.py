from datetime import date
from fractions import Fraction

import pytest

from expedition.domain.boss_state import BossState
from expedition.domain.bosses import BOSS_MAX_HP, BOSSES, UNESTIMABLE_DAYS
from expedition.domain.models import DailyAssignment, DayPlan, MemberDamage, damage_table
from expedition.rules import estimation, targeting


def _member(member_id="m", **scores):
    return MemberDamage(member_id=member_id, member_ign=member_id, scores=scores)


def test_boss_state_defaults_missing_bosses_to_full_hp():
    state = BossState({"kyle": 5})
    assert state["kyle"] == 5
    assert state["teo"] == BOSS_MAX_HP
    assert list(state) == list(BOSSES)
    assert len(state) == 4


def test_close_day_records_first_kill_only():
    state = BossState({"teo": 10, "yeonhee": 0, "kyle": 0, "karma": 0})
    ledger = state.open_day()
    ledger.commit("teo", 15)
    assert ledger.headroom("teo") == -5

    killed = state.close_day(ledger, ["teo"], day_number=2)
    assert killed == ["teo"]
    assert state.kill_days == {"teo": 2}
    assert state["teo"] == -5
    assert state.all_cleared()
    assert state.remaining_total() == 0

    # Dead bosses are not passed back in, so nothing changes.
    assert state.close_day(state.open_day(), state.alive(), day_number=3) == []
    assert state.kill_days == {"teo": 2}


def test_commit_counts_entries_even_for_zero_damage():
    state = BossState()
    ledger = state.open_day()
    ledger.commit("karma", 0)
    ledger.commit("karma", 7)
    assert state.entries["karma"] == 2
    assert ledger.total() == 7


def test_best_boss_skips_zero_and_keeps_first_on_tie():
    member = _member(teo=0, yeonhee=5, kyle=5)
    assert targeting.best_boss(member, BOSSES) == "yeonhee"
    assert targeting.best_boss(_member(), BOSSES) is None


def test_choose_boss_prefers_uncovered_bosses():
    member = _member(teo=100, kyle=20)
    headroom = {"teo": 0, "yeonhee": 50, "kyle": 50, "karma": 50}.__getitem__
    assert targeting.choose_boss(member, list(BOSSES), headroom) == "kyle"


def test_choose_boss_falls_back_to_first_damageable_alive_boss():
    member = _member(kyle=20, karma=90)
    headroom = {"kyle": -1, "karma": -1}.__getitem__
    assert targeting.choose_boss(member, ["kyle", "karma"], headroom) == "kyle"


def test_choose_boss_returns_none_when_member_cannot_hurt_anything():
    member = _member(teo=100)
    headroom = {"kyle": 10}.__getitem__
    assert targeting.choose_boss(member, ["kyle"], headroom) is None


def _plans(*boss_lists):
    plans = []
    for number, bosses in enumerate(boss_lists, start=1):
        assignments = [DailyAssignment(member_id=mid, member_ign=mid, boss=boss) for mid, boss in bosses]
        plans.append(DayPlan(date(2025, 1, number), number, assignments, {}, []))
    return plans


def test_average_daily_damage_is_exact():
    members = damage_table([_member("a", teo=10), _member("b", kyle=5)])
    plans = _plans([("a", "teo"), ("b", "kyle")], [("a", "teo")], [])
    assert estimation.total_damage(plans, members) == 25
    assert estimation.average_daily_damage(plans, members) == Fraction(25, 3)
    assert estimation.average_daily_damage([], members) is None


def test_total_damage_ignores_unknown_members():
    members = damage_table([_member("a", teo=10)])
    assert estimation.total_damage(_plans([("ghost", "teo"), ("a", "teo")]), members) == 10


def test_estimate_rounds_remaining_days_up():
    state = BossState({"teo": 7, "yeonhee": 0, "kyle": 0, "karma": 0})
    members = damage_table([_member("a", teo=3)])
    plans = _plans([("a", "teo")], [("a", "teo")])
    # 7 HP at 3 per day needs three more days.
    assert estimation.estimate_days(state, plans, members, days_simulated=2) == 5


def test_estimate_falls_back_when_no_damage_was_dealt():
    state = BossState()
    members = damage_table([_member("a", teo=3)])
    assert estimation.estimate_days(state, [], members, days_simulated=0) == UNESTIMABLE_DAYS
    assert estimation.estimate_days(state, _plans([], []), members, days_simulated=2) == UNESTIMABLE_DAYS


def test_estimate_uses_last_kill_day_when_cleared():
    state = BossState({boss: 0 for boss in BOSSES})
    state.kill_days.update({"teo": 2, "karma": 6})
    assert estimation.estimate_days(state, [], {}, days_simulated=7) == 6


@pytest.mark.parametrize(
    "target, estimated, expected",
    [
        (9, 9, None),
        (9, 3, None),
        (
            9,
            10,
            "Cannot finish by day 9: estimated completion on day 10. Total daily damage is insufficient.",
        ),
    ],
)
def test_target_warning(target, estimated, expected):
    assert estimation.target_warning(target, estimated) == expected


def test_damage_table_keeps_first_duplicate():
    first = _member("dup", teo=1)
    table = damage_table([first, _member("dup", teo=99)])
    assert table["dup"] is first
