"""Domain dataclasses for advent expedition planning."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .bosses import BOSSES


@dataclass(frozen=True)
class MemberDamage:
    """Damage a member deals to each boss per attempt. Missing bosses count as zero."""

    member_id: str
    member_ign: str
    scores: Mapping[str, int] = field(default_factory=dict)
    member_nickname: Optional[str] = None

    def damage_to(self, boss: str) -> int:
        return int(self.scores.get(boss) or 0)

    def has_scores(self) -> bool:
        return any(self.damage_to(boss) > 0 for boss in BOSSES)


@dataclass(frozen=True)
class MemberRef:
    member_id: str
    member_ign: str

    def to_dict(self) -> Dict[str, str]:
        return {"member_id": self.member_id, "member_ign": self.member_ign}


@dataclass(frozen=True)
class DailyAssignment:
    member_id: str
    member_ign: str
    boss: str
    member_nickname: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "member_id": self.member_id,
            "member_ign": self.member_ign,
            "member_nickname": self.member_nickname,
            "boss": self.boss,
        }


@dataclass(frozen=True)
class DayPlan:
    date: date
    day_number: int
    assignments: List[DailyAssignment]
    boss_hp_after: Dict[str, int]
    bosses_killed_today: List[str]

    def entries_for(self, boss: str) -> int:
        return sum(1 for assignment in self.assignments if assignment.boss == boss)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "day_number": self.day_number,
            "assignments": [assignment.to_dict() for assignment in self.assignments],
            "boss_hp_after": dict(self.boss_hp_after),
            "bosses_killed_today": list(self.bosses_killed_today),
        }


@dataclass(frozen=True)
class PlanResult:
    estimated_days: int
    target_day: int
    target_met: bool
    warning_message: Optional[str]
    daily_plans: List[DayPlan]
    summary: Dict[str, int]
    total_entries_per_boss: Dict[str, int]
    total_members: int
    members_with_scores: int
    members_without_scores: List[MemberRef]
    generated_at: datetime

    @property
    def days_simulated(self) -> int:
        return len(self.daily_plans)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "estimated_days": self.estimated_days,
            "target_day": self.target_day,
            "target_met": self.target_met,
            "warning_message": self.warning_message,
            "daily_plans": [plan.to_dict() for plan in self.daily_plans],
            "summary": dict(self.summary),
            "total_entries_per_boss": dict(self.total_entries_per_boss),
            "total_members": self.total_members,
            "members_with_scores": self.members_with_scores,
            "members_without_scores": [ref.to_dict() for ref in self.members_without_scores],
            "generated_at": self.generated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PlanResult":
        """Rebuild a plan from the JSON shape produced by :meth:`to_dict`."""
        daily_plans = [
            DayPlan(
                date=date.fromisoformat(raw["date"]),
                day_number=int(raw["day_number"]),
                assignments=[
                    DailyAssignment(
                        member_id=item["member_id"],
                        member_ign=item["member_ign"],
                        boss=item["boss"],
                        member_nickname=item.get("member_nickname"),
                    )
                    for item in raw.get("assignments", [])
                ],
                boss_hp_after={k: int(v) for k, v in raw.get("boss_hp_after", {}).items()},
                bosses_killed_today=list(raw.get("bosses_killed_today", [])),
            )
            for raw in payload.get("daily_plans", [])
        ]
        return cls(
            estimated_days=int(payload["estimated_days"]),
            target_day=int(payload["target_day"]),
            target_met=bool(payload["target_met"]),
            warning_message=payload.get("warning_message"),
            daily_plans=daily_plans,
            summary={k: int(v) for k, v in payload.get("summary", {}).items()},
            total_entries_per_boss={k: int(v) for k, v in payload.get("total_entries_per_boss", {}).items()},
            total_members=int(payload.get("total_members", 0)),
            members_with_scores=int(payload.get("members_with_scores", 0)),
            members_without_scores=[
                MemberRef(member_id=ref["member_id"], member_ign=ref["member_ign"])
                for ref in payload.get("members_without_scores", [])
            ],
            generated_at=datetime.fromisoformat(payload["generated_at"]),
        )


def damage_table(members: Iterable[MemberDamage]) -> Dict[str, MemberDamage]:
    """Index members by id; the first occurrence of a duplicated id wins."""
    table: Dict[str, MemberDamage] = {}
    for member in members:
        table.setdefault(member.member_id, member)
    return table


__all__ = [
    "MemberDamage",
    "MemberRef",
    "DailyAssignment",
    "DayPlan",
    "PlanResult",
    "damage_table",
]
