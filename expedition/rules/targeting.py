"""Boss selection for a single member on a single day."""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from ..domain.models import MemberDamage

Headroom = Callable[[str], int]


def eligible_bosses(alive: Iterable[str], headroom: Headroom) -> List[str]:
    """Alive bosses that earlier assignments today have not already finished off."""
    return [boss for boss in alive if headroom(boss) > 0]


def best_boss(member: MemberDamage, candidates: Iterable[str]) -> Optional[str]:
    # Strictly greater keeps the earliest boss on ties and skips zero damage.
    chosen: Optional[str] = None
    best_damage = 0
    for boss in candidates:
        damage = member.damage_to(boss)
        if damage > best_damage:
            best_damage = damage
            chosen = boss
    return chosen


def fallback_boss(member: MemberDamage, alive: Iterable[str]) -> Optional[str]:
    for boss in alive:
        if member.damage_to(boss) > 0:
            return boss
    return None


def choose_boss(member: MemberDamage, alive: List[str], headroom: Headroom) -> Optional[str]:
    """Pick the boss ``member`` should attack, or ``None`` when it can hurt none of them.

    Prefers the highest-damage boss among those still standing after the
    damage already committed today, so later members are not sent to overkill
    a boss. If every alive boss is already covered, the member goes to the
    first alive boss it can damage at all.
    """
    chosen = best_boss(member, eligible_bosses(alive, headroom))
    if chosen is None:
        chosen = fallback_boss(member, alive)
    return chosen


__all__ = ["choose_boss", "best_boss", "fallback_boss", "eligible_bosses"]
