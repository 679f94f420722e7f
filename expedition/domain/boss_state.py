"""Boss hit-point aggregate used by the scheduler."""
from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional

from .bosses import BOSS_MAX_HP, BOSSES


class DayLedger:
    """Damage committed against each boss during a single simulated day."""

    def __init__(self, state: "BossState") -> None:
        self._state = state
        self.committed: Dict[str, int] = {boss: 0 for boss in BOSSES}

    def headroom(self, boss: str) -> int:
        """HP left on ``boss`` once everything committed today lands."""
        return self._state[boss] - self.committed[boss]

    def commit(self, boss: str, damage: int) -> None:
        self.committed[boss] += damage
        self._state.entries[boss] += 1

    def total(self) -> int:
        return sum(self.committed.values())


class BossState(Mapping[str, int]):
    """Remaining HP per boss plus kill days and lifetime entry counters.

    HP may go below zero after the day's damage lands; a boss counts as
    killed as soon as its HP is zero or less.
    """

    def __init__(self, initial_hp: Optional[Mapping[str, int]] = None) -> None:
        initial_hp = initial_hp or {}
        self._hp: Dict[str, int] = {}
        for boss in BOSSES:
            value = initial_hp.get(boss)
            self._hp[boss] = BOSS_MAX_HP if value is None else int(value)
        self.kill_days: Dict[str, int] = {}
        self.entries: Dict[str, int] = {boss: 0 for boss in BOSSES}

    # -- Mapping protocol ---------------------------------------------------------
    def __getitem__(self, boss: str) -> int:
        return self._hp[boss]

    def __iter__(self) -> Iterator[str]:
        return iter(BOSSES)

    def __len__(self) -> int:
        return len(self._hp)

    # -- Queries ------------------------------------------------------------------
    def alive(self) -> List[str]:
        return [boss for boss in BOSSES if self._hp[boss] > 0]

    def all_cleared(self) -> bool:
        return all(hp <= 0 for hp in self._hp.values())

    def remaining_total(self) -> int:
        return sum(max(0, hp) for hp in self._hp.values())

    def snapshot(self) -> Dict[str, int]:
        return dict(self._hp)

    # -- Day lifecycle --------------------------------------------------------------
    def open_day(self) -> DayLedger:
        return DayLedger(self)

    def close_day(self, ledger: DayLedger, alive: List[str], day_number: int) -> List[str]:
        """Apply the day's committed damage to ``alive`` bosses and return first-time kills."""
        killed: List[str] = []
        for boss in alive:
            self._hp[boss] -= ledger.committed[boss]
            if self._hp[boss] <= 0 and boss not in self.kill_days:
                self.kill_days[boss] = day_number
                killed.append(boss)
        return killed


__all__ = ["BossState", "DayLedger"]
