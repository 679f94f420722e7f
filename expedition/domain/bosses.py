"""Canonical boss identifiers and expedition constants."""
from __future__ import annotations

from typing import Dict, Tuple

__all__ = [
    "TEO",
    "YEONHEE",
    "KYLE",
    "KARMA",
    "BOSSES",
    "BOSS_LABELS",
    "BOSS_MAX_HP",
    "DEFAULT_TARGET_DAY",
    "DEFAULT_WINDOW_DAYS",
    "MAX_TARGET_DAY",
    "UNESTIMABLE_DAYS",
    "CYCLE_STATUSES",
    "STATUS_COLLECTING",
    "STATUS_PLANNING",
    "STATUS_ACTIVE",
    "STATUS_COMPLETED",
    "is_boss",
    "label_for",
    "full_hp",
]


TEO = "teo"
YEONHEE = "yeonhee"
KYLE = "kyle"
KARMA = "karma"

# Order matters: ties between bosses are resolved in this order.
BOSSES: Tuple[str, ...] = (TEO, YEONHEE, KYLE, KARMA)

BOSS_LABELS: Dict[str, str] = {
    TEO: "Teo",
    YEONHEE: "Yeonhee",
    KYLE: "Kyle",
    KARMA: "Karma",
}

BOSS_MAX_HP = 100_000_000

DEFAULT_TARGET_DAY = 9
# Window end defaults to start + 13 days, i.e. a two week event.
DEFAULT_WINDOW_DAYS = 13
MAX_TARGET_DAY = 14

# Reported when the average daily damage is zero and no projection is possible.
UNESTIMABLE_DAYS = 30

STATUS_COLLECTING = "collecting"
STATUS_PLANNING = "planning"
STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
CYCLE_STATUSES: Tuple[str, ...] = (
    STATUS_COLLECTING,
    STATUS_PLANNING,
    STATUS_ACTIVE,
    STATUS_COMPLETED,
)


def is_boss(key: str) -> bool:
    return key in BOSS_LABELS


def label_for(boss: str) -> str:
    return BOSS_LABELS.get(boss, boss)


def full_hp() -> Dict[str, int]:
    return {boss: BOSS_MAX_HP for boss in BOSSES}
