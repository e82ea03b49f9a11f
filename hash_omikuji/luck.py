"""
luck.py
Luck categories, ranks and per-category score records.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Sequence, Tuple

MAX_RAW = 255
MAX_SCORE = 100


class Rank(Enum):
    """Qualitative bucket for a 0-100 score."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NORMAL = "Normal"
    BAD = "Bad"
    TERRIBLE = "Terrible"

    @classmethod
    def from_score(cls, score: int) -> Rank:
        for threshold, rank in RANK_THRESHOLDS:
            if score >= threshold:
                return rank
        return cls.TERRIBLE


# Checked top-down; anything below the last threshold is Terrible
RANK_THRESHOLDS: Tuple[Tuple[int, Rank], ...] = (
    (90, Rank.EXCELLENT),
    (70, Rank.GOOD),
    (40, Rank.NORMAL),
    (10, Rank.BAD),
)


class LuckType(IntEnum):
    """The sixteen luck categories; the value is both display order and flag bit."""
    LIFE = 0
    HEALTH = 1
    WEALTH = 2
    CAREER = 3
    LOVE = 4
    MARRIAGE = 5
    FAMILY = 6
    FRIENDSHIP = 7
    STUDY = 8
    CHALLENGE = 9
    OPPORTUNITY = 10
    MOTIVATION = 11
    DEBUG = 12
    WIFI = 13
    WINDFALL = 14
    CHAOS = 15

    @property
    def index(self) -> int:
        return int(self)

    @property
    def label(self) -> str:
        return LUCK_LABELS[self]

    @property
    def display_name(self) -> str:
        return f"{self.label} Luck"


LUCK_LABELS: Dict[LuckType, str] = {
    LuckType.LIFE: "Life",
    LuckType.HEALTH: "Health",
    LuckType.WEALTH: "Wealth",
    LuckType.CAREER: "Career",
    LuckType.LOVE: "Love",
    LuckType.MARRIAGE: "Marriage",
    LuckType.FAMILY: "Family",
    LuckType.FRIENDSHIP: "Friendship",
    LuckType.STUDY: "Study",
    LuckType.CHALLENGE: "Challenge",
    LuckType.OPPORTUNITY: "Opportunity",
    LuckType.MOTIVATION: "Motivation",
    LuckType.DEBUG: "Debug",
    LuckType.WIFI: "WiFi",
    LuckType.WINDFALL: "Windfall",
    LuckType.CHAOS: "Chaos",
}

# Display order, ordered by index
ALL_LUCK_TYPES: Tuple[LuckType, ...] = tuple(sorted(LuckType, key=int))


@dataclass(frozen=True)
class LuckScore:
    """One category's slice of the slip."""
    luck_type: LuckType
    raw_value: int
    score: int
    rank: Rank
    active: bool

    @classmethod
    def from_raw(cls, luck_type: LuckType, raw_value: int, active: bool) -> LuckScore:
        # Integer division truncates: 127 -> 49, not 50
        score = raw_value * MAX_SCORE // MAX_RAW
        return cls(
            luck_type=luck_type,
            raw_value=raw_value,
            score=score,
            rank=Rank.from_score(score),
            active=active,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "luck_type": self.luck_type.label,
            "raw_value": self.raw_value,
            "score": self.score,
            "rank": self.rank.value,
            "active": self.active,
        }


def calculate_luck_scores(scores: Sequence[int], flags: int) -> List[LuckScore]:
    """Pair each raw score with its category and the matching bit of ``flags``."""
    if len(scores) != len(ALL_LUCK_TYPES):
        raise ValueError(f"Expected {len(ALL_LUCK_TYPES)} raw scores, got {len(scores)}.")
    return [
        LuckScore.from_raw(luck_type, scores[luck_type.index], (flags >> luck_type.index) & 1 == 1)
        for luck_type in ALL_LUCK_TYPES
    ]


__all__ = ["ALL_LUCK_TYPES", "LuckScore", "LuckType", "Rank", "calculate_luck_scores"]
