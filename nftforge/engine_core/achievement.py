"""
Achievement Classifier - Maps a level to an achievement tier label.
"""

from __future__ import annotations
from enum import Enum


class AchievementTier(Enum):
    NOVICE = "Novice"
    APPRENTICE = "Apprentice"
    EXPERT = "Expert"
    MASTER = "Master"
    GRANDMASTER = "Grandmaster"


# (low, high, tier), inclusive bounds
_TIER_BANDS: list[tuple[int, int, AchievementTier]] = [
    (1, 10, AchievementTier.NOVICE),
    (11, 25, AchievementTier.APPRENTICE),
    (26, 50, AchievementTier.EXPERT),
    (51, 75, AchievementTier.MASTER),
]


def classify_level(level: int) -> AchievementTier:
    """
    Achievement tier for a level.

    Anything outside the banded ranges is Grandmaster, which includes
    level 0 as well as everything above 75.
    """
    for low, high, tier in _TIER_BANDS:
        if low <= level <= high:
            return tier
    return AchievementTier.GRANDMASTER
